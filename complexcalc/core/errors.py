"""Structured error types for tokenizer/parser/evaluator separation."""

from __future__ import annotations


class ComplexCalcError(Exception):
    """Base class for all complexcalc errors."""


# ── Parse stage ──────────────────────────────────────────────────────

class ParseError(ComplexCalcError, ValueError):
    """Raised while turning expression text into an AST."""

    def __init__(self, message: str, token: str | None = None):
        super().__init__(message)
        self.message = message
        self.token = token

    def __str__(self) -> str:
        if self.token is None:
            return self.message
        return f"{self.message}: {self.token!r}"


class LexicalError(ParseError):
    """The input contains characters no token matches."""

    def __init__(self, text: str, position: int):
        super().__init__(f"Invalid character at position {position}", text[position:position + 1] or None)
        self.text = text
        self.position = position


class UnexpectedCommaError(ParseError):
    """Argument separator outside of a function call."""


class UnbalancedParenthesesError(ParseError):
    pass


class UnknownOperatorError(ParseError):
    pass


class InvalidTokenError(ParseError):
    pass


class InsufficientArgumentsError(ParseError):
    """An operator or function has fewer operands than its arity."""


class MalformedExpressionError(ParseError):
    """The token sequence does not reduce to exactly one expression."""


# ── Evaluation stage ─────────────────────────────────────────────────

class EvaluationError(ComplexCalcError):
    """Generic failure while evaluating a parsed expression."""


class InvalidLiteralError(EvaluationError, ValueError):
    def __init__(self, text: str):
        super().__init__(f"Invalid numeric literal: {text!r}")
        self.text = text


class UnboundVariableError(EvaluationError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"Variable has no value: {name}")
        self.name = name


class UnknownFunctionError(EvaluationError):
    def __init__(self, name: str):
        super().__init__(f"Unknown function: {name}")
        self.name = name


class NonIntegerRootDegreeError(EvaluationError, ValueError):
    """root(x, n) was given a degree with a non-zero imaginary part."""


class InvalidRootDegreeError(EvaluationError, ValueError):
    """root(x, n) was given a degree that is zero or not an integer."""


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    pass


class NumericOverflowError(EvaluationError, OverflowError):
    """A power or exponential left the representable float range."""


# ── Equivalence checking ─────────────────────────────────────────────

class InconclusiveEquivalenceError(ComplexCalcError):
    """Every sampled environment failed to evaluate within the retry budget."""

    def __init__(self, retries: int, last_error: Exception):
        super().__init__(
            f"Equivalence inconclusive: {retries} sampled environments failed "
            f"to evaluate (last error: {last_error})"
        )
        self.retries = retries
        self.last_error = last_error
