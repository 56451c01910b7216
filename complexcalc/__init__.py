"""Complex-number expression engine: parse, render, evaluate and compare expressions."""

from complexcalc.core import (
    BinaryOp, Call, Complex, Expr, Literal, UnaryOp, Var,
    evaluate, free_variables, parse, read_prefix, render, tokenize,
)
from complexcalc.core.errors import (
    ComplexCalcError, DivisionByZeroError, EvaluationError, InconclusiveEquivalenceError,
    InsufficientArgumentsError, InvalidLiteralError, InvalidRootDegreeError, InvalidTokenError,
    LexicalError, MalformedExpressionError, NonIntegerRootDegreeError, NumericOverflowError,
    ParseError, UnboundVariableError, UnbalancedParenthesesError, UnexpectedCommaError,
    UnknownFunctionError, UnknownOperatorError,
)
from complexcalc.checking import CheckerConfig, EquivalenceChecker, EquivalenceReport, check_equivalence

__version__ = "0.1.0"

__all__ = [
    "parse", "render", "evaluate", "check_equivalence", "free_variables",
    "tokenize", "read_prefix",
    "Complex", "Expr", "Literal", "Var", "UnaryOp", "BinaryOp", "Call",
    "CheckerConfig", "EquivalenceChecker", "EquivalenceReport",
    "ComplexCalcError", "ParseError", "EvaluationError",
    "LexicalError", "UnexpectedCommaError", "UnbalancedParenthesesError",
    "UnknownOperatorError", "InvalidTokenError", "InsufficientArgumentsError",
    "MalformedExpressionError", "InvalidLiteralError", "UnboundVariableError",
    "UnknownFunctionError", "NonIntegerRootDegreeError", "DivisionByZeroError",
    "InvalidRootDegreeError", "NumericOverflowError", "InconclusiveEquivalenceError",
]
