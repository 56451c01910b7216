"""Prefix (Lisp-style) rendering of ASTs, and reading that form back."""

from __future__ import annotations

import re

from complexcalc.core.ast_nodes import (
    BINARY_OPERATORS,
    BinaryOp,
    Call,
    Expr,
    Literal,
    UnaryOp,
    Var,
    function_arity,
)
from complexcalc.core.errors import (
    InsufficientArgumentsError,
    InvalidTokenError,
    MalformedExpressionError,
    UnbalancedParenthesesError,
)
from complexcalc.core.tokenizer import is_identifier, is_number_token


def render(expr: Expr) -> str:
    """Render `expr` fully parenthesized in prefix form.

    >>> render(parse("(a+b)*conj(c)"))
    '(* (+ a b) (conj c))'
    """
    if isinstance(expr, Literal):
        return expr.text
    if isinstance(expr, Var):
        return expr.name
    if isinstance(expr, UnaryOp):
        return f"({expr.op} {render(expr.operand)})"
    if isinstance(expr, BinaryOp):
        return f"({expr.op} {render(expr.left)} {render(expr.right)})"
    if isinstance(expr, Call):
        return f"({' '.join([expr.name, *(render(a) for a in expr.args)])})"
    raise TypeError(f"Not an expression node: {expr!r}")


# --- Parsing render() output back into AST objects ---

_ATOM_RE = re.compile(r"[^\s()]+")


def _tokenize(text: str) -> list[str]:
    """Tokenize prefix text into parentheses and atoms."""
    tokens: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
        elif ch in "()":
            tokens.append(ch)
            i += 1
        else:
            m = _ATOM_RE.match(text, i)
            tokens.append(m.group())
            i = m.end()
    return tokens


def read_prefix(text: str) -> Expr:
    """Parse the output of render() back into an AST.

    Grammar:
        expr := '(' HEAD expr+ ')'   -- operator or function application
              | NUMBER               -- literal
              | IDENT                -- variable

    ``(- x)`` is negation, ``(op x y)`` with a binary operator head is a
    BinaryOp, any identifier head is a Call.
    """
    tokens = _tokenize(text)
    expr, pos = _read_expr(tokens, 0)
    if pos != len(tokens):
        raise MalformedExpressionError(f"Unexpected tokens after position {pos}: {tokens[pos:]}")
    return expr


def _read_expr(tokens: list[str], pos: int) -> tuple[Expr, int]:
    """Recursive descent reader. Returns (expr, next_pos)."""
    if pos >= len(tokens):
        raise MalformedExpressionError("Unexpected end of expression")

    tok = tokens[pos]

    if tok == ")":
        raise UnbalancedParenthesesError("Unbalanced parentheses: unexpected ')'", tok)

    if tok != "(":
        if is_number_token(tok):
            return Literal(tok), pos + 1
        if is_identifier(tok):
            return Var(tok), pos + 1
        raise InvalidTokenError("Invalid token", tok)

    pos += 1  # consume '('
    if pos >= len(tokens) or tokens[pos] in "()":
        raise MalformedExpressionError("Expected an operator or function name")
    head = tokens[pos]
    pos += 1

    args: list[Expr] = []
    while pos < len(tokens) and tokens[pos] != ")":
        arg, pos = _read_expr(tokens, pos)
        args.append(arg)
    if pos >= len(tokens):
        raise UnbalancedParenthesesError("Unbalanced parentheses: missing ')'")
    pos += 1  # consume ')'

    return _apply(head, args), pos


def _apply(head: str, args: list[Expr]) -> Expr:
    if head in BINARY_OPERATORS:
        if head == "-" and len(args) == 1:
            return UnaryOp("-", args[0])
        expected = 2
    elif is_identifier(head):
        expected = function_arity(head)
    else:
        raise InvalidTokenError("Invalid operator or function name", head)

    if len(args) < expected:
        raise InsufficientArgumentsError(f"Insufficient arguments for {head}")
    if len(args) > expected:
        raise MalformedExpressionError(f"Too many arguments for {head}")

    if head in BINARY_OPERATORS:
        return BinaryOp(head, args[0], args[1])
    return Call(head, args)
