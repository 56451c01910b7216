"""Operator-precedence (shunting-yard) parser producing an AST.

Parsing runs in two passes over local state only:

1. Infix tokens → postfix sequence, using an operator stack that holds
   left-parenthesis markers, operators and pending function calls.
2. Postfix sequence → AST, using a value stack.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from complexcalc.core.ast_nodes import BinaryOp, Call, Expr, Literal, UnaryOp, Var, function_arity
from complexcalc.core.errors import (
    InsufficientArgumentsError,
    InvalidTokenError,
    MalformedExpressionError,
    UnbalancedParenthesesError,
    UnexpectedCommaError,
    UnknownOperatorError,
)
from complexcalc.core.tokenizer import is_identifier, is_number_token, tokenize

log = logging.getLogger(__name__)


class Assoc(str, Enum):
    LEFT = "L"
    RIGHT = "R"


@dataclass(frozen=True)
class OperatorInfo:
    precedence: int
    assoc: Assoc
    arity: int


UNARY_MINUS = "u-"

OPERATORS: dict[str, OperatorInfo] = {
    "+": OperatorInfo(2, Assoc.LEFT, 2),
    "-": OperatorInfo(2, Assoc.LEFT, 2),
    "*": OperatorInfo(3, Assoc.LEFT, 2),
    "/": OperatorInfo(3, Assoc.LEFT, 2),
    "**": OperatorInfo(5, Assoc.RIGHT, 2),
    "^": OperatorInfo(5, Assoc.RIGHT, 2),
    UNARY_MINUS: OperatorInfo(6, Assoc.RIGHT, 1),
}


# ── Stack markers ────────────────────────────────────────────────────

@dataclass(frozen=True)
class LeftParen:
    pass


@dataclass(frozen=True)
class OperatorMark:
    symbol: str


@dataclass(frozen=True)
class FunctionMark:
    name: str


StackItem = Union[LeftParen, OperatorMark, FunctionMark]
PostfixItem = Union[Literal, Var, OperatorMark, FunctionMark]

_LEFT_PAREN = LeftParen()


def _pops_before(incoming: OperatorInfo, top: OperatorInfo) -> bool:
    if incoming.assoc is Assoc.LEFT:
        return incoming.precedence <= top.precedence
    return incoming.precedence < top.precedence


def _is_unary_position(prev: str | None) -> bool:
    return prev is None or prev in ("(", ",") or prev in OPERATORS


def to_postfix(tokens: Sequence[str]) -> list[PostfixItem]:
    """Reorder infix tokens into postfix order (first pass)."""
    output: list[PostfixItem] = []
    ops: list[StackItem] = []
    # Category of the previous token: None at the start, otherwise "number",
    # "id", "(", ")", "," or an operator key from OPERATORS.
    prev: str | None = None

    for i, tok in enumerate(tokens):
        if is_number_token(tok):
            output.append(Literal(tok))
            prev = "number"

        elif is_identifier(tok):
            if i + 1 < len(tokens) and tokens[i + 1] == "(":
                ops.append(FunctionMark(tok))
            else:
                output.append(Var(tok))
            prev = "id"

        elif tok == ",":
            while ops and not isinstance(ops[-1], LeftParen):
                output.append(ops.pop())
            if not ops:
                raise UnexpectedCommaError("Argument separator outside of a function call", tok)
            prev = ","

        elif tok == "(":
            ops.append(_LEFT_PAREN)
            prev = "("

        elif tok == ")":
            while ops and not isinstance(ops[-1], LeftParen):
                output.append(ops.pop())
            if not ops:
                raise UnbalancedParenthesesError("Unbalanced parentheses: missing '('", tok)
            ops.pop()
            if ops and isinstance(ops[-1], FunctionMark):
                output.append(ops.pop())
            prev = ")"

        elif tok in OPERATORS and tok != UNARY_MINUS:
            symbol = UNARY_MINUS if tok == "-" and _is_unary_position(prev) else tok
            info = OPERATORS[symbol]
            while ops:
                top = ops[-1]
                if not isinstance(top, OperatorMark):
                    break
                if not _pops_before(info, OPERATORS[top.symbol]):
                    break
                output.append(ops.pop())
            ops.append(OperatorMark(symbol))
            prev = symbol

        elif _looks_like_operator(tok):
            raise UnknownOperatorError("Unknown operator", tok)

        else:
            raise InvalidTokenError("Invalid token", tok)

    while ops:
        top = ops.pop()
        if isinstance(top, LeftParen):
            raise UnbalancedParenthesesError("Unbalanced parentheses: missing ')'")
        output.append(top)

    log.debug("postfix: %s", " ".join(_describe(item) for item in output))
    return output


def _looks_like_operator(tok: str) -> bool:
    return bool(tok) and not any(ch.isalnum() or ch == "_" or ch.isspace() for ch in tok)


def _describe(item: PostfixItem) -> str:
    if isinstance(item, Literal):
        return item.text
    if isinstance(item, Var):
        return item.name
    if isinstance(item, OperatorMark):
        return item.symbol
    return f"{item.name}()"


def _pop_args(stack: list[Expr], count: int, what: str) -> list[Expr]:
    if len(stack) < count:
        raise InsufficientArgumentsError(f"Insufficient arguments for {what}")
    args = stack[len(stack) - count:]
    del stack[len(stack) - count:]
    return args


def build_ast(postfix: Sequence[PostfixItem]) -> Expr:
    """Rebuild a tree from a postfix sequence (second pass)."""
    stack: list[Expr] = []
    for item in postfix:
        if isinstance(item, (Literal, Var)):
            stack.append(item)
        elif isinstance(item, FunctionMark):
            args = _pop_args(stack, function_arity(item.name), f"function {item.name}")
            stack.append(Call(item.name, args))
        elif isinstance(item, OperatorMark):
            info = OPERATORS[item.symbol]
            args = _pop_args(stack, info.arity, f"operator {item.symbol}")
            if item.symbol == UNARY_MINUS:
                stack.append(UnaryOp("-", args[0]))
            else:
                stack.append(BinaryOp(item.symbol, args[0], args[1]))
        else:
            raise MalformedExpressionError(f"Unexpected postfix item {item!r}")

    if len(stack) != 1:
        raise MalformedExpressionError("Invalid or ambiguous expression")
    return stack[0]


def parse_tokens(tokens: Sequence[str]) -> Expr:
    return build_ast(to_postfix(tokens))


def parse(text: str) -> Expr:
    """Parse an infix expression string into an AST.

    Raises a ParseError subclass on malformed input.
    """
    return parse_tokens(tokenize(text))
