"""Recursive evaluation of ASTs over complex numbers."""

from __future__ import annotations

import math
import re
from typing import Mapping

from complexcalc.core.ast_nodes import BinaryOp, Call, Expr, Literal, UnaryOp, Var
from complexcalc.core.complex_number import Complex
from complexcalc.core.errors import (
    EvaluationError,
    InvalidLiteralError,
    NonIntegerRootDegreeError,
    UnboundVariableError,
    UnknownFunctionError,
)
from complexcalc.utils.complex_input import parse_complex_input

ROOT_DEGREE_EPS = 1e-12

Environment = Mapping[str, "Complex | complex | float | str"]

_REAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _parse_real(text: str, literal: str) -> float:
    if not _REAL_RE.fullmatch(text):
        raise InvalidLiteralError(literal)
    value = float(text)
    if not math.isfinite(value):
        raise InvalidLiteralError(literal)
    return value


def parse_literal(text: str) -> Complex:
    """Convert literal text such as ``3``, ``2.5e-3`` or ``4i`` to a Complex.

    A trailing ``i`` marks an imaginary literal; with nothing (or only a
    sign) before it the coefficient is ±1.
    """
    if text.endswith("i"):
        num = text[:-1]
        if num in ("", "+"):
            return Complex(0.0, 1.0)
        if num == "-":
            return Complex(0.0, -1.0)
        return Complex(0.0, _parse_real(num, text))
    return Complex(_parse_real(text, text), 0.0)


def _binary(op: str, a: Complex, b: Complex) -> Complex:
    if op == "+":
        return a.add(b)
    if op == "-":
        return a.sub(b)
    if op == "*":
        return a.mul(b)
    if op == "/":
        return a.div(b)
    if op in ("**", "^"):
        return a.power(b)
    raise EvaluationError(f"Operator not implemented: {op}")


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _call(name: str, args: list[Complex]) -> Complex:
    if name == "conj":
        return args[0].conjugate()
    if name == "sqrt":
        return args[0].sqrt()
    if name == "root":
        degree = args[1]
        if abs(degree.im) > ROOT_DEGREE_EPS:
            raise NonIntegerRootDegreeError(
                f"root: degree must be a real integer, got {degree}"
            )
        return args[0].nth_root(_round_half_up(degree.re))
    raise UnknownFunctionError(name)


def evaluate(expr: Expr, env: Environment | None = None) -> Complex:
    """Evaluate `expr` with variables bound by `env`.

    Arguments and operands are evaluated left to right before the
    operation is applied. `env` is only read.
    """
    if env is None:
        env = {}

    if isinstance(expr, Literal):
        return parse_literal(expr.text)

    if isinstance(expr, Var):
        try:
            value = env[expr.name]
        except KeyError:
            raise UnboundVariableError(expr.name) from None
        if isinstance(value, Complex):
            return value
        if isinstance(value, str):
            return parse_complex_input(value)
        # plain int/float/complex bindings
        try:
            value = complex(value)
        except (TypeError, ValueError):
            raise InvalidLiteralError(repr(value)) from None
        return Complex(value.real, value.imag)

    if isinstance(expr, Call):
        args = [evaluate(a, env) for a in expr.args]
        return _call(expr.name, args)

    if isinstance(expr, UnaryOp):
        return evaluate(expr.operand, env).neg()

    if isinstance(expr, BinaryOp):
        left = evaluate(expr.left, env)
        right = evaluate(expr.right, env)
        return _binary(expr.op, left, right)

    raise TypeError(f"Not an expression node: {expr!r}")
