"""Abstract syntax tree nodes for complex-number expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

BINARY_OPERATORS = ("+", "-", "*", "/", "**", "^")

# Fixed arity per known function; unknown names are parsed with arity 1
# and rejected at evaluation time.
FUNCTION_ARITY = {"conj": 1, "sqrt": 1, "root": 2}
DEFAULT_FUNCTION_ARITY = 1


def function_arity(name: str) -> int:
    return FUNCTION_ARITY.get(name, DEFAULT_FUNCTION_ARITY)


class Expr:
    """Base class for AST expressions."""

    def size(self) -> int:
        raise NotImplementedError

    def variables(self) -> set[str]:
        raise NotImplementedError

    def children(self) -> tuple[Expr, ...]:
        return ()

    def __repr__(self) -> str:
        from complexcalc.core.printer import render
        return render(self)


@dataclass(frozen=True, repr=False)
class Literal(Expr):
    """A numeric or imaginary literal: 3, 2.5, 1e-3, 4i, ...

    The text is kept as written and only converted to a number at
    evaluation time.
    """

    text: str

    def size(self) -> int:
        return 1

    def variables(self) -> set[str]:
        return set()


@dataclass(frozen=True, repr=False)
class Var(Expr):
    """A free variable: a, b, z1, ..."""

    name: str

    def size(self) -> int:
        return 1

    def variables(self) -> set[str]:
        return {self.name}


@dataclass(frozen=True, repr=False)
class UnaryOp(Expr):
    """Negation: -x."""

    op: str
    operand: Expr

    def size(self) -> int:
        return 1 + self.operand.size()

    def variables(self) -> set[str]:
        return self.operand.variables()

    def children(self) -> tuple[Expr, ...]:
        return (self.operand,)


@dataclass(frozen=True, repr=False)
class BinaryOp(Expr):
    """Binary arithmetic: x + y, x ** y, ..."""

    op: str
    left: Expr
    right: Expr

    def size(self) -> int:
        return 1 + self.left.size() + self.right.size()

    def variables(self) -> set[str]:
        return self.left.variables() | self.right.variables()

    def children(self) -> tuple[Expr, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, repr=False)
class Call(Expr):
    """Function application: conj(z), sqrt(z), root(z, n)."""

    name: str
    args: tuple[Expr, ...]

    def __init__(self, name: str, args: Sequence[Expr]):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "args", tuple(args))

    def size(self) -> int:
        return 1 + sum(a.size() for a in self.args)

    def variables(self) -> set[str]:
        result: set[str] = set()
        for a in self.args:
            result |= a.variables()
        return result

    def children(self) -> tuple[Expr, ...]:
        return self.args


def free_variables(expr: Expr) -> set[str]:
    """Names of all variables referenced anywhere in `expr`."""
    return expr.variables()
