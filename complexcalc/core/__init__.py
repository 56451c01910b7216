from complexcalc.core.complex_number import Complex
from complexcalc.core.ast_nodes import BinaryOp, Call, Expr, Literal, UnaryOp, Var, free_variables
from complexcalc.core.tokenizer import tokenize
from complexcalc.core.parser import parse, parse_tokens
from complexcalc.core.printer import read_prefix, render
from complexcalc.core.evaluator import evaluate, parse_literal

__all__ = [
    "Complex",
    "Expr", "Literal", "Var", "UnaryOp", "BinaryOp", "Call", "free_variables",
    "tokenize", "parse", "parse_tokens", "render", "read_prefix",
    "evaluate", "parse_literal",
]
