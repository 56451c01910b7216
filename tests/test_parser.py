"""Tests for tokenization, shunting-yard parsing and prefix rendering."""

import pytest
from complexcalc.core.ast_nodes import BinaryOp, Call, Literal, UnaryOp, Var
from complexcalc.core.errors import (
    InsufficientArgumentsError, InvalidTokenError, LexicalError, MalformedExpressionError,
    ParseError, UnbalancedParenthesesError, UnexpectedCommaError, UnknownOperatorError,
)
from complexcalc.core.parser import (
    OPERATORS, UNARY_MINUS, Assoc, FunctionMark, OperatorMark, parse, parse_tokens, to_postfix,
)
from complexcalc.core.printer import read_prefix, render
from complexcalc.core.tokenizer import tokenize


class TestTokenizer:
    def test_basic(self):
        assert tokenize("3 + 4i*x") == ["3", "+", "4i", "*", "x"]

    def test_power_operators(self):
        assert tokenize("a**2^b") == ["a", "**", "2", "^", "b"]

    def test_number_forms(self):
        assert tokenize("1.5e-3i + .5 - 2e10") == ["1.5e-3i", "+", ".5", "-", "2e10"]

    def test_function_call(self):
        assert tokenize("root(x, 2)") == ["root", "(", "x", ",", "2", ")"]

    def test_whitespace_only(self):
        assert tokenize("  \t ") == []

    def test_bare_i_is_identifier(self):
        assert tokenize("i") == ["i"]

    def test_invalid_character(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("2 $ 3")
        assert exc_info.value.position == 2

    def test_no_partial_results(self):
        with pytest.raises(LexicalError):
            tokenize("a + b = c")

    def test_lexical_error_is_value_error(self):
        with pytest.raises(ValueError):
            tokenize("3 # 4")

    @pytest.mark.parametrize("text", ["abc + 12 * (x1 - y_2)", "sqrt(2i)^ 3 ** 4 / 5", "a,b,(c)"])
    def test_valid_characters_tokenize(self, text):
        assert "".join(tokenize(text)) == "".join(text.split())


class TestOperatorTable:
    def test_precedence_order(self):
        assert OPERATORS["+"].precedence < OPERATORS["*"].precedence < OPERATORS["**"].precedence
        assert OPERATORS["**"].precedence < OPERATORS[UNARY_MINUS].precedence

    def test_associativity(self):
        assert OPERATORS["-"].assoc is Assoc.LEFT
        assert OPERATORS["^"].assoc is Assoc.RIGHT
        assert OPERATORS[UNARY_MINUS].arity == 1


class TestPostfix:
    def test_precedence(self):
        assert to_postfix(tokenize("2+3*4")) == [
            Literal("2"), Literal("3"), Literal("4"), OperatorMark("*"), OperatorMark("+"),
        ]

    def test_function_marker(self):
        assert to_postfix(tokenize("root(a, 2)")) == [
            Var("a"), Literal("2"), FunctionMark("root"),
        ]

    def test_unary_minus_marker(self):
        assert to_postfix(tokenize("-x")) == [Var("x"), OperatorMark(UNARY_MINUS)]


class TestParser:
    @pytest.mark.parametrize("text, expected", [
        ("(a+b)*conj(c)", "(* (+ a b) (conj c))"),
        ("2+3*4", "(+ 2 (* 3 4))"),
        ("(2+3)*4", "(* (+ 2 3) 4)"),
        ("2**3**2", "(** 2 (** 3 2))"),
        ("2^3^2", "(^ 2 (^ 3 2))"),
        ("a-b-c", "(- (- a b) c)"),
        ("a/b*c", "(* (/ a b) c)"),
        ("-2+3", "(+ (- 2) 3)"),
        ("2*-3", "(* 2 (- 3))"),
        ("a - -b", "(- a (- b))"),
        ("--a", "(- (- a))"),
        ("-x**2", "(** (- x) 2)"),
        ("2**-1", "(** 2 (- 1))"),
        ("sqrt(-4)", "(sqrt (- 4))"),
        ("root(x, 3)", "(root x 3)"),
        ("root(x,-3)", "(root x (- 3))"),
        ("root(a+b, 1+1)", "(root (+ a b) (+ 1 1))"),
        ("conj(sqrt(z))", "(conj (sqrt z))"),
        ("(3+2i)*(1-4i)", "(* (+ 3 2i) (- 1 4i))"),
        ("foo(x)", "(foo x)"),
        ("((x))", "x"),
    ])
    def test_render(self, text, expected):
        assert render(parse(text)) == expected

    def test_ast_shape(self):
        ast = parse("-a + root(b, 2)")
        assert ast == BinaryOp(
            "+",
            UnaryOp("-", Var("a")),
            Call("root", [Var("b"), Literal("2")]),
        )

    def test_literal_text_is_kept(self):
        assert parse("2.50e1i") == Literal("2.50e1i")

    def test_parse_tokens_directly(self):
        assert parse_tokens(["x", "*", "2"]) == BinaryOp("*", Var("x"), Literal("2"))


class TestParserErrors:
    @pytest.mark.parametrize("text, error", [
        ("(a+b", UnbalancedParenthesesError),
        ("a+b)", UnbalancedParenthesesError),
        ("sqrt(4", UnbalancedParenthesesError),
        ("a, b", UnexpectedCommaError),
        ("a+b, c", UnexpectedCommaError),
        ("a+", InsufficientArgumentsError),
        ("*3", InsufficientArgumentsError),
        ("+3", InsufficientArgumentsError),
        ("root(4)", InsufficientArgumentsError),
        ("a b", MalformedExpressionError),
        ("", MalformedExpressionError),
        ("2x", MalformedExpressionError),
        ("sqrt x", MalformedExpressionError),
        ("(a, b)", MalformedExpressionError),
        ("a @ b", LexicalError),
    ])
    def test_errors(self, text, error):
        with pytest.raises(error):
            parse(text)

    def test_unknown_operator(self):
        with pytest.raises(UnknownOperatorError):
            parse_tokens(["3", "%", "4"])

    def test_invalid_token(self):
        with pytest.raises(InvalidTokenError):
            parse_tokens(["3x"])

    def test_all_errors_are_parse_errors(self):
        for text in ["(a", "a,", "a+", "a b"]:
            with pytest.raises(ParseError):
                parse(text)


class TestPrefixReader:
    @pytest.mark.parametrize("text", [
        "(a+b)*conj(c)",
        "-2-3",
        "2*-3",
        "root(x**2, 1+1) / sqrt(-4i)",
        "2**3**2",
        "conj(a)^b - 1.5e-3i",
        "foo(i)",
    ])
    def test_round_trip(self, text):
        ast = parse(text)
        assert read_prefix(render(ast)) == ast

    def test_reads_unary_minus(self):
        assert read_prefix("(- x)") == UnaryOp("-", Var("x"))

    @pytest.mark.parametrize("text, error", [
        ("(root a)", InsufficientArgumentsError),
        ("(+ a)", InsufficientArgumentsError),
        ("(+ a b c)", MalformedExpressionError),
        ("(+ a b", UnbalancedParenthesesError),
        (")", UnbalancedParenthesesError),
        ("a b", MalformedExpressionError),
        ("()", MalformedExpressionError),
        ("(% a b)", InvalidTokenError),
        ("3x", InvalidTokenError),
    ])
    def test_errors(self, text, error):
        with pytest.raises(error):
            read_prefix(text)
