"""Tokenization of infix complex-number expressions."""

from __future__ import annotations

import re

from complexcalc.core.errors import LexicalError

NUMBER_PATTERN = r"[0-9]*\.?[0-9]+(?:e[+-]?[0-9]+)?i?"
IDENT_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

_TOKEN_RE = re.compile(
    rf"\s*({NUMBER_PATTERN}|{IDENT_PATTERN}|\*\*|\^|[()+\-*/,])\s*"
)
_NUMBER_RE = re.compile(NUMBER_PATTERN)
_IDENT_RE = re.compile(IDENT_PATTERN)
_WHITESPACE_RE = re.compile(r"\s+")


def is_number_token(tok: str) -> bool:
    return _NUMBER_RE.fullmatch(tok) is not None


def is_identifier(tok: str) -> bool:
    return _IDENT_RE.fullmatch(tok) is not None


def tokenize(text: str) -> list[str]:
    """Split an expression into token strings.

    Tokens are numeric literals (optionally suffixed with ``i``),
    identifiers, ``**``, ``^`` and the single characters ``()+-*/,``.
    Whitespace between tokens is dropped. Raises LexicalError if any
    non-whitespace character is left unmatched.
    """
    tokens: list[str] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if not m or m.end() == pos:
            break
        tokens.append(m.group(1))
        pos = m.end()

    if "".join(tokens) != _WHITESPACE_RE.sub("", text):
        raise LexicalError(text, _first_unmatched(text, pos))
    return tokens


def _first_unmatched(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos
