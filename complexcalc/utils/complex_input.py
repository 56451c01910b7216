"""Parsing of user-typed complex values such as ``3+4i``, ``-2-3i``, ``i``."""

from __future__ import annotations

import re

from complexcalc.core.complex_number import Complex
from complexcalc.core.errors import InvalidLiteralError

_NUM = r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"

_REAL_RE = re.compile(rf"(?P<re>[+-]?{_NUM})")
_IMAG_RE = re.compile(rf"(?P<sign>[+-]?)(?P<im>{_NUM})?i")
_FULL_RE = re.compile(rf"(?P<re>[+-]?{_NUM})(?P<sign>[+-])(?P<im>{_NUM})?i")


def _imag_part(sign: str, digits: str | None) -> float:
    value = float(digits) if digits else 1.0
    return -value if sign == "-" else value


def parse_complex_input(text: str) -> Complex:
    """Parse a loosely formatted complex value.

    Accepts ``a``, ``bi``, ``a+bi``, ``a-bi`` with optional exponents, and
    bare ``i``/``-i`` for the unit imaginary. Whitespace is ignored.
    """
    cleaned = re.sub(r"\s+", "", text)

    m = _REAL_RE.fullmatch(cleaned)
    if m:
        return Complex(float(m["re"]), 0.0)

    m = _IMAG_RE.fullmatch(cleaned)
    if m:
        return Complex(0.0, _imag_part(m["sign"], m["im"]))

    m = _FULL_RE.fullmatch(cleaned)
    if m:
        return Complex(float(m["re"]), _imag_part(m["sign"], m["im"]))

    raise InvalidLiteralError(text)
