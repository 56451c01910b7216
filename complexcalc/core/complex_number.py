"""Immutable complex number value type.

All operations return new values. Integer powers use repeated
multiplication; everything else goes through the polar form.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from complexcalc.core.errors import (
    DivisionByZeroError,
    InvalidRootDegreeError,
    NumericOverflowError,
)

DEFAULT_TOLERANCE = 1e-8
INTEGER_EXPONENT_EPS = 1e-14
LOG_FLOOR = 1e-300
DISPLAY_ZERO = 1e-12
DISPLAY_DIGITS = 10


def _check_finite(z: Complex) -> Complex:
    if not (math.isfinite(z.re) and math.isfinite(z.im)):
        raise NumericOverflowError("Power overflows the float range")
    return z


def _format_real(x: float) -> str:
    if x.is_integer():
        return str(int(x))
    return repr(x)


@dataclass(frozen=True)
class Complex:
    """A complex number re + im·i."""

    re: float = 0.0
    im: float = 0.0

    def __post_init__(self) -> None:
        # fold -0.0 into 0.0; atan2 would otherwise return -pi on the negative real axis
        object.__setattr__(self, "re", float(self.re) + 0.0)
        object.__setattr__(self, "im", float(self.im) + 0.0)

    # --- arithmetic ---

    def add(self, other: Complex) -> Complex:
        return Complex(self.re + other.re, self.im + other.im)

    def sub(self, other: Complex) -> Complex:
        return Complex(self.re - other.re, self.im - other.im)

    def mul(self, other: Complex) -> Complex:
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def div(self, other: Complex) -> Complex:
        """Divide by `other`; only an exactly-zero denominator is rejected."""
        denom = other.re * other.re + other.im * other.im
        if denom == 0:
            raise DivisionByZeroError("Division by zero (complex)")
        return Complex(
            (self.re * other.re + self.im * other.im) / denom,
            (self.im * other.re - self.re * other.im) / denom,
        )

    def neg(self) -> Complex:
        return Complex(-self.re, -self.im)

    def conjugate(self) -> Complex:
        return Complex(self.re, -self.im)

    def magnitude(self) -> float:
        return math.hypot(self.re, self.im)

    def angle(self) -> float:
        return math.atan2(self.im, self.re)

    def power(self, exponent: Complex) -> Complex:
        """Raise to a complex power.

        Real integer exponents are computed by repeated multiplication (a
        negative exponent inverts the result, so a zero base raises
        DivisionByZeroError). Other exponents use
        (r·e^{iθ})^{a+ci} = r^a·e^{-cθ}·e^{i(aθ + c·ln r)}.
        """
        if abs(exponent.im) < INTEGER_EXPONENT_EPS and exponent.re.is_integer():
            n = int(exponent.re)
            if n == 0:
                return Complex(1.0, 0.0)
            result = Complex(1.0, 0.0)
            for _ in range(abs(n)):
                result = _check_finite(result.mul(self))
            if n < 0:
                return Complex(1.0, 0.0).div(result)
            return result

        r = self.magnitude()
        theta = self.angle()
        a, c = exponent.re, exponent.im
        try:
            mag = r ** a * math.exp(-c * theta)
        except ZeroDivisionError as e:
            # 0 ** negative
            raise DivisionByZeroError("Zero raised to a negative power") from e
        except OverflowError as e:
            raise NumericOverflowError("Power overflows the float range") from e
        ang = a * theta + c * math.log(max(r, LOG_FLOOR))
        if not (math.isfinite(mag) and math.isfinite(ang)):
            raise NumericOverflowError("Power overflows the float range")
        return _check_finite(Complex(mag * math.cos(ang), mag * math.sin(ang)))

    def sqrt(self) -> Complex:
        """Principal square root; the result's imaginary sign follows the input's."""
        r = self.magnitude()
        re = math.sqrt((r + self.re) / 2)
        im = math.sqrt((r - self.re) / 2)
        if self.im < 0:
            im = -im
        return Complex(re, im)

    def nth_root(self, n: int) -> Complex:
        """Principal n-th root via the polar form."""
        if n == 0 or not float(n).is_integer():
            raise InvalidRootDegreeError(f"root: degree must be a nonzero integer, got {n!r}")
        r = self.magnitude()
        try:
            mag = r ** (1 / n)
        except ZeroDivisionError as e:
            raise DivisionByZeroError("Negative-degree root of zero") from e
        ang = self.angle() / n
        return Complex(mag * math.cos(ang), mag * math.sin(ang))

    def approx_equals(self, other: Complex, tol: float = DEFAULT_TOLERANCE) -> bool:
        return abs(self.re - other.re) < tol and abs(self.im - other.im) < tol

    # --- operator sugar ---

    def __add__(self, other: Complex) -> Complex:
        return self.add(other)

    def __sub__(self, other: Complex) -> Complex:
        return self.sub(other)

    def __mul__(self, other: Complex) -> Complex:
        return self.mul(other)

    def __truediv__(self, other: Complex) -> Complex:
        return self.div(other)

    def __pow__(self, other: Complex) -> Complex:
        return self.power(other)

    def __neg__(self) -> Complex:
        return self.neg()

    def __abs__(self) -> float:
        return self.magnitude()

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __str__(self) -> str:
        re = round(self.re, DISPLAY_DIGITS)
        im = round(self.im, DISPLAY_DIGITS)
        re_str = "0" if abs(re) < DISPLAY_ZERO else _format_real(re)
        if abs(im) < DISPLAY_ZERO:
            return re_str
        sign = "+" if im >= 0 else "-"
        im_abs = "i" if abs(im) == 1 else f"{_format_real(abs(im))}i"
        return f"{re_str}{sign}{im_abs}"
