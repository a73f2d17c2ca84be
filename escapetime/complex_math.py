"""
Minimal complex number type used by the escape-time engine.

Complex values are immutable pairs of float64 components. Arithmetic lives in
module-level functions (add, multiply, power, ...) and the usual Python
operators delegate to them.

Nothing here raises on arithmetic edge cases: division by zero gives
inf / nan and overflow gives inf, exactly as IEEE doubles do. Plain Python
floats raise ZeroDivisionError and `math` raises OverflowError, so division and
the transcendental functions go through numpy under errstate(all="ignore").
"""

from __future__ import annotations

import numbers

import numpy as np

from escapetime.errors import ComplexConversionError


class Complex:
    """A complex number in a + bi form."""

    __slots__ = ("_re", "_im")

    def __init__(self, re: float = 0.0, im: float = 0.0):
        object.__setattr__(self, "_re", float(re))
        object.__setattr__(self, "_im", float(im))

    def __setattr__(self, name, value):
        raise AttributeError("Complex values are immutable")

    @property
    def re(self) -> float:
        return self._re

    @property
    def im(self) -> float:
        return self._im

    @classmethod
    def from_complex(cls, z: complex) -> "Complex":
        z = complex(z)
        return cls(z.real, z.imag)

    # -----------------------------
    # narrowing conversions
    # -----------------------------

    def to_int(self) -> int:
        """Real part truncated toward zero; fails if there is an imaginary part."""
        if self._im != 0:
            raise ComplexConversionError()
        if not np.isfinite(self._re):
            raise ComplexConversionError(f"Cannot convert {self._re} to int.")
        return int(self._re)

    def to_float32(self) -> float:
        if self._im != 0:
            raise ComplexConversionError()
        return float(np.float32(self._re))

    def to_float(self) -> float:
        if self._im != 0:
            raise ComplexConversionError()
        return self._re

    def __complex__(self):
        return complex(self._re, self._im)

    # -----------------------------
    # value semantics
    # -----------------------------

    def __eq__(self, other):
        if not isinstance(other, Complex):
            return NotImplemented
        # plain float ==, so nan never equals anything
        return self._re == other._re and self._im == other._im

    def __hash__(self):
        return hash((self._re, self._im))

    def __repr__(self):
        return f"Complex({self._re!r}, {self._im!r})"

    def __str__(self):
        return f"{self._re} + {self._im}i"

    # -----------------------------
    # operators
    # -----------------------------

    def __add__(self, other):
        if isinstance(other, (Complex, numbers.Real)):
            return add(self, other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, numbers.Real):
            return add(self, other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, (Complex, numbers.Real)):
            return subtract(self, other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, (Complex, numbers.Real)):
            return multiply(self, other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return multiply(self, other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, (Complex, numbers.Real)):
            return divide(self, other)
        return NotImplemented

    def __pow__(self, n):
        if isinstance(n, numbers.Integral):
            return power(self, n)
        return NotImplemented

    def __neg__(self):
        return Complex(-self._re, -self._im)

    def __abs__(self):
        return magnitude(self)


def _ieee_div(num, den) -> float:
    with np.errstate(all="ignore"):
        return float(np.float64(num) / np.float64(den))


def conjugate(c: Complex) -> Complex:
    return Complex(c.re, -c.im)


def reciprocal(c: Complex) -> Complex:
    """1 / c, computed as (re/s, -im/s) with s = re^2 + im^2."""
    scale = (c.re * c.re) + (c.im * c.im)
    return Complex(_ieee_div(c.re, scale), _ieee_div(-c.im, scale))


def add(a: Complex, b) -> Complex:
    """a + b. A real scalar b only shifts the real part."""
    if isinstance(b, Complex):
        return Complex(a.re + b.re, a.im + b.im)
    return Complex(a.re + b, a.im)


def subtract(a: Complex, b) -> Complex:
    if isinstance(b, Complex):
        return Complex(a.re - b.re, a.im - b.im)
    return Complex(a.re - b, a.im)


def multiply(a: Complex, b) -> Complex:
    """
    a * b. Multiplying a value by its own conjugate always leaves a zero
    imaginary part. A real scalar b scales both parts.
    """
    if isinstance(b, Complex):
        re = a.re * b.re - a.im * b.im
        im = a.re * b.im + a.im * b.re
        return Complex(re, im)
    return Complex(a.re * b, a.im * b)


def divide(a: Complex, b) -> Complex:
    """
    a / b.

    For complex b this is a * conj(b) divided by the real number b * conj(b).
    b == 0 is not an error: the result is inf / nan.
    """
    if isinstance(b, Complex):
        conj = conjugate(b)
        numerator = multiply(a, conj)
        denominator = multiply(b, conj).to_float()
        return divide(numerator, denominator)
    return Complex(_ieee_div(a.re, b), _ieee_div(a.im, b))


def power(c: Complex, n: int) -> Complex:
    """
    c raised to the integer n.

    The product starts from c itself and multiplies c in |n| - 1 more times,
    with c on the left of every multiply. Rendered images depend on this exact
    rounding order, so keep it. n == 0 is (1, 0) for every c, zero included.
    Negative n takes the reciprocal of c^|n|.
    """
    n = int(n)
    if n == 0:
        return Complex(1.0, 0.0)
    ret = c
    for _ in range(1, abs(n)):
        ret = multiply(c, ret)
    if n < 0:
        ret = divide(reciprocal(ret), 1)
    return ret


pow = power


def magnitude(c: Complex) -> float:
    """Euclidean norm; hypot keeps large components from overflowing."""
    return float(np.hypot(c.re, c.im))


def sin(c: Complex) -> Complex:
    with np.errstate(all="ignore"):
        re = np.sin(c.re) * np.cosh(c.im)
        im = np.cos(c.re) * np.sinh(c.im)
    return Complex(re, im)


def cos(c: Complex) -> Complex:
    with np.errstate(all="ignore"):
        re = np.cos(c.re) * np.cosh(c.im)
        im = -np.sin(c.re) * np.sinh(c.im)
    return Complex(re, im)


def sinh(c: Complex) -> Complex:
    with np.errstate(all="ignore"):
        re = np.sinh(c.re) * np.cos(c.im)
        im = np.cosh(c.re) * np.sin(c.im)
    return Complex(re, im)


def cosh(c: Complex) -> Complex:
    with np.errstate(all="ignore"):
        re = np.cosh(c.re) * np.cos(c.im)
        im = np.sinh(c.re) * np.sin(c.im)
    return Complex(re, im)


def tan(c: Complex) -> Complex:
    return divide(sin(c), cos(c))


def tanh(c: Complex) -> Complex:
    return divide(sinh(c), cosh(c))
