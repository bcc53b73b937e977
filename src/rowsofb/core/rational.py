"""
Exact rational numbers for the RowsOfB numeric engine.

A Rational is a (numerator, denominator) pair. The denominator is never
zero and is always positive after construction; any sign lives in the
numerator. Arithmetic does NOT reduce to lowest terms, so equal values
may be held in different forms until ``reduce()`` is called. Equality and
hashing compare reduced forms.

Usage:
    from rowsofb.core.rational import Rational

    half = Rational(2, 4)
    str(half)            # "2/4"
    str(half.reduce())   # "1/2"
    half == Rational(1, 2)
"""

from __future__ import annotations

import re

from rowsofb.core.errors import DivisionByZeroError

# "n" or "n/d", optional sign on either part
_RATIONAL_RE = re.compile(r"\s*([+-]?\d+)\s*(?:/\s*([+-]?\d+)\s*)?")


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by the Euclidean algorithm (result is non-negative)."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


class Rational:
    """An exact fraction that is only reduced on request."""

    __slots__ = ("_n", "_d")

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        if denominator == 0:
            raise DivisionByZeroError(f"zero denominator in {numerator}/{denominator}")
        # Sign normalization: the denominator is always positive
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        self._n = numerator
        self._d = denominator

    @classmethod
    def from_int(cls, value: int) -> Rational:
        return cls(value, 1)

    @classmethod
    def parse(cls, text: str) -> Rational:
        """Parse ``n`` or ``n/d``; the denominator defaults to 1.

        Raises:
            ValueError: If the text is not an integer or integer fraction.
            DivisionByZeroError: If the denominator is zero.
        """
        m = _RATIONAL_RE.fullmatch(text)
        if m is None:
            raise ValueError(f"invalid fraction: {text!r}")
        numerator = int(m.group(1))
        denominator = int(m.group(2)) if m.group(2) is not None else 1
        return cls(numerator, denominator)

    @property
    def numerator(self) -> int:
        return self._n

    @property
    def denominator(self) -> int:
        return self._d

    # -- Arithmetic (unreduced) --

    def add(self, other: Rational) -> Rational:
        """Sum over the product of denominators; no common-denominator search."""
        return Rational(self._n * other._d + other._n * self._d, self._d * other._d)

    def mul(self, other: Rational) -> Rational:
        return Rational(self._n * other._n, self._d * other._d)

    def reciprocal(self) -> Rational:
        """Multiplicative inverse.

        Raises:
            DivisionByZeroError: If this value is zero.
        """
        if self._n == 0:
            raise DivisionByZeroError("cannot take the reciprocal of zero")
        return Rational(self._d, self._n)

    def div(self, other: Rational) -> Rational:
        return self.mul(other.reciprocal())

    def neg(self) -> Rational:
        return Rational(-self._n, self._d)

    def reduce(self) -> Rational:
        """Return the same value in lowest terms."""
        divisor = gcd(self._n, self._d)
        return Rational(self._n // divisor, self._d // divisor)

    # -- Predicates and conversion --

    def is_zero(self) -> bool:
        return self._n == 0

    def is_whole(self) -> bool:
        """True if the value is an integer (e.g. 4/2, but not 3/2)."""
        return self._n % self._d == 0

    def to_int(self) -> int:
        """Integer value of an integral rational.

        Raises:
            ValueError: If the value is not integral.
        """
        if not self.is_whole():
            raise ValueError(f"{self} is not an integer")
        return self._n // self._d

    # -- Python protocol --

    def __add__(self, other: object) -> Rational:
        if isinstance(other, int):
            other = Rational.from_int(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: object) -> Rational:
        if isinstance(other, int):
            other = Rational.from_int(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return self.add(other.neg())

    def __mul__(self, other: object) -> Rational:
        if isinstance(other, int):
            other = Rational.from_int(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Rational:
        if isinstance(other, int):
            other = Rational.from_int(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return self.div(other)

    def __neg__(self) -> Rational:
        return self.neg()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            other = Rational.from_int(other)
        if not isinstance(other, Rational):
            return NotImplemented
        # Cross-multiplication equals comparing reduced forms
        return self._n * other._d == other._n * self._d

    def __hash__(self) -> int:
        reduced = self.reduce()
        # Whole values hash like the equal int
        if reduced._d == 1:
            return hash(reduced._n)
        return hash((reduced._n, reduced._d))

    def __str__(self) -> str:
        if self._d == 1:
            return str(self._n)
        return f"{self._n}/{self._d}"

    def __repr__(self) -> str:
        return f"Rational({self._n}, {self._d})"


ZERO = Rational(0)
ONE = Rational(1)
MINUS_ONE = Rational(-1)
