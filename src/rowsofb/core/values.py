"""
Tagged evaluation results.

Every expression evaluates to either a scalar (Rational) or a matrix
(Matrix). The kind is checked at each combination site at run time; the
grammar itself is untyped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from rowsofb.core.matrix import Matrix
from rowsofb.core.rational import Rational


class ValueKind(StrEnum):
    """The two kinds of value an expression can produce."""

    SCALAR = "scalar"
    MATRIX = "matrix"


@dataclass(frozen=True)
class Value:
    """A scalar or a matrix, never both."""

    kind: ValueKind
    payload: Rational | Matrix

    @classmethod
    def scalar(cls, value: Rational) -> Value:
        return cls(ValueKind.SCALAR, value)

    @classmethod
    def matrix(cls, value: Matrix) -> Value:
        return cls(ValueKind.MATRIX, value)

    @property
    def is_scalar(self) -> bool:
        return self.kind == ValueKind.SCALAR

    @property
    def is_matrix(self) -> bool:
        return self.kind == ValueKind.MATRIX

    def as_scalar(self) -> Rational:
        if not isinstance(self.payload, Rational):
            raise TypeError("value is a matrix, not a scalar")
        return self.payload

    def as_matrix(self) -> Matrix:
        if not isinstance(self.payload, Matrix):
            raise TypeError("value is a scalar, not a matrix")
        return self.payload

    def __str__(self) -> str:
        return str(self.payload)
