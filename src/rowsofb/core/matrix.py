"""
Dense matrices of exact rationals.

Matrices are value types: every module-level operation (ref, rref,
inverse, augment, add, scale, multiply, transpose) returns a new Matrix
and leaves its operands untouched. The elementary row operations on
Matrix itself (swap_rows, scale_row, add_scaled_row) mutate in place and
are only applied to private working copies.

Rows and columns are 1-indexed in the public API.

Usage:
    from rowsofb.core.matrix import Matrix, rref

    m = Matrix.from_rows([[1, 2], [3, 4]])
    print(rref(m))
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rowsofb.core.errors import DimensionError, SingularMatrixError
from rowsofb.core.rational import MINUS_ONE, ONE, ZERO, Rational

logger = logging.getLogger(__name__)


def _as_rational(value: Rational | int | str) -> Rational:
    if isinstance(value, Rational):
        return value
    if isinstance(value, int):
        return Rational.from_int(value)
    return Rational.parse(value)


class Matrix:
    """An r x c matrix stored row-major."""

    __slots__ = ("_rows", "_cols", "_values")

    def __init__(self, rows: int, cols: int, values: Iterable[Rational] | None = None) -> None:
        if rows < 0 or cols < 0:
            raise DimensionError(f"invalid matrix size {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        if values is None:
            self._values = [ZERO] * (rows * cols)
        else:
            self._values = list(values)
            if len(self._values) != rows * cols:
                raise DimensionError(
                    f"a {rows}x{cols} matrix needs {rows * cols} values, got {len(self._values)}"
                )

    # -- Constructors --

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls(rows, cols)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Rational | int | str]]) -> Matrix:
        """Build a matrix from a list of rows; entries may be Rationals, ints or "n/d" strings."""
        if not rows:
            return cls(0, 0)
        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                raise DimensionError("all rows must have the same number of entries")
        return cls(len(rows), width, (_as_rational(v) for row in rows for v in row))

    @classmethod
    def identity(cls, size: int) -> Matrix:
        m = cls(size, size)
        for i in range(1, size + 1):
            m.set(i, i, ONE)
        return m

    # -- Accessors --

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    def get(self, r: int, c: int) -> Rational:
        return self._values[self._index(r, c)]

    def set(self, r: int, c: int, value: Rational) -> None:
        self._values[self._index(r, c)] = value

    def _index(self, r: int, c: int) -> int:
        if not (1 <= r <= self._rows and 1 <= c <= self._cols):
            raise IndexError(f"({r}, {c}) is outside a {self._rows}x{self._cols} matrix")
        return (r - 1) * self._cols + (c - 1)

    def row(self, r: int) -> list[Rational]:
        start = (r - 1) * self._cols
        return self._values[start : start + self._cols]

    def rows_list(self) -> list[list[Rational]]:
        return [self.row(r) for r in range(1, self._rows + 1)]

    def values(self) -> list[Rational]:
        """Row-major copy of the entries."""
        return list(self._values)

    def column_slice(self, first: int, last: int) -> Matrix:
        """Columns first..last (1-indexed, inclusive) as a new matrix."""
        width = last - first + 1
        out = Matrix(self._rows, max(width, 0))
        for r in range(1, self._rows + 1):
            for c in range(1, width + 1):
                out.set(r, c, self.get(r, first + c - 1))
        return out

    def copy(self) -> Matrix:
        return Matrix(self._rows, self._cols, self._values)

    def is_zero(self) -> bool:
        return all(v.is_zero() for v in self._values)

    def is_square(self) -> bool:
        return self._rows == self._cols

    def reduce(self) -> Matrix:
        """Every entry in lowest terms."""
        return Matrix(self._rows, self._cols, (v.reduce() for v in self._values))

    # -- Elementary row operations (in place) --

    def swap_rows(self, r1: int, r2: int) -> None:
        if r1 == r2:
            return
        for c in range(1, self._cols + 1):
            a, b = self.get(r1, c), self.get(r2, c)
            self.set(r1, c, b)
            self.set(r2, c, a)

    def scale_row(self, r: int, s: Rational) -> None:
        for c in range(1, self._cols + 1):
            self.set(r, c, self.get(r, c).mul(s).reduce())

    def add_scaled_row(self, source: int, s: Rational, target: int) -> None:
        """target += s * source."""
        for c in range(1, self._cols + 1):
            updated = self.get(target, c).add(self.get(source, c).mul(s))
            self.set(target, c, updated.reduce())

    # -- Python protocol --

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and all(
            a == b for a, b in zip(self._values, other._values, strict=True)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self._rows}x{self._cols}, {self})"

    def __str__(self) -> str:
        rows = ("[" + ", ".join(str(v) for v in row) + "]" for row in self.rows_list())
        return "[" + ", ".join(rows) + "]"


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def zeros(rows: int, cols: int) -> Matrix:
    return Matrix.zeros(rows, cols)


def identity(size: int) -> Matrix:
    return Matrix.identity(size)


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------


def is_leading_entry(m: Matrix, r: int, c: int) -> bool:
    """True if (r, c) is nonzero and every entry to its left in row r is zero."""
    if m.get(r, c).is_zero():
        return False
    return all(m.get(r, cc).is_zero() for cc in range(1, c))


def ref(m: Matrix) -> Matrix:
    """Row echelon form: each nonzero row starts with a 1, strictly right of the row above."""
    work = m.copy()

    cursor = 1
    for c in range(1, work.cols + 1):
        if cursor > work.rows:
            break
        pivot = next(
            (r for r in range(cursor, work.rows + 1) if is_leading_entry(work, r, c)),
            None,
        )
        if pivot is None:
            continue

        work.swap_rows(cursor, pivot)
        work.scale_row(cursor, work.get(cursor, c).reciprocal())

        for r in range(cursor + 1, work.rows + 1):
            below = work.get(r, c)
            if not below.is_zero():
                work.add_scaled_row(cursor, below.neg(), r)

        cursor += 1

    return work


def rref(m: Matrix) -> Matrix:
    """Reduced row echelon form: each leading 1 is the only nonzero entry in its column."""
    work = ref(m)

    for c in range(1, work.cols + 1):
        for r in range(1, work.rows + 1):
            if not is_leading_entry(work, r, c):
                continue
            work.scale_row(r, work.get(r, c).reciprocal())
            for above in range(r - 1, 0, -1):
                entry = work.get(above, c)
                if not entry.is_zero():
                    work.add_scaled_row(r, entry.neg().mul(work.get(r, c).reciprocal()), above)

    return work


def inverse(m: Matrix) -> Matrix:
    """Inverse by row-reducing [M | I].

    Raises:
        DimensionError: If the matrix is not square.
        SingularMatrixError: If the matrix has no inverse.
    """
    if not m.is_square():
        raise DimensionError("non-square matrices have no inverse")

    n = m.rows
    reduced = rref(augment(m, identity(n)))

    for c in range(1, n + 1):
        has_unit_pivot = any(
            is_leading_entry(reduced, r, c)
            and reduced.get(r, c).numerator == 1
            and reduced.get(r, c).denominator == 1
            for r in range(1, n + 1)
        )
        if not has_unit_pivot:
            logger.debug("No unit leading entry in column %d; matrix is singular", c)
            raise SingularMatrixError("matrix has no inverse")

    return reduced.column_slice(n + 1, 2 * n)


# ---------------------------------------------------------------------------
# Combination
# ---------------------------------------------------------------------------


def augment(a: Matrix, b: Matrix) -> Matrix:
    """A's columns followed by B's columns.

    Raises:
        DimensionError: If the row counts differ.
    """
    if a.rows != b.rows:
        raise DimensionError("augmented matrices must have equal row counts")
    out = Matrix(a.rows, a.cols + b.cols)
    for r in range(1, a.rows + 1):
        for c in range(1, a.cols + 1):
            out.set(r, c, a.get(r, c))
        for c in range(1, b.cols + 1):
            out.set(r, a.cols + c, b.get(r, c))
    return out


def add(a: Matrix, b: Matrix) -> Matrix:
    """Entrywise sum.

    Raises:
        DimensionError: If the shapes differ.
    """
    if a.shape != b.shape:
        raise DimensionError("addition requires two identically-sized matrices")
    return Matrix(a.rows, a.cols, (x.add(y) for x, y in zip(a.values(), b.values(), strict=True)))


def scale(s: Rational, m: Matrix) -> Matrix:
    out = m.copy()
    for r in range(1, out.rows + 1):
        out.scale_row(r, s)
    return out


def negate(m: Matrix) -> Matrix:
    return scale(MINUS_ONE, m)


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product, summing each entry left to right over k.

    Raises:
        DimensionError: If A's column count differs from B's row count.
    """
    if a.cols != b.rows:
        raise DimensionError(
            f"cannot multiply a {a.rows}x{a.cols} matrix by a {b.rows}x{b.cols} matrix"
        )
    out = Matrix(a.rows, b.cols)
    for r in range(1, out.rows + 1):
        for c in range(1, out.cols + 1):
            total = ZERO
            for k in range(1, a.cols + 1):
                total = total.add(a.get(r, k).mul(b.get(k, c)))
            out.set(r, c, total)
    return out


def transpose(m: Matrix) -> Matrix:
    out = Matrix(m.cols, m.rows)
    for r in range(1, m.rows + 1):
        for c in range(1, m.cols + 1):
            out.set(c, r, m.get(r, c))
    return out
