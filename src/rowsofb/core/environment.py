"""
Variable environment for a RowsOfB session.

An Environment holds 26 matrix variables (A-Z) and 26 scalar variables
(a-z). Every slot always holds a value: matrices default to a zero matrix
(3x3 unless configured otherwise) and scalars to zero. ``Z`` and ``z``
double as the "last result" of matrix- and scalar-valued evaluations.

Interactive definitions (``$A``, ``$a``, ``$$``) are delegated to a
Definer, injected at construction so the core can run without any
terminal attached.

Usage:
    from rowsofb.core.environment import Environment

    env = Environment()
    env.set_scalar("x", Rational(4, 2))
    env.get_scalar("x")   # Rational(2, 1): scalar writes are reduced
"""

from __future__ import annotations

import logging
import string
from enum import StrEnum
from typing import Protocol

from rowsofb.core.errors import UnknownVariableError
from rowsofb.core.matrix import Matrix
from rowsofb.core.rational import ZERO, Rational

logger = logging.getLogger(__name__)

MATRIX_NAMES = string.ascii_uppercase
SCALAR_NAMES = string.ascii_lowercase

MATRIX_RESULT = "Z"
SCALAR_RESULT = "z"


class VarKind(StrEnum):
    """Kind of variable a single-letter name denotes."""

    MATRIX = "matrix"
    SCALAR = "scalar"


def variable_kind(name: str) -> VarKind:
    """Classify a variable name.

    Raises:
        UnknownVariableError: If the name is not a single ASCII letter.
    """
    if len(name) == 1 and name in MATRIX_NAMES:
        return VarKind.MATRIX
    if len(name) == 1 and name in SCALAR_NAMES:
        return VarKind.SCALAR
    raise UnknownVariableError(f"{name!r} is not a valid variable name")


class Definer(Protocol):
    """Supplies values for definition-on-use factors.

    Each method blocks until the user provides a value, and returns None
    if the user cancelled.
    """

    def define_matrix(self, name: str) -> Matrix | None: ...

    def define_anonymous_matrix(self) -> Matrix | None: ...

    def define_scalar(self, name: str) -> Rational | None: ...


class CancellingDefiner:
    """A Definer with no user behind it: every request is cancelled."""

    def define_matrix(self, name: str) -> Matrix | None:
        return None

    def define_anonymous_matrix(self) -> Matrix | None:
        return None

    def define_scalar(self, name: str) -> Rational | None:
        return None


class Environment:
    """The 52 variable slots of one session. Not thread-safe."""

    def __init__(
        self,
        definer: Definer | None = None,
        default_shape: tuple[int, int] = (3, 3),
    ) -> None:
        self.definer: Definer = definer if definer is not None else CancellingDefiner()
        self.default_shape = default_shape
        self._matrices: dict[str, Matrix] = {}
        self._scalars: dict[str, Rational] = {}
        self.reset()

    def reset(self) -> None:
        """Restore every slot to its default value."""
        rows, cols = self.default_shape
        self._matrices = {name: Matrix.zeros(rows, cols) for name in MATRIX_NAMES}
        self._scalars = {name: ZERO for name in SCALAR_NAMES}
        logger.debug("Environment reset (matrix default %dx%d)", rows, cols)

    # -- Matrix slots --

    def get_matrix(self, name: str) -> Matrix:
        self._require(name, VarKind.MATRIX)
        return self._matrices[name]

    def set_matrix(self, name: str, value: Matrix) -> None:
        self._require(name, VarKind.MATRIX)
        self._matrices[name] = value
        logger.debug("Set %s to a %dx%d matrix", name, value.rows, value.cols)

    # -- Scalar slots --

    def get_scalar(self, name: str) -> Rational:
        self._require(name, VarKind.SCALAR)
        return self._scalars[name]

    def set_scalar(self, name: str, value: Rational) -> None:
        """Store a scalar, always in lowest terms."""
        self._require(name, VarKind.SCALAR)
        self._scalars[name] = value.reduce()
        logger.debug("Set %s to %s", name, self._scalars[name])

    # -- Last results --

    @property
    def last_matrix(self) -> Matrix:
        return self._matrices[MATRIX_RESULT]

    @property
    def last_scalar(self) -> Rational:
        return self._scalars[SCALAR_RESULT]

    # -- Inspection --

    def matrices(self) -> dict[str, Matrix]:
        return dict(self._matrices)

    def scalars(self) -> dict[str, Rational]:
        return dict(self._scalars)

    def modified(self) -> list[str]:
        """Names of slots whose value differs from the default, in A-Z, a-z order."""
        rows, cols = self.default_shape
        default_matrix = Matrix.zeros(rows, cols)
        names = [n for n in MATRIX_NAMES if self._matrices[n] != default_matrix]
        names += [n for n in SCALAR_NAMES if not self._scalars[n].is_zero()]
        return names

    def _require(self, name: str, kind: VarKind) -> None:
        if variable_kind(name) != kind:
            raise UnknownVariableError(f"{name!r} is not a {kind.value} variable")
