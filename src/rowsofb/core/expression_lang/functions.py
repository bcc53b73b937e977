"""
Built-in functions of the RowsOfB language.

Each function has a fixed parameter signature of value kinds. Calls are
checked against the signature before the handler runs, so handlers can
assume their arguments have the declared kinds.

    identity(size: scalar)        size x size identity matrix
    ref(mat: matrix)              row echelon form
    rref(mat: matrix)             reduced row echelon form
    invert(mat: matrix)           inverse
    augment(a: matrix, b: matrix) [a | b]
    transpose(mat: matrix)        transpose
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rowsofb.core import matrix as mx
from rowsofb.core.errors import InvalidArgumentError, SignatureError, UnknownFunctionError
from rowsofb.core.values import Value, ValueKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Param:
    """One declared function parameter."""

    name: str
    kind: ValueKind


@dataclass(frozen=True)
class FunctionSpec:
    """A registry entry: signature, handler, and help text."""

    name: str
    params: tuple[Param, ...]
    handler: Callable[[Sequence[Value]], Value]
    summary: str

    @property
    def signature(self) -> tuple[ValueKind, ...]:
        return tuple(p.kind for p in self.params)

    def usage(self) -> str:
        params = ", ".join(f"{p.name}: {p.kind.value}" for p in self.params)
        return f"{self.name}({params})"


def _identity(args: Sequence[Value]) -> Value:
    size = args[0].as_scalar()
    if not size.is_whole():
        raise InvalidArgumentError("size must be an integer")
    n = size.to_int()
    if n < 0:
        raise InvalidArgumentError("size must be positive")
    return Value.matrix(mx.identity(n))


def _ref(args: Sequence[Value]) -> Value:
    return Value.matrix(mx.ref(args[0].as_matrix()))


def _rref(args: Sequence[Value]) -> Value:
    return Value.matrix(mx.rref(args[0].as_matrix()))


def _invert(args: Sequence[Value]) -> Value:
    return Value.matrix(mx.inverse(args[0].as_matrix()))


def _augment(args: Sequence[Value]) -> Value:
    return Value.matrix(mx.augment(args[0].as_matrix(), args[1].as_matrix()))


def _transpose(args: Sequence[Value]) -> Value:
    return Value.matrix(mx.transpose(args[0].as_matrix()))


_SCALAR = ValueKind.SCALAR
_MATRIX = ValueKind.MATRIX

FUNCTIONS: dict[str, FunctionSpec] = {
    spec.name: spec
    for spec in (
        FunctionSpec(
            "identity",
            (Param("size", _SCALAR),),
            _identity,
            "The size x size identity matrix.",
        ),
        FunctionSpec(
            "ref",
            (Param("mat", _MATRIX),),
            _ref,
            "Row echelon form by Gaussian elimination.",
        ),
        FunctionSpec(
            "rref",
            (Param("mat", _MATRIX),),
            _rref,
            "Reduced row echelon form by Gauss-Jordan elimination.",
        ),
        FunctionSpec(
            "invert",
            (Param("mat", _MATRIX),),
            _invert,
            "Inverse of a square matrix, or an error if none exists.",
        ),
        FunctionSpec(
            "augment",
            (Param("a", _MATRIX), Param("b", _MATRIX)),
            _augment,
            "The columns of a followed by the columns of b; row counts must match.",
        ),
        FunctionSpec(
            "transpose",
            (Param("mat", _MATRIX),),
            _transpose,
            "Rows become columns.",
        ),
    )
}


def list_functions() -> list[FunctionSpec]:
    """All registered functions, sorted by name."""
    return [FUNCTIONS[name] for name in sorted(FUNCTIONS)]


def lookup(name: str) -> FunctionSpec:
    """Find a function by name.

    Raises:
        UnknownFunctionError: If no function has that name.
    """
    spec = FUNCTIONS.get(name)
    if spec is None:
        raise UnknownFunctionError(f"{name!r} is not a valid function")
    return spec


def _kinds(kinds: Sequence[ValueKind]) -> str:
    return ", ".join(kind.value for kind in kinds)


def check_arguments(spec: FunctionSpec, args: Sequence[Value]) -> None:
    """Validate argument count and kinds against the signature.

    Raises:
        SignatureError: On wrong arity or wrong argument kinds.
    """
    if len(args) != len(spec.params):
        raise SignatureError(
            f"call to {spec.name} takes {len(spec.params)} arguments, but was supplied {len(args)}"
        )
    supplied = tuple(arg.kind for arg in args)
    if supplied != spec.signature:
        raise SignatureError(
            f"call to {spec.name} expects arguments ({_kinds(spec.signature)}) "
            f"but was supplied ({_kinds(supplied)})"
        )


def call_function(name: str, args: Sequence[Value]) -> Value:
    """Look up, check, and invoke a built-in function."""
    spec = lookup(name)
    check_arguments(spec, args)
    logger.debug("Calling %s with (%s)", name, _kinds([a.kind for a in args]))
    return spec.handler(args)
