"""Core RowsOfB functionality: rationals, matrices, the expression language, and the environment."""

from . import ir
from .environment import CancellingDefiner, Definer, Environment
from .errors import (
    DimensionError,
    DivisionByZeroError,
    ErrorContext,
    EvaluationError,
    InputCancelledError,
    InvalidArgumentError,
    LexError,
    ParseError,
    RowsOfBError,
    SignatureError,
    SingularMatrixError,
    TypeMismatchError,
    UnknownFunctionError,
    UnknownVariableError,
)
from .matrix import Matrix
from .rational import Rational
from .values import Value, ValueKind

__all__ = [
    "ir",
    "CancellingDefiner",
    "Definer",
    "Environment",
    "Matrix",
    "Rational",
    "Value",
    "ValueKind",
    "RowsOfBError",
    "ErrorContext",
    "LexError",
    "ParseError",
    "EvaluationError",
    "TypeMismatchError",
    "DimensionError",
    "SingularMatrixError",
    "DivisionByZeroError",
    "UnknownVariableError",
    "UnknownFunctionError",
    "SignatureError",
    "InvalidArgumentError",
    "InputCancelledError",
]
