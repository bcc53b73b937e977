"""
RowsOfB - an exact-arithmetic matrix calculator.

Evaluates one-line expressions over rational scalars and matrices held in
52 single-letter variables.
"""

from __future__ import annotations

from ._version import get_version as _get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.environment import Environment
from .core.errors import EvaluationError, LexError, ParseError, RowsOfBError
from .core.expression_lang import evaluate, evaluate_line, parse_expr
from .core.matrix import Matrix
from .core.rational import Rational

__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "Environment",
    "Matrix",
    "Rational",
    "evaluate",
    "evaluate_line",
    "parse_expr",
    "RowsOfBError",
    "LexError",
    "ParseError",
    "EvaluationError",
]
