"""
Error types for RowsOfB lexing, parsing, and evaluation.

Every failure the core can produce is a subclass of RowsOfBError. Errors
are raised to the immediate caller; there is no partial-evaluation
recovery.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Source location for an error inside a single input line.

    Attributes:
        source: The full input line
        column: Column number (1-indexed)
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the input line with a marker under the error column.

        Returns:
            Two lines: the input, then "^^^" under the offending column.
        """
        marker = " " * (self.column - 1) + "^^^"
        return f"{self.source}\n{marker}"


class RowsOfBError(Exception):
    """Base exception for all RowsOfB errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class LexError(RowsOfBError, ValueError):
    """
    Raised when a character in the input matches no token rule.

    Attributes:
        char: The offending character
        pos: 0-based position of the character in the input line
    """

    def __init__(self, char: str, pos: int, context: ErrorContext | None = None):
        self.char = char
        self.pos = pos
        super().__init__(f"unrecognized token starting at {char!r}", context)


class ParseError(RowsOfBError, ValueError):
    """
    Raised when the parser meets a token it did not expect.

    Attributes:
        expected: Token kinds that would have been accepted
        found: Token kind actually present
        pos: 0-based position of the unexpected token

    ``message`` replaces the generated "expected ... but found ..." text
    for failures that are not a single unexpected token.
    """

    def __init__(
        self,
        expected: tuple[str, ...],
        found: str,
        pos: int = 0,
        context: ErrorContext | None = None,
        message: str | None = None,
    ):
        self.expected = tuple(expected)
        self.found = found
        self.pos = pos
        if message is None:
            if len(self.expected) == 1:
                message = f"expected {self.expected[0]!r} but found {found!r}"
            else:
                wanted = ", ".join(repr(kind) for kind in self.expected)
                message = f"expected one of ({wanted}) but found {found!r}"
        super().__init__(message, context)


class EvaluationError(RowsOfBError):
    """Base class for failures while evaluating an expression tree."""

    pass


class TypeMismatchError(EvaluationError, TypeError):
    """
    Raised when a scalar and a matrix meet where only one kind is allowed.

    Examples:
    - Adding a scalar to a matrix
    - Dividing by a matrix
    - Assigning a matrix result to a scalar variable
    """

    pass


class DimensionError(EvaluationError, ValueError):
    """
    Raised when matrix shapes are incompatible.

    Examples:
    - Adding a 2x3 matrix to a 3x2 matrix
    - Multiplying when left columns != right rows
    - Augmenting matrices with different row counts
    - Inverting a non-square matrix
    """

    pass


class SingularMatrixError(EvaluationError, ValueError):
    """Raised when a matrix has no inverse."""

    pass


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    """Raised for a zero denominator or the reciprocal of zero."""

    pass


class UnknownVariableError(EvaluationError, KeyError):
    """Raised when a name is not one of the 52 variable slots."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class UnknownFunctionError(EvaluationError, LookupError):
    """Raised when a function name is not in the registry."""

    pass


class SignatureError(EvaluationError, TypeError):
    """Raised when a function is called with the wrong arity or argument kinds."""

    pass


class InvalidArgumentError(EvaluationError, ValueError):
    """Raised when a function argument has the right kind but an unusable value."""

    pass


class InputCancelledError(EvaluationError):
    """Raised when the user cancels an interactive variable definition."""

    pass
