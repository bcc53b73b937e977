"""
Tokenizer for the RowsOfB expression language.

Converts one input line into a sequence of typed tokens, always ending
with an EOF token.

Rules, tried in order after skipping whitespace:
    1. + - * / ( ) ,   ("->" is the arrow, not minus)
    2. a run of digits                       NUM
    3. a run of two or more letters          FUNC
    4. $X / $x / $$                          DMVAR / DSVAR / DAMVAR
    5. a single letter X / x                 MVAR / SVAR
"""

from __future__ import annotations

import logging
from enum import StrEnum

from rowsofb.core.errors import ErrorContext, LexError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # End of input
    EOF = "EOF"

    # Operators
    PLUS = "plus"
    MINUS = "minus"
    MULT = "mult"
    DIV = "div"
    ARROW = "arrow"  # ->
    COMMA = "comma"

    # Parentheses
    LPAREN = "lparen"
    RPAREN = "rparen"

    # Literals
    NUM = "num"
    FUNC = "func"

    # Variables
    MVAR = "mvar"  # matrix variable
    SVAR = "svar"  # scalar variable
    DMVAR = "dmvar"  # define matrix variable
    DSVAR = "dsvar"  # define scalar variable
    DAMVAR = "damvar"  # define anonymous matrix variable


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.value, self.pos) == (other.kind, other.value, other.pos)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

_WHITESPACE = " \t\n\r"


def _is_upper(c: str) -> bool:
    return "A" <= c <= "Z"


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_letter(c: str) -> bool:
    return _is_upper(c) or _is_lower(c)


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _run_length(source: str, start: int, predicate) -> int:
    """Number of consecutive characters from start satisfying predicate."""
    end = start
    while end < len(source) and predicate(source[end]):
        end += 1
    return end - start


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression line into a list of tokens ending in EOF.

    Raises:
        LexError: If a character matches no token rule.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c in _WHITESPACE:
            i += 1
            continue

        # Operators and punctuation
        if c == "-" and i + 1 < n and source[i + 1] == ">":
            tokens.append(Token(TokenKind.ARROW, "->", i))
            i += 2
            continue
        if c in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[c], c, i))
            i += 1
            continue

        # Numbers: unsigned digit runs
        digits = _run_length(source, i, _is_digit)
        if digits:
            tokens.append(Token(TokenKind.NUM, source[i : i + digits], i))
            i += digits
            continue

        # Function names: two or more letters, otherwise fall through to a variable
        letters = _run_length(source, i, _is_letter)
        if letters >= 2:
            tokens.append(Token(TokenKind.FUNC, source[i : i + letters], i))
            i += letters
            continue

        # Definition-on-use variables
        if c == "$" and i + 1 < n:
            nxt = source[i + 1]
            kind = None
            if _is_upper(nxt):
                kind = TokenKind.DMVAR
            elif _is_lower(nxt):
                kind = TokenKind.DSVAR
            elif nxt == "$":
                kind = TokenKind.DAMVAR
            if kind is not None:
                tokens.append(Token(kind, source[i : i + 2], i))
                i += 2
                continue

        # Single-letter variables
        if _is_upper(c):
            tokens.append(Token(TokenKind.MVAR, c, i))
            i += 1
            continue
        if _is_lower(c):
            tokens.append(Token(TokenKind.SVAR, c, i))
            i += 1
            continue

        raise LexError(c, i, ErrorContext(source=source, column=i + 1))

    tokens.append(Token(TokenKind.EOF, "", n))
    logger.debug("Tokenized %r into %d tokens", source, len(tokens))
    return tokens
