"""
Interactive value entry for definition-on-use factors.

ConsoleDefiner implements the core Definer protocol on top of a rich
Console. Matrices are typed one row per line, entries separated by tabs
or spaces, each entry an integer or fraction (``3``, ``-1/2``). A blank
first line cancels, and so does Ctrl-C at any prompt. A blank line
after the first row finishes.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.text import Text

from rowsofb.cli.render import STYLES, print_error
from rowsofb.core.errors import DivisionByZeroError
from rowsofb.core.matrix import Matrix
from rowsofb.core.rational import Rational

logger = logging.getLogger(__name__)


class ConsoleDefiner:
    """Prompts the user for variable values."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def define_matrix(self, name: str) -> Matrix | None:
        return self._read_matrix(f"Define matrix {name}")

    def define_anonymous_matrix(self) -> Matrix | None:
        return self._read_matrix("Define a matrix")

    def define_scalar(self, name: str) -> Rational | None:
        self._header(f"Define scalar {name} (blank line cancels)")
        while True:
            line = self._ask(f"{name} = ")
            if line is None or not line.strip():
                return None
            try:
                return Rational.parse(line.strip())
            except (ValueError, DivisionByZeroError) as e:
                print_error(str(e), self.console)

    def _read_matrix(self, title: str) -> Matrix | None:
        self._header(f"{title}: one row per line, blank line to finish")
        rows: list[list[Rational]] = []
        while True:
            line = self._ask("  ")
            if line is None:
                return None
            if not line.strip():
                if not rows:
                    return None
                break
            try:
                entries = [Rational.parse(field) for field in line.split()]
            except (ValueError, DivisionByZeroError) as e:
                print_error(f"{e}; re-enter the row", self.console)
                continue
            if rows and len(entries) != len(rows[0]):
                print_error(
                    f"uneven columns: expected {len(rows[0])} entries, got {len(entries)}",
                    self.console,
                )
                continue
            rows.append([entry.reduce() for entry in entries])

        matrix = Matrix.from_rows(rows)
        logger.debug("Read a %dx%d matrix", matrix.rows, matrix.cols)
        return matrix

    def _header(self, message: str) -> None:
        self.console.print(Text(message, style=STYLES["muted"]))

    def _ask(self, prompt: str) -> str | None:
        """Read one line; None if the user ended input or pressed Ctrl-C."""
        try:
            return self.console.input(Text(prompt, style=STYLES["input"]))
        except EOFError:
            return None
        except KeyboardInterrupt:
            self.console.print()
            logger.debug("Definition interrupted")
            return None
