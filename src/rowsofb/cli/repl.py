"""
The interactive read-evaluate-print loop.

Each line is one expression, or one of the session commands:

    (blank)        show the last result again
    help           language summary and function list
    vars           variables that differ from their defaults
    clear          reset every variable
    exit, quit     end the session (so does end of input)
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.text import Text

from rowsofb.cli.render import (
    STYLES,
    functions_table,
    print_error,
    print_result,
    print_value,
    print_variables,
)
from rowsofb.core.config import Settings
from rowsofb.core.environment import Environment
from rowsofb.core.errors import RowsOfBError
from rowsofb.core.expression_lang import evaluate_line, list_functions
from rowsofb.core.values import Value

logger = logging.getLogger(__name__)

PROMPT = "> "

EXIT_COMMANDS = {"exit", "quit"}

LANGUAGE_HELP = """\
Expressions combine numbers, variables and function calls with + - * /.

  A-Z     matrix variables (default: zero matrices)
  a-z     scalar variables (default: 0)
  $A $a   define a variable interactively, then use its value
  $$      enter a one-off matrix without storing it
  -> X    store the result in a variable

Z and z always hold the last matrix and scalar result.
Multiplications between divisions group first: 2*3/4*6 is (2*3)/(4*6).

Session commands: help, vars, clear, exit.
"""


class Repl:
    """One interactive session over a single Environment."""

    def __init__(self, env: Environment, console: Console, settings: Settings) -> None:
        self.env = env
        self.console = console
        self.settings = settings
        self.last: Value | None = None

    def run(self) -> None:
        while True:
            try:
                line = self.console.input(Text(PROMPT, style=STYLES["prompt"]))
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Process one line; return False when the session should end."""
        text = line.strip()

        if text in EXIT_COMMANDS:
            return False
        if not text:
            print_value(self.last or Value.matrix(self.env.last_matrix), self.console)
        elif text == "help":
            self.console.print(LANGUAGE_HELP)
            self.console.print(functions_table(list_functions()))
        elif text == "vars":
            print_variables(self.env, self.console)
        elif text == "clear":
            self.env.reset()
            self.last = None
        else:
            self.evaluate(text)
        return True

    def evaluate(self, text: str) -> None:
        if len(text) > self.settings.max_input_length:
            print_error(
                f"input is longer than {self.settings.max_input_length} characters",
                self.console,
            )
            return
        try:
            result = evaluate_line(text, self.env)
        except RowsOfBError as e:
            logger.debug("Evaluation of %r failed: %s", text, e.message)
            print_error(e, self.console)
            return
        self.last = result.value
        print_result(result, self.console)


def run_repl(env: Environment, console: Console, settings: Settings) -> None:
    """Run an interactive session until exit or end of input."""
    Repl(env, console, settings).run()
