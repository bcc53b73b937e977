"""
RowsOfB CLI application.

Commands:
    rowsofb                 start an interactive session
    rowsofb repl            same
    rowsofb eval "EXPR"     evaluate one expression and print the result
    rowsofb functions       list the built-in functions
"""

import logging

import typer

from rowsofb.cli.prompts import ConsoleDefiner
from rowsofb.cli.render import console, functions_table, print_error, print_result
from rowsofb.cli.repl import run_repl
from rowsofb.cli.utils import configure_logging, version_callback
from rowsofb.core.config import load_settings
from rowsofb.core.environment import CancellingDefiner, Definer, Environment
from rowsofb.core.errors import RowsOfBError
from rowsofb.core.expression_lang import evaluate_line, list_functions

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="""RowsOfB – exact rational matrix calculator

Type expressions such as  invert(A) * $B -> C  or  2*3/4 -> x.
Run without a command to start an interactive session.
""",
    invoke_without_command=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
) -> None:
    """RowsOfB CLI main callback for global options."""
    settings = load_settings()
    configure_logging(settings.log_level, verbose)
    if ctx.invoked_subcommand is None:
        _start_repl()


def _start_repl() -> None:
    settings = load_settings()
    env = Environment(definer=ConsoleDefiner(console), default_shape=settings.default_shape)
    console.print("RowsOfB: type 'help' for the language, 'exit' to leave.")
    run_repl(env, console, settings)


@app.command()
def repl() -> None:
    """Start an interactive session."""
    _start_repl()


@app.command(name="eval")
def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate"),
    no_input: bool = typer.Option(
        False,
        "--no-input",
        help="Cancel $A / $a / $$ definitions instead of prompting",
    ),
) -> None:
    """Evaluate one expression in a fresh environment."""
    settings = load_settings()
    if len(expression) > settings.max_input_length:
        print_error(f"input is longer than {settings.max_input_length} characters")
        raise typer.Exit(code=1)

    definer: Definer = CancellingDefiner() if no_input else ConsoleDefiner(console)
    env = Environment(definer=definer, default_shape=settings.default_shape)
    try:
        result = evaluate_line(expression, env)
    except RowsOfBError as e:
        logger.debug("Evaluation of %r failed", expression, exc_info=True)
        print_error(e)
        raise typer.Exit(code=1)
    print_result(result)


@app.command()
def functions() -> None:
    """List the built-in functions."""
    console.print(functions_table(list_functions()))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)
