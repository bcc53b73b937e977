"""
Rich rendering for RowsOfB values, errors and tables.

Matrices are drawn with box corners and left-aligned, width-padded
columns separated by four spaces:

    ┌             ┐
    │ 1      -1/2 │
    │ 3/4    0    │
    └             ┘
"""

from __future__ import annotations

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from rowsofb.core.environment import Environment
from rowsofb.core.errors import RowsOfBError
from rowsofb.core.expression_lang.evaluator import EvalResult
from rowsofb.core.expression_lang.functions import FunctionSpec
from rowsofb.core.matrix import Matrix
from rowsofb.core.rational import Rational
from rowsofb.core.values import Value

console = Console(highlight=False)

# Style definitions
STYLES = {
    "prompt": Style(color="green"),
    "result": Style(color="magenta"),
    "error": Style(color="red", bold=True),
    "input": Style(color="bright_blue"),
    "name": Style(color="cyan", bold=True),
    "muted": Style(color="bright_black"),
}

COLUMN_GAP = 4


def render_rational(value: Rational) -> str:
    return str(value.reduce())


def render_matrix(m: Matrix) -> str:
    """Draw a matrix as boxed text, entries shown in lowest terms."""
    if m.rows == 0 or m.cols == 0:
        return f"[empty {m.rows}x{m.cols} matrix]"

    cells = [[render_rational(v) for v in row] for row in m.rows_list()]
    widths = [max(len(row[c]) for row in cells) for c in range(m.cols)]
    inner = sum(widths) + COLUMN_GAP * (m.cols - 1)
    gap = " " * COLUMN_GAP

    lines = ["┌ " + " " * inner + " ┐"]
    for row in cells:
        padded = gap.join(cell.ljust(widths[c]) for c, cell in enumerate(row))
        lines.append("│ " + padded + " │")
    lines.append("└ " + " " * inner + " ┘")
    return "\n".join(lines)


def render_value(value: Value) -> str:
    if value.is_matrix:
        return render_matrix(value.as_matrix())
    return render_rational(value.as_scalar())


def print_value(value: Value, target: Console | None = None) -> None:
    out = target or console
    out.print()
    out.print(Text(render_value(value), style=STYLES["result"]))
    out.print()


def print_result(result: EvalResult, target: Console | None = None) -> None:
    """Print an evaluation result, noting the assigned variable if any."""
    out = target or console
    if result.assigned_to is not None:
        out.print(Text(f"{result.assigned_to} =", style=STYLES["name"]))
    print_value(result.value, out)


def print_error(error: RowsOfBError | str, target: Console | None = None) -> None:
    """Print an error as "[!] message." in red, under its source marker if it has one."""
    out = target or console
    if isinstance(error, RowsOfBError):
        if error.context is not None:
            out.print(Text(error.context.format(), style=STYLES["muted"]))
        message = error.message.rstrip(".")
    else:
        message = error.rstrip(".")
    out.print(Text(f"[!] {message}.", style=STYLES["error"]))


def functions_table(specs: list[FunctionSpec]) -> Table:
    table = Table(title="Functions", show_lines=False)
    table.add_column("Function", style=STYLES["name"], no_wrap=True)
    table.add_column("Description")
    for spec in specs:
        table.add_row(spec.usage(), spec.summary)
    return table


def print_variables(env: Environment, target: Console | None = None) -> None:
    """Print every modified slot, plus the last results Z and z."""
    out = target or console
    names = env.modified()
    for last in ("Z", "z"):
        if last not in names:
            names.append(last)
    matrices = env.matrices()
    scalars = env.scalars()
    for name in names:
        if name in matrices:
            out.print(Text(f"{name} =", style=STYLES["name"]))
            out.print(Text(render_matrix(matrices[name]), style=STYLES["result"]))
        else:
            line = Text(f"{name} = ", style=STYLES["name"])
            line.append(render_rational(scalars[name]), style=STYLES["result"])
            out.print(line)
