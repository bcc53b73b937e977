"""
RowsOfB CLI Package.

- app.py: typer application and commands
- repl.py: the interactive read-evaluate-print loop
- prompts.py: interactive variable definition
- render.py: rich output of values, errors and tables
- utils.py: version and logging helpers
"""

from rowsofb.cli.app import app, main

__all__ = ["app", "main"]
