"""Version lookup for RowsOfB."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """The source tree's pyproject version when run from a checkout, else the installed one."""
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if "version" in project:
            return str(project["version"])
    try:
        return version("rowsofb")
    except PackageNotFoundError:
        return "0.0.0"
