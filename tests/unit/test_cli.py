"""Tests for CLI commands."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from rowsofb.cli import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROWSOFB_MAX_INPUT_LENGTH", raising=False)
    monkeypatch.delenv("ROWSOFB_DEFAULT_ROWS", raising=False)
    monkeypatch.delenv("ROWSOFB_DEFAULT_COLS", raising=False)


# ============================================================================
# Global options
# ============================================================================


class TestGlobalOptions:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "RowsOfB version" in result.output

    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "eval" in result.output
        assert "functions" in result.output


# ============================================================================
# eval
# ============================================================================


class TestEvalCommand:
    def test_scalar(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "2*3/4*6/10"])
        assert result.exit_code == 0
        assert "1/40" in result.output

    def test_matrix(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "2 * identity(2)"])
        assert result.exit_code == 0
        assert "│ 2    0 │" in result.output
        assert "│ 0    2 │" in result.output

    def test_assignment_named(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "identity(1) -> B"])
        assert result.exit_code == 0
        assert "B =" in result.output

    def test_error_exit_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "invert(A)"])
        assert result.exit_code == 1
        assert "[!] matrix has no inverse." in result.output

    def test_parse_error_marker(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "1 + * 2"])
        assert result.exit_code == 1
        assert "    ^^^" in result.output
        assert "[!] expected one of" in result.output

    def test_no_input_cancels(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "--no-input", "$A"])
        assert result.exit_code == 1
        assert "[!] user cancelled input." in result.output

    def test_prompted_matrix(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "$A * 2"], input="1 1/2\n3 4\n\n")
        assert result.exit_code == 0
        assert "│ 2    1 │" in result.output
        assert "│ 6    8 │" in result.output

    def test_prompted_scalar(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "$k + 1"], input="3/4\n")
        assert result.exit_code == 0
        assert "7/4" in result.output

    def test_deeply_nested_input(self, cli_runner: CliRunner) -> None:
        source = "(" * 300 + "1" + ")" * 300
        result = cli_runner.invoke(app, ["eval", source])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "[!] expression nested too deeply" in result.output

    def test_input_too_long(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ROWSOFB_MAX_INPUT_LENGTH", "5")
        result = cli_runner.invoke(app, ["eval", "1+1+1+1"])
        assert result.exit_code == 1
        assert "longer than 5 characters" in result.output


# ============================================================================
# functions
# ============================================================================


class TestFunctionsCommand:
    def test_lists_all(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["functions"])
        assert result.exit_code == 0
        for name in ("identity", "ref", "rref", "invert", "augment", "transpose"):
            assert name in result.output


# ============================================================================
# REPL
# ============================================================================


class TestRepl:
    def test_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="1/2 + 1/4 -> x\nx * 4\nexit\n")
        assert result.exit_code == 0
        assert "x =" in result.output
        assert "3/4" in result.output
        assert "\n3\n" in result.output

    def test_no_command_starts_repl(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, [], input="quit\n")
        assert result.exit_code == 0
        assert "RowsOfB" in result.output

    def test_end_of_input_exits(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="5\n")
        assert result.exit_code == 0
        assert "\n5\n" in result.output

    def test_error_keeps_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="1 + A\n2 * 3\nexit\n")
        assert result.exit_code == 0
        assert "[!] cannot perform addition or subtraction" in result.output
        assert "\n6\n" in result.output

    def test_deep_nesting_keeps_session(self, cli_runner: CliRunner) -> None:
        nested = "(" * 300 + "1" + ")" * 300
        result = cli_runner.invoke(app, ["repl"], input=f"{nested}\n2 * 3\nexit\n")
        assert result.exit_code == 0
        assert "nested too deeply" in result.output
        assert "\n6\n" in result.output

    def test_blank_line_repeats_result(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="7\n\nexit\n")
        assert result.exit_code == 0
        assert result.output.count("\n7\n") == 2

    def test_vars_and_clear(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            app, ["repl"], input="identity(2) -> B\nclear\nvars\nexit\n"
        )
        assert result.exit_code == 0
        assert "Z =" in result.output
        assert "z = 0" in result.output

    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["repl"], input="help\nexit\n")
        assert result.exit_code == 0
        assert "Session commands" in result.output
        assert "augment" in result.output
