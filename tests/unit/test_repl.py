"""Tests for the interactive loop, driven line by line."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from rowsofb.cli.prompts import ConsoleDefiner
from rowsofb.cli.repl import Repl
from rowsofb.core.config import Settings
from rowsofb.core.environment import Environment


@pytest.fixture
def out() -> Console:
    return Console(file=io.StringIO(), width=100, highlight=False)


def text_of(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


class TestHandle:
    def test_exit_commands(self, out: Console) -> None:
        repl = Repl(Environment(), out, Settings())
        assert repl.handle("exit") is False
        assert repl.handle("  quit ") is False

    def test_expression_keeps_going(self, out: Console) -> None:
        repl = Repl(Environment(), out, Settings())
        assert repl.handle("2 * 3") is True
        assert repl.last is not None
        assert repl.last.as_scalar() == 6

    def test_clear_forgets_last(self, out: Console) -> None:
        env = Environment()
        repl = Repl(env, out, Settings())
        repl.handle("5 -> a")
        repl.handle("clear")
        assert repl.last is None
        assert env.get_scalar("a") == 0

    def test_too_long(self, out: Console) -> None:
        repl = Repl(Environment(), out, Settings(max_input_length=3))
        assert repl.handle("1 + 1") is True
        assert "longer than 3 characters" in text_of(out)


class TestInterruptedDefinition:
    def test_ctrl_c_cancels_and_session_continues(
        self, out: Console, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def raise_interrupt(*args: object) -> str:
            raise KeyboardInterrupt

        monkeypatch.setattr("builtins.input", raise_interrupt)
        env = Environment(definer=ConsoleDefiner(out))
        repl = Repl(env, out, Settings())

        assert repl.handle("$A + A") is True
        assert "[!] user cancelled input." in text_of(out)
        assert env.modified() == []
