"""Shared pytest fixtures for RowsOfB tests."""

from __future__ import annotations

from collections import deque

import pytest

from rowsofb.core.environment import Environment
from rowsofb.core.matrix import Matrix
from rowsofb.core.rational import Rational


class ScriptedDefiner:
    """A Definer that answers from a queue of prepared values.

    A queued None means "the user cancelled". Every request is recorded in
    ``requests`` as (method, name).
    """

    def __init__(self, *answers: Matrix | Rational | None) -> None:
        self.answers = deque(answers)
        self.requests: list[tuple[str, str | None]] = []

    def _next(self):
        if not self.answers:
            raise AssertionError("definer asked for more values than were scripted")
        return self.answers.popleft()

    def define_matrix(self, name: str) -> Matrix | None:
        self.requests.append(("matrix", name))
        return self._next()

    def define_anonymous_matrix(self) -> Matrix | None:
        self.requests.append(("anonymous", None))
        return self._next()

    def define_scalar(self, name: str) -> Rational | None:
        self.requests.append(("scalar", name))
        return self._next()


@pytest.fixture
def env() -> Environment:
    """A fresh environment whose definer cancels every request."""
    return Environment()


@pytest.fixture
def scripted():
    """Factory for an environment driven by a ScriptedDefiner."""

    def make(*answers: Matrix | Rational | None) -> tuple[Environment, ScriptedDefiner]:
        definer = ScriptedDefiner(*answers)
        return Environment(definer=definer), definer

    return make
