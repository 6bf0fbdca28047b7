"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest
from cleanctl.core.policy import Confirmer, Decision
from cleanctl.filesystem.models import ResolvedTarget
from cleanctl.models.profile import Entry


class ScriptedConfirmer(Confirmer):
    """Confirmer replaying a fixed list of answers.

    Records every target and entry it was asked about. Running out of
    answers fails the test.
    """

    def __init__(self, answers: Iterable[Decision]) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []
        self.asked_entries: list[str] = []

    def _next(self) -> Decision:
        if not self._answers:
            pytest.fail("ScriptedConfirmer ran out of answers")
        return self._answers.pop(0)

    def ask(self, target: ResolvedTarget) -> Decision:
        self.asked.append(target.path)
        return self._next()

    def ask_entry(self, entry: Entry) -> Decision:
        self.asked_entries.append(entry.value)
        return self._next()


@pytest.fixture
def make_confirmer() -> Callable[..., ScriptedConfirmer]:
    """Factory for scripted confirmers: make_confirmer(Decision.YES, Decision.NO)."""

    def _make(*answers: Decision) -> ScriptedConfirmer:
        return ScriptedConfirmer(answers)

    return _make


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory creating a file with optional content and modification time."""

    def _make(path: Path, content: str = "data", mtime: float | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def write_profile(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a profile JSON document into tmp_path."""

    def _write(data: dict[str, Any] | str, name: str = "profile.json") -> Path:
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path

    return _write


@pytest.fixture
def dumps_dir(tmp_path: Path, make_file: Callable[..., Path]) -> Path:
    """A dumps directory holding an older 1.dmp and a newer 2.dmp."""
    dumps = tmp_path / "dumps"
    make_file(dumps / "1.dmp", mtime=1_700_000_000)
    make_file(dumps / "2.dmp", mtime=1_700_000_100)
    return dumps
