"""Shared pytest fixtures for the create-nrtgmp-app test suite.

Provides reusable fixtures for:
- Tool configuration pointed at a fake template repository
- A scripted ``Prompter`` that replays canned answers
- A fake ``git clone`` that writes a minimal template tree
- Mock subprocess helpers
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_nrtgmp.collector import PromptCancelled
from create_nrtgmp.config import Config

CANCEL = object()
"""Scripted answer that makes the prompter raise ``PromptCancelled``."""


TEMPLATE_PACKAGE_JSON: dict[str, Any] = {
    "name": "nrtgmp-template",
    "version": "0.1.0",
    "private": True,
    "scripts": {"dev": "next dev", "build": "next build"},
    "dependencies": {"mongoose": "^8.0.0", "sequelize": "^6.35.0", "pg": "^8.11.0"},
}


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """``Prompter`` that replays answers in order and records every question."""

    def __init__(self, confirms: Sequence[Any] = (), selects: Sequence[Any] = ()) -> None:
        self.confirms = list(confirms)
        self.selects = list(selects)
        self.asked: list[str] = []

    def confirm(self, message: str, default: bool = True) -> bool:
        self.asked.append(message)
        answer = self.confirms.pop(0)
        if answer is CANCEL:
            raise PromptCancelled(message)
        return answer

    def select(self, message: str, choices, default_index: int = 0):
        self.asked.append(message)
        answer = self.selects.pop(0)
        if answer is CANCEL:
            raise PromptCancelled(message)
        if answer is None:
            return choices[default_index][1]
        return answer


@pytest.fixture
def scripted_prompter():
    """Factory for ``ScriptedPrompter`` instances.

    Usage:
        def test_flow(scripted_prompter):
            prompter = scripted_prompter(confirms=[True, True], selects=[Dialect.POSTGRES])
    """
    return ScriptedPrompter


@pytest.fixture
def cancel_answer() -> object:
    """Sentinel to script a cancelled prompt."""
    return CANCEL


# ---------------------------------------------------------------------------
# Configuration & template tree
# ---------------------------------------------------------------------------


@pytest.fixture
def config() -> Config:
    """Config with a local template URL so nothing reaches the network."""
    return Config(template_url="file:///tmp/nrtgmp-template.git")


def write_template_tree(project_path: Path) -> Path:
    """Create what a shallow clone of the template leaves on disk."""
    project_path.mkdir(parents=True)
    (project_path / ".git").mkdir()
    (project_path / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (project_path / "package.json").write_text(
        json.dumps(TEMPLATE_PACKAGE_JSON, indent=2), encoding="utf-8"
    )
    (project_path / "README.md").write_text("# NRTGMP template\n", encoding="utf-8")
    return project_path


@pytest.fixture
def template_project(tmp_path: Path) -> Path:
    """A freshly 'cloned' template directory named ``demo``."""
    return write_template_tree(tmp_path / "demo")


@pytest.fixture
def fake_git():
    """AsyncMock standing in for ``run_git`` / ``run_command``.

    ``git clone`` writes a template tree at its destination argument; every
    other command succeeds with empty output.  Calls are recorded on the mock.
    """
    async def _side_effect(*args: str, **kwargs: Any) -> tuple[str, str]:
        if args and args[0] == "clone":
            write_template_tree(Path(args[-1]))
        return "", ""

    return AsyncMock(side_effect=_side_effect)


# ---------------------------------------------------------------------------
# Subprocess mocking
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def make_template_tree():
    """Expose ``write_template_tree`` for tests needing several projects."""
    return write_template_tree
