"""Shared pytest fixtures for the DrupalVM generator test suite.

Provides reusable fixtures for:
- Temporary workspaces and template trees
- Mock asyncio subprocesses
- Fake prompter, version-control client and plugin lister
- A complete, valid answer map
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config import Config
from src.questions.models import QuestionSpec


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty workspace root (auto-cleanup)."""
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def config(workspace: Path) -> Config:
    """Config rooted at the temporary workspace with the packaged templates."""
    return Config(workspace_root=workspace, clone_timeout=30)


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """Small template tree with a nested directory and a plain file."""
    root = tmp_path / "templates"
    (root / "provisioning").mkdir(parents=True)
    (root / "config.yml.j2").write_text(
        "vagrant_hostname: {{ vagrant_hostname }}\ninstalled_extras:\n  {{ install_adminer }}\n",
        encoding="utf-8",
    )
    (root / "provisioning" / "notes.txt").write_text(
        "cpus={{ vagrant_cpus }}\n", encoding="utf-8"
    )
    return root


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
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


# ---------------------------------------------------------------------------
# Capability fakes
# ---------------------------------------------------------------------------


class FakePrompter:
    """Replays scripted raw answers per question key.

    Keys without a script accept the offered default.
    """

    def __init__(self, script: dict[str, list[Any]] | None = None) -> None:
        self.script = {key: list(values) for key, values in (script or {}).items()}
        self.asked: list[str] = []
        self.defaults: dict[str, Any] = {}
        self.rejected: list[tuple[str, Any]] = []

    def ask(self, question: QuestionSpec, default: Any) -> Any:
        self.asked.append(question.key)
        self.defaults[question.key] = default
        queue = self.script.get(question.key)
        if queue:
            return queue.pop(0)
        return default

    def reject(self, question: QuestionSpec, raw: Any) -> None:
        self.rejected.append((question.key, raw))


class FakeVCSClient:
    """Records clone calls; on success writes a minimal DrupalVM tree."""

    def __init__(self, returncode: int = 0, stderr: str = "", partial: bool = False) -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.partial = partial
        self.calls: list[dict[str, Any]] = []

    async def clone(
        self,
        url: str,
        destination: Path,
        branch: str | None = None,
        timeout: float = 600,
    ) -> tuple[int, str, str]:
        self.calls.append(
            {"url": url, "destination": destination, "branch": branch, "timeout": timeout}
        )
        if self.returncode == 0:
            destination.mkdir(parents=True, exist_ok=True)
            (destination / "README.md").write_text("# Drupal VM\n", encoding="utf-8")
            (destination / "default.config.yml").write_text("vagrant_memory: 1024\n", encoding="utf-8")
            (destination / "config.yml").write_text("# upstream placeholder\n", encoding="utf-8")
        elif self.partial:
            (destination / ".git").mkdir(parents=True, exist_ok=True)
            (destination / ".git" / "HEAD").write_text("ref: refs/heads/master\n", encoding="utf-8")
        return (self.returncode, "", self.stderr)


class FakePluginLister:
    """Returns a fixed listing, or raises ``OSError`` when ``output`` is None."""

    def __init__(self, output: str | None = "") -> None:
        self.output = output
        self.calls = 0

    async def list_plugins(self) -> str:
        self.calls += 1
        if self.output is None:
            raise OSError("vagrant: command not found")
        return self.output


@pytest.fixture
def fake_prompter():
    """Factory for ``FakePrompter`` instances."""
    return FakePrompter


@pytest.fixture
def fake_vcs():
    """Factory for ``FakeVCSClient`` instances."""
    return FakeVCSClient


@pytest.fixture
def fake_plugins():
    """Factory for ``FakePluginLister`` instances."""
    return FakePluginLister


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------


@pytest.fixture
def full_answers() -> dict[str, Any]:
    """A complete answer map, as a user accepting most defaults would give."""
    return {
        "workflow": "new",
        "drupalvm_version": "3.1.4",
        "install_drupal": True,
        "drupal_version": "8",
        "vagrant_hostname": "example.dev",
        "vagrant_machine_name": "example",
        "vagrant_ip": "192.168.88.88",
        "sync_type": "nfs",
        "vagrant_memory": "2048",
        "vagrant_cpus": "2",
        "drupalvm_webserver": "nginx",
        "drush_version": "8.1.3",
        "packages": frozenset({"adminer", "mailhog"}),
        "php_version": "7.0",
        "php_memory_limit": "256",
    }
