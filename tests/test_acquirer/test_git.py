"""Unit tests for the upstream repository acquirer (src.acquirer.git).

Tests cover:
- Latest-marker detection
- git clone argument construction (pinned vs default branch)
- GitClient subprocess handling (success, failure, missing git)
- ResourceAcquirer success, failure, partial-clone cleanup
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from src.acquirer.git import (
    AcquisitionError,
    GitClient,
    ResourceAcquirer,
    clone_command,
    is_latest,
)

URL = "https://github.com/geerlingguy/drupal-vm.git"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestIsLatest:
    @pytest.mark.unit
    @pytest.mark.parametrize("version", ["master", "latest", "LATEST", " master ", "", None])
    def test_latest_markers(self, version):
        assert is_latest(version)

    @pytest.mark.unit
    @pytest.mark.parametrize("version", ["3.1.4", "3.0.0", "develop"])
    def test_pinned(self, version):
        assert not is_latest(version)


class TestCloneCommand:
    @pytest.mark.unit
    def test_pinned(self, tmp_path: Path):
        assert clone_command(URL, tmp_path / "vm", "3.1.4") == [
            "git", "clone", "--branch", "3.1.4", URL, str(tmp_path / "vm"),
        ]

    @pytest.mark.unit
    def test_default_branch(self, tmp_path: Path):
        assert clone_command(URL, tmp_path / "vm") == ["git", "clone", URL, str(tmp_path / "vm")]


# ---------------------------------------------------------------------------
# GitClient
# ---------------------------------------------------------------------------


class TestGitClient:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_git_clone(self, mock_subprocess, tmp_path: Path):
        proc = mock_subprocess(stderr="Cloning into 'vm'...", returncode=0)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as exec_mock:
            returncode, _, _ = await GitClient().clone(URL, tmp_path / "vm", branch="3.1.4")
        assert returncode == 0
        assert exec_mock.call_args.args[:4] == ("git", "clone", "--branch", "3.1.4")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_passes_exit_code(self, mock_subprocess, tmp_path: Path):
        proc = mock_subprocess(stderr="fatal: Remote branch 9.9.9 not found", returncode=128)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            returncode, _, stderr = await GitClient().clone(URL, tmp_path / "vm", branch="9.9.9")
        assert returncode == 128
        assert "not found" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_git(self, tmp_path: Path):
        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("git")),
        ):
            returncode, _, stderr = await GitClient().clone(URL, tmp_path / "vm")
        assert returncode == 127
        assert "git executable not found" in stderr


# ---------------------------------------------------------------------------
# ResourceAcquirer
# ---------------------------------------------------------------------------


class TestResourceAcquirer:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_pinned_version_clones_tag(self, fake_vcs, tmp_path: Path):
        client = fake_vcs()
        destination = tmp_path / "vm"
        destination.mkdir()
        result = await ResourceAcquirer(client, URL, timeout=12).acquire("3.1.4", destination)
        assert result == destination
        assert client.calls == [
            {"url": URL, "destination": destination, "branch": "3.1.4", "timeout": 12}
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("version", ["master", "latest"])
    async def test_latest_clones_default_branch(self, fake_vcs, tmp_path: Path, version):
        client = fake_vcs()
        await ResourceAcquirer(client, URL).acquire(version, tmp_path / "vm")
        assert client.calls[0]["branch"] is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_raises(self, fake_vcs, tmp_path: Path):
        client = fake_vcs(returncode=128, stderr="fatal: destination path 'vm' already exists")
        destination = tmp_path / "vm"
        destination.mkdir()
        with pytest.raises(AcquisitionError) as excinfo:
            await ResourceAcquirer(client, URL).acquire("3.1.4", destination)
        assert "exit 128" in str(excinfo.value)
        assert excinfo.value.command.startswith("git clone --branch 3.1.4")
        assert "already exists" in excinfo.value.stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_partial_clone_removed_from_empty_destination(self, fake_vcs, tmp_path: Path):
        client = fake_vcs(returncode=128, partial=True)
        destination = tmp_path / "vm"
        destination.mkdir()
        with pytest.raises(AcquisitionError):
            await ResourceAcquirer(client, URL).acquire("3.1.4", destination)
        assert destination.is_dir()
        assert list(destination.iterdir()) == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_existing_content_never_removed(self, fake_vcs, tmp_path: Path):
        client = fake_vcs(returncode=128, partial=True)
        destination = tmp_path / "vm"
        destination.mkdir()
        (destination / "mine.txt").write_text("user data")
        with pytest.raises(AcquisitionError):
            await ResourceAcquirer(client, URL).acquire("3.1.4", destination)
        assert (destination / "mine.txt").read_text() == "user data"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_is_a_failure(self, tmp_path: Path):
        class SlowClient:
            async def clone(self, url, destination, branch=None, timeout=600):
                return (-1, "", f"Command timed out after {timeout}s")

        with pytest.raises(AcquisitionError, match="timed out"):
            await ResourceAcquirer(SlowClient(), URL, timeout=1).acquire("3.1.4", tmp_path / "vm")
