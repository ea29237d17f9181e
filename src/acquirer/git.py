"""Pinned checkout of the upstream DrupalVM repository.

Clones either the default branch (for the ``master``/``latest`` markers) or
exactly the tag/branch named by the chosen version into the VM destination.
A failed clone is fatal for the run; the caller decides how to exit.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

from rich.markup import escape

from src.utils import console, is_empty_dir, run_command

LATEST_MARKERS: frozenset[str] = frozenset({"master", "latest"})


class AcquisitionError(Exception):
    """Raised when the upstream repository cannot be cloned."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class VersionControlClient(Protocol):
    """Minimal clone capability used by ``ResourceAcquirer``."""

    async def clone(
        self,
        url: str,
        destination: Path,
        branch: str | None = None,
        timeout: float = 600,
    ) -> tuple[int, str, str]:
        """Clone *url* into *destination*, returning ``(returncode, stdout, stderr)``."""
        ...


def is_latest(version: str | None) -> bool:
    """``True`` when *version* means "whatever the default branch holds"."""
    return not version or version.strip().lower() in LATEST_MARKERS


def clone_command(url: str, destination: Path, branch: str | None = None) -> list[str]:
    """Build the ``git clone`` argument list."""
    cmd = ["git", "clone"]
    if branch:
        cmd += ["--branch", branch]
    cmd += [url, str(destination)]
    return cmd


class GitClient:
    """``VersionControlClient`` backed by the ``git`` executable."""

    async def clone(
        self,
        url: str,
        destination: Path,
        branch: str | None = None,
        timeout: float = 600,
    ) -> tuple[int, str, str]:
        cmd = clone_command(url, destination, branch)
        try:
            return await run_command(cmd, timeout=timeout)
        except FileNotFoundError as exc:
            return (127, "", f"git executable not found: {exc}")


class ResourceAcquirer:
    """Clones a pinned revision of the upstream repository.

    Attributes:
        client: The clone capability.
        repository_url: Upstream HTTPS URL.
        timeout: Seconds allowed for the clone before it counts as failed.
    """

    def __init__(
        self,
        client: VersionControlClient | None = None,
        repository_url: str = "https://github.com/geerlingguy/drupal-vm.git",
        timeout: float = 600,
    ) -> None:
        self.client = client or GitClient()
        self.repository_url = repository_url
        self.timeout = timeout

    async def acquire(self, version: str, destination: str | Path) -> Path:
        """Clone *version* of the repository into *destination*.

        Args:
            version: A tag/branch name, or a latest marker for the default branch.
            destination: Existing directory; git requires it to be empty.

        Returns:
            The destination path.

        Raises:
            AcquisitionError: If git exits non-zero or times out. When the
                destination was empty beforehand, whatever the failed clone
                left in it is removed first.
        """
        dest = Path(destination)
        branch = None if is_latest(version) else version.strip()
        was_empty = is_empty_dir(dest)
        command = " ".join(clone_command(self.repository_url, dest, branch))

        label = branch or "default branch"
        console.print(
            f"  Cloning DrupalVM [bold]{escape(label)}[/bold] "
            f"into [cyan]{escape(str(dest))}[/cyan]..."
        )

        returncode, _, stderr = await self.client.clone(
            self.repository_url, dest, branch=branch, timeout=self.timeout
        )
        if returncode != 0:
            if was_empty:
                _clear_directory(dest)
            raise AcquisitionError(
                f"Git clone of DrupalVM '{version}' failed (exit {returncode}): {stderr}",
                command=command,
                stderr=stderr,
            )

        return dest


def _clear_directory(path: Path) -> None:
    """Remove everything inside *path* while keeping the directory itself."""
    if not path.is_dir():
        return
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
