"""Workspace ``.gitignore`` maintenance."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from src.config import DEFAULT_GITIGNORE_ENTRIES


def append_gitignore_entries(
    gitignore_path: str | Path,
    entries: Iterable[str] = DEFAULT_GITIGNORE_ENTRIES,
) -> Path:
    """Append *entries* to the ignore file, creating it when absent.

    Entries are appended as a block, each on its own line, after a leading
    newline. Existing lines are not inspected, so running twice duplicates
    the block.
    """
    path = Path(gitignore_path)
    block = "".join(f"\n{entry}" for entry in entries)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(block)
    return path
