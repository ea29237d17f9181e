"""Write the rendered configuration tree into the VM destination."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Mapping

from src.utils import ensure_dir

from .templates import TemplateRenderer


async def materialize(
    template_root: str | Path,
    destination: str | Path,
    context: Mapping[str, Any],
) -> list[Path]:
    """Render every file under *template_root* into *destination*.

    All files are rendered before the first write, so a template/context
    mismatch leaves the destination untouched. Existing files (for example
    defaults shipped by the cloned repository) are overwritten.

    Raises:
        TemplateRenderError: If any template references an unknown variable.
        FileNotFoundError: If *template_root* is not a directory.

    Returns:
        The written file paths.
    """
    renderer = TemplateRenderer(template_root)
    rendered = await asyncio.to_thread(renderer.render_tree, context)

    out_base = Path(destination)
    written: list[Path] = []
    for rel, content in rendered.items():
        target = out_base / rel
        await asyncio.to_thread(_write_file, target, content)
        written.append(target)
    return written


def _write_file(path: Path, content: str | bytes) -> None:
    """Synchronous helper: create parent dirs and write content."""
    ensure_dir(path.parent)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
