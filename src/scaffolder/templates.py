"""Jinja2 template rendering for the DrupalVM configuration tree.

Provides the TemplateRenderer class which loads every file under a template
directory and renders it against the projected context. Rendering is strict:
a template that references a variable missing from the context is rejected
with the template path and the variable names, before anything is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, meta

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TemplateRenderError(Exception):
    """Raised when a template cannot be rendered against the context."""

    def __init__(self, template: str, variables: list[str] | None = None, detail: str = "") -> None:
        self.template = template
        self.variables = variables or []
        self.detail = detail
        if self.variables:
            message = f"{template}: undefined template variable(s): {', '.join(self.variables)}"
        else:
            message = f"{template}: {detail or 'render failed'}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------

TEMPLATE_SUFFIX = ".j2"


class TemplateRenderer:
    """Renders every file of a template directory with Jinja2.

    File names keep their relative location; a trailing ``.j2`` is stripped
    from the output name. Files that are not UTF-8 text are copied verbatim.
    """

    def __init__(self, template_dir: str | Path) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    # -- Single template rendering -----------------------------------------

    def missing_variables(self, template_path: str, context: Mapping[str, Any]) -> list[str]:
        """Return the variables *template_path* needs but *context* lacks."""
        source, _, _ = self.env.loader.get_source(self.env, template_path)
        referenced = meta.find_undeclared_variables(self.env.parse(source))
        return sorted(
            name for name in referenced if name not in context and name not in self.env.globals
        )

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"config.yml.j2"``), using forward slashes.
            context: Variables available inside the template.

        Raises:
            TemplateRenderError: If a referenced variable is missing or Jinja2
                fails to render.
        """
        try:
            missing = self.missing_variables(template_path, context)
            if missing:
                raise TemplateRenderError(template_path, missing)
            return self.env.get_template(template_path).render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(template_path, detail=str(exc)) from exc

    # -- Tree rendering ----------------------------------------------------

    def list_templates(self) -> list[Path]:
        """Return every file under the template directory, sorted."""
        if not self.template_dir.is_dir():
            raise FileNotFoundError(self.template_dir)
        return sorted(p for p in self.template_dir.rglob("*") if p.is_file())

    def render_tree(self, context: Mapping[str, Any]) -> dict[Path, str | bytes]:
        """Render the whole template directory in memory.

        Returns:
            Mapping of output path (relative to the template directory, with
            ``.j2`` stripped) to rendered text, or raw bytes for binary files.
        """
        rendered: dict[Path, str | bytes] = {}
        for template_file in self.list_templates():
            rel = template_file.relative_to(self.template_dir)
            output = rel
            if rel.suffix == TEMPLATE_SUFFIX:
                output = rel.with_name(rel.name[: -len(TEMPLATE_SUFFIX)])

            raw = template_file.read_bytes()
            try:
                raw.decode("utf-8")
            except UnicodeDecodeError:
                rendered[output] = raw
                continue
            rendered[output] = self.render(rel.as_posix(), context)
        return rendered
