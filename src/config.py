"""DrupalVM generator configuration.

Centralised, typed configuration for a single generator run. Settings use
Pydantic v2 models so they are validated at construction time and can be
overridden from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_REPOSITORY_URL = "https://github.com/geerlingguy/drupal-vm.git"

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "scaffolder" / "templates" / "configuration"

DEFAULT_GITIGNORE_ENTRIES: tuple[str, ...] = (".vagrant", ".idea", "node_modules")


class Config(BaseModel):
    """Global generator configuration.

    Holds the workspace location, the upstream repository reference and the
    tuning knobs for the external commands. Instances are created once by the
    CLI entry point and passed to ``Pipeline``.
    """

    workspace_root: Path = Field(default_factory=Path.cwd)
    vm_dir_name: str = Field(default="vm", min_length=1)
    repository_url: str = Field(default=DEFAULT_REPOSITORY_URL)
    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    clone_timeout: int = Field(default=600, ge=1, description="git clone timeout in seconds")
    probe_timeout: int = Field(
        default=15, ge=1, description="vagrant plugin listing timeout in seconds"
    )
    gitignore_entries: tuple[str, ...] = Field(default=DEFAULT_GITIGNORE_ENTRIES)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def vm_path(self) -> Path:
        """Destination for both the clone and the rendered configuration."""
        return self.workspace_root / self.vm_dir_name

    @property
    def gitignore_path(self) -> Path:
        """Root-level ``.gitignore`` of the workspace."""
        return self.workspace_root / ".gitignore"

    @property
    def readme_path(self) -> Path:
        """README shipped with the cloned DrupalVM tree."""
        return self.vm_path / "README.md"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DVM_WORKSPACE, DVM_REPOSITORY_URL, DVM_TEMPLATE_DIR,
            DVM_CLONE_TIMEOUT.

        Keyword ``overrides`` whose value is not ``None`` win over the
        environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("DVM_WORKSPACE"):
            kwargs["workspace_root"] = Path(os.environ["DVM_WORKSPACE"])
        if os.environ.get("DVM_REPOSITORY_URL"):
            kwargs["repository_url"] = os.environ["DVM_REPOSITORY_URL"]
        if os.environ.get("DVM_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["DVM_TEMPLATE_DIR"])
        if os.environ.get("DVM_CLONE_TIMEOUT"):
            kwargs["clone_timeout"] = int(os.environ["DVM_CLONE_TIMEOUT"])

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)

    def ensure_directories(self) -> Path:
        """Create the VM destination directory if it does not exist yet.

        Safe to call repeatedly. Returns the destination path.
        """
        self.vm_path.mkdir(parents=True, exist_ok=True)
        return self.vm_path
