"""Where plugforge looks for plugins and templates, and where it writes.

The CLI builds one ``Config`` from ``PLUGFORGE_*`` environment variables,
lets command-line flags override individual fields, and hands it to the
composer.  The reserved plugin filenames live here too, so the fallback
placement and the registry agree on what ``config.json`` and ``lib/`` are.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field


_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global Plugforge configuration.

    Holds every tuneable path and conventional filename used by the
    composition engine.  Instances are created once by the CLI entry point
    (or by a test) and then passed explicitly through the rest of the system.
    """

    plugins_dir: Path = Field(default=Path("./plugins"))
    templates_dir: Path = Field(default=Path("./templates"))
    output_dir: Path = Field(
        default=Path("."), description="Parent directory of generated projects"
    )

    # Reserved names inside a plugin directory.
    config_filename: str = Field(default="config.json")
    manifest_filename: str = Field(default="package.json")
    lib_dirname: str = Field(default="lib")

    verbose: bool = Field(default=False)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def reserved_names(self) -> frozenset[str]:
        """Plugin entries that are never copied by the fallback placement."""
        return frozenset(
            {self.lib_dirname, self.config_filename, self.manifest_filename}
        )

    def project_path(self, project_name: str) -> Path:
        """Destination directory for *project_name*."""
        return self.output_dir / project_name

    def plugin_path(self, plugin_id: str) -> Path:
        """Directory where *plugin_id* is expected to live."""
        return self.plugins_dir / plugin_id

    def template_path(self, template: str) -> Path:
        """Directory holding on-disk data for *template*."""
        return self.templates_dir / template

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PLUGFORGE_PLUGINS_DIR, PLUGFORGE_TEMPLATES_DIR,
            PLUGFORGE_OUTPUT_DIR, PLUGFORGE_VERBOSE.
        """
        return cls(
            plugins_dir=Path(os.environ.get("PLUGFORGE_PLUGINS_DIR", "./plugins")),
            templates_dir=Path(os.environ.get("PLUGFORGE_TEMPLATES_DIR", "./templates")),
            output_dir=Path(os.environ.get("PLUGFORGE_OUTPUT_DIR", ".")),
            verbose=os.environ.get("PLUGFORGE_VERBOSE", "").strip().lower() in _TRUTHY,
        )
