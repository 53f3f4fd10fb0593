"""Plugin registry access.

Locates plugin directories under the configured plugins root and loads their
optional ``config.json`` descriptors.  Neither a missing plugin nor a broken
descriptor aborts a run: both are reported through the context and the caller
carries on with whatever is available.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from plugforge.composer.context import ScaffoldContext
from plugforge.composer.models import PluginConfig
from plugforge.utils import load_json


@dataclass(frozen=True)
class Plugin:
    """A plugin found on disk, with its descriptor if it has a usable one."""

    identifier: str
    path: Path
    config: Optional[PluginConfig] = None

    @property
    def is_legacy(self) -> bool:
        return self.config is None


class PluginRegistry:
    """Resolves plugin identifiers against ``Config.plugins_dir``."""

    def __init__(self, ctx: ScaffoldContext) -> None:
        self.ctx = ctx
        self.root = ctx.config.plugins_dir

    # -- Lookup ------------------------------------------------------------

    def locate(self, plugin_id: str) -> Optional[Path]:
        """Return the plugin directory, or ``None`` when it does not exist."""
        path = self.ctx.config.plugin_path(plugin_id)
        if path.is_dir():
            return path
        return None

    def load_config(self, plugin_dir: Path) -> Optional[PluginConfig]:
        """Load the descriptor inside *plugin_dir*.

        Returns ``None`` when there is no descriptor or it cannot be parsed;
        the latter is reported as a warning.
        """
        descriptor = plugin_dir / self.ctx.config.config_filename
        if not descriptor.is_file():
            return None
        try:
            return PluginConfig.model_validate(load_json(descriptor))
        except (json.JSONDecodeError, ValueError, ValidationError) as exc:
            self.ctx.warn(f"Ignoring malformed plugin config {descriptor}: {exc}")
            return None

    def get(self, plugin_id: str) -> Optional[Plugin]:
        """Locate *plugin_id* and load its descriptor in one step."""
        path = self.locate(plugin_id)
        if path is None:
            return None
        return Plugin(identifier=plugin_id, path=path, config=self.load_config(path))

    # -- Discovery ---------------------------------------------------------

    def discover(self) -> list[str]:
        """List plugin identifiers available under the plugins root.

        Every ``category/variant`` directory counts, as does any deeper
        directory that carries its own descriptor.
        """
        if not self.root.is_dir():
            return []

        found: set[str] = set()
        for category in self.root.iterdir():
            if not category.is_dir():
                continue
            for variant in category.iterdir():
                if variant.is_dir():
                    found.add(variant.relative_to(self.root).as_posix())

        for descriptor in self.root.rglob(self.ctx.config.config_filename):
            rel = descriptor.parent.relative_to(self.root)
            if len(rel.parts) >= 2:
                found.add(rel.as_posix())

        return sorted(found)
