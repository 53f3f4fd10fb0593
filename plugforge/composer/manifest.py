"""Manifest merging.

Folds each plugin's ``dependencies`` / ``devDependencies`` / ``scripts`` into
the project manifest.  Every section is a shallow key-wise overwrite, so for
any key the last plugin to set it wins, silently.
"""

from __future__ import annotations

from typing import Optional

from plugforge.composer.context import ScaffoldContext
from plugforge.composer.models import MANIFEST_SECTIONS, PluginConfig, ProjectManifest


# ---------------------------------------------------------------------------
# Legacy contributions
# ---------------------------------------------------------------------------

# Plugins that predate config.json descriptors.  These entries are applied
# after the plugin's own descriptor, so a descriptor cannot remove them.
# TODO: drop each entry once the matching plugin ships a config.json.
LEGACY_CONTRIBUTIONS: dict[str, dict[str, dict[str, str]]] = {
    "logger/default": {
        "dependencies": {"@kalabamssalu/logger": "^1.0.0"},
        "scripts": {"log:example": "tsx lib/logger-example.ts"},
    },
    "task/default": {
        "dependencies": {"@kalabamssalu/task": "^1.0.0"},
        "scripts": {"task:example": "tsx lib/task-example.ts"},
    },
    "logging-enhanced/default": {
        "dependencies": {
            "@kalabamssalu/logger": "^1.0.0",
            "@kalabamssalu/task": "^1.0.0",
        },
        "scripts": {
            "logging:demo": "tsx lib/logging-demo.ts",
            "logging:init": "tsx lib/enhanced-logging.ts",
        },
    },
    "graphql/apollo": {
        "dependencies": {
            "@apollo/client": "^3.8.0",
            "graphql": "^16.8.0",
        },
        "devDependencies": {"@graphql-codegen/cli": "^5.0.0"},
        "scripts": {"graphql:codegen": "graphql-codegen"},
    },
}


class ManifestMerger:
    """Accumulates plugin contributions into a single ``ProjectManifest``."""

    def __init__(self, ctx: ScaffoldContext, manifest: Optional[ProjectManifest] = None) -> None:
        self.ctx = ctx
        self.manifest = manifest if manifest is not None else ProjectManifest()

    def apply(self, plugin_id: str, config: Optional[PluginConfig]) -> None:
        """Fold one plugin into the manifest: descriptor first, then legacy entries."""
        if config is not None:
            self._merge(
                plugin_id,
                {
                    "dependencies": config.dependencies,
                    "devDependencies": config.dev_dependencies,
                    "scripts": config.scripts,
                },
            )
        legacy = LEGACY_CONTRIBUTIONS.get(plugin_id)
        if legacy:
            self.ctx.debug(f"{plugin_id}: applying legacy manifest entries")
            self._merge(plugin_id, legacy)

    def finalize(self, project_name: str) -> ProjectManifest:
        """Stamp the project name over anything a template provided."""
        self.manifest.name = project_name
        return self.manifest

    def _merge(self, plugin_id: str, contributions: dict[str, dict[str, str]]) -> None:
        for key in MANIFEST_SECTIONS:
            entries = contributions.get(key)
            if not entries:
                continue
            section = self.manifest.section(key)
            for name, value in entries.items():
                if name in section and section[name] != value:
                    self.ctx.debug(f"{plugin_id}: {key}.{name} {section[name]!r} -> {value!r}")
                section[name] = value
