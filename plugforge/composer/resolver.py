"""Template expansion.

Turns the ``--plugins`` / ``--template`` / ``--api`` combination into the
ordered plugin identifier list the rest of the engine walks.
"""

from __future__ import annotations

import json
from typing import Optional

from pydantic import ValidationError

from plugforge.composer.context import ScaffoldContext
from plugforge.composer.models import ProjectManifest, TemplateConfig
from plugforge.utils import load_json


# ---------------------------------------------------------------------------
# Built-in tables
# ---------------------------------------------------------------------------

TEMPLATE_PLUGINS: dict[str, list[str]] = {
    "enterprise-monorepo": [
        "turbo/default",
        "devcontainer/default",
        "apps/empty",
        "packages/empty",
        "conventional-commits/default",
        "vscode/default",
        "github/workflows/default",
        "github/issue-template/default",
        "gitignore/default",
        "releaserc/default",
        "license/default",
        "makefile/default",
        "renovate/default",
        "package/full-monorepo",
        "security/default",
        "testing/enhanced",
        "monitoring/default",
        "performance/default",
        "documentation/default",
        "infrastructure/default",
        "logging-enhanced/default",
    ],
}

TEMPLATE_DESCRIPTIONS: dict[str, str] = {
    "enterprise-monorepo": "Full enterprise setup with all plugins",
}

# API style -> identifiers appended when that style is selected.
API_PLUGINS: dict[str, list[str]] = {
    "rest": [],
    "graphql": ["graphql/apollo"],
}

API_STYLES: tuple[str, ...] = tuple(API_PLUGINS)


def parse_plugin_list(raw: Optional[str]) -> list[str]:
    """Split a comma-separated ``--plugins`` value, dropping blanks.

    Duplicates are kept in order.
    """
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class TemplateResolver:
    """Expands a template name and API style into an ordered plugin list."""

    def __init__(self, ctx: ScaffoldContext) -> None:
        self.ctx = ctx

    def resolve(
        self,
        plugins: Optional[list[str]] = None,
        template: Optional[str] = None,
        api: Optional[str] = None,
    ) -> list[str]:
        """Return the final plugin list.

        Order: explicit plugins, then the built-in template expansion, then
        API-conditional plugins.  An on-disk template override with its own
        ``plugins`` list replaces all of that outright.

        Raises:
            ValueError: If *api* is not a known style.  The orchestrator
                validates this earlier, so reaching it is a caller error.
        """
        if api is not None and api not in API_PLUGINS:
            raise ValueError(f"Unknown API style {api!r}")

        resolved = list(plugins or [])

        if template:
            if template in TEMPLATE_PLUGINS:
                resolved.extend(TEMPLATE_PLUGINS[template])
            else:
                self.ctx.debug(f"template {template!r} has no built-in expansion")

        if api:
            resolved.extend(API_PLUGINS[api])

        override = self.load_override(template) if template else None
        if override is not None:
            self.ctx.debug(f"template {template!r} override replaces {len(resolved)} plugin(s)")
            resolved = list(override)

        return resolved

    # -- On-disk template data --------------------------------------------

    def load_override(self, template: str) -> Optional[list[str]]:
        """Return the ``plugins`` list of the template's ``config.json``, if any."""
        path = self.ctx.config.template_path(template) / self.ctx.config.config_filename
        if not path.is_file():
            return None
        try:
            override = TemplateConfig.model_validate(load_json(path))
        except (json.JSONDecodeError, ValueError, ValidationError) as exc:
            self.ctx.warn(f"Ignoring malformed template config {path}: {exc}")
            return None
        return override.plugins

    def load_manifest(self, template: Optional[str]) -> ProjectManifest:
        """Seed manifest for a run: the template's ``package.json`` or the default skeleton."""
        if not template:
            return ProjectManifest()
        path = self.ctx.config.template_path(template) / self.ctx.config.manifest_filename
        if not path.is_file():
            return ProjectManifest()
        try:
            # A template manifest replaces the skeleton, placeholder scripts included.
            return ProjectManifest.model_validate({"scripts": {}, **load_json(path)})
        except (json.JSONDecodeError, ValueError, ValidationError) as exc:
            self.ctx.warn(f"Ignoring malformed template manifest {path}: {exc}")
            return ProjectManifest()

    def known_templates(self) -> dict[str, str]:
        """Built-in templates plus any template directories found on disk."""
        known = dict(TEMPLATE_DESCRIPTIONS)
        root = self.ctx.config.templates_dir
        if root.is_dir():
            for entry in sorted(root.iterdir()):
                if entry.is_dir() and entry.name not in known:
                    known[entry.name] = "On-disk template"
        return known
