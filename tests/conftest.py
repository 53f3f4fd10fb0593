"""Shared pytest fixtures for the Plugforge test suite.

Provides reusable fixtures for:
- A throwaway plugin store with legacy and descriptor-driven plugins
- A template directory with an override and a manifest seed
- A ``Config`` / ``ScaffoldContext`` pointing at both
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pytest

from plugforge.composer.context import ScaffoldContext
from plugforge.config import Config


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write_plugin(
    root: Path,
    plugin_id: str,
    files: Optional[dict[str, str]] = None,
    config: Optional[dict[str, Any]] = None,
) -> Path:
    """Create a plugin directory under *root* with the given files and descriptor."""
    plugin_dir = root / plugin_id
    plugin_dir.mkdir(parents=True, exist_ok=True)
    for rel, content in (files or {}).items():
        path = plugin_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    if config is not None:
        (plugin_dir / "config.json").write_text(json.dumps(config), encoding="utf-8")
    return plugin_dir


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

@pytest.fixture
def plugins_dir(tmp_path: Path) -> Path:
    """A plugin store modelled on the bundled Next.js boilerplate plugins."""
    root = tmp_path / "plugins"

    # Legacy plugins: no descriptor, fallback placement.
    write_plugin(root, "logger/default", {
        "lib/logger.ts": "export const initLogger = async () => {};\n",
        "lib/logger-example.ts": "import { initLogger } from './logger';\n",
    })
    write_plugin(root, "task/default", {
        "lib/task-manager.ts": "export class TaskManager {}\n",
        "lib/task-example.ts": "import { TaskManager } from './task-manager';\n",
    })
    write_plugin(root, "monitoring/default", {
        "lib/metrics.ts": "export const metrics = {};\n",
        "middleware.ts": "export function middleware() {}\n",
        "sentry.server.config.ts": "// sentry\n",
        "package.json": '{"name": "monitoring-fragment"}\n',
    })
    write_plugin(root, "graphql/apollo", {
        "lib/apollo-client.ts": "export const client = null;\n",
        "hooks/use-graphql.ts": "export function useGraphQL() {}\n",
        "graphql/fragments.ts": "export const fragments = {};\n",
        ".eslintrc.js": "module.exports = {};\n",
    })

    # Descriptor-driven plugins.
    write_plugin(root, "apps/empty", config={"paths": [{"from": "apps", "to": "apps"}]})
    write_plugin(root, "packages/empty", config={"paths": [{"from": "packages", "to": "packages"}]})
    write_plugin(
        root,
        "design-system/default",
        {
            "lib/design-system.ts": "export const tokens = {};\n",
            "theme/provider.tsx": "export function ThemeProvider() {}\n",
        },
        config={
            "dependencies": {"clsx": "^2.0.0"},
            "devDependencies": {"@types/react": "^18.2.0"},
            "scripts": {"theme:build": "tsx lib/design-system.ts"},
            "files": [
                "lib/design-system.ts",
                {"src": "theme/provider.tsx", "dest": "lib/theme-provider.tsx"},
            ],
        },
    )
    write_plugin(
        root,
        "apps/web",
        {
            "apps/web/app/page.tsx": "export default function Page() {}\n",
            "apps/web/next.config.js": "module.exports = {};\n",
            "components/hero.tsx": "export function Hero() {}\n",
        },
        config={"paths": [{"from": "apps/web", "to": "apps/web"}]},
    )

    # A plugin whose descriptor cannot be parsed.
    broken = write_plugin(root, "broken/default", {"README.md": "# broken\n"})
    (broken / "config.json").write_text("{not json", encoding="utf-8")

    return root


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Template directory with one data-driven template."""
    root = tmp_path / "templates"
    starter = root / "starter"
    starter.mkdir(parents=True)
    (starter / "config.json").write_text(
        json.dumps({"plugins": ["logger/default", "design-system/default"]}),
        encoding="utf-8",
    )
    (starter / "package.json").write_text(
        json.dumps({
            "name": "starter-template",
            "version": "0.0.1",
            "private": True,
            "scripts": {"lint": "eslint ."},
        }),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def config(tmp_path: Path, plugins_dir: Path, templates_dir: Path) -> Config:
    output = tmp_path / "out"
    output.mkdir()
    return Config(plugins_dir=plugins_dir, templates_dir=templates_dir, output_dir=output)


@pytest.fixture
def ctx(config: Config) -> ScaffoldContext:
    return ScaffoldContext(config=config)


@pytest.fixture
def project_dir(config: Config) -> Path:
    """An existing, empty project directory for materializer tests."""
    path = config.output_dir / "demo"
    path.mkdir()
    return path


@pytest.fixture
def make_plugin(plugins_dir: Path):
    """Factory adding extra plugins to the store fixture."""

    def _make(
        plugin_id: str,
        files: Optional[dict[str, str]] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> Path:
        return write_plugin(plugins_dir, plugin_id, files, config)

    return _make
