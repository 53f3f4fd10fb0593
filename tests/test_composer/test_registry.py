"""Tests for plugin lookup and descriptor loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from plugforge.composer.context import ScaffoldContext
from plugforge.composer.registry import PluginRegistry


pytestmark = pytest.mark.unit


class TestLocate:
    def test_existing_plugin(self, ctx: ScaffoldContext, plugins_dir: Path):
        assert PluginRegistry(ctx).locate("logger/default") == plugins_dir / "logger" / "default"

    def test_missing_plugin(self, ctx: ScaffoldContext):
        assert PluginRegistry(ctx).locate("nope/default") is None
        assert ctx.warnings == []

    def test_file_is_not_a_plugin(self, ctx: ScaffoldContext, plugins_dir: Path):
        (plugins_dir / "stray.txt").write_text("x", encoding="utf-8")
        assert PluginRegistry(ctx).locate("stray.txt") is None


class TestLoadConfig:
    def test_legacy_plugin_has_no_config(self, ctx: ScaffoldContext):
        plugin = PluginRegistry(ctx).get("logger/default")
        assert plugin is not None
        assert plugin.config is None
        assert plugin.is_legacy

    def test_descriptor_loaded(self, ctx: ScaffoldContext):
        plugin = PluginRegistry(ctx).get("design-system/default")
        assert plugin.config is not None
        assert plugin.config.dependencies == {"clsx": "^2.0.0"}
        assert not plugin.is_legacy

    def test_malformed_json_is_warning(self, ctx: ScaffoldContext):
        plugin = PluginRegistry(ctx).get("broken/default")
        assert plugin is not None
        assert plugin.config is None
        assert len(ctx.warnings) == 1
        assert "malformed plugin config" in ctx.warnings[0]

    def test_schema_violation_is_warning(self, ctx: ScaffoldContext, make_plugin):
        make_plugin("odd/default", config={"scripts": ["not", "a", "mapping"]})
        plugin = PluginRegistry(ctx).get("odd/default")
        assert plugin.config is None
        assert len(ctx.warnings) == 1

    def test_non_object_descriptor_is_warning(self, ctx: ScaffoldContext, make_plugin):
        plugin_dir = make_plugin("array/default")
        (plugin_dir / "config.json").write_text("[]", encoding="utf-8")
        assert PluginRegistry(ctx).get("array/default").config is None
        assert len(ctx.warnings) == 1

    def test_get_missing(self, ctx: ScaffoldContext):
        assert PluginRegistry(ctx).get("ghost/default") is None


class TestDiscover:
    def test_lists_category_variant_dirs(self, ctx: ScaffoldContext):
        found = PluginRegistry(ctx).discover()
        assert "logger/default" in found
        assert "apps/empty" in found
        assert found == sorted(found)

    def test_deep_plugin_with_descriptor(self, ctx: ScaffoldContext, make_plugin):
        make_plugin("github/workflows/default", config={"files": []})
        assert "github/workflows/default" in PluginRegistry(ctx).discover()

    def test_missing_root(self, ctx: ScaffoldContext, tmp_path: Path):
        ctx.config.plugins_dir = tmp_path / "absent"
        assert PluginRegistry(ctx).discover() == []
