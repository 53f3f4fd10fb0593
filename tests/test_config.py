"""Unit tests for Config (plugforge.config).

Tests cover:
- Defaults and reserved names
- Derived paths
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from plugforge.config import Config


class TestConfigDefaults:
    @pytest.mark.unit
    def test_default_paths(self):
        config = Config()
        assert config.plugins_dir == Path("./plugins")
        assert config.templates_dir == Path("./templates")
        assert config.output_dir == Path(".")
        assert config.verbose is False

    @pytest.mark.unit
    def test_reserved_names(self):
        config = Config()
        assert config.reserved_names == {"lib", "config.json", "package.json"}

    @pytest.mark.unit
    def test_reserved_names_follow_overrides(self):
        config = Config(config_filename="plugin.json", lib_dirname="src")
        assert config.reserved_names == {"src", "plugin.json", "package.json"}


class TestConfigPaths:
    @pytest.mark.unit
    def test_project_path(self, tmp_path: Path):
        config = Config(output_dir=tmp_path)
        assert config.project_path("my-app") == tmp_path / "my-app"

    @pytest.mark.unit
    def test_plugin_path_keeps_nested_identifiers(self, tmp_path: Path):
        config = Config(plugins_dir=tmp_path)
        assert config.plugin_path("github/workflows/default") == tmp_path / "github" / "workflows" / "default"

    @pytest.mark.unit
    def test_template_path(self, tmp_path: Path):
        config = Config(templates_dir=tmp_path)
        assert config.template_path("starter") == tmp_path / "starter"


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config.plugins_dir == Path("./plugins")
        assert config.verbose is False

    @pytest.mark.unit
    def test_reads_env(self):
        env = {
            "PLUGFORGE_PLUGINS_DIR": "/opt/store/plugins",
            "PLUGFORGE_TEMPLATES_DIR": "/opt/store/templates",
            "PLUGFORGE_OUTPUT_DIR": "/tmp/projects",
            "PLUGFORGE_VERBOSE": "yes",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.plugins_dir == Path("/opt/store/plugins")
        assert config.templates_dir == Path("/opt/store/templates")
        assert config.output_dir == Path("/tmp/projects")
        assert config.verbose is True

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["0", "false", "", "off"])
    def test_verbose_falsy_values(self, value: str):
        with patch.dict(os.environ, {"PLUGFORGE_VERBOSE": value}, clear=True):
            assert Config.from_env().verbose is False
