"""Plugforge composer -- assembles projects from reusable plugins.

Resolves a plugin list (optionally expanded from a template), merges each
plugin's manifest contributions into one ``package.json`` and copies each
plugin's files into the new project directory.

Quick usage::

    from pathlib import Path

    from plugforge.composer import CreateRequest, ProjectGenerator
    from plugforge.config import Config

    generator = ProjectGenerator(Config(plugins_dir=Path("plugins")))
    result = generator.create(
        CreateRequest(project_name="my-app", plugins=["logger/default"])
    )
"""

from plugforge.composer.generator import (
    CreateRequest,
    PreconditionError,
    ProjectGenerator,
    ScaffoldError,
    ScaffoldResult,
    Stage,
)
from plugforge.composer.manifest import ManifestMerger
from plugforge.composer.materializer import FileMaterializer
from plugforge.composer.registry import Plugin, PluginRegistry
from plugforge.composer.resolver import TemplateResolver

__all__ = [
    "CreateRequest",
    "FileMaterializer",
    "ManifestMerger",
    "Plugin",
    "PluginRegistry",
    "PreconditionError",
    "ProjectGenerator",
    "ScaffoldError",
    "ScaffoldResult",
    "Stage",
    "TemplateResolver",
]
