"""Pydantic v2 models for the plugin composition engine.

Defines the declarative plugin descriptor, the template override file, the
accumulated project manifest and the resolved file-copy instruction.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Plugin descriptor
# ---------------------------------------------------------------------------

class PathMapping(BaseModel):
    """A directory-copy instruction: ``from`` inside the plugin, ``to`` inside the project."""
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., alias="from", description="Directory relative to the plugin root")
    target: str = Field(..., alias="to", description="Directory relative to the project root")


class FileMapping(BaseModel):
    """An explicit file-copy instruction with distinct source and destination."""
    src: str = Field(..., description="Path relative to the plugin root")
    dest: Optional[str] = Field(
        default=None, description="Path relative to the project root (defaults to src)"
    )


class PluginConfig(BaseModel):
    """Declarative descriptor shipped by a plugin as ``config.json``.

    ``paths`` and ``files`` stay ``None`` when the descriptor omits them, which
    is what selects the fallback placement for the plugin.
    """
    model_config = ConfigDict(populate_by_name=True)

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    scripts: dict[str, str] = Field(default_factory=dict)
    paths: Optional[list[PathMapping]] = Field(default=None)
    files: Optional[list[Union[str, FileMapping]]] = Field(default=None)

    @property
    def has_placement(self) -> bool:
        """Whether the descriptor declares its own file placement."""
        return self.paths is not None or self.files is not None


# ---------------------------------------------------------------------------
# Template override
# ---------------------------------------------------------------------------

class TemplateConfig(BaseModel):
    """On-disk template override.  Only ``plugins`` is consulted."""
    plugins: Optional[list[str]] = Field(default=None)


# ---------------------------------------------------------------------------
# Project manifest
# ---------------------------------------------------------------------------

DEFAULT_SCRIPTS: dict[str, str] = {
    "dev": 'echo "Development server starting..."',
    "build": 'echo "Building project..."',
    "start": 'echo "Starting project..."',
}


class ProjectManifest(BaseModel):
    """The ``package.json`` accumulated across all plugins of one run.

    Unknown keys from a template-provided manifest are preserved verbatim.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(default="")
    version: str = Field(default="1.0.0")
    type: str = Field(default="module")
    scripts: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SCRIPTS))
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    def section(self, key: str) -> dict[str, str]:
        """Return the mutable sub-mapping stored under its ``package.json`` key."""
        if key == "dependencies":
            return self.dependencies
        if key == "devDependencies":
            return self.dev_dependencies
        if key == "scripts":
            return self.scripts
        raise KeyError(key)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialise with ``package.json`` key names."""
        return self.model_dump(by_alias=True)


MANIFEST_SECTIONS: tuple[str, ...] = ("dependencies", "devDependencies", "scripts")


# ---------------------------------------------------------------------------
# Resolved copy instruction
# ---------------------------------------------------------------------------

class FileCopyInstruction(BaseModel):
    """A fully resolved copy step produced by the materializer."""
    source: Path
    destination: Path
    is_directory: bool = Field(default=False)
