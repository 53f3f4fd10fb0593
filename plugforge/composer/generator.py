"""Main scaffolding orchestrator.

Drives one ``create`` invocation through four stages::

    VALIDATING -> EXPANDING -> MATERIALIZING -> DONE

with ``ABORTED`` reachable from any of them.  Only validation failures are
reported as :class:`PreconditionError`; they are raised before anything is
written to disk.  Per-plugin problems become warnings and the run continues.
Filesystem errors during materialization propagate and leave the partially
populated project in place.
"""

from __future__ import annotations

import time
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from plugforge.composer.context import ScaffoldContext
from plugforge.composer.manifest import ManifestMerger
from plugforge.composer.materializer import FileMaterializer
from plugforge.composer.registry import PluginRegistry
from plugforge.composer.resolver import API_STYLES, TemplateResolver
from plugforge.config import Config
from plugforge.utils import format_duration, save_json


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for scaffolding failures."""


class PreconditionError(ScaffoldError):
    """Raised when a ``create`` request fails validation.  Nothing has been written."""


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class Stage(str, Enum):
    """Lifecycle of a single ``create`` run."""
    VALIDATING = "validating"
    EXPANDING = "expanding"
    MATERIALIZING = "materializing"
    DONE = "done"
    ABORTED = "aborted"


class CreateRequest(BaseModel):
    """Everything the caller asked for."""
    project_name: str = Field(default="")
    plugins: list[str] = Field(default_factory=list)
    template: Optional[str] = Field(default=None)
    api: Optional[str] = Field(default=None, description="API style selector")
    store: Optional[str] = Field(default=None, description="Echoed only")


class ScaffoldResult(BaseModel):
    """Outcome of a completed run."""
    project_name: str
    project_path: Path
    plugins: list[str] = Field(default_factory=list, description="Resolved plugin list")
    skipped: list[str] = Field(default_factory=list, description="Plugins with no directory")
    manifest: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    copied: int = Field(default=0, description="Number of copy steps executed")
    duration: str = Field(default="0.0s")


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Composes a project from plugins.

    A generator may be reused for several requests; each call to
    :meth:`create` builds fresh per-run state.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.stage = Stage.VALIDATING

    # -- Public API --------------------------------------------------------

    def validate(self, request: CreateRequest) -> Path:
        """Check the request and return the destination directory.

        Raises:
            PreconditionError: On a missing project name, an unknown API
                style or an existing destination.
        """
        if not request.project_name.strip():
            raise PreconditionError("Project name is required")
        if request.api is not None and request.api not in API_STYLES:
            raise PreconditionError(
                f"Invalid API style {request.api!r} (expected one of: {', '.join(API_STYLES)})"
            )
        project_path = self.config.project_path(request.project_name)
        if project_path.exists():
            raise PreconditionError(f"Directory {request.project_name} already exists")
        return project_path

    def create(self, request: CreateRequest) -> ScaffoldResult:
        """Run the full pipeline for *request*.

        Returns:
            A :class:`ScaffoldResult` describing what was produced.
        """
        started = time.monotonic()
        ctx = ScaffoldContext(config=self.config)

        # 1. Validate
        self.stage = Stage.VALIDATING
        try:
            project_path = self.validate(request)
        except PreconditionError:
            self.stage = Stage.ABORTED
            raise

        # 2. Expand the plugin list
        self.stage = Stage.EXPANDING
        resolver = TemplateResolver(ctx)
        plugins = resolver.resolve(request.plugins, request.template, request.api)
        ctx.debug(f"template: {request.template}")
        ctx.debug(f"plugins: {plugins}")

        # 3. Materialize
        self.stage = Stage.MATERIALIZING
        try:
            result = self._materialize(ctx, request, resolver, project_path, plugins)
        except OSError:
            self.stage = Stage.ABORTED
            raise

        # 4. Done
        self.stage = Stage.DONE
        result.duration = format_duration(time.monotonic() - started)
        return result

    # -- Stages ------------------------------------------------------------

    def _materialize(
        self,
        ctx: ScaffoldContext,
        request: CreateRequest,
        resolver: TemplateResolver,
        project_path: Path,
        plugins: list[str],
    ) -> ScaffoldResult:
        project_path.mkdir(parents=True)

        registry = PluginRegistry(ctx)
        merger = ManifestMerger(ctx, resolver.load_manifest(request.template))
        materializer = FileMaterializer(ctx, project_path)

        skipped: list[str] = []
        copied = 0
        for plugin_id in plugins:
            plugin = registry.get(plugin_id)
            if plugin is None:
                ctx.warn(f"Plugin not found: {plugin_id}")
                skipped.append(plugin_id)
                # Legacy entries are keyed by identifier alone.
                merger.apply(plugin_id, None)
                continue
            merger.apply(plugin_id, plugin.config)
            copied += len(materializer.materialize(plugin))

        manifest = merger.finalize(request.project_name).to_json_dict()
        save_json(manifest, project_path / self.config.manifest_filename)

        return ScaffoldResult(
            project_name=request.project_name,
            project_path=project_path,
            plugins=plugins,
            skipped=skipped,
            manifest=manifest,
            warnings=list(ctx.warnings),
            copied=copied,
        )
