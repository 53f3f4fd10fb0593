"""File materialization.

Turns a plugin directory into concrete copy steps inside the generated
project and executes them.  Placement comes from the plugin descriptor
(``paths`` and/or ``files``) when it declares any, otherwise from the
fallback rule:

1. every entry of ``lib/`` is copied flatly into the project's ``lib/``;
2. every other top-level entry is copied to the project root, except the
   reserved names (``lib``, ``config.json``, ``package.json``).

Copies never merge file contents.  When two plugins write the same
destination the later one replaces the earlier one.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from plugforge.composer.context import ScaffoldContext
from plugforge.composer.models import FileCopyInstruction, FileMapping, PluginConfig
from plugforge.composer.registry import Plugin
from plugforge.utils import ensure_dir


class FileMaterializer:
    """Copies plugin file fragments into a project directory."""

    def __init__(self, ctx: ScaffoldContext, project_root: Path) -> None:
        self.ctx = ctx
        self.project_root = Path(project_root)

    # -- Public API --------------------------------------------------------

    def materialize(self, plugin: Plugin) -> list[FileCopyInstruction]:
        """Plan and execute every copy step for *plugin*.

        Returns:
            The instructions that were carried out, in order.
        """
        instructions = self.plan(plugin)
        for instruction in instructions:
            self.execute(instruction)
        self.ctx.debug(f"{plugin.identifier}: {len(instructions)} copy step(s)")
        return instructions

    def plan(self, plugin: Plugin) -> list[FileCopyInstruction]:
        """Resolve the copy steps for *plugin* without touching the project."""
        if plugin.is_legacy or not plugin.config.has_placement:
            return self._plan_fallback(plugin)
        return self._plan_paths(plugin, plugin.config) + self._plan_files(plugin, plugin.config)

    def execute(self, instruction: FileCopyInstruction) -> None:
        """Carry out one copy step, creating destination directories as needed.

        A directory step whose source is missing leaves an empty directory
        at the destination.
        """
        if instruction.is_directory:
            ensure_dir(instruction.destination)
            if instruction.source.is_dir():
                shutil.copytree(
                    instruction.source, instruction.destination, dirs_exist_ok=True
                )
            return

        ensure_dir(instruction.destination.parent)
        shutil.copy2(instruction.source, instruction.destination)

    # -- Declarative placement --------------------------------------------

    def _plan_paths(self, plugin: Plugin, config: PluginConfig) -> list[FileCopyInstruction]:
        steps: list[FileCopyInstruction] = []
        for mapping in config.paths or []:
            source = plugin.path / mapping.source
            destination = self.project_root / mapping.target
            if source.is_file():
                self.ctx.debug(f"{plugin.identifier}: {mapping.source} is a file, copying as-is")
                steps.append(FileCopyInstruction(source=source, destination=destination))
                continue
            if not source.exists():
                self.ctx.debug(
                    f"{plugin.identifier}: {mapping.source} missing, creating empty {mapping.target}"
                )
            steps.append(
                FileCopyInstruction(source=source, destination=destination, is_directory=True)
            )
        return steps

    def _plan_files(self, plugin: Plugin, config: PluginConfig) -> list[FileCopyInstruction]:
        steps: list[FileCopyInstruction] = []
        for entry in config.files or []:
            if isinstance(entry, FileMapping):
                src, dest = entry.src, entry.dest or entry.src
            else:
                src, dest = entry, entry

            source = plugin.path / src
            if not source.exists():
                self.ctx.warn(f"{plugin.identifier}: source file not found: {src}")
                continue
            steps.append(
                FileCopyInstruction(
                    source=source,
                    destination=self.project_root / dest,
                    is_directory=source.is_dir(),
                )
            )
        return steps

    # -- Fallback placement -----------------------------------------------

    def _plan_fallback(self, plugin: Plugin) -> list[FileCopyInstruction]:
        cfg = self.ctx.config
        steps: list[FileCopyInstruction] = []

        lib_dir = plugin.path / cfg.lib_dirname
        if lib_dir.is_dir():
            project_lib = self.project_root / cfg.lib_dirname
            entries = sorted(lib_dir.iterdir())
            if not entries:
                # The project lib/ exists whenever the plugin ships one.
                steps.append(
                    FileCopyInstruction(source=lib_dir, destination=project_lib, is_directory=True)
                )
            for entry in entries:
                steps.append(
                    FileCopyInstruction(
                        source=entry,
                        destination=project_lib / entry.name,
                        is_directory=entry.is_dir(),
                    )
                )

        reserved = cfg.reserved_names
        for entry in sorted(plugin.path.iterdir()):
            if entry.name in reserved:
                continue
            steps.append(
                FileCopyInstruction(
                    source=entry,
                    destination=self.project_root / entry.name,
                    is_directory=entry.is_dir(),
                )
            )
        return steps
