"""Per-run state shared by the composition components."""

from __future__ import annotations

from dataclasses import dataclass, field

from plugforge.config import Config
from plugforge.utils import print_debug, print_warning


@dataclass
class ScaffoldContext:
    """Everything one ``create`` invocation needs, passed explicitly.

    Recoverable problems are printed immediately and kept in ``warnings`` so
    the orchestrator can report how many occurred.
    """

    config: Config
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        print_warning(message)

    def debug(self, message: str) -> None:
        if self.config.verbose:
            print_debug(message)
