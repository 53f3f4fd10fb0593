"""Jinja2 rendering of the messages printed around a scaffolding run.

Loads ``.j2`` templates shipped in ``plugforge/composer/messages/`` and
renders them with run-specific context (project name, resolved plugins,
warning count and so on).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


_DEFAULT_MESSAGE_DIR = Path(__file__).parent / "messages"

DEFAULT_NEXT_STEPS: list[str] = ["npm install", "npm run dev"]


class MessageRenderer:
    """Renders the usage text and the post-run summary."""

    def __init__(self, message_dir: str | Path | None = None) -> None:
        if message_dir is None:
            message_dir = _DEFAULT_MESSAGE_DIR
        self.message_dir = Path(message_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.message_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a single message template with the provided context."""
        template = self.env.get_template(template_name)
        return template.render(**context)

    def summary(
        self,
        project_name: str,
        project_path: Path,
        plugins: list[str],
        *,
        template: str | None = None,
        store: str | None = None,
        warnings: list[str] | None = None,
        duration: str = "0.0s",
    ) -> str:
        return self.render(
            "summary.txt.j2",
            {
                "project_name": project_name,
                "project_path": str(project_path),
                "plugins": plugins,
                "template": template,
                "store": store,
                "warnings": warnings or [],
                "duration": duration,
                "next_steps": DEFAULT_NEXT_STEPS,
            },
        )

    def usage(self, prog: str, templates: dict[str, str], api_styles: tuple[str, ...]) -> str:
        return self.render(
            "usage.txt.j2",
            {"prog": prog, "templates": templates, "api_styles": api_styles},
        )
