"""Jinja2 rendering of the files create-nrtgmp-app writes itself.

Templates live in ``create_nrtgmp/templates/`` and are rendered with a plain
context dictionary.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders ``.j2`` templates from a template directory.

    Undefined variables are an error, so a missing context key can never
    produce a half-empty config file.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        An existing file at *output_path* is replaced, never merged.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(out.write_text, content, "utf-8")
        return out
