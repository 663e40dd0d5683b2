"""Jinja2 template rendering for generated source files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``kickstart/scaffolder/templates/`` directory and renders them with a
choice-derived context, plus the async write used for every generated file.
"""

from __future__ import annotations

import asyncio
import posixpath
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Referencing a variable missing from the context
    raises ``jinja2.UndefinedError``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["title_case"] = _title_case_filter
        self.env.filters["module_from"] = _module_from_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"content/vite/component.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _title_case_filter(value: str) -> str:
    """Convert ``my-app`` to ``My App``."""
    return " ".join(word.capitalize() for word in re.split(r"[-_\s]+", value) if word)


def _module_from_filter(target: str, importer: str) -> str:
    """Import specifier for module *target* as seen from file *importer*.

    Both are project-relative, e.g. ``"src/components/Counter"`` from
    ``"src/App.jsx"`` gives ``"./components/Counter"``.
    """
    specifier = posixpath.relpath(target, posixpath.dirname(importer) or ".")
    return specifier if specifier.startswith(".") else f"./{specifier}"


# ---------------------------------------------------------------------------
# File writing
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def write_file(path: Path, content: str) -> None:
    """Write *content* to *path* on a worker thread."""
    await asyncio.to_thread(_write_file, path, content)
