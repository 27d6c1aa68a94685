"""HTML renderer.

Renders the catalog as a static page with one section per library, and
single symbols as a documentation block followed by the code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from ..library import LibraryContainer
from ..model import Symbol
from .base import CatalogRenderer, catalog_outline, renderer_registry

# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"


def _strip_comment_markers(doc: str) -> str:
    """Turn a ``--`` comment block into plain text lines."""
    lines = []
    for line in doc.splitlines():
        text = line.strip()
        if text.startswith("--"):
            text = text[2:]
            if text.startswith(" "):
                text = text[1:]
        lines.append(text)
    return "\n".join(lines)


@renderer_registry.register("html")
class HtmlRenderer(CatalogRenderer):
    """Render catalog pages with Jinja2 templates."""

    def __init__(self, title: str = "VHDL symbol catalog") -> None:
        self.title = title
        self._env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_catalog(self, libraries: LibraryContainer) -> str:
        template = self._env.get_template("catalog.jinja2")
        return template.render(title=self.title, libraries=catalog_outline(libraries))

    def render_symbol(self, symbol: Symbol, source: Optional[bytes] = None) -> str:
        doc, code = symbol.doc_code(source)
        template = self._env.get_template("symbol.jinja2")
        return template.render(
            title=symbol.qualified_name,
            symbol=symbol,
            doc=_strip_comment_markers(doc),
            code=code.rstrip("\n"),
        )
