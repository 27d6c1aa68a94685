"""Plain text renderer for terminal output."""

from __future__ import annotations

from typing import List, Optional

from ..highlight import bold_keywords
from ..library import LibraryContainer
from ..model import Symbol
from .base import CatalogRenderer, catalog_outline, renderer_registry


@renderer_registry.register("text")
class TextRenderer(CatalogRenderer):
    """Render the catalog as an indented tree and symbols as source text.

    With ``bold`` set, VHDL keywords in code are emphasised with ANSI
    escapes.  Documentation comments are printed as written.
    """

    def __init__(self, bold: bool = True, indent: int = 2) -> None:
        self.bold = bold
        self.indent = " " * indent

    def render_catalog(self, libraries: LibraryContainer) -> str:
        lines: List[str] = []
        for lib in catalog_outline(libraries):
            lines.append(f"library {lib.name}")
            for unit in lib.units:
                lines.append(f"{self.indent}{unit.symbol.kind.value} {unit.symbol.name}")
                for label, names in unit.members:
                    for name in names:
                        lines.append(f"{self.indent * 2}{label} {name}")
        return "\n".join(lines)

    def render_symbol(self, symbol: Symbol, source: Optional[bytes] = None) -> str:
        doc, code = symbol.doc_code(source)
        if self.bold:
            code = bold_keywords(code)
        return f"{doc}{code}".rstrip("\n")
