"""Renderer implementations for the symbol catalog.

This package contains the output formats:
- text: indented tree and source text for terminals
- html: static pages rendered from Jinja2 templates

All renderers are automatically registered via decorators.
"""

from .base import CatalogRenderer, LibraryOutline, UnitOutline, catalog_outline, renderer_registry
from .text import TextRenderer
from .html import HtmlRenderer

__all__ = [
    "CatalogRenderer",
    "LibraryOutline",
    "UnitOutline",
    "catalog_outline",
    "renderer_registry",
    "TextRenderer",
    "HtmlRenderer",
]
