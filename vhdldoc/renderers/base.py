"""Base renderer class and registry.

A renderer turns the catalog, or a single symbol, into text for the
user.  :func:`catalog_outline` flattens the catalog into plain lists so
that every output format walks the same structure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..library import LibraryContainer
from ..model import Package, Symbol
from ..registry import Registry

# Registry for renderer implementations
renderer_registry = Registry("renderer")


@dataclass
class UnitOutline:
    """A library unit and, for packages, its member names per category."""

    symbol: Symbol
    members: List[Tuple[str, List[str]]] = field(default_factory=list)


@dataclass
class LibraryOutline:
    name: str
    units: List[UnitOutline] = field(default_factory=list)


def catalog_outline(libraries: LibraryContainer) -> List[LibraryOutline]:
    """Return libraries, units and member names in display order.

    Libraries and units are sorted by name.  Empty member categories are
    omitted.
    """
    outline: List[LibraryOutline] = []
    for lib in libraries:
        lib_outline = LibraryOutline(lib.name)
        for unit in lib.symbols():
            unit_outline = UnitOutline(unit)
            if isinstance(unit, Package):
                categories = [
                    ("constant", unit.constant_names()),
                    ("function", unit.function_names()),
                    ("procedure", unit.procedure_names()),
                    ("type", unit.type_names()),
                    ("subtype", unit.subtype_names()),
                ]
                unit_outline.members = [(label, names) for label, names in categories if names]
            lib_outline.units.append(unit_outline)
        outline.append(lib_outline)
    return outline


class CatalogRenderer(ABC):
    """Abstract base class for catalog output formats."""

    @abstractmethod
    def render_catalog(self, libraries: LibraryContainer) -> str:
        """Render an overview of every library, unit and member.

        Args:
            libraries: The scanned catalog.

        Returns:
            The formatted overview.
        """
        raise NotImplementedError

    @abstractmethod
    def render_symbol(self, symbol: Symbol, source: Optional[bytes] = None) -> str:
        """Render the documentation and code of one symbol.

        Args:
            symbol: Symbol to show.
            source: Contents of ``symbol.filepath``; read when omitted.

        Returns:
            The formatted symbol.
        """
        raise NotImplementedError
