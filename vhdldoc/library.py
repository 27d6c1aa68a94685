"""Library container: the catalog root.

:class:`LibraryContainer` groups scanned entities and packages by
library.  It is filled once, after every file has been scanned, and is
read-only for the documentation consumers that follow.  Mutations are
still serialised behind a lock so that scan tasks may feed it directly.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .model import Library, Package, Symbol
from .scanner import FileScan


class LibraryContainer:
    """All libraries of one catalog build, keyed by name."""

    def __init__(self) -> None:
        self._libraries: Dict[str, Library] = {}
        self._lock = threading.Lock()

    def add(self, name: str) -> Library:
        """Return library ``name``, creating it on first reference."""
        with self._lock:
            return self._get_or_create(name)

    def add_symbol(self, library: str, symbol: Symbol) -> None:
        with self._lock:
            self._get_or_create(library).add_symbol(symbol)

    def merge(self, result: FileScan) -> None:
        """Insert the symbols of one scanned file, all or nothing."""
        with self._lock:
            self._get_or_create(result.library).add_symbols(result.symbols)

    def _get_or_create(self, name: str) -> Library:
        lib = self._libraries.get(name)
        if lib is None:
            lib = Library(name)
            self._libraries[name] = lib
        return lib

    # ------------------------------------------------------------------
    # Queries

    def get(self, name: str) -> Optional[Library]:
        return self._libraries.get(name)

    def library_names(self) -> List[str]:
        return sorted(self._libraries)

    def __contains__(self, name: object) -> bool:
        return name in self._libraries

    def __iter__(self) -> Iterator[Library]:
        for name in self.library_names():
            yield self._libraries[name]

    def __len__(self) -> int:
        return len(self._libraries)

    def resolve(self, path: str) -> List[Symbol]:
        """Look up symbols by dotted path.

        ``path`` is ``unit``, ``unit.member``, ``library.unit`` or
        ``library.unit.member``.  When the first component does not name
        a library, every library is searched.
        """
        parts = [p for p in path.lower().split(".") if p]
        if not parts:
            return []
        if parts[0] in self._libraries:
            libraries = [self._libraries[parts[0]]]
            parts = parts[1:]
        else:
            libraries = list(self)
        if not parts or len(parts) > 2:
            return []

        found: List[Symbol] = []
        for lib in libraries:
            for unit in lib.get_symbol(parts[0]):
                if len(parts) == 1:
                    found.append(unit)
                elif isinstance(unit, Package):
                    found.extend(unit.get_symbol(parts[1]))
        return found

    def identities(self) -> Set[Tuple[str, str, int]]:
        """Return ``(library, qualified name, line)`` for every symbol."""
        ids: Set[Tuple[str, str, int]] = set()
        for lib in self:
            for unit in lib.symbols():
                ids.add((lib.name, unit.qualified_name, unit.line))
                if isinstance(unit, Package):
                    for children in (unit.constants, unit.functions, unit.procedures,
                                     unit.types, unit.subtypes):
                        for child in children.values():
                            ids.add((lib.name, child.qualified_name, child.line))
        return ids
