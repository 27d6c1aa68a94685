"""Data model for the VHDL symbol catalog.

Every documentable declaration found by the scanner is a
:class:`Symbol`.  A symbol does not hold its text; it records the file
it came from and two byte ranges into that file:

* ``[doc_start, doc_end)`` covers the comment block placed directly
  above the declaration.  An empty range sits at ``code_start``.
* ``[code_start, code_end)`` covers the declaration itself, from its
  first line up to and including its terminating line.

The variants form a closed set tagged by :class:`SymbolKind`.  Top
level units (:class:`Entity`, :class:`Package`) live in a
:class:`Library`; everything else lives in a :class:`Package`.

Symbols are identified by :class:`SymbolID`, the pair of name and
declaration line, so overloaded subprograms and same-named declarations
at different sites can coexist in one container.
"""

from __future__ import annotations

import enum
from abc import ABC
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, List, NamedTuple, Optional, Tuple

from .errors import DuplicateSymbolError, SourceReadError


class SymbolKind(enum.Enum):
    ENTITY = "entity"
    PACKAGE = "package"
    CONSTANT = "constant"
    FUNCTION = "function"
    PROCEDURE = "procedure"
    TYPE = "type"
    SUBTYPE = "subtype"


class SymbolID(NamedTuple):
    """Container key of a symbol."""

    name: str
    line: int


def read_source(filepath: str) -> bytes:
    """Read a whole source file as bytes."""
    try:
        with open(filepath, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise SourceReadError(f"cannot read file: {exc.strerror or exc}", filepath) from exc


@dataclass
class Symbol(ABC):
    """Capabilities shared by every declaration in the catalog.

    ``scope`` is the qualified name of the enclosing library or package
    and ``signature`` the declaration's opening line as written, with
    any trailing comment removed and whitespace collapsed.  Subprograms
    also carry ``summary``, the whole declaration joined onto one line.
    """

    kind: ClassVar[SymbolKind]

    filepath: str
    name: str
    line: int
    scope: str
    doc_start: int
    doc_end: int
    code_start: int
    code_end: int
    signature: str = ""
    summary: str = ""

    @property
    def key(self) -> SymbolID:
        return SymbolID(self.name, self.line)

    @property
    def qualified_name(self) -> str:
        return f"{self.scope}.{self.name}" if self.scope else self.name

    @property
    def has_doc(self) -> bool:
        return self.doc_end > self.doc_start

    def doc(self, source: Optional[bytes] = None) -> str:
        """Return the documentation comment text.

        Args:
            source: Contents of :attr:`filepath`.  The file is read when
                omitted.
        """
        if source is None:
            source = read_source(self.filepath)
        return source[self.doc_start:self.doc_end].decode("utf-8", errors="replace")

    def code(self, source: Optional[bytes] = None) -> str:
        """Return the declaration text."""
        if source is None:
            source = read_source(self.filepath)
        return source[self.code_start:self.code_end].decode("utf-8", errors="replace")

    def doc_code(self, source: Optional[bytes] = None) -> Tuple[str, str]:
        if source is None:
            source = read_source(self.filepath)
        return self.doc(source), self.code(source)

    def one_line_summary(self) -> str:
        return self.summary or self.signature or f"{self.kind.value} {self.name}"

    def __str__(self) -> str:
        return f"{self.kind.value} {self.qualified_name}"


@dataclass
class Entity(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.ENTITY


@dataclass
class Constant(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.CONSTANT


@dataclass
class Function(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.FUNCTION


@dataclass
class Procedure(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.PROCEDURE


@dataclass
class Type(Symbol):
    """A type declaration; ``form`` is ``array``, ``enum`` or ``record``."""

    kind: ClassVar[SymbolKind] = SymbolKind.TYPE

    form: str = ""


@dataclass
class Subtype(Symbol):
    kind: ClassVar[SymbolKind] = SymbolKind.SUBTYPE


def _sorted_by_line(symbols: Iterable[Symbol]) -> List[Symbol]:
    return sorted(symbols, key=lambda s: (s.line, s.filepath))


@dataclass
class Package(Symbol):
    """A package declaration and the symbols declared in its header.

    Child symbols are stored per category under their :class:`SymbolID`.
    Adding a symbol whose key is already present raises
    :class:`DuplicateSymbolError`; nothing is ever overwritten.
    """

    kind: ClassVar[SymbolKind] = SymbolKind.PACKAGE

    constants: Dict[SymbolID, Symbol] = field(default_factory=dict)
    functions: Dict[SymbolID, Symbol] = field(default_factory=dict)
    procedures: Dict[SymbolID, Symbol] = field(default_factory=dict)
    types: Dict[SymbolID, Symbol] = field(default_factory=dict)
    subtypes: Dict[SymbolID, Symbol] = field(default_factory=dict)

    def _map_for(self, kind: SymbolKind) -> Dict[SymbolID, Symbol]:
        if kind is SymbolKind.CONSTANT:
            return self.constants
        if kind is SymbolKind.FUNCTION:
            return self.functions
        if kind is SymbolKind.PROCEDURE:
            return self.procedures
        if kind is SymbolKind.TYPE:
            return self.types
        if kind is SymbolKind.SUBTYPE:
            return self.subtypes
        raise TypeError(f"a {kind.value} cannot be declared inside package '{self.name}'")

    def _maps(self) -> Tuple[Dict[SymbolID, Symbol], ...]:
        return (self.constants, self.functions, self.procedures, self.types, self.subtypes)

    def add_symbol(self, symbol: Symbol) -> None:
        children = self._map_for(symbol.kind)
        if symbol.key in children:
            raise DuplicateSymbolError(symbol.name, symbol.line, self.qualified_name, symbol.filepath)
        children[symbol.key] = symbol

    def get_symbol(self, name: str) -> List[Symbol]:
        """Return every child named ``name``, whatever its kind, by line."""
        found = [s for children in self._maps() for key, s in children.items() if key.name == name]
        return _sorted_by_line(found)

    def get_functions(self, name: str) -> List[Symbol]:
        return _sorted_by_line(s for key, s in self.functions.items() if key.name == name)

    def get_procedures(self, name: str) -> List[Symbol]:
        return _sorted_by_line(s for key, s in self.procedures.items() if key.name == name)

    # ------------------------------------------------------------------
    # Enumeration

    def constant_names(self) -> List[str]:
        return sorted(key.name for key in self.constants)

    def function_names(self) -> List[str]:
        # Overloads share one entry.
        return sorted({key.name for key in self.functions})

    def procedure_names(self) -> List[str]:
        return sorted({key.name for key in self.procedures})

    def type_names(self) -> List[str]:
        return sorted(key.name for key in self.types)

    def subtype_names(self) -> List[str]:
        return sorted(key.name for key in self.subtypes)

    def inner_names(self) -> List[str]:
        return sorted(key.name for children in self._maps() for key in children)

    def __len__(self) -> int:
        return sum(len(children) for children in self._maps())

    # ------------------------------------------------------------------
    # Rendering support

    def code_summary(self) -> str:
        """Summarise the package header, one line per declaration.

        Categories come in the order constants, functions, procedures,
        types, subtypes.  Consecutive non-empty categories are separated
        by a blank line.
        """
        blocks: List[List[str]] = [
            self._summaries(self.constants),
            [s.one_line_summary() for name in self.function_names() for s in self.get_functions(name)],
            [s.one_line_summary() for name in self.procedure_names() for s in self.get_procedures(name)],
            self._summaries(self.types),
            self._summaries(self.subtypes),
        ]
        return "\n".join("".join(line + "\n" for line in block) for block in blocks if block)

    @staticmethod
    def _summaries(children: Dict[SymbolID, Symbol]) -> List[str]:
        return [children[key].one_line_summary() for key in sorted(children)]

    def code(self, source: Optional[bytes] = None) -> str:
        return self.code_summary()

    def doc_code(self, source: Optional[bytes] = None) -> Tuple[str, str]:
        return self.doc(source), self.code_summary()


@dataclass
class Library:
    """A named group of entities and packages."""

    name: str
    entities: Dict[SymbolID, Symbol] = field(default_factory=dict)
    packages: Dict[SymbolID, Symbol] = field(default_factory=dict)

    def add_symbol(self, symbol: Symbol) -> None:
        if symbol.kind is SymbolKind.ENTITY:
            units = self.entities
        elif symbol.kind is SymbolKind.PACKAGE:
            units = self.packages
        else:
            raise TypeError(f"a {symbol.kind.value} cannot be a library unit")
        if symbol.key in units:
            raise DuplicateSymbolError(symbol.name, symbol.line, self.name, symbol.filepath)
        units[symbol.key] = symbol

    def add_symbols(self, symbols: Iterable[Symbol]) -> None:
        """Add several units at once; on error none of them is added."""
        staged = Library(self.name, dict(self.entities), dict(self.packages))
        for symbol in symbols:
            staged.add_symbol(symbol)
        self.entities = staged.entities
        self.packages = staged.packages

    def get_symbol(self, name: str) -> List[Symbol]:
        found = [s for units in (self.entities, self.packages) for key, s in units.items() if key.name == name]
        return _sorted_by_line(found)

    def entity_names(self) -> List[str]:
        return sorted(key.name for key in self.entities)

    def package_names(self) -> List[str]:
        return sorted(key.name for key in self.packages)

    def symbols(self) -> List[Symbol]:
        """Return the library units ordered by name then line."""
        units = list(self.entities.values()) + list(self.packages.values())
        return sorted(units, key=lambda s: (s.name, s.line, s.kind.value, s.filepath))

    def __str__(self) -> str:
        return f"library {self.name}"
