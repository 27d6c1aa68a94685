"""Top level package for the VHDL documentation catalog.

This package scans VHDL source files for the declarations worth
documenting and records, for each one, the byte ranges of its code and
of the comment block written just above it.  The result is a symbol
catalog grouped by library.

Key concepts:

* **Model classes** represent entities, packages and package members.
  See :mod:`vhdldoc.model`.
* **Scanner** is a line-oriented state machine.  See
  :mod:`vhdldoc.scanner` and :mod:`vhdldoc.context`.
* **Library container** is the catalog root.  See :mod:`vhdldoc.library`.
* **Orchestrator** scans many files concurrently.  See
  :mod:`vhdldoc.orchestrator`.
* **Renderers** provide pluggable output formats (text, HTML).
  See :mod:`vhdldoc.renderers`.
"""

from .model import (
    SymbolKind,
    SymbolID,
    Symbol,
    Entity,
    Package,
    Constant,
    Function,
    Procedure,
    Type,
    Subtype,
    Library,
)

from .errors import ScanError, SourceReadError, UnterminatedDeclarationError, DuplicateSymbolError, ScanTaskError
from .config import DEFAULT_LIBRARY, DocConfig
from .scanner import FileScan, Scanner, scan_file, scan_text
from .library import LibraryContainer
from .orchestrator import ScanReport, scan_files, scan_files_sequential
from .registry import Registry
from .renderers import CatalogRenderer, TextRenderer, HtmlRenderer, renderer_registry

__all__ = [
    "SymbolKind",
    "SymbolID",
    "Symbol",
    "Entity",
    "Package",
    "Constant",
    "Function",
    "Procedure",
    "Type",
    "Subtype",
    "Library",
    "ScanError",
    "ScanTaskError",
    "SourceReadError",
    "UnterminatedDeclarationError",
    "DuplicateSymbolError",
    "DEFAULT_LIBRARY",
    "DocConfig",
    "FileScan",
    "Scanner",
    "scan_file",
    "scan_text",
    "LibraryContainer",
    "ScanReport",
    "scan_files",
    "scan_files_sequential",
    "Registry",
    "CatalogRenderer",
    "TextRenderer",
    "HtmlRenderer",
    "renderer_registry",
]
