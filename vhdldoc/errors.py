"""Exceptions raised while building the symbol catalog.

Every error is fatal to the scan of the file it concerns.  The
orchestrator records it against that file and lets the remaining files
finish; nothing is retried and partially scanned symbols are dropped.
"""

from __future__ import annotations

from typing import Optional


class ScanError(Exception):
    """Base class for all scanning failures."""

    def __init__(self, message: str, filepath: Optional[str] = None) -> None:
        super().__init__(message)
        self.filepath = filepath

    def __str__(self) -> str:
        message = super().__str__()
        if self.filepath:
            return f"{self.filepath}: {message}"
        return message


class SourceReadError(ScanError):
    """The source file could not be read."""


class UnterminatedDeclarationError(ScanError):
    """Input ended before the declaration's closing line was found."""

    def __init__(self, kind: str, name: str, line: int, filepath: Optional[str] = None) -> None:
        super().__init__(f"{kind} '{name}' declared at line {line}: end of declaration not found", filepath)
        self.kind = kind
        self.name = name
        self.line = line


class DuplicateSymbolError(ScanError):
    """Two symbols with the same name and line were added to one container."""

    def __init__(self, name: str, line: int, scope: str, filepath: Optional[str] = None) -> None:
        super().__init__(f"'{name}' at line {line} already declared in '{scope}'", filepath)
        self.name = name
        self.line = line
        self.scope = scope


class ScanTaskError(ScanError):
    """A scan task failed with an error the scanner does not report itself."""
