"""Scan configuration.

Deciding which library a file belongs to is not the scanner's job.
The assignment comes from outside, usually the command line, and is
trusted as given.  Files without an assignment go to ``work``, the
library VHDL tools compile into by default.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

DEFAULT_LIBRARY = "work"


def _normalize(path: str) -> str:
    return os.path.normpath(path)


@dataclass
class DocConfig:
    """Options controlling a catalog build.

    Attributes:
        default_library: Library for files without an explicit assignment.
        libraries: Mapping of file path to library name.
        workers: Number of scan threads.  ``None`` runs one per file.
    """

    default_library: str = DEFAULT_LIBRARY
    libraries: Dict[str, str] = field(default_factory=dict)
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.default_library:
            raise ValueError("default library name must not be empty")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")
        # VHDL library names are case-insensitive.
        self.default_library = self.default_library.lower()
        self.libraries = {_normalize(path): lib.lower() for path, lib in self.libraries.items()}

    def assign(self, library: str, paths: Iterable[str]) -> None:
        for path in paths:
            self.libraries[_normalize(path)] = library.lower()

    def library_for(self, path: str) -> str:
        return self.libraries.get(_normalize(path), self.default_library)

    def files(self) -> List[str]:
        """Return the explicitly assigned files."""
        return list(self.libraries)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "DocConfig":
        """Build a configuration from parsed ``doc`` command options.

        ``args.lib`` holds ``(library, file)`` pairs from repeated
        ``--lib LIB FILE`` options.
        """
        pairs: List[Tuple[str, str]] = [tuple(p) for p in (getattr(args, "lib", None) or [])]
        config = cls(
            default_library=getattr(args, "default_lib", None) or DEFAULT_LIBRARY,
            workers=getattr(args, "workers", None),
        )
        for library, path in pairs:
            config.assign(library, [path])
        return config
