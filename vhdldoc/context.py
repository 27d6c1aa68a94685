"""Line cursor used by the scanner.

:class:`ScanContext` walks the lines of one file and keeps the byte
offsets of the current line together with the run of comment lines
seen just before it.  Blank and comment lines are consumed internally;
callers only ever see code lines.

Scanning stops at the first package body or architecture.  Those
regions implement what the package and entity declarations already
describe, so nothing after them is documented.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

BLANK_LINE = re.compile(r"^\s*$")
COMMENT_LINE = re.compile(r"^\s*--")
PACKAGE_BODY = re.compile(r"^\s*package\s+body\s+\w+\s+is\b")
ARCHITECTURE = re.compile(r"^\s*architecture\s+\w+\s+of\s+\w+\s+is\b")


def strip_comment(line: str) -> str:
    """Remove a trailing ``--`` comment from a line."""
    return line.split("--", 1)[0]


class ScanContext:
    """Cursor over the lines of one source file.

    Attributes:
        line: Current line, lower-cased, without its line terminator.
        text: Current line as written.
        code: ``line`` without its trailing comment.
        line_number: 1-based number of the current line.
        start: Byte offset of the first byte of the current line.
        end: Byte offset just past the current line's terminator.
        doc_active: True while consecutive comment lines are being read.
        doc_start: Start offset of the current comment run.
        doc_end: End offset of the current comment run.
    """

    def __init__(self, data: bytes, encoding: str = "utf-8") -> None:
        # keepends so that offsets count \n, \r\n and \r terminators exactly
        self._lines: List[bytes] = data.splitlines(keepends=True)
        self._index = 0
        self._encoding = encoding

        self.line = ""
        self.text = ""
        self.code = ""
        self.line_number = 0
        self.start = 0
        self.end = 0

        self.doc_active = False
        self.doc_start = 0
        self.doc_end = 0
        self._line_doc: Optional[Tuple[int, int]] = None

    def advance(self) -> bool:
        """Move to the next code line.

        Returns:
            False at end of input, or when a package body or an
            architecture begins.  ``line`` must not be used afterwards.
        """
        while self._index < len(self._lines):
            raw = self._lines[self._index]
            self._index += 1

            self.line_number += 1
            self.start = self.end
            self.end += len(raw)

            text = raw.decode(self._encoding, errors="replace").rstrip("\r\n")
            line = text.lower()

            if BLANK_LINE.match(line):
                self.doc_active = False
                continue
            if COMMENT_LINE.match(line):
                if not self.doc_active:
                    self.doc_active = True
                    self.doc_start = self.start
                self.doc_end = self.end
                continue
            if PACKAGE_BODY.match(line) or ARCHITECTURE.match(line):
                return False

            self.text = text
            self.line = line
            self.code = strip_comment(line)
            # A comment run documents the code line right after it only.
            self._line_doc = (self.doc_start, self.doc_end) if self.doc_active else None
            self.doc_active = False
            return True
        return False

    def doc_range(self) -> Tuple[int, int]:
        """Return the documentation range of the current line.

        The range is empty, positioned at :attr:`start`, when no comment
        block immediately precedes the line.
        """
        if self._line_doc is None:
            return (self.start, self.start)
        return self._line_doc

    def signature(self) -> str:
        """Return the current line as written, comment removed, whitespace collapsed."""
        return " ".join(strip_comment(self.text).split())
