"""VHDL declaration scanner.

The scanner does not parse VHDL.  It walks a file line by line and
recognises the first line of the declarations worth documenting, then
consumes lines until a construct specific closing line is found.  The
logic is an explicit state machine:

* ``TOP_LEVEL`` and ``IN_PACKAGE`` classify lines.  Each has an ordered
  transition table of line patterns; the first matching pattern selects
  the next state.
* Every other state consumes one declaration.  It owns a terminator
  predicate that decides whether the current line closes the
  declaration.

Example usage::

    from vhdldoc import scan_file

    result = scan_file("rtl/uart_pkg.vhd", library="uart")
    for symbol in result.symbols:
        print(symbol.qualified_name, symbol.code_start, symbol.code_end)

If input ends before a declaration is closed an
:class:`vhdldoc.errors.UnterminatedDeclarationError` is raised and the
whole file is abandoned; the scanner never tries to resynchronise.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from .config import DEFAULT_LIBRARY
from .context import ScanContext
from .errors import UnterminatedDeclarationError
from .model import (
    Constant,
    Entity,
    Function,
    Package,
    Procedure,
    Subtype,
    Symbol,
    Type,
    read_source,
)

logger = logging.getLogger(__name__)


class State(enum.Enum):
    """Scanner states.  The value names the construct being consumed."""

    TOP_LEVEL = "top level"
    IN_ENTITY = "entity"
    IN_PACKAGE = "package"
    IN_CONSTANT = "constant"
    IN_FUNCTION = "function"
    IN_PROCEDURE = "procedure"
    IN_ARRAY_TYPE = "array type"
    IN_ENUM_TYPE = "enum type"
    IN_RECORD_TYPE = "record type"
    IN_SUBTYPE = "subtype"


# Opening lines.  All patterns run against the lower-cased line and
# capture the declared name(s) in group 1.  Package and subprogram
# instantiations (`is new`) declare nothing to document.
ENTITY_DECLARATION = re.compile(r"^\s*entity\s+(\w+)\s+is\b")
PACKAGE_DECLARATION = re.compile(r"^\s*package\s+(\w+)\s+is\b(?!\s+new\b)")
CONSTANT_DECLARATION = re.compile(r"^\s*constant\s+(\w+(?:\s*,\s*\w+)*)")
ARRAY_TYPE_DECLARATION = re.compile(r"^\s*type\s+(\w+)\s+is\s+array\b")
ENUM_TYPE_DECLARATION = re.compile(r"^\s*type\s+(\w+)\s+is\s*\(")
RECORD_TYPE_DECLARATION = re.compile(r"^\s*type\s+(\w+)\s+is\s+record\b")
FUNCTION_DECLARATION = re.compile(r'^\s*(?:(?:pure|impure)\s+)?function\s+(\w+\b|"[^"]+")(?!\s+is\s+new\b)')
PROCEDURE_DECLARATION = re.compile(r"^\s*procedure\s+(\w+)\b(?!\s+is\s+new\b)")
SUBTYPE_DECLARATION = re.compile(r"^\s*subtype\s+(\w+)\s+is\b")

# Closing lines.
END = re.compile(r"^\s*end\b")
END_PACKAGE = re.compile(r"^\s*end\s+package\b")
END_RECORD = re.compile(r"^\s*end\s+record\b")
END_SEMICOLON = re.compile(r"^\s*end\s*;")
ENDS_WITH_SEMICOLON = re.compile(r";\s*$")
RETURN_TYPE = re.compile(r"\breturn\s+[\w.]+\s*;")

TRANSITIONS: Dict[State, Tuple[Tuple[Pattern[str], State], ...]] = {
    State.TOP_LEVEL: (
        (ENTITY_DECLARATION, State.IN_ENTITY),
        (PACKAGE_DECLARATION, State.IN_PACKAGE),
    ),
    State.IN_PACKAGE: (
        (CONSTANT_DECLARATION, State.IN_CONSTANT),
        (ARRAY_TYPE_DECLARATION, State.IN_ARRAY_TYPE),
        (ENUM_TYPE_DECLARATION, State.IN_ENUM_TYPE),
        (RECORD_TYPE_DECLARATION, State.IN_RECORD_TYPE),
        (FUNCTION_DECLARATION, State.IN_FUNCTION),
        (PROCEDURE_DECLARATION, State.IN_PROCEDURE),
        (SUBTYPE_DECLARATION, State.IN_SUBTYPE),
    ),
}


def classify(state: State, line: str) -> Optional[Tuple[State, List[str]]]:
    """Match a line against the transition table of ``state``.

    Returns:
        The target state and the declared names, or ``None`` when the
        line opens nothing.
    """
    for pattern, target in TRANSITIONS[state]:
        m = pattern.match(line)
        if m:
            names = [name.strip() for name in m.group(1).split(",")]
            return target, names
    return None


# ----------------------------------------------------------------------
# Terminators


@dataclass
class _Progress:
    """Per-declaration scratch state handed to terminators."""

    name: str
    depth: int = 0


def _entity_closed(ctx: ScanContext, progress: _Progress) -> bool:
    return bool(END.match(ctx.line))


def _names_self(ctx: ScanContext, name: str) -> bool:
    return re.search(rf"(?<![\w\"]){re.escape(name)}(?![\w\"])", ctx.code) is not None


def _package_closed(ctx: ScanContext, progress: _Progress) -> bool:
    if not END.match(ctx.line):
        return False
    return bool(END_PACKAGE.match(ctx.line)) or _names_self(ctx, progress.name)


def _semicolon_closed(ctx: ScanContext, progress: _Progress) -> bool:
    return bool(ENDS_WITH_SEMICOLON.search(ctx.code))


def _function_closed(ctx: ScanContext, progress: _Progress) -> bool:
    return bool(RETURN_TYPE.search(ctx.code))


def _procedure_closed(ctx: ScanContext, progress: _Progress) -> bool:
    # The parameter list holds semicolons of its own; only one outside
    # every parenthesis ends the declaration.
    for ch in ctx.code:
        if ch == "(":
            progress.depth += 1
        elif ch == ")":
            progress.depth = max(progress.depth - 1, 0)
        elif ch == ";" and progress.depth == 0:
            return True
    return False


def _record_closed(ctx: ScanContext, progress: _Progress) -> bool:
    if not END.match(ctx.line):
        return False
    return (
        bool(END_RECORD.match(ctx.line))
        or bool(END_SEMICOLON.match(ctx.line))
        or _names_self(ctx, progress.name)
    )


Terminator = Callable[[ScanContext, _Progress], bool]

TERMINATORS: Dict[State, Terminator] = {
    State.IN_ENTITY: _entity_closed,
    State.IN_PACKAGE: _package_closed,
    State.IN_CONSTANT: _semicolon_closed,
    State.IN_FUNCTION: _function_closed,
    State.IN_PROCEDURE: _procedure_closed,
    State.IN_ARRAY_TYPE: _semicolon_closed,
    State.IN_ENUM_TYPE: _semicolon_closed,
    State.IN_RECORD_TYPE: _record_closed,
    State.IN_SUBTYPE: _semicolon_closed,
}

# States whose opening line may also be the closing line.
CLOSES_ON_OPENING_LINE = frozenset({
    State.IN_CONSTANT,
    State.IN_FUNCTION,
    State.IN_PROCEDURE,
    State.IN_ARRAY_TYPE,
    State.IN_ENUM_TYPE,
    State.IN_RECORD_TYPE,
    State.IN_SUBTYPE,
})

# Subprograms are summarised with their whole parameter list.
FULL_SUMMARY_STATES = frozenset({State.IN_FUNCTION, State.IN_PROCEDURE})


def _join_lines(parts: List[str]) -> str:
    """Join declaration lines into one, tight against parentheses."""
    text = " ".join(part for part in parts if part)
    text = re.sub(r"\(\s+", "(", text)
    return re.sub(r"\s+\)", ")", text)

SYMBOL_FACTORIES: Dict[State, Callable[..., Symbol]] = {
    State.IN_ENTITY: Entity,
    State.IN_PACKAGE: Package,
    State.IN_CONSTANT: Constant,
    State.IN_FUNCTION: Function,
    State.IN_PROCEDURE: Procedure,
    State.IN_ARRAY_TYPE: partial(Type, form="array"),
    State.IN_ENUM_TYPE: partial(Type, form="enum"),
    State.IN_RECORD_TYPE: partial(Type, form="record"),
    State.IN_SUBTYPE: Subtype,
}


# ----------------------------------------------------------------------
# Scanner


@dataclass
class FileScan:
    """Top-level symbols extracted from one file."""

    filepath: str
    library: str
    symbols: List[Symbol] = field(default_factory=list)


class Scanner:
    """Extract documentable declarations from one VHDL file.

    Args:
        filepath: Path recorded in every symbol.  Only used for error
            messages and for reading the text back later.
        library: Library the file's entities and packages belong to.
            Library names are case-insensitive and stored lower-cased.
    """

    def __init__(self, filepath: str, library: str = DEFAULT_LIBRARY) -> None:
        self.filepath = filepath
        self.library = library.lower()

    def scan(self, data: bytes) -> FileScan:
        ctx = ScanContext(data)
        result = FileScan(self.filepath, self.library)
        while ctx.advance():
            match = classify(State.TOP_LEVEL, ctx.line)
            if match is None:
                continue
            state, names = match
            if state is State.IN_PACKAGE:
                result.symbols.append(self._scan_package(ctx, names[0]))
            else:
                result.symbols.extend(self._scan_declaration(ctx, state, names, self.library))
        logger.debug("%s: %d top-level symbol(s) in library '%s'",
                     self.filepath, len(result.symbols), self.library)
        return result

    def _open(self, ctx: ScanContext, state: State, names: List[str], scope: str) -> List[Symbol]:
        """Create the symbols declared by the current line."""
        doc_start, doc_end = ctx.doc_range()
        factory = SYMBOL_FACTORIES[state]
        signature = ctx.signature()
        return [
            factory(
                filepath=self.filepath,
                name=name,
                line=ctx.line_number,
                scope=scope,
                doc_start=doc_start,
                doc_end=doc_end,
                code_start=ctx.start,
                code_end=ctx.end,
                signature=signature,
            )
            for name in names
        ]

    def _scan_declaration(self, ctx: ScanContext, state: State, names: List[str], scope: str) -> List[Symbol]:
        """Consume one declaration and return its symbols.

        A multi-name constant yields one symbol per name, all sharing
        the same ranges.
        """
        symbols = self._open(ctx, state, names, scope)
        progress = _Progress(names[0])
        terminated = TERMINATORS[state]

        parts = [ctx.signature()]
        closed = state in CLOSES_ON_OPENING_LINE and terminated(ctx, progress)
        while not closed and ctx.advance():
            parts.append(ctx.signature())
            closed = terminated(ctx, progress)
        if not closed:
            raise UnterminatedDeclarationError(state.value, names[0], symbols[0].line, self.filepath)

        summary = _join_lines(parts) if state in FULL_SUMMARY_STATES else ""
        for symbol in symbols:
            symbol.code_end = ctx.end
            symbol.summary = summary
            logger.debug("%s:%d: %s %s", self.filepath, symbol.line, state.value, symbol.qualified_name)
        return symbols

    def _scan_package(self, ctx: ScanContext, name: str) -> Package:
        """Consume a package declaration, collecting its header symbols."""
        package = self._open(ctx, State.IN_PACKAGE, [name], self.library)[0]
        progress = _Progress(name)

        while ctx.advance():
            match = classify(State.IN_PACKAGE, ctx.line)
            if match is not None:
                state, names = match
                for symbol in self._scan_declaration(ctx, state, names, package.qualified_name):
                    package.add_symbol(symbol)
            elif TERMINATORS[State.IN_PACKAGE](ctx, progress):
                package.code_end = ctx.end
                logger.debug("%s:%d: package %s with %d symbol(s)",
                             self.filepath, package.line, package.qualified_name, len(package))
                return package

        raise UnterminatedDeclarationError(State.IN_PACKAGE.value, name, package.line, self.filepath)


def scan_text(text: str, filepath: str = "<string>", library: str = DEFAULT_LIBRARY) -> FileScan:
    """Scan VHDL source held in a string (encoded as UTF-8)."""
    return Scanner(filepath, library).scan(text.encode("utf-8"))


def scan_file(filepath: str, library: str = DEFAULT_LIBRARY) -> FileScan:
    """Read and scan one VHDL file.

    Raises:
        SourceReadError: The file cannot be read.
        UnterminatedDeclarationError: A declaration is never closed.
        DuplicateSymbolError: A package declares the same name twice
            on one line.
    """
    data = read_source(filepath)
    return Scanner(filepath, library).scan(data)
