"""Terminal emphasis of VHDL keywords."""

from __future__ import annotations

import re

BOLD = "\033[1m"
RESET = "\033[0m"

VHDL_KEYWORDS = frozenset({
    "array", "assert",
    "begin", "boolean", "buffer",
    "constant",
    "downto",
    "end", "entity",
    "failure", "false", "function",
    "generic",
    "impure", "in", "inout", "integer", "is",
    "natural",
    "of", "others", "out",
    "package", "port", "positive", "procedure", "pure",
    "range", "record", "report", "return",
    "severity", "signed", "std_logic", "std_logic_vector", "string", "subtype",
    "time", "to", "true", "type",
    "unsigned",
})

_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def bold_keywords(text: str) -> str:
    """Wrap every VHDL keyword of ``text`` in ANSI bold escapes.

    Matching is case-insensitive; the keyword keeps its original case.
    Identifiers that merely contain a keyword (``end_of_frame``) are
    left alone.
    """
    def emphasize(m: "re.Match[str]") -> str:
        word = m.group(0)
        if word.lower() in VHDL_KEYWORDS:
            return f"{BOLD}{word}{RESET}"
        return word

    return _WORD.sub(emphasize, text)
