"""Character sets and the active-character table.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from ganchos.parsing.charsets import PUNCTUATION

    if char in PUNCTUATION:  # O(1) lookup
        ...
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType

from ganchos.flags import Extension

# ASCII punctuation, used by the intra-word emphasis check
PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# Characters a backslash can escape in inline text
ESCAPE_CHARS: frozenset[str] = frozenset("\\`*_{}[]()#+-.!:|&<>~")

# Inline whitespace (what "leading spaces" means for block recognizers)
SPACE_TAB: frozenset[str] = frozenset(" \t")

HRULE_CHARS: frozenset[str] = frozenset("*-_")

FENCE_CHARS: frozenset[str] = frozenset("`~")

UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("*+-")

DIGITS: frozenset[str] = frozenset("0123456789")

# Characters that may start a bare URL (http, https, ftp, mailto)
AUTOLINK_STARTS: frozenset[str] = frozenset("hHfFmM")


class ActiveChar(IntEnum):
    """Inline handler selected by an active character."""

    NONE = 0
    EMPHASIS = 1
    CODESPAN = 2
    LINEBREAK = 3
    LINK = 4
    ANGLE = 5
    ESCAPE = 6
    ENTITY = 7
    AUTOLINK = 8


def build_active_chars(hooks: frozenset[str], extensions: Extension) -> Mapping[str, ActiveChar]:
    """Build the per-parse active-character table.

    Args:
        hooks: Hook names the renderer implements
        extensions: Enabled extensions

    Returns:
        Read-only mapping from trigger character to handler kind.
        Characters missing from the mapping are plain text.

    """
    table: dict[str, ActiveChar] = {}

    if hooks & {"emphasis", "double_emphasis", "triple_emphasis"}:
        table["*"] = ActiveChar.EMPHASIS
        table["_"] = ActiveChar.EMPHASIS
    if extensions & Extension.STRIKETHROUGH and (table or "strikethrough" in hooks):
        table["~"] = ActiveChar.EMPHASIS
    if "codespan" in hooks:
        table["`"] = ActiveChar.CODESPAN
    if "linebreak" in hooks:
        table["\n"] = ActiveChar.LINEBREAK
    if hooks & {"image", "link"}:
        table["["] = ActiveChar.LINK
    table["<"] = ActiveChar.ANGLE
    table["\\"] = ActiveChar.ESCAPE
    table["&"] = ActiveChar.ENTITY

    if extensions & Extension.AUTOLINK:
        for char in AUTOLINK_STARTS:
            table[char] = ActiveChar.AUTOLINK

    return MappingProxyType(table)
