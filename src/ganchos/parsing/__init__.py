"""Parsing subsystem for Ganchos Markdown parser.

Provides mixin classes for modular parsing functionality:
- `InlineParsingMixin`: Inline content (emphasis, links, code spans)
- `BlockParsingMixin`: Block-level content (paragraphs, lists, code blocks)

plus the first-pass reference scanner and the shared nesting guard.

Architecture:
The parser uses a mixin-based design for separation of concerns.
Each mixin handles one aspect of the Markdown grammar and reads its
per-parse state from attributes set up by ``ganchos.parser.Parser``.

Example:
    >>> from ganchos.parsing import InlineParsingMixin, BlockParsingMixin
    >>> class Parser(InlineParsingMixin, BlockParsingMixin):
    ...     pass

"""

from __future__ import annotations

from ganchos.parsing.blocks import BlockParsingMixin
from ganchos.parsing.inline import InlineParsingMixin
from ganchos.parsing.nesting import NestingGuard
from ganchos.parsing.references import LinkRef, ReferenceTable, scan_references

__all__ = [
    "BlockParsingMixin",
    "InlineParsingMixin",
    "LinkRef",
    "NestingGuard",
    "ReferenceTable",
    "scan_references",
]
