"""Block parsing subsystem for Ganchos parser.

Provides mixins for parsing block-level Markdown content:
- Headings (ATX and setext)
- Code blocks (fenced and indented)
- Block quotes
- Lists (ordered and unordered, with nested sublists)
- Pipe tables
- Raw HTML blocks
- Horizontal rules and paragraphs

Architecture:
Block parsing is split into logical modules:
- core: Block dispatch and basic blocks
- html: Raw HTML block detection
- fence: Fenced code blocks
- table: Pipe tables
- list: Two-pass list parsing

"""

from __future__ import annotations

from ganchos.parsing.blocks.core import BlockParsingCoreMixin
from ganchos.parsing.blocks.fence import FencedCodeMixin
from ganchos.parsing.blocks.html import BLOCK_TAGS, HtmlBlockMixin
from ganchos.parsing.blocks.list import ListParsingMixin
from ganchos.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    HtmlBlockMixin,
    FencedCodeMixin,
    TableParsingMixin,
    ListParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _renderer: Renderer
        - _hooks: frozenset[str]
        - _extensions: Extension
        - _guard: NestingGuard

    Required Host Methods:
        - _parse_inline(ob, data) -> None
        - _render_inline(data) -> str

    """

    pass


__all__ = [
    "BLOCK_TAGS",
    "BlockParsingMixin",
    "BlockParsingCoreMixin",
    "FencedCodeMixin",
    "HtmlBlockMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
