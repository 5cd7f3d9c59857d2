"""Raw HTML block detection.

A raw HTML block opens with ``<tag`` for one of the known block tags and
runs to the matching ``</tag>`` at the end of a line followed by a blank
line (with ``LAX_HTML_BLOCKS`` the blank line is optional). HTML comments
and ``<hr>`` are recognized on their own, when followed by a blank line.
Tag names are matched case-sensitively.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ganchos.flags import Extension
from ganchos.parsing.blocks.core import is_empty

if TYPE_CHECKING:
    from ganchos.renderers.protocol import Renderer
    from ganchos.stringbuilder import StringBuilder

BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "p",
        "dl",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "ol",
        "ul",
        "del",
        "div",
        "ins",
        "pre",
        "form",
        "math",
        "table",
        "iframe",
        "script",
        "fieldset",
        "noscript",
        "blockquote",
    }
)

# Inline-level in practice; never close a block on their own
_NEVER_BLOCK = frozenset({"ins", "del"})


def find_block_tag(data: str, beg: int) -> str | None:
    """Return the block tag name starting at ``beg``, if it is a known one."""
    size = len(data)
    i = beg
    while i < size and data[i].isascii() and data[i].isalnum():
        i += 1
    if i >= size:
        return None
    tag = data[beg:i]
    return tag if tag in BLOCK_TAGS else None


class HtmlBlockMixin:
    """Raw HTML block recognizer.

    Required Host Attributes:
        - _renderer: Renderer
        - _extensions: Extension

    """

    _renderer: Renderer
    _extensions: Extension

    def _htmlblock_end(self, tag: str, data: str, beg: int) -> int:
        """Length of ``</tag>`` plus the blank line(s) after it, else 0.

        ``data[beg:beg + 2]`` is known to be ``</``.
        """
        size = len(data)
        n = len(tag)
        if beg + n + 3 >= size or data[beg + 2 : beg + 2 + n] != tag or data[beg + n + 2] != ">":
            return 0

        # rest of the closing tag's line must be blank
        i = beg + n + 3
        blank = is_empty(data, i) if i < size else 0
        if i < size and not blank:
            return 0
        i += blank

        blank = 0
        if i < size:
            blank = is_empty(data, i)
            if not blank and not self._extensions & Extension.LAX_HTML_BLOCKS:
                return 0

        return i + blank - beg

    def _parse_htmlblock(self, ob: StringBuilder, data: str, beg: int, render: bool) -> int:
        """Recognize a raw HTML block at ``beg``.

        Args:
            ob: Output buffer
            data: Block text
            beg: Line start, ``data[beg] == "<"``
            render: Call ``block_html``; False only tests for a block

        Returns:
            Position after the block, or 0.

        """
        size = len(data)
        if beg + 1 >= size or data[beg] != "<":
            return 0

        tag = find_block_tag(data, beg + 1)

        if tag is None:
            end = self._special_htmlblock(data, beg)
            if end and render:
                self._renderer.block_html(ob, data[beg:end])
            return end

        if tag in _NEVER_BLOCK:
            return 0

        # first closing tag followed by a blank line
        pos = beg + 1
        end = 0
        while True:
            close = data.find("</", pos)
            if close == -1 or close + len(tag) + 3 >= size:
                break
            length = self._htmlblock_end(tag, data, close)
            if length:
                end = close + length
                break
            pos = close + 1

        if not end:
            return 0

        if render:
            self._renderer.block_html(ob, data[beg:end])
        return end

    def _special_htmlblock(self, data: str, beg: int) -> int:
        """``<!-- comment -->`` or ``<hr ...>`` followed by a blank line."""
        size = len(data)

        if size - beg > 5 and data.startswith("!--", beg + 1):
            close = data.find("-->", beg + 3)
            if close != -1:
                i = close + 3
                blank = is_empty(data, i) if i < size else 0
                if blank:
                    return i + blank

        if size - beg > 4 and data[beg + 1] in "hH" and data[beg + 2] in "rR":
            close = data.find(">", beg + 3)
            if close != -1 and close + 1 < size:
                i = close + 1
                blank = is_empty(data, i)
                if blank:
                    return i + blank

        return 0
