"""Ordered and unordered lists.

A list is parsed in two passes. The first pass scans item spans and
collects each item's dedented text; the second renders every item with the
list's final flags. ``BLOCK`` (an internal blank line anywhere in the list)
and ``END`` therefore apply to every item, not just the items after the one
that set them.

Item boundaries:
- a new marker at the same indentation as the item's own marker starts a
  sibling item;
- a marker at any other indentation starts a nested sublist inside the
  item, which is always block-parsed;
- after a blank line, a line indented by less than four spaces ends the
  list (``END``);
- otherwise lines continue the item, losing up to four leading spaces or
  one tab.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from ganchos.flags import ListFlag
from ganchos.parsing.blocks.core import (
    is_empty,
    is_hrule,
    line_end,
    prefix_oli,
    prefix_uli,
)
from ganchos.stringbuilder import StringBuilder

if TYPE_CHECKING:
    from ganchos.renderers.protocol import Renderer


class ListItemSpan(NamedTuple):
    """One scanned list item."""

    end: int  # position after the item
    text: str  # dedented item content
    sublist: int  # offset of a nested sublist in ``text``, 0 when none
    flags: ListFlag  # BLOCK and/or END contributed by this item


def scan_list_item(data: str, beg: int) -> ListItemSpan | None:
    """Scan the list item whose marker line starts at ``beg``."""
    size = len(data)

    orgpre = 0
    while orgpre < 3 and beg + orgpre < size and data[beg + orgpre] == " ":
        orgpre += 1

    marker = prefix_uli(data, beg) or prefix_oli(data, beg)
    if not marker:
        return None

    start = beg + marker
    end = line_end(data, start)
    parts = [data[start:end]]
    length = end - start
    pos = end

    flags = ListFlag.NONE
    sublist = 0
    in_empty = False
    has_inside_empty = False

    while pos < size:
        end = line_end(data, pos)

        if is_empty(data, pos):
            in_empty = True
            pos = end
            continue

        # indentation, up to four spaces or one tab
        indent = 0
        while indent < 4 and pos + indent < end and data[pos + indent] == " ":
            indent += 1
        pre = indent
        if data[pos] == "\t":
            indent = 1
            pre = 8

        content = pos + indent
        if (prefix_uli(data, content) and not is_hrule(data, content)) or prefix_oli(data, content):
            if in_empty:
                has_inside_empty = True
            if pre == orgpre:
                # sibling item
                break
            if not sublist:
                sublist = length
        elif in_empty and indent < 4 and data[pos] != "\t":
            flags |= ListFlag.END
            break
        elif in_empty:
            parts.append("\n")
            length += 1
            has_inside_empty = True

        in_empty = False
        parts.append(data[content:end])
        length += end - content
        pos = end

    if has_inside_empty:
        flags |= ListFlag.BLOCK

    return ListItemSpan(pos, "".join(parts), sublist, flags)


class ListParsingMixin:
    """List recognizer.

    Required Host Attributes:
        - _renderer: Renderer

    Required Host Methods:
        - _parse_block(ob, data) -> None
        - _parse_inline(ob, data) -> None

    """

    _renderer: Renderer

    def _parse_list(self, ob: StringBuilder, data: str, beg: int, flags: ListFlag) -> int:
        """Parse a whole list starting at ``beg``; returns the position after it."""
        size = len(data)
        items: list[ListItemSpan] = []
        i = beg

        while i < size:
            item = scan_list_item(data, i)
            if item is None:
                break
            items.append(item)
            flags |= item.flags
            i = item.end
            if flags & ListFlag.END:
                break

        body = StringBuilder()
        for item in items:
            self._render_list_item(body, item, flags)

        self._renderer.list(ob, body.build(), flags)
        return i

    def _render_list_item(self, ob: StringBuilder, item: ListItemSpan, flags: ListFlag) -> None:
        work = StringBuilder()
        text = item.text
        split = 0 < item.sublist < len(text)
        head = text[: item.sublist] if split else text

        if flags & ListFlag.BLOCK:
            self._parse_block(work, head)
        else:
            self._parse_inline(work, head)
        if split:
            self._parse_block(work, text[item.sublist :])

        self._renderer.list_item(ob, work.build(), flags)
