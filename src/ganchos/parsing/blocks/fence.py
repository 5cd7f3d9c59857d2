"""Fenced code blocks (``FENCED_CODE`` extension).

    ```python
    print("hi")
    ```

The opening fence is at least three backticks or tildes after at most three
spaces, optionally followed by a language: a single word or a ``{...}``
group. The block closes on a line holding only a fence of the same
character at least as long as the opening one, or at the end of input.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from ganchos.parsing.blocks.core import is_empty, line_end
from ganchos.parsing.charsets import FENCE_CHARS

if TYPE_CHECKING:
    from ganchos.renderers.protocol import Renderer
    from ganchos.stringbuilder import StringBuilder


class Fence(NamedTuple):
    """An opening fence line."""

    end: int  # position after the fence line
    char: str
    length: int
    lang: str


def _fence_marker(data: str, beg: int) -> tuple[int, str, int] | None:
    """Match the marker run: (position after it, char, run length)."""
    size = len(data)
    if size - beg < 3:
        return None

    i = beg
    while i < beg + 3 and data[i] == " ":
        i += 1

    if i + 2 >= size or data[i] not in FENCE_CHARS:
        return None

    c = data[i]
    start = i
    while i < size and data[i] == c:
        i += 1
    if i - start < 3:
        return None
    return i, c, i - start


def _rest_is_blank(data: str, i: int) -> int:
    """Position after the line if only whitespace remains on it, else 0."""
    size = len(data)
    while i < size and data[i] != "\n":
        if not data[i].isspace():
            return 0
        i += 1
    return min(i + 1, size)


def scan_fence_open(data: str, beg: int) -> Fence | None:
    """Match an opening fence line with its optional language."""
    marker = _fence_marker(data, beg)
    if marker is None:
        return None
    i, c, run = marker
    size = len(data)

    while i < size and data[i] in " \t":
        i += 1

    if i < size and data[i] == "{":
        close = i + 1
        while close < size and data[close] not in "}\n":
            close += 1
        if close >= size or data[close] != "}":
            return None
        lang = data[i + 1 : close].strip()
        i = close + 1
    else:
        start = i
        while i < size and not data[i].isspace():
            i += 1
        lang = data[start:i]

    end = _rest_is_blank(data, i)
    if not end:
        return None
    return Fence(end, c, run, lang)


def scan_fence_close(data: str, beg: int, char: str, length: int) -> int:
    """Position after a closing fence at ``beg``, else 0."""
    marker = _fence_marker(data, beg)
    if marker is None:
        return 0
    i, c, run = marker
    if c != char or run < length:
        return 0
    return _rest_is_blank(data, i)


class FencedCodeMixin:
    """Fenced code recognizer.

    Required Host Attributes:
        - _renderer: Renderer

    """

    _renderer: Renderer

    def _parse_fencedcode(self, ob: StringBuilder, data: str, beg: int) -> int:
        fence = scan_fence_open(data, beg)
        if fence is None:
            return 0

        size = len(data)
        parts: list[str] = []
        beg = fence.end

        while beg < size:
            close = scan_fence_close(data, beg, fence.char, fence.length)
            if close:
                beg = close
                break

            end = line_end(data, beg)
            parts.append("\n" if is_empty(data, beg) else data[beg:end])
            beg = end

        text = "".join(parts).rstrip("\n") + "\n"
        self._renderer.block_code(ob, text, fence.lang)
        return beg
