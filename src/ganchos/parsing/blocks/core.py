"""Core block parsing: the dispatcher and the basic block recognizers.

Block recognizers work on absolute indices into one string. Each takes the
text and a line-start position and returns the position where parsing
resumes (0 or the unchanged position means "not mine"). Bodies that must be
reflowed before recursing (blockquotes, code, list items) are copied.

Recognizers are tried in a fixed order at every position; the paragraph
recognizer always consumes at least one line, so the loop terminates.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ganchos.flags import Extension, ListFlag
from ganchos.parsing.charsets import DIGITS, HRULE_CHARS, SPACE_TAB, UNORDERED_LIST_MARKERS
from ganchos.stringbuilder import StringBuilder

if TYPE_CHECKING:
    from ganchos.parsing.nesting import NestingGuard
    from ganchos.renderers.protocol import Renderer


def line_end(data: str, beg: int) -> int:
    """Position just past the newline ending the line at ``beg``."""
    nl = data.find("\n", beg)
    return len(data) if nl == -1 else nl + 1


def is_empty(data: str, beg: int) -> int:
    """Length of a blank line at ``beg`` including its newline, else 0."""
    size = len(data)
    i = beg
    while i < size and data[i] != "\n":
        if data[i] not in SPACE_TAB:
            return 0
        i += 1
    return i - beg + 1


def is_hrule(data: str, beg: int) -> bool:
    """Return True for a line of 3+ ``*``, ``-`` or ``_`` and blanks."""
    size = len(data)
    if size - beg < 3:
        return False

    i = beg
    while i < beg + 3 and data[i] == " ":
        i += 1

    if i + 2 >= size or data[i] not in HRULE_CHARS:
        return False
    c = data[i]

    n = 0
    while i < size and data[i] != "\n":
        if data[i] == c:
            n += 1
        elif data[i] not in SPACE_TAB:
            return False
        i += 1
    return n >= 3


def is_headerline(data: str, beg: int) -> int:
    """Setext underline level: 1 for ``===``, 2 for ``---``, else 0."""
    size = len(data)
    c = data[beg]
    if c not in "=-":
        return 0

    i = beg + 1
    while i < size and data[i] == c:
        i += 1
    while i < size and data[i] in SPACE_TAB:
        i += 1
    if i >= size or data[i] == "\n":
        return 1 if c == "=" else 2
    return 0


def prefix_quote(data: str, beg: int) -> int:
    """Length of a ``>`` quote prefix (with one following blank), else 0."""
    size = len(data)
    i = beg
    while i < size and i - beg < 3 and data[i] == " ":
        i += 1
    if i < size and data[i] == ">":
        if i + 1 < size and data[i + 1] in SPACE_TAB:
            return i + 2 - beg
        return i + 1 - beg
    return 0


def prefix_code(data: str, beg: int) -> int:
    """Length of an indented-code prefix (a tab or 4 spaces), else 0."""
    if beg < len(data) and data[beg] == "\t":
        return 1
    if data.startswith("    ", beg):
        return 4
    return 0


def prefix_uli(data: str, beg: int) -> int:
    """Length of a ``*``, ``+`` or ``-`` item marker with its blank, else 0."""
    size = len(data)
    i = beg
    while i < size and i - beg < 3 and data[i] == " ":
        i += 1
    if i + 1 >= size or data[i] not in UNORDERED_LIST_MARKERS or data[i + 1] not in SPACE_TAB:
        return 0
    return i + 2 - beg


def prefix_oli(data: str, beg: int) -> int:
    """Length of a ``1.`` item marker with its blank, else 0."""
    size = len(data)
    i = beg
    while i < size and i - beg < 3 and data[i] == " ":
        i += 1
    if i >= size or data[i] not in DIGITS:
        return 0
    while i < size and data[i] in DIGITS:
        i += 1
    if i + 1 >= size or data[i] != "." or data[i + 1] not in SPACE_TAB:
        return 0
    return i + 2 - beg


class BlockParsingCoreMixin:
    """Block dispatcher plus headers, rules, paragraphs, quotes and code.

    Required Host Attributes:
        - _renderer: Renderer
        - _hooks: frozenset[str]
        - _extensions: Extension
        - _guard: NestingGuard

    Required Host Methods (from other mixins):
        - _parse_inline(ob, data) -> None
        - _render_inline(data) -> str
        - _parse_htmlblock(ob, data, beg, render) -> int
        - _parse_fencedcode(ob, data, beg) -> int
        - _parse_table(ob, data, beg) -> int
        - _parse_list(ob, data, beg, flags) -> int

    """

    _renderer: Renderer
    _hooks: frozenset[str]
    _extensions: Extension
    _guard: NestingGuard

    def _parse_block(self, ob: StringBuilder, data: str) -> None:
        """Render block content of ``data`` into ``ob``.

        Enters the nesting guard; past the depth limit nothing is emitted.
        """
        with self._guard.enter() as allowed:
            if not allowed:
                return

            extensions = self._extensions
            html_blocks = "block_html" in self._hooks
            size = len(data)
            beg = 0

            while beg < size:
                if self._is_atxheader(data, beg):
                    beg = self._parse_atxheader(ob, data, beg)
                    continue

                if data[beg] == "<" and html_blocks:
                    end = self._parse_htmlblock(ob, data, beg, True)
                    if end:
                        beg = end
                        continue

                blank = is_empty(data, beg)
                if blank:
                    beg += blank
                    continue

                if is_hrule(data, beg):
                    self._renderer.hrule(ob)
                    beg = line_end(data, beg)
                    continue

                if extensions & Extension.FENCED_CODE:
                    end = self._parse_fencedcode(ob, data, beg)
                    if end:
                        beg = end
                        continue

                if extensions & Extension.TABLES:
                    end = self._parse_table(ob, data, beg)
                    if end:
                        beg = end
                        continue

                if prefix_quote(data, beg):
                    beg = self._parse_blockquote(ob, data, beg)
                elif prefix_code(data, beg):
                    beg = self._parse_blockcode(ob, data, beg)
                elif prefix_uli(data, beg):
                    beg = self._parse_list(ob, data, beg, ListFlag.NONE)
                elif prefix_oli(data, beg):
                    beg = self._parse_list(ob, data, beg, ListFlag.ORDERED)
                else:
                    beg = self._parse_paragraph(ob, data, beg)

    def _render_block(self, data: str) -> str:
        """Block-parse ``data`` into an isolated buffer and return the text."""
        work = StringBuilder()
        self._parse_block(work, data)
        return work.build()

    # -- headers ------------------------------------------------------------------

    def _is_atxheader(self, data: str, beg: int) -> bool:
        if data[beg] != "#":
            return False

        if self._extensions & Extension.SPACE_HEADERS:
            size = len(data)
            level = 0
            while beg + level < size and level < 6 and data[beg + level] == "#":
                level += 1
            if beg + level < size and data[beg + level] not in SPACE_TAB:
                return False
        return True

    def _parse_atxheader(self, ob: StringBuilder, data: str, beg: int) -> int:
        """``# Title ##``: returns the position of the line's newline."""
        size = len(data)
        level = 0
        while beg + level < size and level < 6 and data[beg + level] == "#":
            level += 1

        i = beg + level
        while i < size and data[i] in SPACE_TAB:
            i += 1

        end = data.find("\n", i)
        if end == -1:
            end = size
        skip = end

        while end > i and data[end - 1] == "#":
            end -= 1
        while end > i and data[end - 1] in SPACE_TAB:
            end -= 1

        if end > i:
            self._renderer.header(ob, self._render_inline(data[i:end]), level)
        return skip

    # -- paragraph ----------------------------------------------------------------

    def _parse_paragraph(self, ob: StringBuilder, data: str, beg: int) -> int:
        """Consume lines up to a blank line, an underline or a block start.

        The first line is never tested for an interruption, so a paragraph
        always consumes at least one line.
        """
        size = len(data)
        lax_html = bool(self._extensions & Extension.LAX_HTML_BLOCKS) and "block_html" in self._hooks
        level = 0
        i = end = beg

        while i < size:
            end = line_end(data, i)

            if i > beg:
                if is_empty(data, i):
                    break
                level = is_headerline(data, i)
                if level:
                    break
                if lax_html and data[i] == "<" and self._parse_htmlblock(ob, data, i, False):
                    end = i
                    break
                if self._is_atxheader(data, i) or is_hrule(data, i):
                    end = i
                    break

            i = end

        stop = i
        while stop > beg and data[stop - 1] == "\n":
            stop -= 1

        if not level:
            self._renderer.paragraph(ob, self._render_inline(data[beg:stop]))
            return end

        # the underline promotes the last line; earlier lines stay a paragraph
        last_nl = data.rfind("\n", beg, stop)
        header_beg = beg
        if last_nl != -1:
            header_beg = last_nl + 1
            para_end = last_nl
            while para_end > beg and data[para_end - 1] == "\n":
                para_end -= 1
            if para_end > beg:
                self._renderer.paragraph(ob, self._render_inline(data[beg:para_end]))

        self._renderer.header(ob, self._render_inline(data[header_beg:stop]), level)
        return end

    # -- blockquote ---------------------------------------------------------------

    def _parse_blockquote(self, ob: StringBuilder, data: str, beg: int) -> int:
        """Dequote ``>`` lines (with lazy continuation) and block-parse them."""
        size = len(data)
        parts: list[str] = []
        end = beg

        while beg < size:
            end = line_end(data, beg)

            pre = prefix_quote(data, beg)
            if pre:
                beg += pre
            elif is_empty(data, beg) and (
                end >= size or (not prefix_quote(data, end) and not is_empty(data, end))
            ):
                # blank line followed by an unquoted line
                break

            if beg < end:
                parts.append(data[beg:end])
            beg = end

        self._renderer.block_quote(ob, self._render_block("".join(parts)))
        return end

    # -- indented code ------------------------------------------------------------

    def _parse_blockcode(self, ob: StringBuilder, data: str, beg: int) -> int:
        size = len(data)
        parts: list[str] = []

        while beg < size:
            end = line_end(data, beg)

            pre = prefix_code(data, beg)
            if pre:
                beg += pre
            elif not is_empty(data, beg):
                # non-empty unindented line ends the block
                break

            if beg < end:
                parts.append("\n" if is_empty(data, beg) else data[beg:end])
            beg = end

        text = "".join(parts).rstrip("\n") + "\n"
        self._renderer.block_code(ob, text, "")
        return beg
