"""Core inline parsing: the scanning loop and the simple span handlers.

The loop copies runs of plain characters through ``normal_text`` and hands
every active character to its handler. A handler returns how many
characters it consumed; 0 declines, and the trigger character is then
emitted as plain text.

Handlers share one signature: ``(ob, data, offset) -> int`` where ``data`` is
the whole span being parsed and ``offset`` is the trigger position, so a
handler can look behind the trigger as well as ahead.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from ganchos.flags import AutolinkType
from ganchos.parsing.charsets import ESCAPE_CHARS, ActiveChar
from ganchos.parsing.scanners import entity_length, tag_length
from ganchos.stringbuilder import StringBuilder
from ganchos.utils.text import unescape_text

if TYPE_CHECKING:
    from ganchos.parsing.nesting import NestingGuard
    from ganchos.renderers.protocol import Renderer

InlineHandler = Callable[["StringBuilder", str, int], int]


class InlineParsingCoreMixin:
    """Inline scanning loop plus escape, entity, tag, code span and line break.

    Required Host Attributes:
        - _renderer: Renderer
        - _hooks: frozenset[str]
        - _active: Mapping[str, ActiveChar]
        - _guard: NestingGuard
        - _handlers: dict[ActiveChar, InlineHandler] (from _inline_handlers())

    Required Host Methods (from other mixins):
        - _char_emphasis(ob, data, offset) -> int
        - _char_link(ob, data, offset) -> int
        - _char_autolink(ob, data, offset) -> int

    """

    _renderer: Renderer
    _hooks: frozenset[str]
    _active: Mapping[str, ActiveChar]
    _guard: NestingGuard
    _handlers: dict[ActiveChar, InlineHandler]

    def _inline_handlers(self) -> dict[ActiveChar, InlineHandler]:
        """Map each active-character kind to its bound handler."""
        return {
            ActiveChar.EMPHASIS: self._char_emphasis,
            ActiveChar.CODESPAN: self._char_codespan,
            ActiveChar.LINEBREAK: self._char_linebreak,
            ActiveChar.LINK: self._char_link,
            ActiveChar.ANGLE: self._char_angle_tag,
            ActiveChar.ESCAPE: self._char_escape,
            ActiveChar.ENTITY: self._char_entity,
            ActiveChar.AUTOLINK: self._char_autolink,
        }

    def _parse_inline(self, ob: StringBuilder, data: str) -> None:
        """Render inline content of ``data`` into ``ob``.

        Enters the nesting guard; past the depth limit nothing is emitted.
        """
        with self._guard.enter() as allowed:
            if not allowed:
                return

            active = self._active
            handlers = self._handlers
            normal_text = self._renderer.normal_text
            size = len(data)
            i = end = 0

            while i < size:
                while end < size and data[end] not in active:
                    end += 1
                if end > i:
                    normal_text(ob, data[i:end])
                if end >= size:
                    break

                i = end
                consumed = handlers[active[data[i]]](ob, data, i)
                if consumed:
                    i += consumed
                    end = i
                else:
                    end = i + 1

    def _render_inline(self, data: str) -> str:
        """Inline-parse ``data`` into an isolated buffer and return the text."""
        work = StringBuilder()
        self._parse_inline(work, data)
        return work.build()

    # -- handlers -----------------------------------------------------------------

    def _char_escape(self, ob: StringBuilder, data: str, offset: int) -> int:
        """``\\x``: emit ``x`` literally when it is an escapable character."""
        if offset + 1 >= len(data):
            return 0
        char = data[offset + 1]
        if char not in ESCAPE_CHARS:
            return 0
        self._renderer.normal_text(ob, char)
        return 2

    def _char_entity(self, ob: StringBuilder, data: str, offset: int) -> int:
        semicolon = data.find(";", offset)
        if semicolon == -1:
            return 0
        end = entity_length(data[offset : semicolon + 1])
        if not end:
            return 0
        self._renderer.entity(ob, data[offset : offset + end])
        return end

    def _char_angle_tag(self, ob: StringBuilder, data: str, offset: int) -> int:
        """``<...>``: autolink or raw inline tag."""
        span = data[offset:]
        end, kind = tag_length(span)
        rendered = False

        if end > 2:
            if kind != AutolinkType.NOT_AUTOLINK and "autolink" in self._hooks:
                link = unescape_text(span[1 : end - 1])
                rendered = self._renderer.autolink(ob, link, kind)
            elif "raw_html_tag" in self._hooks:
                rendered = self._renderer.raw_html_tag(ob, span[:end])

        return end if rendered else 0

    def _char_codespan(self, ob: StringBuilder, data: str, offset: int) -> int:
        """Backtick code span closed by a run of the same length."""
        size = len(data)
        start = offset
        while start < size and data[start] == "`":
            start += 1
        run = start - offset

        close = -1
        i = start
        while i < size:
            if data[i] != "`":
                i += 1
                continue
            j = i
            while j < size and data[j] == "`":
                j += 1
            if j - i == run:
                close = i
                break
            i = j

        if close == -1:
            return 0

        content = data[start:close]
        if not content.strip(" \t"):
            content = ""
        elif content[0] in " \t" and content[-1] in " \t":
            content = content[1:-1]

        if not self._renderer.codespan(ob, content):
            return 0
        return close + run - offset

    def _char_linebreak(self, ob: StringBuilder, data: str, offset: int) -> int:
        """Hard break on a newline preceded by two or more spaces."""
        if offset < 2 or data[offset - 1] != " " or data[offset - 2] != " ":
            return 0

        ob.rstrip(" ")
        return 1 if self._renderer.linebreak(ob) else 0
