"""Emphasis engine: delimiter search and the single/double/triple matchers.

Emphasis here is resolved greedily from the opening run, not with a
delimiter stack:

- ``*x*`` / ``_x_``: the single matcher looks for the next lone delimiter
  not preceded by whitespace.
- ``**x**`` / ``__x__`` / ``~~x~~``: the double matcher looks for a doubled
  delimiter not preceded by whitespace.
- ``***x***``: the triple matcher looks at the first closing candidate and
  hands over to the single or double matcher when the closer is shorter
  than three, so ``***a** b*`` becomes emphasis around strong text.

Every matcher renders its content through ``_parse_inline`` and therefore
through the shared nesting guard.

Cost:
An opener that never closes rescans to the end of its span, so a long run
of unclosable delimiters such as ``"a*" * n`` takes quadratic time.
Matchers index into the span rather than copying suffixes of it. Callers
rendering untrusted input should bound its size.

Thread Safety:
All methods use instance-local state only.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ganchos.flags import Extension
from ganchos.parsing.charsets import PUNCTUATION

if TYPE_CHECKING:
    from ganchos.renderers.protocol import Renderer
    from ganchos.stringbuilder import StringBuilder


def _skip_code_span(data: str, i: int, c: str) -> tuple[int, int]:
    """Skip a backtick run at ``i`` and its closing run of the same length.

    Returns:
        (position after the closing run or ``len(data)`` if unclosed,
        first ``c`` seen inside or 0)

    """
    size = len(data)
    run_start = i
    while i < size and data[i] == "`":
        i += 1
    run = i - run_start

    first = 0
    while i < size:
        if data[i] == "`":
            j = i
            while j < size and data[j] == "`":
                j += 1
            if j - i == run:
                return j, first
            i = j
            continue
        if not first and data[i] == c:
            first = i
        i += 1
    return size, first


def _skip_until(data: str, i: int, closer: str, c: str, first: int) -> tuple[int, int]:
    """Advance to ``closer``, remembering the first ``c`` passed on the way."""
    size = len(data)
    while i < size and data[i] != closer:
        if not first and data[i] == c:
            first = i
        i += 1
    return i, first


def find_emph_char(data: str, c: str, start: int = 0) -> int:
    """Find the next unescaped delimiter ``c`` after ``data[start]``.

    Code spans and link-like brackets (``[...]`` followed by ``(...)`` or
    ``[...]``) are skipped wholesale. When a skipped construct runs off the
    end, the first ``c`` seen inside it is returned instead.

    Returns:
        Distance from ``start`` to the delimiter, or 0 if there is none.

    Examples:
        >>> find_emph_char("a*b", "*")
        1
        >>> find_emph_char("a`*`*", "*")
        4
        >>> find_emph_char("a\\\\*b", "*")
        0

    """
    size = len(data)
    i = start + 1

    while i < size:
        while i < size and data[i] != c and data[i] != "`" and data[i] != "[":
            i += 1
        if i >= size:
            return 0

        # escaped characters never count
        if data[i - 1] == "\\":
            i += 1
            continue

        char = data[i]
        if char == c:
            return i - start

        if char == "`":
            i, first = _skip_code_span(data, i, c)
            if i >= size:
                return first - start if first else 0
            continue

        # link-like brackets
        i, first = _skip_until(data, i + 1, "]", c, 0)
        i += 1
        while i < size and data[i] in " \t\n":
            i += 1
        if i >= size:
            return first - start if first else 0

        if data[i] not in "[(":
            if first:
                return first - start
            continue

        closer = "]" if data[i] == "[" else ")"
        i, first = _skip_until(data, i + 1, closer, c, first)
        if i >= size:
            return first - start if first else 0
        i += 1

    return 0


class EmphasisMixin:
    """Mutually recursive emphasis matchers.

    Matchers work on absolute indices into the span handed to the inline
    parser; ``start`` is the first character after the opening run. Each
    returns the number of characters consumed from ``start`` through the
    closing run, or 0 to decline.

    Required Host Attributes:
        - _renderer: Renderer
        - _hooks: frozenset[str]
        - _extensions: Extension

    Required Host Methods:
        - _render_inline(data) -> str

    """

    _renderer: Renderer
    _hooks: frozenset[str]
    _extensions: Extension

    def _char_emphasis(self, ob: StringBuilder, data: str, offset: int) -> int:
        """Dispatch on the length of the delimiter run at ``offset``."""
        size = len(data) - offset
        c = data[offset]

        if size > 2 and data[offset + 1] != c:
            # whitespace cannot follow an opener; strikethrough needs "~~"
            if c == "~" or data[offset + 1].isspace():
                return 0
            ret = self._parse_emph1(ob, data, offset + 1, c)
            return ret + 1 if ret else 0

        if size > 3 and data[offset + 1] == c and data[offset + 2] != c:
            if data[offset + 2].isspace():
                return 0
            ret = self._parse_emph2(ob, data, offset + 2, c)
            return ret + 2 if ret else 0

        if size > 4 and data[offset + 1] == c and data[offset + 2] == c and data[offset + 3] != c:
            if c == "~" or data[offset + 3].isspace():
                return 0
            ret = self._parse_emph3(ob, data, offset + 3, c)
            return ret + 3 if ret else 0

        return 0

    def _parse_emph1(self, ob: StringBuilder, data: str, start: int, c: str) -> int:
        """Single delimiter."""
        if "emphasis" not in self._hooks:
            return 0

        size = len(data)
        no_intra = bool(self._extensions & Extension.NO_INTRA_EMPHASIS)

        # skip one symbol when coming from the triple matcher
        i = start + 1 if size - start > 1 and data[start] == c and data[start + 1] == c else start

        while i < size:
            length = find_emph_char(data, c, i)
            if not length:
                return 0
            i += length
            if i >= size:
                return 0

            if i + 1 < size and data[i + 1] == c:
                i += 1
                continue

            if data[i] == c and not data[i - 1].isspace():
                if no_intra and not (
                    i + 1 == size or data[i + 1].isspace() or data[i + 1] in PUNCTUATION
                ):
                    continue

                content = self._render_inline(data[start:i])
                return i - start + 1 if self._renderer.emphasis(ob, content) else 0

        return 0

    def _parse_emph2(self, ob: StringBuilder, data: str, start: int, c: str) -> int:
        """Double delimiter; ``~~`` is strikethrough."""
        hook = "strikethrough" if c == "~" else "double_emphasis"
        if hook not in self._hooks:
            return 0

        size = len(data)
        i = start
        while i < size:
            length = find_emph_char(data, c, i)
            if not length:
                return 0
            i += length

            if (
                i + 1 < size
                and data[i] == c
                and data[i + 1] == c
                and i > start
                and not data[i - 1].isspace()
            ):
                content = self._render_inline(data[start:i])
                render = getattr(self._renderer, hook)
                return i - start + 2 if render(ob, content) else 0
            i += 1

        return 0

    def _parse_emph3(self, ob: StringBuilder, data: str, start: int, c: str) -> int:
        """Triple delimiter; the opening run is ``data[start - 3:start]``."""
        size = len(data)
        i = start

        while i < size:
            length = find_emph_char(data, c, i)
            if not length:
                return 0
            i += length

            # skip whitespace-preceded closers
            if data[i] != c or data[i - 1].isspace():
                continue

            if i + 2 < size and data[i + 1] == c and data[i + 2] == c and "triple_emphasis" in self._hooks:
                content = self._render_inline(data[start:i])
                if self._renderer.triple_emphasis(ob, content):
                    return i - start + 3
                return 0

            if i + 1 < size and data[i + 1] == c:
                # double closer: the outer pair is a single
                length = self._parse_emph1(ob, data, start - 2, c)
                return length - 2 if length else 0

            # single closer: the outer pair is a double
            length = self._parse_emph2(ob, data, start - 1, c)
            return length - 1 if length else 0

        return 0
