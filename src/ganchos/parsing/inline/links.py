"""Links, images and bare autolinks.

Supported forms:

    [text](url "title")     inline link, title optional
    [text](<url>)           angle brackets are stripped from the target
    [text][id]              reference link
    [text][]  /  [text]     the text itself is the reference id
    ![alt](url "title")     the same forms, rendered as an image

Whitespace (including a newline) may separate ``]`` from ``(`` or ``[``.
References resolve case-insensitively with newlines in the id read as
spaces; an unknown reference declines and the brackets stay literal text.

Thread Safety:
All methods use instance-local state only.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ganchos.flags import AutolinkType
from ganchos.parsing.scanners import bare_link_length, is_safe_link
from ganchos.utils.text import unescape_text

if TYPE_CHECKING:
    from ganchos.parsing.references import ReferenceTable
    from ganchos.renderers.protocol import Renderer
    from ganchos.stringbuilder import StringBuilder

_WHITESPACE = " \t\n"
_QUOTES = "'\""


def _find_closing_bracket(data: str, i: int) -> int:
    """Index of the ``]`` matching the ``[`` before ``i``, or -1.

    An unmatched ``[`` scans to the end of the span, so ``"[" * n`` costs
    quadratic time across the whole run.

    """
    size = len(data)
    level = 1
    while i < size:
        char = data[i]
        if char == "\n" or data[i - 1] == "\\":
            pass
        elif char == "[":
            level += 1
        elif char == "]":
            level -= 1
            if level <= 0:
                return i
        i += 1
    return -1


def _scan_inline_target(data: str, i: int) -> tuple[int, str, str] | None:
    """Read ``(url "title")`` with ``data[i]`` just after the ``(``.

    Returns:
        (index of the closing parenthesis, link, title) or None.

    """
    size = len(data)
    while i < size and data[i] in _WHITESPACE:
        i += 1
    link_b = i

    # the link runs to ")" or to a quote opening a title
    while i < size:
        if data[i] == "\\":
            i += 2
        elif data[i] == ")":
            break
        elif data[i - 1] in _WHITESPACE and data[i] in _QUOTES:
            break
        else:
            i += 1
    if i >= size:
        return None
    link_e = i

    title = ""
    if data[i] in _QUOTES:
        quote = data[i]
        in_title = True
        i += 1
        title_b = i
        while i < size:
            if data[i] == "\\":
                i += 2
            elif data[i] == quote:
                in_title = False
                i += 1
            elif data[i] == ")" and not in_title:
                break
            else:
                i += 1
        if i >= size:
            return None

        # step back over trailing whitespace to the closing quote
        title_e = i - 1
        while title_e > title_b and data[title_e] in _WHITESPACE:
            title_e -= 1
        if data[title_e] in _QUOTES:
            title = data[title_b:title_e]
        else:
            # no closing quote: the quote belongs to the link
            link_e = i

    while link_e > link_b and data[link_e - 1] in _WHITESPACE:
        link_e -= 1
    if link_b < link_e and data[link_b] == "<":
        link_b += 1
    if link_b < link_e and data[link_e - 1] == ">":
        link_e -= 1

    return i, unescape_text(data[link_b:link_e]), title


class LinkParsingMixin:
    """Bracketed links and images plus bare URL autolinks.

    Required Host Attributes:
        - _renderer: Renderer
        - _hooks: frozenset[str]
        - _refs: ReferenceTable

    Required Host Methods:
        - _render_inline(data) -> str

    """

    _renderer: Renderer
    _hooks: frozenset[str]
    _refs: ReferenceTable

    def _char_link(self, ob: StringBuilder, data: str, offset: int) -> int:
        """``[``: link or, after ``!``, image."""
        # an escaped "\!" is literal text, not an image marker
        is_image = offset > 0 and data[offset - 1] == "!" and (offset < 2 or data[offset - 2] != "\\")
        if ("image" if is_image else "link") not in self._hooks:
            return 0

        size = len(data)
        txt_e = _find_closing_bracket(data, offset + 1)
        if txt_e == -1:
            return 0
        text = data[offset + 1 : txt_e]

        i = txt_e + 1
        while i < size and data[i] in _WHITESPACE:
            i += 1

        if i < size and data[i] == "(":
            target = _scan_inline_target(data, i + 1)
            if target is None:
                return 0
            i, link, title = target
            end = i + 1
        else:
            if i < size and data[i] == "[":
                id_e = data.find("]", i + 1)
                if id_e == -1:
                    return 0
                ref_id = data[i + 1 : id_e] or text
                end = id_e + 1
            else:
                # shortcut reference: only the brackets are consumed
                ref_id = text
                end = txt_e + 1

            ref = self._refs.find(ref_id.replace("\n", " "))
            if ref is None:
                return 0
            link, title = ref.link, ref.title

        if is_image:
            dropped = ob.endswith("!")
            if dropped:
                ob.drop_last(1)
            rendered = self._renderer.image(ob, link, title, text)
            if not rendered and dropped:
                ob.append("!")
        else:
            content = self._render_inline(text) if text else ""
            rendered = self._renderer.link(ob, link, title, content)

        return end - offset if rendered else 0

    def _char_autolink(self, ob: StringBuilder, data: str, offset: int) -> int:
        """Bare ``http://``, ``https://``, ``ftp://`` or ``mailto:`` link."""
        if offset > 0 and not data[offset - 1].isspace():
            return 0
        if "autolink" not in self._hooks:
            return 0
        if not is_safe_link(data[offset : offset + 16]):
            return 0

        span = data[offset:]
        end = bare_link_length(span)
        if not end:
            return 0

        link = unescape_text(span[:end])
        return end if self._renderer.autolink(ob, link, AutolinkType.NORMAL) else 0
