"""HTML renderer: the default consumer of the renderer hooks.

Every hook writes into the ``StringBuilder`` it is given. Block hooks start
a new line when the buffer already holds output, so blocks come out one per
line without a trailing blank line.

Options (``HtmlFlag``):
- SKIP_HTML: inline tags are dropped, raw HTML blocks are not recognized
  (they render as escaped text)
- SKIP_STYLE: inline ``<style>`` tags are dropped
- SKIP_IMAGES / SKIP_LINKS: images / links are not recognized; the source
  text stays as written
- SAFELINK: links whose target is not http(s), ftp or mailto are declined
- TOC: headers get ``id="toc_N"`` anchors and are collected in ``headings``
- HARD_WRAP: newlines inside paragraphs become ``<br>``
- GITHUB_BLOCKCODE: code blocks use ``<pre lang="...">``
- USE_XHTML: void elements are closed with `` />``

Thread Safety:
Per-document state (the TOC counter and collected headings) is reset in
``doc_header``. Use one HtmlRenderer per concurrent parse.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntFlag
from typing import TYPE_CHECKING

from ganchos.flags import AutolinkType, ListFlag, TableAlign
from ganchos.parsing.scanners import is_safe_link
from ganchos.renderers.protocol import Renderer
from ganchos.utils.text import escape_attr, escape_html

if TYPE_CHECKING:
    from ganchos.stringbuilder import StringBuilder

logger = logging.getLogger(__name__)


class HtmlFlag(IntFlag):
    """Rendering options for ``HtmlRenderer``."""

    NONE = 0
    SKIP_HTML = 1 << 0
    SKIP_STYLE = 1 << 1
    SKIP_IMAGES = 1 << 2
    SKIP_LINKS = 1 << 3
    SAFELINK = 1 << 5
    TOC = 1 << 6
    HARD_WRAP = 1 << 7
    GITHUB_BLOCKCODE = 1 << 8
    USE_XHTML = 1 << 9


_ALIGN_ATTRS = {
    TableAlign.LEFT: ' align="left"',
    TableAlign.RIGHT: ' align="right"',
    TableAlign.CENTER: ' align="center"',
}


@dataclass(frozen=True, slots=True)
class HeadingInfo:
    """Header metadata collected while rendering with ``HtmlFlag.TOC``."""

    level: int
    text: str
    anchor: str


def is_tag(tag: str, name: str) -> bool:
    """Return True if ``tag`` is an opening or closing ``name`` tag.

    Example:
        >>> is_tag("</STYLE>", "style")
        True
        >>> is_tag("<stylesheet>", "style")
        False

    """
    i = 1
    if len(tag) > i and tag[i] == "/":
        i += 1
    end = i + len(name)
    if tag[i:end].lower() != name:
        return False
    return end < len(tag) and (tag[end].isspace() or tag[end] in "/>")


class HtmlRenderer(Renderer):
    """Render markdown to HTML.

    Usage:
            >>> from ganchos import render
            >>> render("# Title", HtmlRenderer())
            '<h1>Title</h1>\\n'

    """

    def __init__(self, flags: HtmlFlag = HtmlFlag.NONE) -> None:
        self.flags = HtmlFlag(flags)
        self.close_tag = " />\n" if self.flags & HtmlFlag.USE_XHTML else ">\n"
        self.headings: list[HeadingInfo] = []
        self._toc_count = 0

        disabled = set()
        if self.flags & HtmlFlag.SKIP_IMAGES:
            disabled.add("image")
        if self.flags & HtmlFlag.SKIP_LINKS:
            disabled.update(("link", "autolink"))
        if self.flags & HtmlFlag.SKIP_HTML:
            disabled.add("block_html")
        self.disabled_hooks = frozenset(disabled)

    # -- document -----------------------------------------------------------------

    def doc_header(self, ob: StringBuilder) -> None:
        self._toc_count = 0
        self.headings = []

    # -- block level --------------------------------------------------------------

    def block_code(self, ob: StringBuilder, text: str, lang: str) -> None:
        if ob:
            ob.append("\n")

        classes = [word[1:] if word.startswith(".") else word for word in lang.split()]
        classes = [c for c in classes if c]

        if classes and self.flags & HtmlFlag.GITHUB_BLOCKCODE:
            ob.append(f'<pre lang="{escape_attr(classes[0])}"><code>')
        elif classes:
            ob.append(f'<pre><code class="{escape_attr(" ".join(classes))}">')
        else:
            ob.append("<pre><code>")

        ob.append(escape_html(text))
        ob.append("</code></pre>\n")

    def block_quote(self, ob: StringBuilder, text: str) -> None:
        if ob:
            ob.append("\n")
        ob.append("<blockquote>\n")
        ob.append(text)
        ob.append("</blockquote>\n")

    def block_html(self, ob: StringBuilder, text: str) -> None:
        text = text.strip("\n")
        if not text:
            return
        if ob:
            ob.append("\n")
        ob.append(text)
        ob.append("\n")

    def header(self, ob: StringBuilder, text: str, level: int) -> None:
        if ob:
            ob.append("\n")

        if self.flags & HtmlFlag.TOC:
            anchor = f"toc_{self._toc_count}"
            self._toc_count += 1
            self.headings.append(HeadingInfo(level, text, anchor))
            ob.append(f'<h{level} id="{anchor}">')
        else:
            ob.append(f"<h{level}>")

        ob.append(text)
        ob.append(f"</h{level}>\n")

    def hrule(self, ob: StringBuilder) -> None:
        if ob:
            ob.append("\n")
        ob.append("<hr")
        ob.append(self.close_tag)

    def list(self, ob: StringBuilder, text: str, flags: ListFlag) -> None:
        if ob:
            ob.append("\n")
        tag = "ol" if flags & ListFlag.ORDERED else "ul"
        ob.append(f"<{tag}>\n")
        ob.append(text)
        ob.append(f"</{tag}>\n")

    def list_item(self, ob: StringBuilder, text: str, flags: ListFlag) -> None:
        ob.append("<li>")
        ob.append(text.rstrip("\n"))
        ob.append("</li>\n")

    def paragraph(self, ob: StringBuilder, text: str) -> None:
        if ob:
            ob.append("\n")

        text = text.lstrip()
        if not text:
            return

        ob.append("<p>")
        if self.flags & HtmlFlag.HARD_WRAP:
            ob.append(text.replace("\n", "<br" + self.close_tag))
        else:
            ob.append(text)
        ob.append("</p>\n")

    def table(self, ob: StringBuilder, header: str, body: str) -> None:
        if ob:
            ob.append("\n")
        ob.append("<table><thead>\n")
        ob.append(header)
        ob.append("\n</thead><tbody>\n")
        ob.append(body)
        ob.append("\n</tbody></table>")

    def table_row(self, ob: StringBuilder, text: str) -> None:
        if ob:
            ob.append("\n")
        ob.append("<tr>\n")
        ob.append(text)
        ob.append("\n</tr>")

    def table_cell(self, ob: StringBuilder, text: str, align: TableAlign) -> None:
        if ob:
            ob.append("\n")
        ob.append(f"<td{_ALIGN_ATTRS.get(align, '')}>")
        ob.append(text)
        ob.append("</td>")

    # -- span level ---------------------------------------------------------------

    def autolink(self, ob: StringBuilder, link: str, kind: AutolinkType) -> bool:
        if not link:
            return False
        if self.flags & HtmlFlag.SAFELINK and kind != AutolinkType.EMAIL and not is_safe_link(link):
            logger.debug("Declining unsafe autolink %r", link)
            return False

        href = "mailto:" + link if kind == AutolinkType.EMAIL else link
        shown = link[7:] if link.startswith("mailto:") else link
        ob.append(f'<a href="{escape_attr(href)}">')
        ob.append(escape_html(shown))
        ob.append("</a>")
        return True

    def codespan(self, ob: StringBuilder, text: str) -> bool:
        ob.append("<code>")
        ob.append(escape_html(text))
        ob.append("</code>")
        return True

    def double_emphasis(self, ob: StringBuilder, text: str) -> bool:
        if not text:
            return False
        ob.append(f"<strong>{text}</strong>")
        return True

    def emphasis(self, ob: StringBuilder, text: str) -> bool:
        if not text:
            return False
        ob.append(f"<em>{text}</em>")
        return True

    def triple_emphasis(self, ob: StringBuilder, text: str) -> bool:
        if not text:
            return False
        ob.append(f"<strong><em>{text}</em></strong>")
        return True

    def strikethrough(self, ob: StringBuilder, text: str) -> bool:
        if not text:
            return False
        ob.append(f"<del>{text}</del>")
        return True

    def image(self, ob: StringBuilder, link: str, title: str, alt: str) -> bool:
        if not link:
            return False
        ob.append(f'<img src="{escape_attr(link)}" alt="{escape_attr(alt)}"')
        if title:
            ob.append(f' title="{escape_attr(title)}"')
        ob.append(self.close_tag.rstrip("\n"))
        return True

    def linebreak(self, ob: StringBuilder) -> bool:
        ob.append("<br")
        ob.append(self.close_tag)
        return True

    def link(self, ob: StringBuilder, link: str, title: str, content: str) -> bool:
        if self.flags & HtmlFlag.SAFELINK and not is_safe_link(link):
            logger.debug("Declining unsafe link %r", link)
            return False

        ob.append(f'<a href="{escape_attr(link)}"')
        if title:
            ob.append(f' title="{escape_attr(title)}"')
        ob.append(">")
        ob.append(content)
        ob.append("</a>")
        return True

    def raw_html_tag(self, ob: StringBuilder, tag: str) -> bool:
        flags = self.flags
        # dropped tags still count as rendered
        if flags & HtmlFlag.SKIP_HTML:
            return True
        if flags & HtmlFlag.SKIP_STYLE and is_tag(tag, "style"):
            return True
        if flags & HtmlFlag.SKIP_LINKS and is_tag(tag, "a"):
            return True
        if flags & HtmlFlag.SKIP_IMAGES and is_tag(tag, "img"):
            return True
        ob.append(tag)
        return True

    # -- low level ----------------------------------------------------------------

    def normal_text(self, ob: StringBuilder, text: str) -> None:
        ob.append(escape_html(text))


__all__ = ["HeadingInfo", "HtmlFlag", "HtmlRenderer", "is_tag"]
