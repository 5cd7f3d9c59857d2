"""Renderer contract: the hook surface driven by the parser.

The parser produces no tree. It calls renderer hooks in document order, each
with an output ``StringBuilder`` and the already-rendered content of the
construct's children. Subclass ``Renderer`` and override only the hooks you
need; everything else keeps the default behavior of its tier:

- Block hooks: default skips the block entirely.
- Span hooks: return True when rendered. The default declines, and the parser
  then prints the span's source text verbatim.
- Low-level hooks (``entity``, ``normal_text``): default copies the input.

A hook counts as *implemented* when a subclass (or the instance itself)
overrides it. Only implemented hooks activate their trigger characters and
recognizers: a renderer without ``codespan`` leaves backticks as plain text,
one without ``block_html`` never sees raw HTML blocks.

Example:
    >>> from ganchos import render
    >>> from ganchos.renderers.protocol import Renderer
    >>>
    >>> class Shout(Renderer):
    ...     def paragraph(self, ob, text):
    ...         ob.append(text.upper())
    >>> render("hello", Shout())
    'HELLO'

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ganchos.flags import AutolinkType, ListFlag, TableAlign

if TYPE_CHECKING:
    from ganchos.stringbuilder import StringBuilder


BLOCK_HOOKS: tuple[str, ...] = (
    "block_code",
    "block_quote",
    "block_html",
    "header",
    "hrule",
    "list",
    "list_item",
    "paragraph",
    "table",
    "table_row",
    "table_cell",
)

SPAN_HOOKS: tuple[str, ...] = (
    "autolink",
    "codespan",
    "double_emphasis",
    "emphasis",
    "image",
    "linebreak",
    "link",
    "raw_html_tag",
    "triple_emphasis",
    "strikethrough",
)

LOW_LEVEL_HOOKS: tuple[str, ...] = ("entity", "normal_text")

DOCUMENT_HOOKS: tuple[str, ...] = ("doc_header", "doc_footer")

ALL_HOOKS: tuple[str, ...] = BLOCK_HOOKS + SPAN_HOOKS + LOW_LEVEL_HOOKS + DOCUMENT_HOOKS


class Renderer:
    """Base renderer with a default for every hook.

    Renderer instances carry their own user data: the same instance is passed
    as ``self`` to every hook call of a parse.

    Thread Safety:
        The parser never mutates the renderer. A renderer whose hooks keep
        state (counters, collected headings) must not be shared between
        concurrent parses.

    """

    #: Hook names to treat as not implemented for this instance, even if the
    #: class overrides them (lets one class switch constructs off per instance).
    disabled_hooks: frozenset[str] = frozenset()

    # -- block level: default skips the block ---------------------------------

    def block_code(self, ob: StringBuilder, text: str, lang: str) -> None:
        """Indented or fenced code; ``lang`` is empty when none was given."""

    def block_quote(self, ob: StringBuilder, text: str) -> None:
        pass

    def block_html(self, ob: StringBuilder, text: str) -> None:
        """Raw HTML block, passed through unparsed."""

    def header(self, ob: StringBuilder, text: str, level: int) -> None:
        pass

    def hrule(self, ob: StringBuilder) -> None:
        pass

    def list(self, ob: StringBuilder, text: str, flags: ListFlag) -> None:
        pass

    def list_item(self, ob: StringBuilder, text: str, flags: ListFlag) -> None:
        pass

    def paragraph(self, ob: StringBuilder, text: str) -> None:
        pass

    def table(self, ob: StringBuilder, header: str, body: str) -> None:
        pass

    def table_row(self, ob: StringBuilder, text: str) -> None:
        pass

    def table_cell(self, ob: StringBuilder, text: str, align: TableAlign) -> None:
        pass

    # -- span level: False prints the source span verbatim ---------------------

    def autolink(self, ob: StringBuilder, link: str, kind: AutolinkType) -> bool:
        return False

    def codespan(self, ob: StringBuilder, text: str) -> bool:
        return False

    def double_emphasis(self, ob: StringBuilder, text: str) -> bool:
        return False

    def emphasis(self, ob: StringBuilder, text: str) -> bool:
        return False

    def image(self, ob: StringBuilder, link: str, title: str, alt: str) -> bool:
        return False

    def linebreak(self, ob: StringBuilder) -> bool:
        return False

    def link(self, ob: StringBuilder, link: str, title: str, content: str) -> bool:
        return False

    def raw_html_tag(self, ob: StringBuilder, tag: str) -> bool:
        return False

    def triple_emphasis(self, ob: StringBuilder, text: str) -> bool:
        return False

    def strikethrough(self, ob: StringBuilder, text: str) -> bool:
        return False

    # -- low level: default copies the input -----------------------------------

    def entity(self, ob: StringBuilder, entity: str) -> None:
        ob.append(entity)

    def normal_text(self, ob: StringBuilder, text: str) -> None:
        ob.append(text)

    # -- document ---------------------------------------------------------------

    def doc_header(self, ob: StringBuilder) -> None:
        pass

    def doc_footer(self, ob: StringBuilder) -> None:
        pass


def implemented_hooks(renderer: Renderer) -> frozenset[str]:
    """Return the names of the hooks ``renderer`` overrides.

    A hook is implemented when the renderer's class (below ``Renderer``)
    defines it, or when it was assigned on the instance, and it is not listed
    in the renderer's ``disabled_hooks``.

    Example:
        >>> class Em(Renderer):
        ...     def emphasis(self, ob, text):
        ...         return True
        >>> sorted(implemented_hooks(Em()))
        ['emphasis']

    """
    cls = type(renderer)
    instance_attrs = getattr(renderer, "__dict__", {})
    found = set()
    for name in ALL_HOOKS:
        if name in instance_attrs:
            found.add(name)
            continue
        impl = getattr(cls, name, None)
        if impl is not None and impl is not getattr(Renderer, name):
            found.add(name)
    return frozenset(found) - frozenset(renderer.disabled_hooks)


__all__ = [
    "ALL_HOOKS",
    "BLOCK_HOOKS",
    "DOCUMENT_HOOKS",
    "LOW_LEVEL_HOOKS",
    "SPAN_HOOKS",
    "Renderer",
    "implemented_hooks",
]
