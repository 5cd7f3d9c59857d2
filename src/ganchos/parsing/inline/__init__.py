"""Inline parsing subsystem for Ganchos parser.

Provides mixins for parsing inline Markdown content:
- Emphasis, strong and triple emphasis (*, _)
- Strikethrough (~~)
- Code spans (`)
- Links, images and reference links
- Autolinks (<...> and bare URLs)
- Raw inline HTML, entities, escapes, hard line breaks

Architecture:
A single left-to-right scan driven by the active-character table. Each
active character owns a handler that either consumes a construct (calling
the matching renderer hook) or declines and leaves the character as text.

"""

from __future__ import annotations

from ganchos.parsing.inline.core import InlineHandler, InlineParsingCoreMixin
from ganchos.parsing.inline.emphasis import EmphasisMixin, find_emph_char
from ganchos.parsing.inline.links import LinkParsingMixin


class InlineParsingMixin(
    InlineParsingCoreMixin,
    EmphasisMixin,
    LinkParsingMixin,
):
    """Combined inline parsing mixin.

    Combines all inline parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _renderer: Renderer
        - _hooks: frozenset[str]
        - _extensions: Extension
        - _active: Mapping[str, ActiveChar]
        - _handlers: dict[ActiveChar, InlineHandler]
        - _guard: NestingGuard
        - _refs: ReferenceTable

    """

    pass


__all__ = [
    "InlineHandler",
    "InlineParsingMixin",
    "InlineParsingCoreMixin",
    "EmphasisMixin",
    "LinkParsingMixin",
    "find_emph_char",
]
