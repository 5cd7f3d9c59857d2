"""Two-pass markdown parser driving renderer hooks.

Pass one (``scan_references``) strips link reference definitions and
normalizes the text. Pass two walks the text with the block recognizers,
which recurse into the inline parser and into themselves, calling renderer
hooks in document order. No syntax tree is built.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `InlineParsingMixin`: Emphasis, links, code spans, autolinks
- `BlockParsingMixin`: Headers, lists, tables, code blocks, quotes

Thread Safety:
A Parser holds the state of exactly one parse (active-character table,
nesting guard, reference table). Create one per ``render()`` call; separate
parsers may run concurrently on separate threads.

"""

from __future__ import annotations

from ganchos.config import get_parse_config
from ganchos.flags import Extension
from ganchos.parsing import BlockParsingMixin, InlineParsingMixin
from ganchos.parsing.charsets import build_active_chars
from ganchos.parsing.nesting import NestingGuard
from ganchos.parsing.references import ReferenceTable, scan_references
from ganchos.renderers.protocol import Renderer, implemented_hooks
from ganchos.stringbuilder import StringBuilder
from ganchos.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(InlineParsingMixin, BlockParsingMixin):
    """Single-use markdown parser bound to one renderer.

    Usage:
            >>> from ganchos.renderers.html import HtmlRenderer
            >>> Parser(HtmlRenderer()).render("*hi*")
            '<p><em>hi</em></p>\\n'

    Thread Safety:
        Parser instances are single-use and not thread-safe. Configuration
        defaults are read from the ContextVar at construction time.

    """

    __slots__ = (
        "_active",
        "_extensions",
        "_guard",
        "_handlers",
        "_hooks",
        "_refs",
        "_renderer",
    )

    def __init__(
        self,
        renderer: Renderer,
        extensions: Extension | None = None,
        max_nesting: int | None = None,
    ) -> None:
        """Initialize parser state for one parse.

        Args:
            renderer: Hook implementation; its overridden hooks decide which
                constructs are recognized
            extensions: Enabled extensions (default: active ``ParseConfig``)
            max_nesting: Recursion depth limit (default: active ``ParseConfig``)

        Raises:
            ConfigError: If ``max_nesting`` is not positive.

        """
        config = get_parse_config()
        if extensions is None:
            extensions = config.extensions
        if max_nesting is None:
            max_nesting = config.max_nesting

        self._renderer = renderer
        self._extensions = Extension(extensions)
        self._hooks = implemented_hooks(renderer)
        self._active = build_active_chars(self._hooks, self._extensions)
        self._handlers = self._inline_handlers()
        self._guard = NestingGuard(max_nesting)
        self._refs = ReferenceTable()

    @property
    def references(self) -> ReferenceTable:
        """Reference definitions collected by the last ``render()``."""
        return self._refs

    @property
    def nesting(self) -> NestingGuard:
        """The recursion guard of this parser (depth, peak, truncations)."""
        return self._guard

    def render(self, source: str) -> str:
        """Run both passes over ``source`` and return the rendered output.

        Raises:
            NestingError: If recursion accounting is off after the parse.

        """
        text, self._refs = scan_references(source)

        ob = StringBuilder()
        self._renderer.doc_header(ob)
        if text:
            self._parse_block(ob, text)
        self._renderer.doc_footer(ob)

        self._guard.check_balanced()
        if self._guard.truncations:
            logger.debug("Parse truncated %d subtree(s) at depth %d", self._guard.truncations, self._guard.limit)
        return ob.build()


__all__ = ["Parser"]
