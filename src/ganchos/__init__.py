"""
Ganchos: callback-driven Markdown parser.

Ganchos parses a markdown dialect (headers, lists, quotes, fenced code,
pipe tables, emphasis, links, autolinks) and reports every construct to a
renderer through hooks. No syntax tree is built; the renderer decides what
the output looks like. Zero runtime dependencies.

Quick Start:
    >>> from ganchos import markdown
    >>> markdown("# Hello, *World*!")
    '<h1>Hello, <em>World</em>!</h1>\\n'

    >>> # Custom renderers override only the hooks they need
    >>> from ganchos import Renderer, render
    >>> class Headers(Renderer):
    ...     def header(self, ob, text, level):
    ...         ob.append(f"{level}:{text}\\n")
    >>> render("# One\\n\\n## Two\\n", Headers())
    '1:One\\n2:Two\\n'

Extensions:
    >>> from ganchos import Markdown
    >>> md = Markdown(extensions=["tables", "fenced_code", "strikethrough"])
    >>> md("~~gone~~")
    '<p><del>gone</del></p>\\n'

"""

from collections.abc import Iterable

from ganchos.config import (
    DEFAULT_MAX_NESTING,
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from ganchos.errors import ConfigError, GanchosError, NestingError
from ganchos.flags import ALL_EXTENSIONS, AutolinkType, Extension, ListFlag, TableAlign
from ganchos.parser import Parser
from ganchos.parsing.references import LinkRef, ReferenceTable
from ganchos.renderers.html import HeadingInfo, HtmlFlag, HtmlRenderer
from ganchos.renderers.protocol import Renderer, implemented_hooks
from ganchos.stringbuilder import StringBuilder

__version__ = "0.1.0"


def _coerce_extensions(extensions: Extension | int | Iterable[str] | None) -> Extension | None:
    """Normalize an extension argument to an ``Extension`` (or None)."""
    if extensions is None:
        return None
    if isinstance(extensions, int):
        return Extension(extensions)
    if isinstance(extensions, str):
        return Extension.from_names([extensions])
    return Extension.from_names(extensions)


def _decode(source: str | bytes) -> str:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).decode("utf-8", errors="replace")
    return source


def render(
    source: str | bytes,
    renderer: Renderer | None,
    extensions: Extension | int | Iterable[str] | None = None,
    *,
    max_nesting: int | None = None,
) -> str:
    """Parse markdown and drive ``renderer`` over it.

    Args:
        source: Markdown text (``bytes`` are decoded as UTF-8)
        renderer: Hook implementation; ``None`` renders nothing
        extensions: Extension flags or names (default: active ``ParseConfig``)
        max_nesting: Recursion depth limit (default: active ``ParseConfig``)

    Returns:
        Whatever the renderer's hooks wrote

    Raises:
        ConfigError: If an extension name is unknown.

    Example:
        >>> render("Hello", HtmlRenderer())
        '<p>Hello</p>\\n'

    """
    if renderer is None:
        return ""
    parser = Parser(renderer, _coerce_extensions(extensions), max_nesting)
    return parser.render(_decode(source))


def markdown(
    source: str | bytes,
    extensions: Extension | int | Iterable[str] | None = None,
    *,
    html_flags: HtmlFlag = HtmlFlag.NONE,
) -> str:
    """Render markdown to HTML with a fresh ``HtmlRenderer``.

    Example:
        >>> markdown("a  \\nb")
        '<p>a<br>\\nb</p>\\n'

    """
    return render(source, HtmlRenderer(html_flags), extensions)


class Markdown:
    """Reusable markdown processor combining configuration and renderer.

    Usage:
        >>> md = Markdown(extensions="all")
        >>> md("Score | Grade\\n------|------\\nA | 1\\n").startswith("<table>")
        True

    Without an explicit renderer each call gets a fresh ``HtmlRenderer``
    built from ``html_flags``. A renderer passed in is reused for every call.

    Thread Safety:
        Configuration is immutable and applied per call through the
        ContextVar. Safe to share across threads when no renderer instance
        is passed in.

    """

    __slots__ = ("_config", "_html_flags", "_renderer")

    def __init__(
        self,
        extensions: Extension | int | Iterable[str] | None = None,
        renderer: Renderer | None = None,
        html_flags: HtmlFlag = HtmlFlag.NONE,
        *,
        max_nesting: int = DEFAULT_MAX_NESTING,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            extensions: Extension flags or names (``"all"`` enables every one)
            renderer: Renderer to reuse (default: new ``HtmlRenderer`` per call)
            html_flags: Options for the default ``HtmlRenderer``
            max_nesting: Recursion depth limit

        Raises:
            ConfigError: If an extension name is unknown or ``max_nesting``
                is not positive.

        """
        coerced = _coerce_extensions(extensions)
        self._config = ParseConfig(
            extensions=coerced if coerced is not None else Extension.NONE,
            max_nesting=max_nesting,
        )
        self._renderer = renderer
        self._html_flags = HtmlFlag(html_flags)

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str | bytes) -> str:
        """Parse and render markdown in one call."""
        return self.render(source)

    def render(self, source: str | bytes) -> str:
        """Render ``source`` with this processor's configuration."""
        renderer = self._renderer if self._renderer is not None else HtmlRenderer(self._html_flags)
        with parse_config_context(self._config):
            return render(source, renderer)

    def render_many(self, sources: Iterable[str | bytes]) -> list[str]:
        """Render several documents with the same configuration."""
        return [self.render(source) for source in sources]


__all__ = [
    "ALL_EXTENSIONS",
    "DEFAULT_MAX_NESTING",
    "AutolinkType",
    "ConfigError",
    "Extension",
    "GanchosError",
    "HeadingInfo",
    "HtmlFlag",
    "HtmlRenderer",
    "LinkRef",
    "ListFlag",
    "Markdown",
    "NestingError",
    "ParseConfig",
    "Parser",
    "ReferenceTable",
    "Renderer",
    "StringBuilder",
    "TableAlign",
    "__version__",
    "get_parse_config",
    "implemented_hooks",
    "markdown",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    "render",
]
