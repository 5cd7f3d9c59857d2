"""Ganchos renderers.

Renderers receive parser callbacks and write output into a StringBuilder.

Available Renderers:
- Renderer: Base class with a default for every hook
- HtmlRenderer: Renders markdown to HTML

Thread Safety:
The parser never mutates a renderer, but renderers may keep per-document
state. Use one renderer instance per concurrent parse.

"""

from ganchos.renderers.html import HeadingInfo, HtmlFlag, HtmlRenderer
from ganchos.renderers.protocol import Renderer, implemented_hooks

__all__ = ["HeadingInfo", "HtmlFlag", "HtmlRenderer", "Renderer", "implemented_hooks"]
