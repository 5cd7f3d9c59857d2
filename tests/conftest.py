"""Shared fixtures for Ganchos tests.

``TraceRenderer`` implements every hook with a compact bracket notation
(``[p:...]``, ``(em:...)``) and records each call, so tests can assert on
both the rendered shape and the exact hook arguments.
"""

from __future__ import annotations

from typing import Any

import pytest

from ganchos import Extension, Renderer, render


class TraceRenderer(Renderer):
    """Renderer that records hook calls and renders bracketed markers."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def find(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    # block level

    def block_code(self, ob, text, lang):
        self.calls.append(("block_code", text, lang))
        ob.append(f"[code:{lang}:{text}]")

    def block_quote(self, ob, text):
        self.calls.append(("block_quote", text))
        ob.append(f"[quote:{text}]")

    def block_html(self, ob, text):
        self.calls.append(("block_html", text))
        ob.append(f"[html:{text}]")

    def header(self, ob, text, level):
        self.calls.append(("header", text, level))
        ob.append(f"[h{level}:{text}]")

    def hrule(self, ob):
        self.calls.append(("hrule",))
        ob.append("[hr]")

    def list(self, ob, text, flags):
        self.calls.append(("list", text, flags))
        ob.append(f"[list:{text}]")

    def list_item(self, ob, text, flags):
        self.calls.append(("list_item", text, flags))
        ob.append(f"[li:{text}]")

    def paragraph(self, ob, text):
        self.calls.append(("paragraph", text))
        ob.append(f"[p:{text}]")

    def table(self, ob, header, body):
        self.calls.append(("table", header, body))
        ob.append(f"[table:{header}|{body}]")

    def table_row(self, ob, text):
        self.calls.append(("table_row", text))
        ob.append(f"[tr:{text}]")

    def table_cell(self, ob, text, align):
        self.calls.append(("table_cell", text, align))
        ob.append(f"[td:{text}]")

    # span level

    def autolink(self, ob, link, kind):
        self.calls.append(("autolink", link, kind))
        ob.append(f"(auto:{link})")
        return True

    def codespan(self, ob, text):
        self.calls.append(("codespan", text))
        ob.append(f"(code:{text})")
        return True

    def double_emphasis(self, ob, text):
        self.calls.append(("double_emphasis", text))
        ob.append(f"(strong:{text})")
        return True

    def emphasis(self, ob, text):
        self.calls.append(("emphasis", text))
        ob.append(f"(em:{text})")
        return True

    def image(self, ob, link, title, alt):
        self.calls.append(("image", link, title, alt))
        ob.append(f"(img:{link}:{title}:{alt})")
        return True

    def linebreak(self, ob):
        self.calls.append(("linebreak",))
        ob.append("(br)")
        return True

    def link(self, ob, link, title, content):
        self.calls.append(("link", link, title, content))
        ob.append(f"(a:{link}:{title}:{content})")
        return True

    def raw_html_tag(self, ob, tag):
        self.calls.append(("raw_html_tag", tag))
        ob.append(f"(tag:{tag})")
        return True

    def triple_emphasis(self, ob, text):
        self.calls.append(("triple_emphasis", text))
        ob.append(f"(strongem:{text})")
        return True

    def strikethrough(self, ob, text):
        self.calls.append(("strikethrough", text))
        ob.append(f"(del:{text})")
        return True

    # low level

    def entity(self, ob, entity):
        self.calls.append(("entity", entity))
        ob.append(f"{{{entity}}}")


@pytest.fixture
def trace() -> TraceRenderer:
    """A fresh tracing renderer."""
    return TraceRenderer()


@pytest.fixture
def run(trace: TraceRenderer):
    """Render source with the tracing renderer.

    Usage:
        out = run("*a*", Extension.TABLES)
    """

    def _run(source: str, extensions: Extension = Extension.NONE, **kwargs: Any) -> str:
        return render(source, trace, extensions, **kwargs)

    return _run
