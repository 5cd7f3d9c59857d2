"""Write your own renderer: override only the hooks you need.

Constructs whose hooks are left alone are skipped (blocks) or printed as
their source text (spans). This one turns a document into an outline.
"""

from ganchos import Extension, Renderer, render


class Outline(Renderer):
    def __init__(self) -> None:
        self.links: list[str] = []

    def header(self, ob, text, level):
        ob.append("  " * (level - 1) + f"- {text}\n")

    def link(self, ob, link, title, content):
        self.links.append(link)
        ob.append(content)
        return True


source = """
# Guide

See [the docs](http://example.com/docs).

## Install

## Usage

### Tables [ref]

[ref]: http://example.com/tables
"""

outline = Outline()
print(render(source, outline, Extension.NONE), end="")
print("links:", outline.links)
