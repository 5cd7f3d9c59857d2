"""Collect headings while rendering, then build a table of contents."""

from ganchos import HtmlFlag, HtmlRenderer, render

renderer = HtmlRenderer(HtmlFlag.TOC)
body = render("# Intro\n\n## Setup\n\n## Usage\n\n# Reference\n", renderer)

for heading in renderer.headings:
    print("  " * (heading.level - 1) + f'<a href="#{heading.anchor}">{heading.text}</a>')
print()
print(body)
