"""Render Markdown to HTML in one call, zero config, zero deps."""

from ganchos import markdown

html = markdown("# Hello **World**")
print(html)
