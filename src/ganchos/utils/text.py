"""Text processing utilities for Ganchos.

Canonical implementations of the small text transforms shared by the
reference scanner, the inline parser and the HTML renderer.

Example:
    >>> from ganchos.utils.text import expand_tabs
    >>> expand_tabs("a\\tb")
    'a   b'
"""

from __future__ import annotations

import html as html_module

TAB_SIZE = 4


def expand_tabs(line: str, tab_size: int = TAB_SIZE) -> str:
    """Expand tabs to the next multiple of ``tab_size`` columns.

    Columns are counted in characters from the start of ``line``, so the
    caller must pass whole lines.

    Args:
        line: A single line without its line ending
        tab_size: Tab stop width

    Returns:
        Line with every tab replaced by one or more spaces

    Examples:
        >>> expand_tabs("\\tx")
        '    x'
        >>> expand_tabs("ab\\tx")
        'ab  x'
    """
    if "\t" not in line:
        return line

    parts: list[str] = []
    column = 0
    for char in line:
        if char == "\t":
            pad = tab_size - (column % tab_size)
            parts.append(" " * pad)
            column += pad
        else:
            parts.append(char)
            column += 1
    return "".join(parts)


def unescape_text(text: str) -> str:
    """Drop backslashes, keeping the character each one escapes.

    A trailing lone backslash is removed.

    Examples:
        >>> unescape_text("http://x.com/a\\\\_b")
        'http://x.com/a_b'
    """
    if "\\" not in text:
        return text

    parts: list[str] = []
    i = 0
    size = len(text)
    while i < size:
        org = i
        while i < size and text[i] != "\\":
            i += 1
        if i > org:
            parts.append(text[org:i])
        if i + 1 >= size:
            break
        parts.append(text[i + 1])
        i += 2
    return "".join(parts)


def escape_html(text: str) -> str:
    """Escape ``<``, ``>``, ``&`` and ``"`` for use in element content.

    Single quotes are left alone.
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def escape_attr(text: str) -> str:
    """Escape HTML special characters for safe use in attributes.

    Converts ``&``, ``<``, ``>``, ``"`` and ``'`` to entities.

    Examples:
        >>> escape_attr('say "hi"')
        'say &quot;hi&quot;'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=True)
