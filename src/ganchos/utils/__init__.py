"""Utility modules for Ganchos.

Provides:
- text: expand_tabs, unescape_text, escape_html, escape_attr
- logger: get_logger for logging
"""

from ganchos.utils.logger import get_logger
from ganchos.utils.text import escape_attr, escape_html, expand_tabs, unescape_text

__all__ = [
    "escape_attr",
    "escape_html",
    "expand_tabs",
    "get_logger",
    "unescape_text",
]
