"""Exception classes for Ganchos.

Parsing never raises for malformed markdown: bad input degrades to literal
text. These exceptions cover configuration mistakes and internal faults.
"""

from __future__ import annotations


class GanchosError(Exception):
    """Base exception for all Ganchos errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(GanchosError):
    """Invalid parse or render configuration.

    Raised for unknown extension names or an unusable nesting limit.
    """

    pass


class NestingError(GanchosError):
    """Nesting depth did not return to zero after a full parse.

    This signals a recursion-accounting bug in the parser, never bad input.
    """

    def __init__(self, depth: int) -> None:
        """Initialize nesting error.

        Args:
            depth: Depth counter value observed after the parse finished
        """
        self.depth = depth
        super().__init__(f"Nesting level did not end at zero (depth={depth})")
