"""Recursion-depth guard shared by the block and inline parsers.

Every recursive descent (a blockquote body, a list item, the text inside
emphasis or a link) enters the same guard. Past the limit the descent is
refused and the subtree renders as nothing: a silent truncation, not an
error.

Example:
    >>> guard = NestingGuard(limit=1)
    >>> with guard.enter() as allowed:
    ...     with guard.enter() as nested_allowed:
    ...         (allowed, nested_allowed)
    (True, False)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from ganchos.errors import ConfigError, NestingError
from ganchos.utils.logger import get_logger

logger = get_logger(__name__)


class NestingGuard:
    """Depth counter with a fixed limit.

    Thread Safety:
        One guard per parse. Not shared between parses.

    """

    __slots__ = ("_depth", "_limit", "_peak", "_truncations")

    def __init__(self, limit: int) -> None:
        """Create a guard allowing ``limit`` nested levels.

        Raises:
            ConfigError: If ``limit`` is not positive.

        """
        if limit < 1:
            raise ConfigError(f"max_nesting must be positive, got {limit}")
        self._depth = 0
        self._limit = limit
        self._peak = 0
        self._truncations = 0

    @property
    def depth(self) -> int:
        """Current recursion depth."""
        return self._depth

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def peak(self) -> int:
        """Deepest level entered so far; never exceeds ``limit``."""
        return self._peak

    @property
    def truncations(self) -> int:
        """Number of descents refused so far."""
        return self._truncations

    @contextmanager
    def enter(self) -> Iterator[bool]:
        """Descend one level.

        Yields:
            True if the caller may recurse, False if the limit is reached.
            The depth is restored on exit either way.

        """
        if self._depth >= self._limit:
            self._truncations += 1
            if self._truncations == 1:
                logger.debug("Nesting limit %d reached; truncating subtree", self._limit)
            yield False
            return

        self._depth += 1
        if self._depth > self._peak:
            self._peak = self._depth
        try:
            yield True
        finally:
            self._depth -= 1

    def check_balanced(self) -> None:
        """Verify the depth is back to zero after a full parse.

        Raises:
            NestingError: If any descent was not unwound.

        """
        if self._depth != 0:
            raise NestingError(self._depth)
