"""StringBuilder for O(n) string accumulation.

Every renderer hook writes into a StringBuilder. Child constructs are rendered
into their own builder and handed to the parent hook as a finished string.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. A few tail operations (trimming trailing
spaces before a line break, dropping the ``!`` of an image) edit the last
parts in place.

Thread Safety:
StringBuilder instances are local to each parse call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<h1>")
            >>> sb.append("Hello")
            >>> sb.append("</h1>")
            >>> sb.build()
            '<h1>Hello</h1>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a string followed by newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def endswith(self, suffix: str) -> bool:
        """Return True if the accumulated text ends with ``suffix``."""
        if not suffix:
            return True
        tail = ""
        for part in reversed(self._parts):
            tail = part + tail
            if len(tail) >= len(suffix):
                break
        return tail.endswith(suffix)

    def rstrip(self, chars: str) -> StringBuilder:
        """Remove trailing characters in ``chars`` from the accumulated text.

        Returns:
            self for method chaining
        """
        parts = self._parts
        while parts:
            last = parts[-1].rstrip(chars)
            if last:
                parts[-1] = last
                break
            parts.pop()
        return self

    def drop_last(self, count: int) -> StringBuilder:
        """Remove the last ``count`` characters.

        Returns:
            self for method chaining
        """
        parts = self._parts
        while count > 0 and parts:
            last = parts[-1]
            if len(last) > count:
                parts[-1] = last[:-count]
                break
            count -= len(last)
            parts.pop()
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts."""
        self._parts.clear()
        return self

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)
