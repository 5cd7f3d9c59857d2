"""Flag and kind enums shared by the parser and the renderer contract.

Thread Safety:
All members are enum constants (inherently immutable).

"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum, IntFlag

from ganchos.errors import ConfigError


class Extension(IntFlag):
    """Optional syntax extensions, combined as a bitmask.

    Bit values are fixed: integer flag sets stay valid across releases and
    can be stored or passed between processes as plain ints.

    """

    NONE = 0
    NO_INTRA_EMPHASIS = 1 << 0
    TABLES = 1 << 1
    FENCED_CODE = 1 << 2
    AUTOLINK = 1 << 3
    STRIKETHROUGH = 1 << 4
    LAX_HTML_BLOCKS = 1 << 5
    SPACE_HEADERS = 1 << 6

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Extension:
        """Build a flag set from extension names.

        Names are case-insensitive and may use dashes or underscores.
        ``"all"`` enables every extension.

        Raises:
            ConfigError: If a name is not a known extension.

        Example:
            >>> Extension.from_names(["tables", "fenced-code"])
            <Extension.TABLES|FENCED_CODE: 6>
        """
        result = cls.NONE
        for name in names:
            key = name.strip().upper().replace("-", "_")
            if key == "ALL":
                result |= ALL_EXTENSIONS
                continue
            if key == "TABLE":
                key = "TABLES"
            member = cls.__members__.get(key)
            if member is None or key == "NONE":
                raise ConfigError(f"Unknown extension: {name!r}")
            result |= member
        return result


ALL_EXTENSIONS = (
    Extension.NO_INTRA_EMPHASIS
    | Extension.TABLES
    | Extension.FENCED_CODE
    | Extension.AUTOLINK
    | Extension.STRIKETHROUGH
    | Extension.LAX_HTML_BLOCKS
    | Extension.SPACE_HEADERS
)


class ListFlag(IntFlag):
    """Flags passed to the ``list`` and ``list_item`` hooks.

    ``BLOCK`` and ``END`` are accumulated across the items of one list: once
    any item sets them they apply to the whole list.

    """

    NONE = 0
    ORDERED = 1
    BLOCK = 2  # item content was block-parsed
    END = 8  # list ended on an unindented line after a blank gap


class TableAlign(IntFlag):
    """Column alignment passed to the ``table_cell`` hook."""

    NONE = 0
    LEFT = 1
    RIGHT = 2
    CENTER = LEFT | RIGHT


class AutolinkType(IntEnum):
    """Kind of link passed to the ``autolink`` hook."""

    NOT_AUTOLINK = 0
    NORMAL = 1
    EMAIL = 2


__all__ = [
    "ALL_EXTENSIONS",
    "AutolinkType",
    "Extension",
    "ListFlag",
    "TableAlign",
]
