"""Pipe tables (``TABLES`` extension).

    Name  | Score
    :-----|------:
    Alice |    10

The header line needs at least one pipe and the line below it one
alignment spec per column (``---``, ``:--``, ``--:``, ``:-:``; at least
three characters counting colons). Body rows continue while lines contain a
pipe. Cells are split on every ``|``; short rows are padded with empty
cells, long rows truncated.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ganchos.flags import TableAlign
from ganchos.parsing.charsets import SPACE_TAB
from ganchos.stringbuilder import StringBuilder

if TYPE_CHECKING:
    from ganchos.renderers.protocol import Renderer


def parse_alignments(data: str, beg: int, end: int, columns: int) -> list[TableAlign] | None:
    """Read the delimiter line ``data[beg:end]``.

    Returns:
        One alignment per column, or None when the line does not describe
        exactly ``columns`` columns.

    """
    aligns = [TableAlign.NONE] * columns
    i = beg
    if i < end and data[i] == "|":
        i += 1

    col = 0
    while col < columns and i < end:
        dashes = 0
        while i < end and data[i] in SPACE_TAB:
            i += 1

        if i < end and data[i] == ":":
            i += 1
            aligns[col] |= TableAlign.LEFT
            dashes += 1
        while i < end and data[i] == "-":
            i += 1
            dashes += 1
        if i < end and data[i] == ":":
            i += 1
            aligns[col] |= TableAlign.RIGHT
            dashes += 1

        while i < end and data[i] in SPACE_TAB:
            i += 1

        if i < end and data[i] != "|":
            break
        if dashes < 3:
            break

        i += 1
        col += 1

    if col < columns:
        return None
    # extra columns in the delimiter line
    if data[i:end].strip(" \t|"):
        return None
    return aligns


class TableParsingMixin:
    """Pipe table recognizer.

    Required Host Attributes:
        - _renderer: Renderer

    Required Host Methods:
        - _render_inline(data) -> str

    """

    _renderer: Renderer

    def _parse_table(self, ob: StringBuilder, data: str, beg: int) -> int:
        size = len(data)
        header = StringBuilder()

        parsed = self._parse_table_header(header, data, beg)
        if parsed is None:
            return 0
        i, columns, aligns = parsed

        body = StringBuilder()
        while i < size:
            nl = data.find("\n", i)
            if nl == -1 or "|" not in data[i:nl]:
                break
            self._parse_table_row(body, data[i:nl], columns, aligns)
            i = nl + 1

        self._renderer.table(ob, header.build(), body.build())
        return i

    def _parse_table_header(
        self, ob: StringBuilder, data: str, beg: int
    ) -> tuple[int, int, list[TableAlign]] | None:
        """Header and delimiter lines: (position after them, columns, aligns)."""
        size = len(data)
        header_end = data.find("\n", beg)
        if header_end == -1:
            return None

        pipes = data.count("|", beg, header_end)
        if not pipes:
            return None
        if data[beg] == "|":
            pipes -= 1
        if header_end - beg > 2 and data[header_end - 1] == "|":
            pipes -= 1
        columns = pipes + 1

        under_beg = header_end + 1
        under_end = data.find("\n", under_beg)
        if under_end == -1:
            under_end = size

        aligns = parse_alignments(data, under_beg, under_end, columns)
        if aligns is None:
            return None

        self._parse_table_row(ob, data[beg:header_end], columns, aligns)
        return min(under_end + 1, size), columns, aligns

    def _parse_table_row(
        self, ob: StringBuilder, row: str, columns: int, aligns: list[TableAlign]
    ) -> None:
        size = len(row)
        work = StringBuilder()
        i = 0
        if i < size and row[i] == "|":
            i += 1

        col = 0
        while col < columns and i < size:
            while i < size and row[i].isspace():
                i += 1
            cell_beg = i
            while i < size and row[i] != "|":
                i += 1
            cell_end = i
            while cell_end > cell_beg and row[cell_end - 1].isspace():
                cell_end -= 1

            self._renderer.table_cell(work, self._render_inline(row[cell_beg:cell_end]), aligns[col])
            i += 1
            col += 1

        for col in range(col, columns):
            self._renderer.table_cell(work, "", aligns[col])

        self._renderer.table_row(ob, work.build())
