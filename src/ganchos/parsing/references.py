"""First pass: link reference definitions and input normalization.

Scans the raw input line by line. Lines holding a reference definition

    [id]: http://example.com "Optional Title"

are removed and recorded in a ``ReferenceTable``; every other line is copied
into the working text with tabs expanded and line endings normalized to a
single ``\\n``. The block parser only ever sees the working text.

Thread Safety:
Functions are pure. ``ReferenceTable`` is read-only once built.

"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ganchos.utils.logger import get_logger
from ganchos.utils.text import expand_tabs

logger = get_logger(__name__)

_TITLE_CLOSERS = {'"': '"', "'": "'", "(": ")"}


@dataclass(frozen=True, slots=True)
class LinkRef:
    """A link reference definition.

    Attributes:
        id: Reference id as written (original case)
        link: Link target
        title: Optional title, empty when absent

    """

    id: str
    link: str
    title: str = ""


def _ref_key(ref: LinkRef) -> str:
    return ref.id.lower()


class ReferenceTable:
    """Reference definitions sorted for case-insensitive lookup.

    Definitions are kept in case-insensitive id order. The sort is stable,
    so among ids that differ only by case the first definition in the input
    is the one ``find()`` returns.

    Example:
        >>> table = ReferenceTable([LinkRef("Home", "http://a"), LinkRef("home", "http://b")])
        >>> table.find("HOME").link
        'http://a'

    """

    __slots__ = ("_keys", "_refs")

    def __init__(self, refs: Iterable[LinkRef] = ()) -> None:
        self._refs: list[LinkRef] = sorted(refs, key=_ref_key)
        self._keys: list[str] = [_ref_key(ref) for ref in self._refs]

    def find(self, ref_id: str) -> LinkRef | None:
        """Look up a definition by id, ignoring case."""
        key = ref_id.lower()
        idx = bisect_left(self._keys, key)
        if idx < len(self._keys) and self._keys[idx] == key:
            return self._refs[idx]
        return None

    def __contains__(self, ref_id: object) -> bool:
        return isinstance(ref_id, str) and self.find(ref_id) is not None

    def __iter__(self) -> Iterator[LinkRef]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)


def _skip_blanks(data: str, i: int) -> int:
    size = len(data)
    while i < size and data[i] in " \t":
        i += 1
    return i


def _line_terminator_end(data: str, i: int) -> int:
    """Index of the last character of the line ending starting at ``i``."""
    if data.startswith(("\r\n", "\n\r"), i):
        return i + 1
    return i


def match_reference(data: str, beg: int) -> tuple[int, LinkRef] | None:
    """Try to read a reference definition starting at line offset ``beg``.

    Returns:
        (end, ref) where ``end`` indexes the last character consumed (the
        line ending is left for the caller), or None if the line is not a
        definition.

    """
    size = len(data)
    if beg + 3 > size:
        return None

    # up to 3 optional leading spaces
    i = beg
    while i < beg + 3 and data[i] == " ":
        i += 1
    if i >= size or data[i] != "[":
        return None

    # id: anything but a newline between brackets
    i += 1
    id_start = i
    while i < size and data[i] not in "\n\r]":
        i += 1
    if i >= size or data[i] != "]":
        return None
    id_end = i

    # spacer: colon, blanks, at most one newline, blanks
    i += 1
    if i >= size or data[i] != ":":
        return None
    i = _skip_blanks(data, i + 1)
    if i < size and data[i] in "\n\r":
        i = _line_terminator_end(data, i) + 1
    i = _skip_blanks(data, i)
    if i >= size:
        return None

    # link: whitespace-free sequence, optionally between angle brackets
    bracketed = data[i] == "<"
    if bracketed:
        i += 1
    link_start = i
    while i < size and data[i] not in " \t\n\r":
        i += 1
    link_end = i
    if bracketed and link_end > link_start and data[link_end - 1] == ">":
        link_end -= 1
    if link_end == link_start and not bracketed:
        return None

    # optional spacer before a same-line title
    i = _skip_blanks(data, i)
    if i < size and data[i] not in "\n\r'\"(":
        return None

    line_end: int | None = None
    if i >= size:
        line_end = size
    elif data[i] in "\n\r":
        line_end = _line_terminator_end(data, i)

    # a title either follows on the same line or sits alone on the next one
    if line_end is None:
        candidate = i
    else:
        candidate = _skip_blanks(data, line_end + 1)

    end = line_end
    title = ""
    if candidate + 1 < size and data[candidate] in _TITLE_CLOSERS:
        closer = _TITLE_CLOSERS[data[candidate]]
        title_start = candidate + 1
        eol = title_start
        while eol < size and data[eol] not in "\n\r":
            eol += 1

        back = eol - 1
        while back > title_start and data[back] in " \t":
            back -= 1
        if back > title_start and data[back] == closer:
            title = data[title_start:back]
            end = _line_terminator_end(data, eol) if eol < size else size

    if end is None:
        # same-line title not validly terminated: not a definition at all
        return None

    ref = LinkRef(id=data[id_start:id_end], link=data[link_start:link_end], title=title)
    return end, ref


def scan_references(source: str) -> tuple[str, ReferenceTable]:
    """Split raw input into working text and reference definitions.

    Args:
        source: Raw markdown input

    Returns:
        (text, table): ``text`` has definitions removed, tabs expanded to
        4-column stops and every line ending turned into one ``\\n``; it
        ends with ``\\n`` unless empty.

    Example:
        >>> text, refs = scan_references("See [1].\\n  [1]: http://x.com\\n")
        >>> text
        'See [1].\\n\\n'
        >>> refs.find("1").link
        'http://x.com'

    """
    parts: list[str] = []
    refs: list[LinkRef] = []
    size = len(source)
    beg = 0

    while beg < size:
        match = match_reference(source, beg)
        if match is not None:
            beg, ref = match
            refs.append(ref)
            continue

        end = beg
        while end < size and source[end] not in "\n\r":
            end += 1
        if end > beg:
            parts.append(expand_tabs(source[beg:end]))

        while end < size and source[end] in "\n\r":
            end = _line_terminator_end(source, end) + 1
            parts.append("\n")
        beg = end

    text = "".join(parts)
    if text and not text.endswith("\n"):
        text += "\n"

    if refs:
        logger.debug("Collected %d link reference definition(s)", len(refs))
    return text, ReferenceTable(refs)
