"""Pure recognizers for tags, autolinks and entities.

Each scanner looks at the start of a string and reports how many characters
form the construct, or 0 when there is none. They hold no state and never
call the renderer, so the inline parser and the HTML-block detector share
them.

"""

from __future__ import annotations

from ganchos.flags import AutolinkType

# Schemes accepted for bare (unbracketed) links
SAFE_LINK_PREFIXES: tuple[str, ...] = ("http://", "https://", "ftp://", "mailto:")

# A trailing character of a bare link that is dropped as sentence punctuation
_TRAILING_PUNCTUATION = frozenset(".,;:!?")

# Closing character -> opening character for unbalanced-tail trimming
_CLOSERS = {")": "(", "]": "[", "}": "{", '"': '"', "'": "'"}


def tag_length(data: str) -> tuple[int, AutolinkType]:
    """Measure a ``<...>`` run at the start of ``data``.

    Recognizes, in order: an email autolink (``<user@host>``), a URI autolink
    (``<scheme:...>``, scheme of at least two characters), and anything shaped
    like an HTML tag (``<`` or ``</`` followed by an alphanumeric, up to the
    next ``>``).

    Returns:
        (length including both brackets, autolink kind); length 0 means the
        text is not a tag.

    Examples:
        >>> tag_length("<http://a.b> x")
        (12, <AutolinkType.NORMAL: 1>)
        >>> tag_length("<b>bold")
        (3, <AutolinkType.NOT_AUTOLINK: 0>)
        >>> tag_length("a < b")
        (0, <AutolinkType.NOT_AUTOLINK: 0>)

    """
    size = len(data)
    not_tag = (0, AutolinkType.NOT_AUTOLINK)
    if size < 3 or data[0] != "<":
        return not_tag

    i = 2 if data[1] == "/" else 1
    if not data[i].isalnum():
        return not_tag

    kind = AutolinkType.NOT_AUTOLINK

    # scheme or mailbox candidate
    while i < size and (data[i].isalnum() or data[i] in ".+-"):
        i += 1

    if i > 1 and i < size and data[i] == "@":
        j = mail_autolink_length(data[i:])
        if j:
            return i + j, AutolinkType.EMAIL

    if i > 2 and i < size and data[i] == ":":
        kind = AutolinkType.NORMAL
        i += 1

    if i >= size:
        kind = AutolinkType.NOT_AUTOLINK
    elif kind:
        # a URI autolink holds no whitespace and no quotes
        start = i
        while i < size:
            if data[i] == "\\":
                i += 2
            elif data[i] in ">'\"" or data[i].isspace():
                break
            else:
                i += 1

        if i >= size:
            return not_tag
        if i > start and data[i] == ">":
            return i + 1, kind

        kind = AutolinkType.NOT_AUTOLINK

    end = data.find(">", i)
    if end == -1:
        return not_tag
    return end + 1, kind


def mail_autolink_length(data: str) -> int:
    """Measure the address tail of an email autolink, up to and including ``>``.

    ``data`` starts at the ``@``. The address may hold letters, digits and
    ``-._``, with exactly one ``@`` in this tail.

    Returns:
        Length through the closing ``>``, or 0.

    """
    at_signs = 0
    for i, char in enumerate(data):
        if char.isalnum() or char in "-._":
            continue
        if char == "@":
            at_signs += 1
        elif char == ">":
            return i + 1 if at_signs == 1 else 0
        else:
            return 0
    return 0


def entity_length(data: str) -> int:
    """Measure an entity reference (``&name;``, ``&#123;``) at the start of ``data``.

    Returns:
        Length including ``&`` and ``;``, or 0 for a lone ampersand.

    Examples:
        >>> entity_length("&amp; more")
        5
        >>> entity_length("&#169;")
        6
        >>> entity_length("& x")
        0

    """
    size = len(data)
    end = 1
    if end < size and data[end] == "#":
        end += 1

    name_start = end
    while end < size and data[end].isalnum():
        end += 1

    if end == name_start or end >= size or data[end] != ";":
        return 0
    return end + 1


def is_safe_link(link: str) -> bool:
    """Return True if ``link`` starts with a safe scheme followed by an alphanumeric.

    Example:
        >>> is_safe_link("https://example.com")
        True
        >>> is_safe_link("javascript:alert(1)")
        False

    """
    lowered = link[:8].lower()
    for prefix in SAFE_LINK_PREFIXES:
        n = len(prefix)
        if lowered.startswith(prefix) and len(link) > n and link[n].isalnum():
            return True
    return False


def bare_link_length(data: str) -> int:
    """Measure a bare URL at the start of ``data``.

    The link runs up to whitespace or ``<``. One trailing sentence
    punctuation mark is dropped, then a trailing bracket or quote that has no
    partner inside the link.

    Returns:
        Length of the link, or 0 when ``data`` does not start with a safe link.

    Examples:
        >>> bare_link_length("http://a.com/x. Next")
        14
        >>> bare_link_length("http://a.com/(x))")
        16

    """
    if not is_safe_link(data):
        return 0

    end = 0
    size = len(data)
    while end < size and not data[end].isspace() and data[end] != "<":
        end += 1

    if data[end - 1] in _TRAILING_PUNCTUATION and not (end >= 2 and data[end - 2] == "\\"):
        end -= 1

    closer = data[end - 1]
    opener = _CLOSERS.get(closer)
    if opener is not None:
        link = data[:end]
        if opener == closer:
            unbalanced = link.count(closer) % 2 == 1
        else:
            unbalanced = link.count(closer) > link.count(opener)
        if unbalanced:
            end -= 1

    return end
