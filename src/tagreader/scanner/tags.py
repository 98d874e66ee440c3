"""Tag scanner mixin: opening, self-closing and closing tags."""

from __future__ import annotations

from tagreader.attributes import parse_attributes
from tagreader.nodes import ClosingTag, NamedTag
from tagreader.scanner.modes import NAME_END, WHITESPACE
from tagreader.utils.logger import get_logger

logger = get_logger(__name__)


def _slash_closes_tag(body: str) -> bool:
    """True when a trailing ``/`` in a start tag body marks self-closing.

    The ``/`` must stand on its own: right after the tag name, after
    whitespace, after a quoted value or after a bare attribute name. A
    ``/`` that ends an unquoted value (``<a href=/docs/>``) is part of the
    value.
    """
    if not body.endswith("/"):
        return False
    head = body[:-1]
    if not head or head[-1] in WHITESPACE or head[-1] in "\"'":
        return True
    if head[-1] == "=":
        return False
    token_start = len(head)
    while token_start > 0 and head[token_start - 1] not in WHITESPACE:
        token_start -= 1
    if "=" in head[token_start:]:
        return False
    # A bare token is a value when '=' precedes it across whitespace
    return not head[:token_start].rstrip().endswith("=")


class TagScannerMixin:
    """Mixin providing tag scanning.

    Both scanners assume the caller already checked that ``pos`` starts a
    tag (``<`` + name start, or ``</`` + name start).

    """

    # These will be set by the Scanner class
    _source: str
    _source_len: int
    _void_elements: frozenset[str]

    def _scan_name(self, pos: int) -> int:
        """Return the offset just past the tag name starting at pos."""
        source = self._source
        end = self._source_len
        while pos < end and source[pos] not in NAME_END:
            pos += 1
        return pos

    def _find_tag_end(self, pos: int) -> tuple[int, bool]:
        """Find the ``>`` that closes a start tag.

        A ``>`` inside a quoted attribute value does not end the tag. A
        quote with no partner is ignored so a stray quote cannot swallow
        the rest of the document.

        Returns:
            (offset of ``>`` or end of input, whether ``>`` was found)
        """
        source = self._source
        end = self._source_len
        while pos < end:
            ch = source[pos]
            if ch == ">":
                return pos, True
            pos += 1
            if ch != "=":
                continue
            while pos < end and source[pos] in WHITESPACE:
                pos += 1
            if pos < end and source[pos] in "\"'":
                close = source.find(source[pos], pos + 1)
                if close != -1:
                    pos = close + 1
        return end, False

    def _scan_named_tag(self, pos: int) -> NamedTag:
        """Scan ``<name attrs>`` or ``<name attrs/>``."""
        name_end = self._scan_name(pos + 1)
        name = self._source[pos + 1 : name_end]
        close, terminated = self._find_tag_end(name_end)

        body = self._source[name_end:close]
        stripped = body.rstrip()
        self_closing = terminated and _slash_closes_tag(stripped)
        if self_closing:
            body = stripped[:-1]
        if not terminated:
            logger.debug("unterminated tag <%s at offset %d", name, pos)

        return NamedTag(
            start=pos,
            end=close + 1 if terminated else close,
            name=name,
            attributes=parse_attributes(body),
            self_closing=self_closing,
            is_group=not self_closing and name.lower() not in self._void_elements,
            terminated=terminated,
        )

    def _scan_closing_tag(self, pos: int) -> ClosingTag:
        """Scan ``</name>``; anything between the name and ``>`` is dropped."""
        name_end = self._scan_name(pos + 2)
        close = self._source.find(">", name_end)
        terminated = close != -1
        if not terminated:
            close = self._source_len
            logger.debug("unterminated closing tag at offset %d", pos)
        return ClosingTag(
            start=pos,
            end=close + 1 if terminated else close,
            name=self._source[pos + 2 : name_end],
            terminated=terminated,
        )
