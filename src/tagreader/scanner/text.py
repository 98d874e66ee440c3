"""Text scanner mixin: character data and raw-text element content."""

from __future__ import annotations

import re
from functools import lru_cache

from tagreader.nodes import PlainText
from tagreader.scanner.modes import is_name_start


@lru_cache(maxsize=32)
def _raw_text_closer(name: str) -> re.Pattern[str]:
    """Pattern for the closer of a raw-text element, any casing."""
    return re.compile(r"</" + re.escape(name) + r"(?=[\s/>]|$)", re.IGNORECASE)


class TextScannerMixin:
    """Mixin providing text scanning.

    A ``<`` that cannot start markup (``a < b``, ``</ >``) is literal text
    and does not end the text node.

    """

    # These will be set by the Scanner class
    _source: str
    _source_len: int

    def _is_markup_start(self, pos: int) -> bool:
        """True when the ``<`` at pos opens a tag, comment or declaration."""
        nxt = self._source[pos + 1 : pos + 2]
        if nxt in ("!", "?"):
            return True
        if nxt == "/":
            return is_name_start(self._source[pos + 2 : pos + 3])
        return is_name_start(nxt)

    def _scan_text(self, pos: int) -> PlainText:
        """Scan character data from pos up to the next markup start."""
        source = self._source
        cursor = pos + 1
        while True:
            idx = source.find("<", cursor)
            if idx == -1:
                end = self._source_len
                break
            if self._is_markup_start(idx):
                end = idx
                break
            cursor = idx + 1
        return PlainText(start=pos, end=end, raw=source[pos:end])

    def _scan_raw_text(self, pos: int, element: str) -> PlainText | None:
        """Scan the content of a raw-text element up to its closer.

        Returns None when the closer follows immediately (empty content).
        """
        m = _raw_text_closer(element).search(self._source, pos)
        end = m.start() if m is not None else self._source_len
        if end == pos:
            return None
        return PlainText(
            start=pos, end=end, raw=self._source[pos:end], raw_element=element.lower()
        )
