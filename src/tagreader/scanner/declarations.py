"""Declaration scanner mixin: comments, CDATA, <!...> and <?...?>."""

from __future__ import annotations

from tagreader.nodes import Comment, MiscText
from tagreader.scanner.modes import (
    CDATA_CLOSE,
    CDATA_OPEN,
    COMMENT_CLOSE,
    COMMENT_OPEN,
    DECLARATION_CLOSE,
    DECLARATION_OPEN,
    PI_CLOSE,
    PI_OPEN,
)
from tagreader.utils.logger import get_logger

logger = get_logger(__name__)


class DeclarationScannerMixin:
    """Mixin providing scanning for everything that starts with ``<!`` or ``<?``.

    An unterminated construct takes the rest of the buffer as its body and
    is flagged ``terminated=False``.

    """

    # These will be set by the Scanner class
    _source: str
    _source_len: int

    def _find_close(self, body_start: int, closer: str) -> tuple[int, int, bool]:
        """Locate closer at or after body_start.

        Returns:
            (body end, node end, terminated)
        """
        idx = self._source.find(closer, body_start)
        if idx == -1:
            return self._source_len, self._source_len, False
        return idx, idx + len(closer), True

    def _scan_comment(self, pos: int) -> Comment:
        """Scan ``<!-- ... -->``; the body is kept unprocessed."""
        body_start = pos + len(COMMENT_OPEN)
        body_end, end, terminated = self._find_close(body_start, COMMENT_CLOSE)
        if not terminated:
            logger.debug("unterminated comment at offset %d", pos)
        return Comment(
            start=pos,
            end=end,
            text=self._source[body_start:body_end],
            terminated=terminated,
        )

    def _scan_cdata(self, pos: int) -> MiscText:
        """Scan ``<![CDATA[ ... ]]>``."""
        body_start = pos + len(CDATA_OPEN)
        body_end, end, terminated = self._find_close(body_start, CDATA_CLOSE)
        if not terminated:
            logger.debug("unterminated CDATA section at offset %d", pos)
        return MiscText(
            start=pos,
            end=end,
            text=self._source[body_start:body_end],
            opener=CDATA_OPEN,
            closer=CDATA_CLOSE,
            terminated=terminated,
        )

    def _scan_declaration(self, pos: int) -> MiscText:
        """Scan ``<!DOCTYPE html>`` and other ``<!...>`` markup."""
        body_start = pos + len(DECLARATION_OPEN)
        body_end, end, terminated = self._find_close(body_start, DECLARATION_CLOSE)
        if not terminated:
            logger.debug("unterminated declaration at offset %d", pos)
        return MiscText(
            start=pos,
            end=end,
            text=self._source[body_start:body_end],
            opener=DECLARATION_OPEN,
            closer=DECLARATION_CLOSE,
            terminated=terminated,
        )

    def _scan_processing_instruction(self, pos: int) -> MiscText:
        """Scan ``<?xml ...?>``. A bare ``>`` closer is accepted as well."""
        body_start = pos + len(PI_OPEN)
        gt = self._source.find(">", body_start)
        if gt == -1:
            logger.debug("unterminated processing instruction at offset %d", pos)
            return MiscText(
                start=pos,
                end=self._source_len,
                text=self._source[body_start:],
                opener=PI_OPEN,
                closer=PI_CLOSE,
                terminated=False,
            )

        closer = PI_CLOSE if gt > body_start and self._source[gt - 1] == "?" else ">"
        return MiscText(
            start=pos,
            end=gt + 1,
            text=self._source[body_start : gt + 1 - len(closer)],
            opener=PI_OPEN,
            closer=closer,
        )
