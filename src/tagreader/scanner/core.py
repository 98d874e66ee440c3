"""Fault-tolerant markup scanner.

Splits a buffer into nodes one at a time. The scanner keeps no position of
its own: every call names the offset to scan from, so the reader can look
ahead, back off after a failed search, or restart at any node boundary.

The scanner never raises on ill-formed markup. An unterminated tag, comment
or declaration takes the rest of the buffer as its body.

Thread Safety:
Scanner instances hold only the immutable source and configuration.
Scanning from several threads at once is safe.

"""

from __future__ import annotations

from collections.abc import Iterator

from tagreader.nodes import NamedTag, Node
from tagreader.scanner.declarations import DeclarationScannerMixin
from tagreader.scanner.modes import (
    CDATA_OPEN,
    COMMENT_OPEN,
    ScanMode,
    is_name_start,
)
from tagreader.scanner.tags import TagScannerMixin
from tagreader.scanner.text import TextScannerMixin


class Scanner(
    TagScannerMixin,
    DeclarationScannerMixin,
    TextScannerMixin,
):
    """Markup scanner producing one node per call.

    Usage:
        >>> scanner = Scanner("<p>Hi</p>")
        >>> [type(n).__name__ for n in scanner.iter_nodes()]
        ['NamedTag', 'PlainText', 'ClosingTag']

    Adjacent markup never yields an empty text node: ``<a></a>`` is exactly
    two nodes.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_raw_text_elements",
        "_void_elements",
    )

    def __init__(
        self,
        source: str,
        *,
        raw_text_elements: frozenset[str] = frozenset(),
        void_elements: frozenset[str] = frozenset(),
    ) -> None:
        """Initialize scanner with source text.

        Args:
            source: Markup to scan
            raw_text_elements: Lower-case names whose content is raw text
            void_elements: Lower-case names never treated as group openers
        """
        self._source = source
        self._source_len = len(source)
        self._raw_text_elements = raw_text_elements
        self._void_elements = void_elements

    def mode_after(self, node: Node | None) -> ScanMode:
        """Scan mode for the offset that follows node."""
        if (
            isinstance(node, NamedTag)
            and node.is_group
            and node.terminated
            and node.name.lower() in self._raw_text_elements
        ):
            return ScanMode.RAW_TEXT
        return ScanMode.MARKUP

    def scan(self, pos: int, previous: Node | None = None) -> Node | None:
        """Scan the node starting at pos.

        Args:
            pos: Offset to scan from
            previous: The node that ended at pos, used to pick the scan mode

        Returns:
            The next node, or None at end of input.
        """
        if pos >= self._source_len:
            return None
        if self.mode_after(previous) is ScanMode.RAW_TEXT:
            assert isinstance(previous, NamedTag)
            node = self._scan_raw_text(pos, previous.name)
            if node is not None:
                return node
        return self._dispatch(pos)

    def _dispatch(self, pos: int) -> Node:
        """Classify the construct at pos and hand it to its scanner."""
        source = self._source
        if source[pos] == "<":
            nxt = source[pos + 1 : pos + 2]
            if nxt == "!":
                if source.startswith(COMMENT_OPEN, pos):
                    return self._scan_comment(pos)
                if source.startswith(CDATA_OPEN, pos):
                    return self._scan_cdata(pos)
                return self._scan_declaration(pos)
            if nxt == "?":
                return self._scan_processing_instruction(pos)
            if nxt == "/" and is_name_start(source[pos + 2 : pos + 3]):
                return self._scan_closing_tag(pos)
            if is_name_start(nxt):
                return self._scan_named_tag(pos)
        return self._scan_text(pos)

    def iter_nodes(self, pos: int = 0, previous: Node | None = None) -> Iterator[Node]:
        """Yield successive nodes from pos to the end of input.

        Complexity: O(n) where n = len(source) - pos
        """
        while True:
            node = self.scan(pos, previous)
            if node is None:
                return
            yield node
            pos = node.end
            previous = node
