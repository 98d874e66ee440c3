"""Sequential tag reader.

TagReader walks HTML/XML-like markup one node at a time. At every moment it
points at exactly one node (a named tag, a closing tag, a comment, a
declaration or a run of text) and exposes that node through read-only
accessors. Searches jump forward, read_html_group captures a balanced
region, set_attr/delete_opt_attr stage edits for export, and
register_compound_attc collects auxiliary files for a bulk export.

Cursor states:
- BEFORE_START: nothing read yet
- POSITIONED: on a consumed node; read_next scans the one after it
- AT_TAG_START: on a tag found by a search but not consumed yet; the
  accessors already describe the tag and read_next consumes it in place

Failed searches and group reads leave the cursor where it was.

Thread Safety:
A TagReader is a single-owner cursor with no internal locking. Share one
between threads only with external serialization. Independent readers
share nothing.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date
from enum import Enum, auto

from tagreader.attachments import AttachmentRegistry, TextSink
from tagreader.attributes import AttributeTable, mask_matches, parse_attr_mask
from tagreader.config import ReaderConfig, get_reader_config
from tagreader.dates import match_date
from tagreader.edits import PendingEdits
from tagreader.errors import (
    InvalidStateError,
    NoDateAtPositionError,
    NotFoundError,
    UnbalancedMarkupError,
)
from tagreader.location import LineIndex, SourceLocation
from tagreader.nodes import (
    BeforeStart,
    ClosingTag,
    Comment,
    MiscText,
    NamedTag,
    Node,
    PlainText,
    TagNode,
)
from tagreader.scanner import Scanner
from tagreader.serialize import export_text, render_tag
from tagreader.utils.logger import get_logger

logger = get_logger(__name__)


class CursorState(Enum):
    """Where the cursor stands relative to its current node."""

    BEFORE_START = auto()
    POSITIONED = auto()
    AT_TAG_START = auto()


class SearchResult(Enum):
    """Outcome of a forward tag search before the call site maps it."""

    FOUND = auto()
    NOT_FOUND = auto()


class TagReader:
    """Cursor over a markup buffer.

    Usage:
        >>> reader = TagReader('<p class="x">Hi</p><!--c-->')
        >>> reader.read_next().tag_name, reader.get_attr("class")
        ('p', 'x')
        >>> reader.read_next().raw_text
        'Hi'
        >>> reader.skip_to_tag_inc("p", is_optional=True)
        False
        >>> for _ in reader:
        ...     pass
        >>> reader.comment
        'c'

    The methods and properties also answer to the host API's spellings
    (ReadNext, TagName, SkipToTag, ...), listed at the end of the class.

    """

    __slots__ = (
        "_attachments",
        "_config",
        "_edits",
        "_fold",
        "_line_index",
        "_node",
        "_scanner",
        "_source",
        "_state",
        "_text_pos",
        "mask_line_breaks",
    )

    def __init__(self, data: str = "", *, config: ReaderConfig | None = None) -> None:
        """Create a reader over data.

        Args:
            data: HTML or XML markup
            config: Reader configuration (the context's active config if None)
        """
        self._config = config if config is not None else get_reader_config()
        self._fold = self._config.force_lower_case
        self.mask_line_breaks = self._config.mask_line_breaks
        self._edits = PendingEdits()
        self._attachments = AttachmentRegistry()
        self.init(data)

    def init(self, data: str) -> TagReader:
        """Reset the reader to read data from the beginning.

        Position, staged edits and registered attachments are discarded.
        The case-fold mode and line-break masking flag are kept.
        """
        if not isinstance(data, str):
            raise TypeError(f"data must be a string, not {type(data).__name__}")
        self._source = data
        self._scanner = Scanner(
            data,
            raw_text_elements=self._config.raw_text_elements,
            void_elements=self._config.void_elements,
        )
        self._line_index: LineIndex | None = None
        self._node: Node = BeforeStart(0, 0)
        self._state = CursorState.BEFORE_START
        self._text_pos: int | None = None
        self._edits.clear()
        self._attachments.clear()
        return self

    # =========================================================================
    # Internal cursor helpers
    # =========================================================================

    def _move_to(self, node: Node, state: CursorState) -> None:
        self._node = node
        self._state = state
        self._text_pos = None
        self._edits.clear()

    def _previous(self) -> Node | None:
        return None if self._state is CursorState.BEFORE_START else self._node

    def _iter_forward(self) -> Iterator[Node]:
        """Nodes after the current one; a pending tag counts as consumed."""
        return self._scanner.iter_nodes(self._node.end, self._previous())

    def _consumed_from(self) -> int:
        """Offset where not-yet-consumed input begins."""
        if self._state is CursorState.AT_TAG_START:
            return self._node.start
        return self._node.end

    def _fold_name(self, name: str) -> str:
        return name.lower() if self._fold else name

    def _name_matches(self, node: Node, wanted: str) -> bool:
        """Match node against a tag name; ``/name`` selects closing tags."""
        if wanted.startswith("/"):
            if not isinstance(node, ClosingTag):
                return False
            wanted = wanted[1:]
        elif not isinstance(node, NamedTag):
            return False
        return self._fold_name(node.name) == self._fold_name(wanted)

    def _location(self, offset: int | None = None) -> SourceLocation:
        if self._line_index is None:
            self._line_index = LineIndex(self._source)
        return self._line_index.location(self.text_pos if offset is None else offset)

    def _search(self, predicate: Callable[[Node], bool]) -> Node | None:
        for node in self._iter_forward():
            if predicate(node):
                return node
        return None

    def _not_found(self, target: str) -> NotFoundError:
        logger.debug("search for %r reached end of input", target)
        return NotFoundError(target, location=self._location())

    # =========================================================================
    # Node accessors
    # =========================================================================

    @property
    def node(self) -> Node:
        """The current node (BeforeStart before the first read)."""
        return self._node

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def data(self) -> str:
        """The buffer being read."""
        return self._source

    @property
    def force_lower_case(self) -> bool:
        """Case-fold mode: compare and report tag/attribute names in lower case."""
        return self._fold

    @force_lower_case.setter
    def force_lower_case(self, value: bool) -> None:
        self._fold = bool(value)

    @property
    def eof(self) -> bool:
        """True once no further node can be read."""
        if self._state is CursorState.AT_TAG_START:
            return False
        return self._node.end >= len(self._source)

    @property
    def tag_name(self) -> str:
        """Name of the current tag; "" for text, comments and declarations."""
        match self._node:
            case NamedTag(name=name) | ClosingTag(name=name):
                return self._fold_name(name)
        return ""

    @property
    def is_group_tag(self) -> bool:
        """True when the current tag opens a balanced region."""
        return isinstance(self._node, NamedTag) and self._node.is_group

    @property
    def is_closing_tag(self) -> bool:
        return isinstance(self._node, ClosingTag)

    @property
    def is_self_closing(self) -> bool:
        return isinstance(self._node, NamedTag) and self._node.self_closing

    @property
    def attr_names(self) -> list[str]:
        """Attribute names of the current tag, in source order."""
        if isinstance(self._node, NamedTag):
            return self._node.attributes.names(fold=self._fold)
        return []

    @property
    def comment(self) -> str | None:
        return self._node.text if isinstance(self._node, Comment) else None

    @property
    def misc_text(self) -> str | None:
        return self._node.text if isinstance(self._node, MiscText) else None

    @property
    def plain_text(self) -> str | None:
        """Text of a text node with character references decoded."""
        return self._node.text if isinstance(self._node, PlainText) else None

    @property
    def raw_text(self) -> str | None:
        """Text of a text node exactly as written in the source."""
        return self._node.raw if isinstance(self._node, PlainText) else None

    @property
    def tag_pos(self) -> int:
        """Offset of the current node from the start of the buffer."""
        return self._node.start

    @property
    def text_pos(self) -> int:
        """Current reading offset; moves inside a text node after read_date."""
        return self._text_pos if self._text_pos is not None else self._node.start

    @property
    def cur_line_index(self) -> int:
        """Zero-based line of the current reading offset."""
        return self._location().lineno - 1

    @property
    def location(self) -> SourceLocation:
        return self._location()

    @property
    def tag_str(self) -> str | None:
        """Canonical form of the current tag, or None when not on a tag."""
        if isinstance(self._node, TagNode):
            return render_tag(self._node, fold=self._fold, edits=self._edits)
        return None

    @property
    def attachments(self) -> AttachmentRegistry:
        return self._attachments

    # =========================================================================
    # Attributes
    # =========================================================================

    def _attributes(self) -> AttributeTable:
        if isinstance(self._node, NamedTag):
            return self._node.attributes
        return AttributeTable()

    def get_attr(self, attr_name: str) -> str:
        """Value of an attribute of the current tag, or "" when absent."""
        return self._attributes().value(attr_name, fold=self._fold)

    def get_bool_attr(self, attr_name: str) -> bool:
        """True when the attribute is present and not zero.

        A bare attribute (``<input checked>``) is true. Numeric values are
        true when non-zero (``"0"`` and ``"0.0"`` are false), an empty value
        is false and any other text is true.
        """
        attr = self._attributes().get(attr_name, fold=self._fold)
        if attr is None:
            return False
        if not attr.has_value:
            return True
        value = attr.value.strip()
        try:
            return float(value) != 0
        except ValueError:
            return bool(value)

    def _require_named_tag(self, operation: str) -> NamedTag:
        if not isinstance(self._node, NamedTag):
            raise InvalidStateError(
                f"{operation} requires a named tag, current node is "
                f"{type(self._node).__name__}",
                self._location(),
            )
        return self._node

    def set_attr(self, attr_name: str, attr_value: str) -> TagReader:
        """Stage a new value for an attribute of the current tag.

        Only the export paths (tag_str, get_tag_str, export_tag) see the
        change; get_attr keeps returning the source value.
        """
        self._require_named_tag("set_attr")
        self._edits.set(attr_name, str(attr_value), fold=self._fold)
        return self

    def delete_opt_attr(self, attr_name: str) -> TagReader:
        """Stage removal of an attribute; a missing attribute is ignored."""
        self._require_named_tag("delete_opt_attr")
        self._edits.delete(attr_name, fold=self._fold)
        return self

    # =========================================================================
    # Navigation
    # =========================================================================

    def read_next(self) -> TagReader:
        """Advance to the next node. At EOF this does nothing."""
        if self._state is CursorState.AT_TAG_START:
            self._state = CursorState.POSITIONED
            self._text_pos = None
            return self
        node = self._scanner.scan(self._node.end, self._previous())
        if node is not None:
            self._move_to(node, CursorState.POSITIONED)
        return self

    def read_html_group(self) -> str:
        """Read from the current tag through its balanced closer.

        For a tag that does not open a group (self-closed, or configured as
        void) only the tag itself is returned. Nested tags with the same
        name are counted; other tags are ignored. The cursor ends on the
        matching closer.

        Raises:
            InvalidStateError: Not positioned on a named tag
            UnbalancedMarkupError: No matching closer before end of input
        """
        opener = self._require_named_tag("read_html_group")
        if not opener.is_group:
            self._state = CursorState.POSITIONED
            return self._source[opener.start : opener.end]

        target = self._fold_name(opener.name)
        depth = 1
        for node in self._scanner.iter_nodes(opener.end, opener):
            if isinstance(node, NamedTag):
                if node.is_group and self._fold_name(node.name) == target:
                    depth += 1
            elif isinstance(node, ClosingTag) and self._fold_name(node.name) == target:
                depth -= 1
                if depth == 0:
                    self._move_to(node, CursorState.POSITIONED)
                    return self._source[opener.start : node.end]

        logger.debug("unbalanced <%s> at offset %d", opener.name, opener.start)
        raise UnbalancedMarkupError(opener.name, self._location(opener.start))

    def read_html_until_tag(self, tag_name: str) -> str:
        """Read markup up to the next tag called tag_name.

        The cursor rests at the start of the found tag. A name starting with
        ``/`` looks for a closing tag.

        Raises:
            NotFoundError: The tag does not occur before end of input
        """
        start = self._consumed_from()
        found = self._search(lambda node: self._name_matches(node, tag_name))
        if found is None:
            raise self._not_found(tag_name)
        self._move_to(found, CursorState.AT_TAG_START)
        return self._source[start : found.start]

    def read_text_until_tag(self, tag_name: str) -> str:
        """Like read_html_until_tag, but returns only the decoded text.

        Raises:
            NotFoundError: The tag does not occur before end of input
        """
        parts: list[str] = []
        for node in self._iter_forward():
            if self._name_matches(node, tag_name):
                self._move_to(node, CursorState.AT_TAG_START)
                return "".join(parts)
            if isinstance(node, PlainText):
                parts.append(node.text)
        raise self._not_found(tag_name)

    def skip_to_plain_text(self, text: str) -> TagReader:
        """Move to the next text node whose decoded text contains text.

        Raises:
            NotFoundError: No such text node before end of input
        """
        found = self._search(lambda node: isinstance(node, PlainText) and text in node.text)
        if found is None:
            raise self._not_found(text)
        self._move_to(found, CursorState.POSITIONED)
        return self

    def _find_tag(self, tag_name: str, attr_mask: str | None) -> tuple[SearchResult, Node | None]:
        mask = parse_attr_mask(attr_mask)

        def matches(node: Node) -> bool:
            if not self._name_matches(node, tag_name):
                return False
            attrs = node.attributes if isinstance(node, NamedTag) else AttributeTable()
            return mask_matches(attrs, mask, fold=self._fold)

        found = self._search(matches)
        if found is None:
            return SearchResult.NOT_FOUND, None
        return SearchResult.FOUND, found

    def _skip_to_tag(
        self,
        tag_name: str,
        attr_mask: str | None,
        is_optional: bool,
        state: CursorState,
    ) -> bool:
        result, found = self._find_tag(tag_name, attr_mask)
        if result is SearchResult.FOUND:
            assert found is not None
            self._move_to(found, state)
            return True
        if is_optional:
            return False
        target = f"{tag_name} [{attr_mask}]" if attr_mask else tag_name
        raise self._not_found(target)

    def skip_to_tag(
        self,
        tag_name: str,
        attr_mask: str | None = None,
        is_optional: bool = False,
    ) -> bool:
        """Move to the start of the next tag matching name and mask.

        The accessors describe the found tag at once; the next read_next
        consumes it without moving.

        Args:
            tag_name: Tag to look for (``/name`` for a closing tag)
            attr_mask: Attribute filter such as ``class=row id="r1"``
            is_optional: Return False instead of raising when not found

        Raises:
            NotFoundError: Not found and is_optional is False
        """
        return self._skip_to_tag(tag_name, attr_mask, is_optional, CursorState.AT_TAG_START)

    def skip_to_tag_inc(
        self,
        tag_name: str,
        attr_mask: str | None = None,
        is_optional: bool = False,
    ) -> bool:
        """Like skip_to_tag, but the found tag is consumed, as after read_next."""
        return self._skip_to_tag(tag_name, attr_mask, is_optional, CursorState.POSITIONED)

    def read_date(self) -> date:
        """Read a date at the current text position.

        Works on the current text node, or on the next node when the cursor
        is not on text and that node is text. On success the text position
        moves past the date, so repeated calls read successive dates.

        Raises:
            NoDateAtPositionError: No accepted format matches here
        """
        current = self._node
        if isinstance(current, PlainText) and self._state is CursorState.POSITIONED:
            text_node: Node | None = current
        else:
            text_node = next(self._iter_forward(), None)
        if not isinstance(text_node, PlainText):
            raise NoDateAtPositionError("", self._location())

        offset = self.text_pos if text_node is current else text_node.start
        found = match_date(
            text_node.raw,
            offset - text_node.start,
            self._config.date_formats,
            self._config.locale,
        )
        if found is None:
            rest = text_node.raw[offset - text_node.start :]
            raise NoDateAtPositionError(rest.strip(), self._location(offset))

        value, end = found
        if text_node is not current:
            self._move_to(text_node, CursorState.POSITIONED)
        self._text_pos = text_node.start + end
        return value

    def get_range_pos(self, start_pos: int, end_pos: int) -> str:
        """Slice of the buffer between two offsets."""
        return self._source[max(start_pos, 0) : max(end_pos, 0)]

    # =========================================================================
    # Export
    # =========================================================================

    def get_tag_str(self) -> str:
        """Canonical form of the current tag with staged edits applied.

        Raises:
            InvalidStateError: Not positioned on a tag
        """
        rendered = self.tag_str
        if rendered is None:
            raise InvalidStateError(
                f"get_tag_str requires a tag, current node is {type(self._node).__name__}",
                self._location(),
            )
        return rendered

    def export_tag(self, dest_stream: TextSink, mask_line_breaks: bool | None = None) -> TagReader:
        """Write the current node to dest_stream.

        Args:
            dest_stream: Object with a text write method
            mask_line_breaks: Override the reader's masking flag for text
        """
        mask = self.mask_line_breaks if mask_line_breaks is None else mask_line_breaks
        dest_stream.write(
            export_text(
                self._node,
                self._source,
                fold=self._fold,
                edits=self._edits,
                mask_breaks=mask,
            )
        )
        return self

    def register_compound_attc(self, file_name: str, data: str) -> str:
        """Register an attachment for export_compound_attc.

        Returns:
            The normalized relative path the attachment is stored under
        """
        return self._attachments.register(file_name, data)

    def export_compound_attc(self, dest_stream: TextSink) -> TagReader:
        """Write all registered attachments to dest_stream."""
        self._attachments.export(dest_stream)
        return self

    # =========================================================================
    # Protocols
    # =========================================================================

    def __iter__(self) -> Iterator[Node]:
        """Read the remaining nodes, yielding each as it becomes current."""
        if self._state is CursorState.AT_TAG_START:
            self.read_next()
            yield self._node
        while not self.eof:
            self.read_next()
            yield self._node

    def __repr__(self) -> str:
        return f"TagReader(state={self._state.name}, pos={self.tag_pos}, node={self._node!r})"

    # =========================================================================
    # Host-API spellings
    # =========================================================================

    AttrNames = attr_names
    Comment = comment
    CurLineIndex = cur_line_index
    EOF = eof
    ForceLowerCase = force_lower_case
    IsGroupTag = is_group_tag
    MiscText = misc_text
    PlainText = plain_text
    RawText = raw_text
    TagName = tag_name
    TagPos = tag_pos
    TagStr = tag_str

    DeleteOptAttr = delete_opt_attr
    ExportCompoundAttc = export_compound_attc
    ExportTag = export_tag
    GetAttr = get_attr
    GetBoolAttr = get_bool_attr
    GetRangePos = get_range_pos
    GetTagStr = get_tag_str
    Init = init
    ReadDate = read_date
    ReadHtmlGroup = read_html_group
    ReadHtmlUntilTag = read_html_until_tag
    ReadNext = read_next
    ReadTextUntilTag = read_text_until_tag
    RegisterCompoundAttc = register_compound_attc
    SetAttr = set_attr
    SkipToPlainText = skip_to_plain_text
    SkipToTag = skip_to_tag
    SkipToTagInc = skip_to_tag_inc
