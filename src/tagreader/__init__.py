"""
tagreader: Sequential reader for HTML and XML markup

A cursor that walks markup one node at a time: named tags, closing tags,
comments, declarations and text. Tolerates hand-written, ill-formed HTML,
supports forward searches, balanced-region extraction, attribute edits with
canonical re-serialization, attachment bookkeeping and date extraction.
Zero runtime dependencies.

Quick Start:
    >>> from tagreader import TagReader
    >>> reader = TagReader('<ul><li id="a">One</li><li id="b">Two</li></ul>')
    >>> reader.skip_to_tag("li", "id=b")
    True
    >>> reader.read_html_group()
    '<li id="b">Two</li>'

    >>> # Rewrite attributes while copying a document
    >>> import io
    >>> out = io.StringIO()
    >>> reader = TagReader('<A HREF="/x">x</A>')
    >>> for node in reader:
    ...     if reader.tag_name == "a" and not reader.is_closing_tag:
    ...         reader.set_attr("rel", "nofollow")
    ...     _ = reader.export_tag(out)
    >>> out.getvalue()
    '<a href="/x" rel="nofollow">x</A>'

Host-API spellings (ReadNext, TagName, SkipToTag, ...) are available as
aliases of the Python names.
"""

from tagreader.attachments import (
    AttachmentRegistry,
    CompoundAttachment,
    read_compound_attachments,
)
from tagreader.attributes import Attribute, AttributeTable, parse_attr_mask, parse_attributes
from tagreader.config import (
    HTML_VOID_ELEMENTS,
    RAW_TEXT_ELEMENTS,
    ReaderConfig,
    get_reader_config,
    reader_config_context,
    reset_reader_config,
    set_reader_config,
)
from tagreader.dates import DEFAULT_DATE_FORMATS, DateFormat, match_date
from tagreader.errors import (
    InvalidStateError,
    NoDateAtPositionError,
    NotFoundError,
    TagReaderError,
    UnbalancedMarkupError,
)
from tagreader.location import SourceLocation
from tagreader.nodes import (
    BeforeStart,
    ClosingTag,
    Comment,
    MiscText,
    NamedTag,
    Node,
    PlainText,
)
from tagreader.reader import CursorState, SearchResult, TagReader
from tagreader.scanner import Scanner
from tagreader.serialize import render_tag

__version__ = "0.1.0"


def read_nodes(data: str, *, config: ReaderConfig | None = None) -> list[Node]:
    """Scan data and return every node in order.

    Example:
        >>> [type(n).__name__ for n in read_nodes("<b>x</b>")]
        ['NamedTag', 'PlainText', 'ClosingTag']
    """
    return list(TagReader(data, config=config))


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "TagReader",
    "CursorState",
    "SearchResult",
    "read_nodes",
    # Nodes
    "Node",
    "BeforeStart",
    "NamedTag",
    "ClosingTag",
    "Comment",
    "MiscText",
    "PlainText",
    # Attributes
    "Attribute",
    "AttributeTable",
    "parse_attributes",
    "parse_attr_mask",
    # Scanner and rendering
    "Scanner",
    "render_tag",
    # Attachments
    "AttachmentRegistry",
    "CompoundAttachment",
    "read_compound_attachments",
    # Dates
    "DateFormat",
    "DEFAULT_DATE_FORMATS",
    "match_date",
    # Configuration (ContextVar-based)
    "ReaderConfig",
    "HTML_VOID_ELEMENTS",
    "RAW_TEXT_ELEMENTS",
    "get_reader_config",
    "set_reader_config",
    "reset_reader_config",
    "reader_config_context",
    # Errors
    "TagReaderError",
    "NotFoundError",
    "UnbalancedMarkupError",
    "NoDateAtPositionError",
    "InvalidStateError",
    # Location
    "SourceLocation",
]
