"""Exception classes for tagreader.

Every failure a caller can observe from a TagReader is a subclass of
TagReaderError. Malformed markup is never an error by itself: the scanner
degrades to best-effort tokenization. Only bounded operations that have an
explicit target (searches, group extraction, date reading) raise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagreader.location import SourceLocation


class TagReaderError(Exception):
    """Base exception for all tagreader errors.

    Args:
        message: Error description
        location: Position in the buffer the error refers to (optional)
    """

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        self.message = message
        self.location = location
        if location is not None:
            super().__init__(f"{location} {message}")
        else:
            super().__init__(message)


class NotFoundError(TagReaderError, LookupError):
    """A mandatory search reached the end of the buffer without a match.

    Raised by read_html_until_tag, read_text_until_tag, skip_to_plain_text
    and by skip_to_tag / skip_to_tag_inc when the search is not optional.
    """

    def __init__(
        self,
        target: str,
        message: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        self.target = target
        super().__init__(message or f"{target!r} not found before end of input", location)


class UnbalancedMarkupError(TagReaderError):
    """Group extraction reached the end of input before the matching closer."""

    def __init__(self, tag_name: str, location: SourceLocation | None = None) -> None:
        self.tag_name = tag_name
        super().__init__(f"no closing tag for <{tag_name}> before end of input", location)


class NoDateAtPositionError(TagReaderError, ValueError):
    """read_date found no recognized date format at the text position."""

    def __init__(self, text: str, location: SourceLocation | None = None) -> None:
        self.text = text
        preview = text if len(text) <= 30 else text[:27] + "..."
        super().__init__(f"no date at current position: {preview!r}", location)


class InvalidStateError(TagReaderError):
    """The current node does not satisfy the operation's precondition.

    For example read_html_group while positioned on text, or set_attr while
    positioned on a comment.
    """

    pass
