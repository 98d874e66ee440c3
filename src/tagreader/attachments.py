"""Compound attachments registered while processing a document.

When a reader is used to rewrite HTML, auxiliary files met along the way
(inline images, stylesheets) can be registered under a relative path and
written out in one batch afterwards.

Registration policy: last write wins. Registering a path again replaces its
content but keeps the position of the first registration, so re-running a
traversal over the same document exports the same sequence.

Export format: each entry is two netstrings, ``<len>:<path>,`` followed by
``<len>:<content>,``, lengths counted in characters.

Example:
    >>> registry = AttachmentRegistry()
    >>> registry.register("img/logo.svg", "<svg/>")
    'img/logo.svg'
    >>> buf = io.StringIO()
    >>> registry.export(buf)
    >>> buf.getvalue()
    '12:img/logo.svg,6:<svg/>,'
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol, TextIO

from tagreader.utils.logger import get_logger

logger = get_logger(__name__)


class TextSink(Protocol):
    """Anything with a text ``write`` method (files, io.StringIO, ...)."""

    def write(self, s: str, /) -> object: ...


@dataclass(frozen=True, slots=True)
class CompoundAttachment:
    """One registered attachment."""

    relative_path: str
    content: str


def normalize_path(file_name: str) -> str:
    """Normalize an attachment name to a relative posix path.

    Backslashes become slashes and ``.`` segments are dropped.

    Raises:
        ValueError: The name is empty, absolute, or climbs out with ``..``
    """
    path = PurePosixPath(file_name.replace("\\", "/"))
    if path.is_absolute() or (path.parts and path.parts[0].endswith(":")):
        raise ValueError(f"attachment path must be relative: {file_name!r}")
    if ".." in path.parts:
        raise ValueError(f"attachment path must not contain '..': {file_name!r}")
    normalized = str(path)
    if normalized in ("", "."):
        raise ValueError("attachment path must not be empty")
    return normalized


class AttachmentRegistry:
    """Insertion-ordered attachment table owned by a TagReader."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, CompoundAttachment] = {}

    def register(self, file_name: str, data: str) -> str:
        """Register data under file_name; returns the normalized path."""
        path = normalize_path(file_name)
        if path in self._entries:
            logger.debug("attachment %r registered again, replacing content", path)
        self._entries[path] = CompoundAttachment(path, data)
        return path

    def get(self, path: str) -> CompoundAttachment | None:
        return self._entries.get(normalize_path(path))

    def clear(self) -> None:
        self._entries.clear()

    def export(self, stream: TextSink) -> None:
        """Write every entry to stream in registration order."""
        for entry in self._entries.values():
            stream.write(_netstring(entry.relative_path))
            stream.write(_netstring(entry.content))

    def save(self, directory: str | Path) -> list[Path]:
        """Write each attachment as a UTF-8 file below directory.

        Returns:
            Paths written, in registration order
        """
        root = Path(directory)
        written: list[Path] = []
        for entry in self._entries.values():
            target = root.joinpath(*PurePosixPath(entry.relative_path).parts)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(entry.content, encoding="utf-8")
            written.append(target)
        return written

    def __iter__(self) -> Iterator[CompoundAttachment]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            return normalize_path(path) in self._entries
        except ValueError:
            return False


def _netstring(value: str) -> str:
    return f"{len(value)}:{value},"


def _read_netstring(stream: TextIO) -> str | None:
    """Read one netstring; None at clean end of input."""
    digits = []
    while True:
        ch = stream.read(1)
        if not ch:
            if digits:
                raise ValueError("truncated netstring length")
            return None
        if ch == ":":
            break
        if not ch.isdigit():
            raise ValueError(f"invalid netstring length character {ch!r}")
        digits.append(ch)
    if not digits:
        raise ValueError("missing netstring length")
    length = int("".join(digits))
    value = stream.read(length)
    if len(value) != length or stream.read(1) != ",":
        raise ValueError("truncated netstring")
    return value


def read_compound_attachments(source: str | TextIO) -> list[CompoundAttachment]:
    """Parse the output of AttachmentRegistry.export.

    Raises:
        ValueError: The input is not a sequence of path/content netstrings
    """
    stream = io.StringIO(source) if isinstance(source, str) else source
    entries: list[CompoundAttachment] = []
    while True:
        path = _read_netstring(stream)
        if path is None:
            return entries
        content = _read_netstring(stream)
        if content is None:
            raise ValueError(f"attachment {path!r} has no content")
        entries.append(CompoundAttachment(path, content))
