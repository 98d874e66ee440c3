"""Source location tracking for error messages and line reporting.

Provides SourceLocation for reporting positions in the reader's buffer and
LineIndex, which maps character offsets to line numbers.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.
LineIndex is built once per buffer and never mutated afterwards.

"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

# \r\n counts as a single break; lone \r and \n each end a line too
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    Positions are 1-indexed (lineno and col_offset start at 1), matching
    what editors display. TagReader.cur_line_index is the zero-based
    counterpart of lineno.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute character offset in the buffer

    Examples:
        >>> loc = SourceLocation(lineno=2, col_offset=5, offset=17)
        >>> str(loc)
        '2:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0

    def __str__(self) -> str:
        """Format location for error messages, e.g. "10:5"."""
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder location for positions outside any buffer."""
        return cls(lineno=0, col_offset=0)


class LineIndex:
    """Offset-to-line lookup table for one buffer.

    The table of line-start offsets is computed once; each lookup is a
    binary search.

    Usage:
        >>> index = LineIndex("a\\nbc\\r\\nd")
        >>> index.line_of(0), index.line_of(3), index.line_of(6)
        (0, 1, 2)
    """

    __slots__ = ("_starts",)

    def __init__(self, source: str) -> None:
        self._starts: list[int] = [0]
        self._starts.extend(m.end() for m in _LINE_BREAK.finditer(source))

    def line_of(self, offset: int) -> int:
        """Zero-based line containing offset."""
        return bisect_right(self._starts, offset) - 1

    def location(self, offset: int) -> SourceLocation:
        """1-indexed SourceLocation for offset."""
        line = self.line_of(offset)
        return SourceLocation(
            lineno=line + 1,
            col_offset=offset - self._starts[line] + 1,
            offset=offset,
        )

    def __len__(self) -> int:
        """Number of lines in the buffer."""
        return len(self._starts)
