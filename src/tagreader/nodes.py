"""Node variants produced by the scanner.

The reader always points at exactly one node. Nodes form a closed set of
frozen dataclasses, so reader accessors can dispatch with ``match``:

Node (base: start, end)
├── BeforeStart    cursor has not read anything yet
├── NamedTag       <name ...> or <name .../>
├── ClosingTag     </name>
├── Comment        <!-- ... -->
├── MiscText       <!DOCTYPE ...>, <?xml ...?>, <![CDATA[...]]>
└── PlainText      character data between markup

``start``/``end`` are character offsets into the reader's buffer, so the
source text of any node is ``source[node.start:node.end]``.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from tagreader.attributes import AttributeTable
from tagreader.utils.text import decode_entities


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes: a half-open span of the buffer."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class BeforeStart(Node):
    """Initial cursor state: no node has been read."""


@dataclass(frozen=True, slots=True)
class NamedTag(Node):
    """An opening or self-closing element.

    Attributes:
        name: Tag name in source casing
        attributes: Parsed attribute list
        self_closing: Written as ``<name .../>``
        is_group: Opens a balanced region (expects a matching closer)
        terminated: False when the input ended before the closing ``>``
    """

    name: str
    attributes: AttributeTable = field(default_factory=AttributeTable, compare=False)
    self_closing: bool = False
    is_group: bool = True
    terminated: bool = True


@dataclass(frozen=True, slots=True)
class ClosingTag(Node):
    """A closer such as ``</div>``."""

    name: str
    terminated: bool = True


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Comment body, everything between ``<!--`` and ``-->``."""

    text: str
    terminated: bool = True


@dataclass(frozen=True, slots=True)
class MiscText(Node):
    """Declaration, processing instruction or CDATA section.

    ``text`` holds only the non-delimiter characters; ``opener`` and
    ``closer`` are kept so the node can be written back in its own
    delimiters.
    """

    text: str
    opener: str = "<!"
    closer: str = ">"
    terminated: bool = True


@dataclass(frozen=True, slots=True)
class PlainText(Node):
    """Character data between markup, exactly as written.

    raw_element names the enclosing raw-text element (script, style) when
    the text is that element's content.
    """

    raw: str
    raw_element: str | None = None

    @property
    def text(self) -> str:
        """Text with character references decoded."""
        return decode_entities(self.raw)


# Nodes that carry a tag name
TagNode = NamedTag | ClosingTag
