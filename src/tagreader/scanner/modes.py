"""Scanner operating modes and delimiter constants."""

from __future__ import annotations

from enum import Enum, auto


class ScanMode(Enum):
    """Scanner operating modes.

    - MARKUP: normal scanning, ``<`` may start a tag, comment or declaration
    - RAW_TEXT: inside a raw-text element (script, style); everything up to
      the element's closer is text

    """

    MARKUP = auto()
    RAW_TEXT = auto()


COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"
DECLARATION_OPEN = "<!"
DECLARATION_CLOSE = ">"
PI_OPEN = "<?"
PI_CLOSE = "?>"

WHITESPACE = frozenset(" \t\n\r\f")

# Characters that end a tag name
NAME_END = frozenset(" \t\n\r\f/>")


def is_name_start(ch: str) -> bool:
    """True when ch can start a tag name (so ``<`` + ch opens a tag)."""
    return bool(ch) and (ch.isalpha() or ch in "_:")
