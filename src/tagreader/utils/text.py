"""Text processing utilities for tagreader.

Attribute escaping for canonical tag output, entity decoding for plain text
and attribute values, and line-break masking for text export.

Example:
    >>> from tagreader.utils.text import escape_attr, mask_line_breaks
    >>> escape_attr('say "hi" & <go>')
    'say &quot;hi&quot; &amp; &lt;go&gt;'
    >>> mask_line_breaks("a\\r\\nb")
    'a&#13;&#10;b'
"""

from __future__ import annotations

import html as html_module
import re

# Entity spellings used when masking line breaks on export
CR_ENTITY = "&#13;"
LF_ENTITY = "&#10;"

_MASK_PATTERN = re.compile(r"[\r\n]")
_UNMASK_PATTERN = re.compile(r"&#(?:(13|10)|[xX]0*([dDaA]));")

_MASKS = {"\r": CR_ENTITY, "\n": LF_ENTITY}


def escape_attr(value: str) -> str:
    """Escape an attribute value for use inside double quotes.

    Minimal XML attribute escaping: & < > and " only. Single quotes are left
    alone since canonical output always uses double quotes.
    """
    if not value:
        return ""
    return html_module.escape(value, quote=False).replace('"', "&quot;")


def decode_entities(text: str) -> str:
    """Replace character references (&amp;, &#10;, &nbsp; ...) with characters."""
    if "&" not in text:
        return text
    return html_module.unescape(text)


def mask_line_breaks(text: str) -> str:
    """Replace every CR and LF with its numeric character reference.

    CRLF therefore becomes the two-entity sequence ``&#13;&#10;``.
    """
    return _MASK_PATTERN.sub(lambda m: _MASKS[m.group(0)], text)


def unmask_line_breaks(text: str) -> str:
    """Inverse of mask_line_breaks; other entities are left untouched."""
    return _UNMASK_PATTERN.sub(_unmask_one, text)


def _unmask_one(match: re.Match[str]) -> str:
    code = match.group(1) or match.group(2)
    return "\r" if code in ("13", "d", "D") else "\n"
