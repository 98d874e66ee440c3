"""Attribute tables for named tags.

parse_attributes turns the attribute-list part of a tag (everything between
the tag name and the closing ``>``) into an ordered AttributeTable. The
parser is permissive in the same way the scanner is: it never raises, and a
stray quote or ``=`` is skipped rather than reported.

Quoting rules:
- ``name="value"`` and ``name='value'``: value runs to the matching quote,
  or to the end of the text when the quote is never closed
- ``name=value``: unquoted value ends at whitespace or ``>``
- ``name``: bare attribute, value ``""`` and has_value False

Values are entity-decoded, so ``title="a &amp; b"`` reads back as
``"a & b"``. Duplicate names keep the first occurrence.

Thread Safety:
AttributeTable is not mutated after parsing; Attribute is frozen.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from tagreader.utils.text import decode_entities

_NAME_STOPS = frozenset(" \t\n\r\f=>/\"'")
_UNQUOTED_STOPS = frozenset(" \t\n\r\f>")
_WHITESPACE = frozenset(" \t\n\r\f")


@dataclass(frozen=True, slots=True)
class Attribute:
    """One attribute as written in the source.

    Attributes:
        name: Attribute name in source casing
        value: Entity-decoded value ("" for bare attributes)
        has_value: False for a bare attribute such as ``checked``
    """

    name: str
    value: str = ""
    has_value: bool = True


class AttributeTable:
    """Ordered attribute-name to Attribute mapping.

    Storage keeps source casing. Lookups take a ``fold`` flag that compares
    names case-insensitively, which is how the reader threads its case-fold
    mode through every name comparison.

    Usage:
        >>> table = parse_attributes(' HREF="/x" checked')
        >>> table.value("href")
        '/x'
        >>> table.value("href", fold=False)
        ''
        >>> table.names()
        ['href', 'checked']
    """

    __slots__ = ("_attrs", "_exact", "_folded")

    def __init__(self, attrs: list[Attribute] | None = None) -> None:
        self._attrs: list[Attribute] = []
        self._exact: dict[str, Attribute] = {}
        self._folded: dict[str, Attribute] = {}
        for attr in attrs or ():
            self._add(attr)

    def _add(self, attr: Attribute) -> None:
        if attr.name in self._exact:
            return
        self._attrs.append(attr)
        self._exact[attr.name] = attr
        self._folded.setdefault(attr.name.lower(), attr)

    def get(self, name: str, *, fold: bool = True) -> Attribute | None:
        """Return the attribute called name, or None."""
        if fold:
            return self._folded.get(name.lower())
        return self._exact.get(name)

    def value(self, name: str, *, fold: bool = True) -> str:
        """Return the attribute's value, or "" when it is absent."""
        attr = self.get(name, fold=fold)
        return attr.value if attr is not None else ""

    def names(self, *, fold: bool = True) -> list[str]:
        """Attribute names in source order, lower-cased when fold is set.

        With fold set, names that differ only in case are reported once.
        """
        if not fold:
            return [attr.name for attr in self._attrs]
        return [attr.name.lower() for attr in self._folded.values()]

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __bool__(self) -> bool:
        return bool(self._attrs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeTable):
            return NotImplemented
        return self._attrs == other._attrs

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{a.name}={a.value!r}" if a.has_value else a.name for a in self._attrs
        )
        return f"AttributeTable({inner})"


def parse_attributes(text: str) -> AttributeTable:
    """Parse an attribute list into an AttributeTable.

    Args:
        text: The part of a tag after its name, without the closing ``>``
            (a trailing ``/`` is tolerated and ignored)

    Returns:
        AttributeTable in source order
    """
    attrs: list[Attribute] = []
    pos = 0
    length = len(text)

    while pos < length:
        ch = text[pos]
        if ch in _WHITESPACE or ch == "/":
            pos += 1
            continue

        start = pos
        while pos < length and text[pos] not in _NAME_STOPS:
            pos += 1
        if pos == start:
            # Stray quote, '=' or '>': not a name start
            pos += 1
            continue
        name = text[start:pos]

        after_name = pos
        while pos < length and text[pos] in _WHITESPACE:
            pos += 1
        if pos >= length or text[pos] != "=":
            attrs.append(Attribute(name, "", has_value=False))
            pos = after_name
            continue

        pos += 1
        while pos < length and text[pos] in _WHITESPACE:
            pos += 1
        if pos < length and text[pos] in "\"'":
            quote = text[pos]
            end = text.find(quote, pos + 1)
            if end == -1:
                end = length
            raw_value = text[pos + 1 : end]
            pos = end + 1
        else:
            start = pos
            while pos < length and text[pos] not in _UNQUOTED_STOPS:
                pos += 1
            raw_value = text[start:pos]

        attrs.append(Attribute(name, decode_entities(raw_value)))

    return AttributeTable(attrs)


def parse_attr_mask(mask: str | None) -> AttributeTable | None:
    """Parse an attribute mask used by tag searches.

    A mask is written like an attribute list: ``class=row id="r1"``. Every
    valued entry must match exactly; a bare name only requires presence.
    Returns None for an empty mask, which matches every tag.
    """
    if not mask or not mask.strip():
        return None
    return parse_attributes(mask)


def mask_matches(table: AttributeTable, mask: AttributeTable | None, *, fold: bool) -> bool:
    """Return True when table satisfies every entry of mask."""
    if mask is None:
        return True
    for wanted in mask:
        attr = table.get(wanted.name, fold=fold)
        if attr is None:
            return False
        if wanted.has_value and attr.value != wanted.value:
            return False
    return True
