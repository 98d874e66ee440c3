"""Staged attribute edits for the current tag.

set_attr and delete_opt_attr never touch the buffer. They record an edit
here, and the serializer applies the edits when rendering the canonical
form. The reader clears its PendingEdits on every advance.
"""

from __future__ import annotations

from collections.abc import Iterator

from tagreader.attributes import AttributeTable

# (name, value) pairs ready for rendering; value None means a bare attribute
RenderedAttr = tuple[str, str | None]


class PendingEdits:
    """Ordered set/delete overrides keyed by attribute name.

    Later edits of the same name replace earlier ones, so
    ``set("x", "1")`` followed by ``delete("x")`` removes ``x``.

    Usage:
        >>> from tagreader.attributes import parse_attributes
        >>> edits = PendingEdits()
        >>> edits.set("Title", "new", fold=True)
        >>> edits.delete("id", fold=True)
        >>> table = parse_attributes('id=a title="old" class=c')
        >>> edits.apply(table, fold=True)
        [('title', 'new'), ('class', 'c')]
    """

    __slots__ = ("_edits",)

    def __init__(self) -> None:
        # key -> (name as given, new value or None for delete)
        self._edits: dict[str, tuple[str, str | None]] = {}

    @staticmethod
    def _key(name: str, fold: bool) -> str:
        return name.lower() if fold else name

    def set(self, name: str, value: str, *, fold: bool) -> None:
        """Stage a replacement or addition."""
        key = self._key(name, fold)
        self._edits.pop(key, None)
        self._edits[key] = (name, value)

    def delete(self, name: str, *, fold: bool) -> None:
        """Stage a removal; harmless when the attribute does not exist."""
        key = self._key(name, fold)
        self._edits.pop(key, None)
        self._edits[key] = (name, None)

    def clear(self) -> None:
        self._edits.clear()

    def apply(self, table: AttributeTable, *, fold: bool) -> list[RenderedAttr]:
        """Merge edits into table, keeping source order.

        Replaced attributes stay in place, deleted ones are dropped and new
        ones are appended in the order they were staged.
        """
        rendered: list[RenderedAttr] = []
        seen: set[str] = set()
        for attr in table:
            key = self._key(attr.name, fold)
            if key in seen:
                # Duplicate once names are folded; first occurrence wins
                continue
            seen.add(key)
            name = attr.name.lower() if fold else attr.name
            edit = self._edits.get(key)
            if edit is None:
                rendered.append((name, attr.value if attr.has_value else None))
            elif edit[1] is not None:
                rendered.append((name, edit[1]))

        for key, (name, value) in self._edits.items():
            if key in seen or value is None:
                continue
            rendered.append((name.lower() if fold else name, value))
        return rendered

    def __bool__(self) -> bool:
        return bool(self._edits)

    def __len__(self) -> int:
        return len(self._edits)

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        return iter(self._edits.values())
