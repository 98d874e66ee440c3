"""Canonical rendering and export text for nodes.

Canonical form of a named tag: ``<name a="v" flag>``, or ``<name a="v"/>``
when self-closed. Values are always double-quoted and escaped with
escape_attr; bare attributes stay bare; names are reported-case (lower-cased
in case-fold mode). Rendering an unedited tag twice, or re-parsing and
rendering again, gives the same string.

export_text decides what ExportTag writes for each node kind:

| Node | Written |
|---|---|
| NamedTag, unedited and terminated | source text, original casing |
| NamedTag, edited or unterminated | canonical form |
| ClosingTag | source text, or ``</name>`` when unterminated |
| Comment | ``<!--text-->`` |
| MiscText | opener + text + closer |
| PlainText | source text, line breaks optionally masked |
| PlainText inside script/style | source text, never masked |

"""

from __future__ import annotations

from tagreader.edits import PendingEdits
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
from tagreader.utils.text import escape_attr, mask_line_breaks


def _name(name: str, fold: bool) -> str:
    return name.lower() if fold else name


def render_tag(
    node: TagNode,
    *,
    fold: bool = True,
    edits: PendingEdits | None = None,
) -> str:
    """Render a tag in canonical form with staged edits applied.

    Args:
        node: Tag to render
        fold: Lower-case tag and attribute names
        edits: Staged overrides (ignored for closing tags)

    Returns:
        Canonical tag text
    """
    if isinstance(node, ClosingTag):
        return f"</{_name(node.name, fold)}>"

    pending = edits if edits is not None else PendingEdits()
    parts = ["<", _name(node.name, fold)]
    for name, value in pending.apply(node.attributes, fold=fold):
        if value is None:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{escape_attr(value)}"')
    parts.append("/>" if node.self_closing else ">")
    return "".join(parts)


def export_text(
    node: Node,
    source: str,
    *,
    fold: bool = True,
    edits: PendingEdits | None = None,
    mask_breaks: bool = True,
) -> str:
    """Text ExportTag writes for node.

    Args:
        node: Current node
        source: Buffer the node was scanned from
        fold: Case-fold mode, used only when rendering canonically
        edits: Staged overrides for a named tag
        mask_breaks: Mask CR/LF in plain text outside raw-text elements

    Returns:
        Export text ("" for BeforeStart)
    """
    match node:
        case NamedTag():
            if edits or not node.terminated:
                return render_tag(node, fold=fold, edits=edits)
            return source[node.start : node.end]
        case ClosingTag():
            if not node.terminated:
                return render_tag(node, fold=fold)
            return source[node.start : node.end]
        case Comment():
            return f"<!--{node.text}-->"
        case MiscText():
            return f"{node.opener}{node.text}{node.closer}"
        case PlainText():
            if mask_breaks and node.raw_element is None:
                return mask_line_breaks(node.raw)
            return node.raw
        case BeforeStart():
            return ""
    raise TypeError(f"unknown node type: {type(node).__name__}")
