"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


def make_large_document(rows: int = 2000) -> str:
    """Generate a table-heavy HTML page (~250KB for the default size)."""
    parts = [
        "<!DOCTYPE html>\n<html><head><title>Report</title>",
        "<style>td { padding: 2px } tr.odd { background: #eee }</style>",
        "<script>var rows = document.querySelectorAll('tr'); if (rows.length < 1) {}</script>",
        "</head><body>\n<table id=\"report\">",
    ]
    for i in range(rows):
        parts.append(
            f'<tr class="{"odd" if i % 2 else "even"}" data-id={i}>'
            f"<td>{i:05d}</td><td>{(i % 28) + 1:02d}.{(i % 12) + 1:02d}.2024</td>"
            f'<td><a href="/item/{i}?x=1&amp;y=2">Item &amp; {i}</a><br/></td>'
            f"<!-- row {i} --></tr>\n"
        )
    parts.append("</table></body></html>")
    return "".join(parts)


@pytest.fixture
def large_document() -> str:
    """A large generated HTML page."""
    return make_large_document()


@pytest.fixture
def real_world_snippets() -> list[str]:
    """Collection of hand-written and ill-formed markup patterns."""
    return [
        "<p>Hello <b>world</b>!",
        '<ul><li class=item>One<li class=item>Two<li class="item last">Three</ul>',
        "<div><img src=logo.png alt='Logo'><br>text & more < less</div>",
        '<?xml version="1.0"?><feed><entry><title>A &amp; B</title></entry></feed>',
        "<table><tr><td>01.02.2024<td>March 3, 2024</table>",
        "<a href=\"unterminated>link</a><!-- trailing comment",
    ]
