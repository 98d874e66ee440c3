"""Markup scanner for tagreader.

Splits HTML/XML-like text into nodes without building a tree.

Architecture:
scanner/
├── __init__.py          # Re-exports Scanner, ScanMode
├── core.py              # Scanner class (mixin composition + dispatch)
├── modes.py             # ScanMode enum, delimiter constants
├── tags.py              # <name ...>, <name/>, </name>
├── declarations.py      # <!-- -->, <![CDATA[ ]]>, <!...>, <?...?>
└── text.py              # character data, raw-text element content

Usage:
    >>> from tagreader.scanner import Scanner
    >>> for node in Scanner("<b>bold</b>").iter_nodes():
    ...     print(node.start, node.end)
    0 3
    3 7
    7 11

"""

from tagreader.scanner.core import Scanner
from tagreader.scanner.modes import ScanMode

__all__ = ["ScanMode", "Scanner"]
