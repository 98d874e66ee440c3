"""Utility modules for tagreader.

Provides:
- text: attribute escaping, entity decoding, line-break masking
- logger: get_logger for logging
"""

from tagreader.utils.logger import get_logger
from tagreader.utils.text import (
    decode_entities,
    escape_attr,
    mask_line_breaks,
    unmask_line_breaks,
)

__all__ = [
    "decode_entities",
    "escape_attr",
    "get_logger",
    "mask_line_breaks",
    "unmask_line_breaks",
]
