"""Multi-format date recognition for TagReader.read_date.

Formats are tried in order at a text position; the first one whose match is
also a valid calendar date wins. Leading whitespace is skipped.

Example:
    >>> match_date("  on 05.03.2024", 5)
    (datetime.date(2024, 3, 5), 15)
    >>> match_date("7 марта 2023", 0, locale="ru")
    (datetime.date(2023, 3, 7), 12)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

from tagreader.utils.logger import get_logger

logger = get_logger(__name__)

MONTH_NAMES: dict[str, dict[str, int]] = {
    "en": {
        "january": 1,
        "february": 2,
        "march": 3,
        "april": 4,
        "may": 5,
        "june": 6,
        "july": 7,
        "august": 8,
        "september": 9,
        "october": 10,
        "november": 11,
        "december": 12,
        "jan": 1,
        "feb": 2,
        "mar": 3,
        "apr": 4,
        "jun": 6,
        "jul": 7,
        "aug": 8,
        "sep": 9,
        "sept": 9,
        "oct": 10,
        "nov": 11,
        "dec": 12,
    },
    "ru": {
        "январь": 1,
        "января": 1,
        "февраль": 2,
        "февраля": 2,
        "март": 3,
        "марта": 3,
        "апрель": 4,
        "апреля": 4,
        "май": 5,
        "мая": 5,
        "июнь": 6,
        "июня": 6,
        "июль": 7,
        "июля": 7,
        "август": 8,
        "августа": 8,
        "сентябрь": 9,
        "сентября": 9,
        "октябрь": 10,
        "октября": 10,
        "ноябрь": 11,
        "ноября": 11,
        "декабрь": 12,
        "декабря": 12,
        "янв": 1,
        "фев": 2,
        "мар": 3,
        "апр": 4,
        "июн": 6,
        "июл": 7,
        "авг": 8,
        "сен": 9,
        "сент": 9,
        "окт": 10,
        "ноя": 11,
        "дек": 12,
    },
}


@dataclass(frozen=True, slots=True)
class DateFormat:
    """One accepted date spelling.

    Attributes:
        name: Human-readable format label, e.g. "DD.MM.YYYY"
        pattern: Regex with named groups ``day``, ``month`` and ``year``
        named_month: The ``month`` group is a month name, not a number
    """

    name: str
    pattern: re.Pattern[str]
    named_month: bool = False


DEFAULT_DATE_FORMATS: tuple[DateFormat, ...] = (
    DateFormat(
        "DD.MM.YYYY",
        re.compile(r"(?P<day>\d{1,2})\.(?P<month>\d{1,2})\.(?P<year>\d{4})(?!\d)"),
    ),
    DateFormat(
        "YYYY-MM-DD",
        re.compile(r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})(?!\d)"),
    ),
    DateFormat(
        "DD/MM/YYYY",
        re.compile(r"(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{4})(?!\d)"),
    ),
    DateFormat(
        "DD Month YYYY",
        re.compile(r"(?P<day>\d{1,2})\s+(?P<month>[^\W\d_]+)\.?,?\s+(?P<year>\d{4})(?!\d)"),
        named_month=True,
    ),
    DateFormat(
        "Month DD, YYYY",
        re.compile(r"(?P<month>[^\W\d_]+)\.?\s+(?P<day>\d{1,2}),?\s+(?P<year>\d{4})(?!\d)"),
        named_month=True,
    ),
)


def _month_number(value: str, named: bool, months: dict[str, int]) -> int | None:
    if not named:
        return int(value)
    return months.get(value.lower())


def match_date(
    text: str,
    pos: int = 0,
    formats: tuple[DateFormat, ...] = DEFAULT_DATE_FORMATS,
    locale: str = "en",
) -> tuple[date, int] | None:
    """Recognize a date starting at pos.

    Args:
        text: Text to read from
        pos: Offset to start at; leading whitespace is skipped
        formats: Formats to try, in order
        locale: Key into MONTH_NAMES for named-month formats

    Returns:
        (date, end offset) for the first format that matches, or None
    """
    months = MONTH_NAMES.get(locale)
    if months is None:
        logger.debug("unknown date locale %r, using 'en' month names", locale)
        months = MONTH_NAMES["en"]

    length = len(text)
    while pos < length and text[pos].isspace():
        pos += 1

    for fmt in formats:
        m = fmt.pattern.match(text, pos)
        if m is None:
            continue
        month = _month_number(m.group("month"), fmt.named_month, months)
        if month is None:
            continue
        try:
            found = date(int(m.group("year")), month, int(m.group("day")))
        except ValueError:
            logger.debug("%s matched %r but is not a calendar date", fmt.name, m.group(0))
            continue
        return found, m.end()
    return None
