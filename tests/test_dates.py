"""Tests for date recognition and TagReader.read_date."""

import re
from datetime import date

import pytest

from tagreader import (
    DEFAULT_DATE_FORMATS,
    DateFormat,
    NoDateAtPositionError,
    ReaderConfig,
    TagReader,
    match_date,
)


class TestMatchDate:
    """match_date tries each format in order at one position."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("01.02.2024", date(2024, 2, 1)),
            ("1.2.2024", date(2024, 2, 1)),
            ("2024-02-01", date(2024, 2, 1)),
            ("01/02/2024", date(2024, 2, 1)),
            ("1 February 2024", date(2024, 2, 1)),
            ("1 Feb. 2024", date(2024, 2, 1)),
            ("February 1, 2024", date(2024, 2, 1)),
            ("Sept 9 2021", date(2021, 9, 9)),
        ],
    )
    def test_formats(self, text: str, expected: date) -> None:
        found = match_date(text)
        assert found == (expected, len(text))

    def test_leading_whitespace_skipped(self) -> None:
        assert match_date("  \t05.03.2024 rest") == (date(2024, 3, 5), 13)

    def test_starts_at_pos(self) -> None:
        text = "from 01.01.2020 to 02.02.2021"
        first = match_date(text, 5)
        assert first == (date(2020, 1, 1), 15)
        assert match_date(text, first[1]) is None
        assert match_date(text, 19) == (date(2021, 2, 2), len(text))

    def test_russian_month_names(self) -> None:
        assert match_date("7 марта 2023", locale="ru") == (date(2023, 3, 7), 12)
        assert match_date("7 марта 2023") is None

    def test_unknown_locale_falls_back_to_english(self) -> None:
        assert match_date("7 March 2023", locale="xx") == (date(2023, 3, 7), 12)

    @pytest.mark.parametrize(
        "text",
        ["31.02.2024", "01.13.2024", "01.02.20245", "hello", "", "7 Smarch 2023"],
    )
    def test_no_date(self, text: str) -> None:
        assert match_date(text) is None

    def test_trailing_letters_do_not_block_match(self) -> None:
        assert match_date("2024-1-1x") == (date(2024, 1, 1), 8)

    def test_custom_formats(self) -> None:
        iso_only = (
            DateFormat(
                "YYYYMMDD",
                re.compile(r"(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})"),
            ),
        )
        assert match_date("20240201", formats=iso_only) == (date(2024, 2, 1), 8)
        assert match_date("01.02.2024", formats=iso_only) is None

    def test_default_format_order(self) -> None:
        assert [f.name for f in DEFAULT_DATE_FORMATS] == [
            "DD.MM.YYYY",
            "YYYY-MM-DD",
            "DD/MM/YYYY",
            "DD Month YYYY",
            "Month DD, YYYY",
        ]


class TestReadDate:
    """read_date on the reader moves the text position past each date."""

    def test_reads_next_text_node(self) -> None:
        reader = TagReader("<td>01.02.2024</td>")
        reader.skip_to_tag_inc("td")
        assert reader.read_date() == date(2024, 2, 1)
        assert reader.plain_text == "01.02.2024"
        assert reader.text_pos == 14

    def test_reads_current_text_node(self) -> None:
        reader = TagReader("<p>March 7, 2024</p>")
        reader.read_next().read_next()
        assert reader.read_date() == date(2024, 3, 7)

    def test_successive_dates(self) -> None:
        reader = TagReader("<p>2024-01-05 05/06/2023</p>")
        reader.read_next().read_next()
        assert reader.read_date() == date(2024, 1, 5)
        assert reader.text_pos == 13
        assert reader.read_date() == date(2023, 6, 5)
        with pytest.raises(NoDateAtPositionError):
            reader.read_date()

    def test_locale_from_config(self) -> None:
        reader = TagReader("<p>7 марта 2023</p>", config=ReaderConfig(locale="ru"))
        reader.read_next()
        assert reader.read_date() == date(2023, 3, 7)

    def test_text_pos_resets_on_advance(self) -> None:
        reader = TagReader("<p>01.01.2020</p>")
        reader.read_next()
        reader.read_date()
        reader.read_next()
        assert reader.text_pos == reader.tag_pos

    def test_invalid_date_raises(self) -> None:
        reader = TagReader("<p>31.02.2024</p>")
        reader.read_next()
        with pytest.raises(NoDateAtPositionError) as exc_info:
            reader.read_date()
        assert exc_info.value.text == "31.02.2024"
        assert reader.tag_name == "p"

    def test_next_node_not_text_raises(self) -> None:
        reader = TagReader("<p><b>01.01.2020</b></p>")
        reader.read_next()
        with pytest.raises(NoDateAtPositionError):
            reader.read_date()

    def test_error_is_value_error(self) -> None:
        reader = TagReader("no date")
        reader.read_next()
        with pytest.raises(ValueError):
            reader.read_date()

    def test_read_date_before_start(self) -> None:
        reader = TagReader("05.05.2005")
        assert reader.read_date() == date(2005, 5, 5)
        assert reader.eof
