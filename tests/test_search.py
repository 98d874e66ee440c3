"""Tests for forward searches: skip_to_tag, read_*_until_tag, skip_to_plain_text."""

import pytest

from tagreader import CursorState, NotFoundError, TagReader

LIST = '<ul><li id="a" class="x">One</li><li id="b">Two</li></ul>'
MIXED = "<div><b>x</b> &amp; y<hr></div>"


class TestSkipToTag:
    """skip_to_tag leaves the found tag pending; skip_to_tag_inc consumes it."""

    def test_found_tag_is_pending(self) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag("li") is True
        assert reader.state is CursorState.AT_TAG_START
        assert reader.tag_name == "li"
        assert reader.get_attr("id") == "a"
        assert not reader.eof

    def test_read_next_consumes_pending_tag_in_place(self) -> None:
        reader = TagReader(LIST)
        reader.skip_to_tag("li")
        pos = reader.tag_pos
        reader.read_next()
        assert reader.state is CursorState.POSITIONED
        assert reader.tag_pos == pos
        assert reader.tag_name == "li"
        reader.read_next()
        assert reader.plain_text == "One"

    def test_inc_consumes_found_tag(self) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag_inc("li") is True
        assert reader.state is CursorState.POSITIONED
        reader.read_next()
        assert reader.plain_text == "One"

    def test_repeated_search_moves_past_pending_tag(self) -> None:
        """A pending tag is never its own next match."""
        reader = TagReader(LIST)
        reader.skip_to_tag("li")
        reader.skip_to_tag("li")
        assert reader.get_attr("id") == "b"

    def test_mask_with_value(self) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag("li", "id=b")
        assert reader.get_attr("id") == "b"

    def test_mask_with_quoted_value_and_several_entries(self) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag("li", 'class="x" id="a"')
        assert reader.tag_pos == LIST.index("<li")

    def test_mask_bare_name_requires_presence(self) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag("li", "class")
        assert reader.get_attr("id") == "a"

    @pytest.mark.parametrize("mask", [None, "", "   "])
    def test_empty_mask_matches_any(self, mask: str | None) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag("li", mask)

    def test_mask_value_must_match_exactly(self) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag("li", "id=A", is_optional=True) is False

    def test_closing_tag_search(self) -> None:
        reader = TagReader(LIST)
        assert reader.skip_to_tag("/li")
        assert reader.is_closing_tag
        assert reader.tag_pos == LIST.index("</li>")

    def test_name_search_ignores_closing_tags(self) -> None:
        reader = TagReader("</p><p>")
        reader.skip_to_tag("p")
        assert reader.tag_pos == 4

    def test_search_folds_case(self) -> None:
        reader = TagReader(LIST.upper())
        assert reader.skip_to_tag("li", "ID=B")

    def test_search_exact_case_when_fold_off(self) -> None:
        reader = TagReader(LIST)
        reader.force_lower_case = False
        assert reader.skip_to_tag("LI", is_optional=True) is False
        assert reader.skip_to_tag("li", "ID=b", is_optional=True) is False
        assert reader.skip_to_tag("li", "id=b", is_optional=True) is True

    def test_optional_miss_leaves_cursor(self) -> None:
        reader = TagReader(LIST)
        reader.read_next()
        node = reader.node
        assert reader.skip_to_tag("table", is_optional=True) is False
        assert reader.node is node
        assert reader.state is CursorState.POSITIONED

    def test_mandatory_miss_raises(self) -> None:
        reader = TagReader(LIST)
        with pytest.raises(NotFoundError) as exc_info:
            reader.skip_to_tag("table")
        assert exc_info.value.target == "table"
        assert "table" in str(exc_info.value)
        assert reader.state is CursorState.BEFORE_START

    def test_mandatory_miss_with_mask_names_mask(self) -> None:
        reader = TagReader(LIST)
        with pytest.raises(NotFoundError, match="id=z"):
            reader.skip_to_tag_inc("li", "id=z")

    def test_not_found_is_lookup_error(self) -> None:
        reader = TagReader(LIST)
        with pytest.raises(LookupError):
            reader.skip_to_tag("table")

    def test_search_at_eof(self) -> None:
        reader = TagReader(LIST)
        for _ in reader:
            pass
        assert reader.skip_to_tag("li", is_optional=True) is False


class TestReadUntilTag:
    """read_html_until_tag and read_text_until_tag."""

    def test_html_until_tag(self) -> None:
        reader = TagReader(MIXED)
        reader.read_next()
        assert reader.read_html_until_tag("hr") == "<b>x</b> &amp; y"
        assert reader.state is CursorState.AT_TAG_START
        assert reader.tag_name == "hr"
        reader.read_next()
        assert reader.tag_name == "hr"
        reader.read_next()
        assert reader.is_closing_tag

    def test_html_until_tag_from_start(self) -> None:
        reader = TagReader(MIXED)
        assert reader.read_html_until_tag("b") == "<div>"

    def test_html_until_tag_includes_pending_tag(self) -> None:
        reader = TagReader(MIXED)
        reader.skip_to_tag("b")
        assert reader.read_html_until_tag("hr") == "<b>x</b> &amp; y"

    def test_html_until_closing_tag(self) -> None:
        reader = TagReader(MIXED)
        reader.read_next()
        assert reader.read_html_until_tag("/div") == "<b>x</b> &amp; y<hr>"
        assert reader.is_closing_tag

    def test_html_until_adjacent_tag_is_empty(self) -> None:
        reader = TagReader(MIXED)
        reader.read_next()
        assert reader.read_html_until_tag("b") == ""

    def test_text_until_tag_decodes(self) -> None:
        reader = TagReader(MIXED)
        reader.read_next()
        assert reader.read_text_until_tag("hr") == "x & y"
        assert reader.state is CursorState.AT_TAG_START
        assert reader.tag_name == "hr"

    def test_until_tag_not_found(self) -> None:
        reader = TagReader(MIXED)
        reader.read_next()
        with pytest.raises(NotFoundError):
            reader.read_html_until_tag("table")
        with pytest.raises(NotFoundError):
            reader.read_text_until_tag("table")
        assert reader.tag_name == "div"
        assert reader.state is CursorState.POSITIONED


class TestSkipToPlainText:
    """skip_to_plain_text matches decoded text."""

    def test_finds_text_node(self) -> None:
        reader = TagReader(LIST)
        reader.skip_to_plain_text("Two")
        assert reader.plain_text == "Two"
        assert reader.state is CursorState.POSITIONED

    def test_substring_match_on_decoded_text(self) -> None:
        reader = TagReader(MIXED)
        reader.skip_to_plain_text("& y")
        assert reader.raw_text == " &amp; y"

    def test_not_found_raises(self) -> None:
        reader = TagReader(LIST)
        reader.read_next()
        with pytest.raises(NotFoundError):
            reader.skip_to_plain_text("Three")
        assert reader.tag_name == "ul"

    def test_tag_text_is_not_matched(self) -> None:
        reader = TagReader('<a title="Two">x</a>')
        with pytest.raises(NotFoundError):
            reader.skip_to_plain_text("Two")
