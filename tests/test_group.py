"""Tests for read_html_group balanced-region extraction."""

import pytest

from tagreader import (
    HTML_VOID_ELEMENTS,
    CursorState,
    InvalidStateError,
    ReaderConfig,
    TagReader,
    UnbalancedMarkupError,
)


def reader_on_first_tag(source: str, **config) -> TagReader:
    reader = TagReader(source, config=ReaderConfig(**config))
    reader.read_next()
    return reader


class TestBalancedGroups:
    """Depth counting over tags with the opener's name."""

    def test_simple_group(self) -> None:
        reader = reader_on_first_tag("<div><p>a</p></div>tail")
        assert reader.read_html_group() == "<div><p>a</p></div>"
        assert reader.is_closing_tag
        assert reader.tag_name == "div"
        reader.read_next()
        assert reader.plain_text == "tail"

    def test_same_name_nesting(self) -> None:
        reader = reader_on_first_tag("<div><div>x</div></div><div>y</div>")
        assert reader.read_html_group() == "<div><div>x</div></div>"
        assert reader.tag_pos == len("<div><div>x</div>")

    def test_other_tags_ignored(self) -> None:
        """Unbalanced tags of other names do not affect the depth."""
        reader = reader_on_first_tag("<li><p>one<br></li>")
        assert reader.read_html_group() == "<li><p>one<br></li>"

    def test_self_closing_inner_same_name(self) -> None:
        reader = reader_on_first_tag("<div><div/>x</div>")
        assert reader.read_html_group() == "<div><div/>x</div>"

    def test_group_from_pending_tag(self) -> None:
        reader = TagReader('<ul><li id="a">One</li><li id="b">Two</li></ul>')
        reader.skip_to_tag("li", "id=b")
        assert reader.read_html_group() == '<li id="b">Two</li>'
        assert reader.state is CursorState.POSITIONED

    def test_group_folds_case(self) -> None:
        reader = reader_on_first_tag("<DIV>x</div>")
        assert reader.read_html_group() == "<DIV>x</div>"

    def test_group_exact_case_when_fold_off(self) -> None:
        reader = reader_on_first_tag("<DIV>x</div>", force_lower_case=False)
        with pytest.raises(UnbalancedMarkupError):
            reader.read_html_group()

    def test_comments_and_raw_text_are_opaque(self) -> None:
        source = "<div><!-- </div> --><script>'</div>'</script></div>"
        reader = reader_on_first_tag(source)
        assert reader.read_html_group() == source

    def test_unquoted_value_ending_in_slash_opens_group(self) -> None:
        reader = reader_on_first_tag("<a href=/docs/>Docs</a><p>x</p>")
        assert reader.get_attr("href") == "/docs/"
        assert reader.tag_str == '<a href="/docs/">'
        assert reader.read_html_group() == "<a href=/docs/>Docs</a>"
        reader.read_next()
        assert reader.tag_name == "p"

    def test_sibling_groups(self) -> None:
        reader = TagReader("<p>1</p><p>2</p>")
        groups = []
        while reader.skip_to_tag_inc("p", is_optional=True):
            groups.append(reader.read_html_group())
        assert groups == ["<p>1</p>", "<p>2</p>"]


class TestNonGroupTags:
    """Tags that open no region return only themselves."""

    def test_self_closing(self) -> None:
        reader = reader_on_first_tag("<div/><p>")
        assert reader.read_html_group() == "<div/>"
        reader.read_next()
        assert reader.tag_name == "p"

    def test_configured_void_element(self) -> None:
        reader = reader_on_first_tag("<br><p>", void_elements=HTML_VOID_ELEMENTS)
        assert not reader.is_group_tag
        assert reader.read_html_group() == "<br>"

    def test_pending_void_element_is_consumed(self) -> None:
        reader = TagReader("<img src=x><p>", config=ReaderConfig(void_elements=HTML_VOID_ELEMENTS))
        reader.skip_to_tag("img")
        assert reader.read_html_group() == "<img src=x>"
        assert reader.state is CursorState.POSITIONED


class TestGroupErrors:
    """Preconditions and missing closers."""

    def test_unbalanced_raises_and_keeps_cursor(self) -> None:
        reader = reader_on_first_tag("<div><p>x</p>")
        node = reader.node
        with pytest.raises(UnbalancedMarkupError) as exc_info:
            reader.read_html_group()
        assert exc_info.value.tag_name == "div"
        assert exc_info.value.location is not None
        assert str(exc_info.value.location) == "1:1"
        assert reader.node is node

    def test_unbalanced_location_points_at_opener(self) -> None:
        reader = TagReader("<p>\n  <div>x")
        reader.skip_to_tag_inc("div")
        with pytest.raises(UnbalancedMarkupError, match="2:3"):
            reader.read_html_group()

    @pytest.mark.parametrize("steps", [0, 2, 3])
    def test_requires_named_tag(self, steps: int) -> None:
        """Before start, on text and on a closer there is no group to read."""
        reader = TagReader("<p>x</p>")
        for _ in range(steps):
            reader.read_next()
        with pytest.raises(InvalidStateError):
            reader.read_html_group()

    def test_on_comment(self) -> None:
        reader = reader_on_first_tag("<!-- c --><p></p>")
        with pytest.raises(InvalidStateError):
            reader.read_html_group()
