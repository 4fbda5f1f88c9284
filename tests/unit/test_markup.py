"""Tests for markdown stripping"""

import pytest

from wordtrail.analysis.markup import MarkupStripper, normalize_whitespace, strip_markup


class TestLineMarkers:
    """Constructs recognised only at the start of a line"""

    def test_heading_marker_removed(self):
        assert strip_markup("# Title") == "Title"
        assert strip_markup("###### Deep heading") == "Deep heading"

    def test_seven_hashes_are_not_a_heading(self):
        assert strip_markup("####### Seven") == "####### Seven"

    def test_hash_inside_line_is_kept(self):
        assert strip_markup("issue #42 is open") == "issue #42 is open"

    def test_quote_markers_removed(self):
        assert strip_markup("> quoted\n>> nested") == "quoted\nnested"

    def test_list_markers_removed(self):
        assert strip_markup("* one\n+ two\n- three") == "one\ntwo\nthree"

    def test_checkboxes_removed_after_list_marker(self):
        assert strip_markup("- [ ] open task\n- [x] done task") == "open task\ndone task"

    def test_checkbox_at_line_start(self):
        assert strip_markup("[X] shipped") == "shipped"

    def test_horizontal_rule_removed_with_its_newline(self):
        assert strip_markup("above\n---\nbelow") == "above\nbelow"

    def test_two_dashes_are_kept(self):
        assert strip_markup("--\nnext") == "--\nnext"

    def test_table_separator_row_removed(self):
        table = "| a | b |\n| --- | --- |\n| 1 | 2 |"
        assert strip_markup(table) == "| a | b |\n| 1 | 2 |"

    def test_table_separator_inside_quote_removed(self):
        assert strip_markup("> | a |\n> |---|\nafter") == "| a |\nafter"

    def test_list_item_with_pipe_and_dash_kept(self):
        text = "- pros | cons of A-B testing\nnext"
        assert strip_markup(text) == "pros | cons of A-B testing\nnext"

    def test_prose_with_pipe_and_dash_kept(self):
        text = "Ratio 3-4 | see notes\nnext"
        assert strip_markup(text) == text


class TestFrontmatter:
    """Leading metadata block"""

    def test_frontmatter_skipped(self):
        text = "---\ntitle: Note\ntags: [x]\n---\nBody text"
        assert strip_markup(text) == "Body text"

    def test_unclosed_frontmatter_is_a_rule(self):
        assert strip_markup("---\nno closing marker") == "no closing marker"

    def test_dashes_later_in_document_are_not_frontmatter(self):
        assert strip_markup("intro\n---\nrest\n---\nend") == "intro\nrest\nend"


class TestSpans:
    """Code and math spans keep their content and lose their delimiters"""

    def test_fenced_block_content_kept(self):
        # The fence content ends with a newline, so one blank line remains.
        assert strip_markup("```\nprint(1)\n```\nafter") == "print(1)\n\nafter"

    def test_inline_code_kept(self):
        assert strip_markup("Use `grep` here") == "Use grep here"

    def test_math_kept(self):
        assert strip_markup("$$x+y$$ and $z$") == "x+y and z"

    def test_markup_inside_code_is_verbatim(self):
        assert strip_markup("`[a](b)` and `<b>`") == "[a](b) and <b>"

    def test_unterminated_span_runs_to_end(self):
        assert strip_markup("start `open [link](x)") == "start open [link](x)"


class TestTags:
    """Tag handling"""

    def test_element_tags_removed(self):
        assert strip_markup("<div>Hello</div> world") == "Hello world"

    def test_comment_removed(self):
        assert strip_markup("a <!-- hidden --> b") == "a b"

    def test_self_closing_tag_removed(self):
        assert strip_markup("line<br/>break") == "linebreak"

    def test_stray_closing_tag_copied(self):
        assert strip_markup("a </b> c") == "a </b> c"

    def test_attribute_with_slash_is_an_opening_tag(self):
        text = '<a href="http://example.com/x">link</a> text'
        assert strip_markup(text) == "link text"

    def test_comparison_is_not_a_tag(self):
        assert strip_markup("a < b and c > d") == "a < b and c > d"

    def test_unclosed_angle_bracket_copied(self):
        assert strip_markup("1 <2") == "1 <2"


class TestLinks:
    """Links and images keep only their text"""

    def test_link_text_kept(self):
        assert strip_markup("See [the docs](http://x.y/z) now") == "See the docs now"

    def test_image_alt_kept(self):
        assert strip_markup("![a diagram](img/flow.png)") == "a diagram"

    def test_brackets_without_target_copied(self):
        assert strip_markup("[not a link] here") == "[not a link] here"

    def test_emphasis_markers_not_stripped(self):
        assert strip_markup("**bold** and _it_") == "**bold** and _it_"


class TestNormalization:
    """Whitespace post-pass"""

    def test_space_runs_collapsed(self):
        assert normalize_whitespace("a   b\t\tc") == "a b c"

    def test_blank_line_runs_collapsed(self):
        assert normalize_whitespace("a\n\n\n\nb") == "a\n\nb"
        assert normalize_whitespace("a\n  \n\nb") == "a\n\nb"

    def test_trimmed(self):
        assert normalize_whitespace("  padded \n") == "padded"

    def test_empty_input(self):
        assert MarkupStripper().strip("") == ""


def test_golden_document():
    raw = "# Title\n\nHello **world**, 123!\n"
    assert strip_markup(raw) == "Title\n\nHello **world**, 123!"


@pytest.mark.parametrize(
    "text",
    [
        "Hello world",
        "Plain sentence, with punctuation!",
        "多言語の text 123",
        "line one\nline two\n\nparagraph",
    ],
)
def test_stripping_plain_text_is_idempotent(text):
    once = strip_markup(text)
    assert strip_markup(once) == once
