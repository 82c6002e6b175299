"""Test markdown parser functionality."""

import pytest
from marp_editor.markdown_parser import (
    BulletList,
    Container,
    Heading,
    LiteralText,
    MarkdownParser,
    Paragraph,
    render,
)
from marp_editor.templates import get_template


@pytest.fixture
def parser():
    return MarkdownParser()


def test_basic_markdown_parsing(parser):
    """Test basic markdown to HTML conversion."""
    markdown_text = """# Hello World

This is a paragraph.

## Section 2

- Item 1
- Item 2"""

    html = parser.parse(markdown_text)

    assert "<h1>Hello World</h1>" in html
    assert "<h2>Section 2</h2>" in html
    assert "<p>This is a paragraph.</p>" in html
    assert "<ul><li>Item 1</li><li>Item 2</li></ul>" in html


def test_heading_levels():
    assert render("# Title") == "<h1>Title</h1>"
    assert render("## Title") == "<h2>Title</h2>"
    assert render("### Title") == "<h3>Title</h3>"
    # Only three levels are recognised
    assert render("#### Title") == "<p>#### Title</p>"
    # Marker needs the space
    assert render("#Title") == "<p>#Title</p>"


def test_heading_uses_first_line_only():
    """Lines after the heading line form their own block."""
    html = render("# Title\nBody line")
    assert html == "<h1>Title</h1><p>Body line</p>"


def test_paragraph_newlines_become_breaks():
    """Soft breaks become hard breaks, one per newline."""
    html = render("Line 1\nLine 2\nLine 3")
    assert html == "<p>Line 1<br/>Line 2<br/>Line 3</p>"


def test_list_continuation_lines():
    html = render("- first\n  continued\n- second")
    assert html == "<ul><li>first<br/>continued</li><li>second</li></ul>"


def test_empty_bullet_is_its_own_item():
    assert render("- a\n- \n- b") == "<ul><li>a</li><li></li><li>b</li></ul>"


def test_bullet_marker_followed_only_by_spaces():
    assert render("- a\n-    \n- b") == "<ul><li>a</li><li></li><li>b</li></ul>"


def test_empty_bullet_as_last_line():
    assert render("- a\n- ") == "<ul><li>a</li><li></li></ul>"


def test_leading_empty_bullet_takes_continuation():
    assert render("- \nfoo") == "<ul><li>foo</li></ul>"


def test_empty_bullet_block_structure(parser):
    blocks = parser.tokenize("- \n- x")
    assert blocks == [BulletList(items=[[""], ["x"]])]


def test_multiple_blank_lines_separate_blocks():
    html = render("one\n\n\n\ntwo")
    assert html == "<p>one</p><p>two</p>"


def test_empty_content_handling(parser):
    """Test handling of empty or whitespace content."""
    assert parser.parse("") == ""
    assert parser.parse("   \n\n   ") == ""


def test_single_unclassified_block():
    assert render("just some words") == "<p>just some words</p>"


def test_parser_reset(parser):
    """Test that parser keeps no state between uses."""
    html1 = parser.parse("# First")
    assert "<h1>First</h1>" in html1

    html2 = parser.parse("# Second")
    assert "<h1>Second</h1>" in html2
    assert "First" not in html2

    assert parser.parse("# First") == html1


class TestInlineFormatting:
    """Strong and em substitution."""

    def test_strong(self):
        assert render("**x**") == "<p><strong>x</strong></p>"

    def test_em(self):
        assert render("*x*") == "<p><em>x</em></p>"

    def test_mixed(self):
        html = render("**bold** and *italic*")
        assert html == "<p><strong>bold</strong> and <em>italic</em></p>"

    def test_inline_in_headings_and_lists(self):
        assert render("# A **b**") == "<h1>A <strong>b</strong></h1>"
        assert render("- *a*\n- b") == "<ul><li><em>a</em></li><li>b</li></ul>"

    def test_triple_asterisks_do_not_nest(self):
        """Strong runs first and consumes the first pair; no em is produced."""
        assert render("***x***") == "<p><strong>*x</strong>*</p>"

    def test_attribute_values_untouched(self):
        html = render('<div class="a*b*c">\n\nx\n\n</div>')
        assert html == '<div class="a*b*c"><p>x</p></div>'
        assert "<em>" not in html


class TestContainers:
    """Raw <div class=...> containers."""

    def test_container_interior_is_parsed(self):
        html = render('<div class="columns">\n\n## Left\n\n- a\n- b\n\n</div>')
        assert html == '<div class="columns"><h2>Left</h2><ul><li>a</li><li>b</li></ul></div>'

    def test_two_column_template(self):
        html = render(get_template("twoColumns").content)

        assert html.startswith("<h1>Slide Title</h1>")
        assert (
            '<div class="columns"><div class="col"><h2>Left Column</h2>'
            "<ul><li>Point 1</li><li>Point 2</li><li>Point 3</li></ul></div>"
        ) in html
        assert html.count('<div class="col">') == 2
        assert html.endswith("</div></div>")

    def test_three_column_template(self):
        html = render(get_template("threeColumns").content)
        assert html.count('<div class="col">') == 3
        assert "<h2>Column 3</h2><ul><li>Item X</li><li>Item Y</li></ul>" in html

    def test_unmatched_div_is_literal_text(self):
        html = render('<div class="columns">\n\nhello')

        assert "&lt;div" in html
        assert "<div" not in html
        assert "<p>hello</p>" in html

    def test_div_without_class_is_literal_text(self):
        html = render("<div>\n\nhello\n\n</div>")
        assert "<div" not in html
        assert "&lt;div&gt;" in html

    def test_tokenize_builds_tree(self, parser):
        blocks = parser.tokenize('# T\n\n<div class="columns">\n\n<div class="col">\n\ntext\n\n</div>\n\n</div>')

        assert blocks[0] == Heading(level=1, text="T")
        outer = blocks[1]
        assert isinstance(outer, Container)
        assert outer.open_tag == '<div class="columns">'
        inner = outer.children[0]
        assert isinstance(inner, Container)
        assert inner.children == [Paragraph(lines=["text"])]

    def test_tokenize_block_kinds(self, parser):
        blocks = parser.tokenize("- a\n- b\n\n<div>\n\nplain")
        assert blocks[0] == BulletList(items=[["a"], ["b"]])
        assert blocks[1] == LiteralText(text="<div>")
        assert blocks[2] == Paragraph(lines=["plain"])


class TestSanitizedOutput:
    """Rendered markup is always sanitized."""

    def test_script_removed(self):
        html = render("<script>evil()</script>")
        assert "<script" not in html
        assert "evil" not in html

    def test_event_handler_removed(self):
        html = render('<div class="columns" onclick="evil()">\n\nx\n\n</div>')
        assert html == '<div class="columns"><p>x</p></div>'

    def test_style_attribute_removed(self):
        html = render('<div class="col" style="color:red">\n\nx\n\n</div>')
        assert "style" not in html

    def test_javascript_link_unwrapped(self):
        html = render('click <a href="javascript:alert(1)">here</a>')
        assert html == "<p>click here</p>"

    def test_iframe_dropped(self):
        html = render('before <iframe src="https://example.com">fallback</iframe> after')
        assert "iframe" not in html
        assert "fallback" not in html
        assert "before" in html and "after" in html


class TestGfmFlavor:
    """markdown-it-py backed flavour."""

    def test_unknown_flavor(self):
        with pytest.raises(ValueError):
            MarkdownParser(flavor="rst")

    def test_table_parsing(self):
        parser = MarkdownParser(flavor="gfm")
        html = parser.parse("| Name | Age |\n|------|-----|\n| John | 25  |")

        assert "<table>" in html
        assert "<th>Name</th>" in html
        assert "<td>John</td>" in html

    def test_breaks_enabled(self):
        parser = MarkdownParser(flavor="gfm")
        html = parser.parse("a\nb")
        assert "<br/>" in html

    def test_script_removed(self):
        parser = MarkdownParser(flavor="gfm")
        html = parser.parse("<script>alert(1)</script>\n\ntext")
        assert "script" not in html
        assert "alert" not in html
        assert "<p>text</p>" in html

    def test_columns_kept(self):
        parser = MarkdownParser(flavor="gfm")
        html = parser.parse('<div class="columns">\n\n## A\n\n</div>')
        assert '<div class="columns">' in html
        assert "<h2>A</h2>" in html
