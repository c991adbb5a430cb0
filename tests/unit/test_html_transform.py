#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the raw HTML policy transform."""

import pytest

from md2asciidoc.ast import (
    Code,
    CommentInline,
    Document,
    Emphasis,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
    extract_text,
)
from md2asciidoc.transforms import HtmlPolicyTransform

BOLD_ITALIC_CODE = (
    "<p><strong>strong emphasis (aka bold)</strong> <em>emphasis (aka italic)</em> <code>monospace</code></p>"
)


def transform_block(raw, html_to_native=True):
    doc = Document(children=[HTMLBlock(content=raw)])
    return HtmlPolicyTransform(html_to_native=html_to_native).transform(doc).children[0]


def transform_inline(content, html_to_native=True):
    doc = Document(children=[Paragraph(content=content)])
    return HtmlPolicyTransform(html_to_native=html_to_native).transform(doc).children[0].content


@pytest.mark.unit
class TestHtmlBlocksToNative:
    """Tests for HTML blocks with html_to_native enabled."""

    def test_phrasing_paragraph_becomes_native(self):
        """Test that a <p> of simple phrasing markup becomes a Paragraph."""
        node = transform_block(BOLD_ITALIC_CODE)
        assert isinstance(node, Paragraph)
        kinds = [type(child) for child in node.content]
        assert kinds == [Strong, Text, Emphasis, Text, Code]
        assert node.content[4].content == "monospace"

    def test_tag_aliases(self):
        """Test b, i, kbd and del aliases."""
        node = transform_block("<p><b>a</b><i>b</i><kbd>c</kbd><del>d</del></p>")
        assert [type(child) for child in node.content] == [Strong, Emphasis, Code, Strikethrough]

    def test_link_image_and_break(self):
        """Test anchors, images and line breaks."""
        node = transform_block('<p><a href="https://example.org">site</a><br><img src="a.png" alt="A"></p>')
        link, line_break, image = node.content
        assert isinstance(link, Link) and link.url == "https://example.org"
        assert extract_text(link.content) == "site"
        assert isinstance(line_break, LineBreak) and not line_break.soft
        assert isinstance(image, Image) and image.alt_text == "A"

    def test_whitespace_is_collapsed_and_trimmed(self):
        """Test that source whitespace runs collapse."""
        node = transform_block("<p>\n  one\n  <b>two</b>\n</p>")
        assert extract_text(node.content) == "one two"

    def test_anchor_without_href_stays_html(self):
        """Test that a non-native element keeps the whole block raw."""
        node = transform_block('<p><a name="x">anchor</a></p>')
        assert isinstance(node, HTMLBlock)

    def test_structural_html_stays_html(self):
        """Test that block markup is left for passthrough."""
        node = transform_block("<div>\n<p>x</p>\n</div>")
        assert isinstance(node, HTMLBlock)

    def test_empty_paragraph_stays_html(self):
        """Test that a block with no content is left alone."""
        assert isinstance(transform_block("<p></p>"), HTMLBlock)


@pytest.mark.unit
class TestHtmlBlocksPassthrough:
    """Tests for HTML blocks with html_to_native disabled."""

    def test_phrasing_block_split_per_tag(self):
        """Test that each tag becomes its own passthrough node."""
        node = transform_block(BOLD_ITALIC_CODE, html_to_native=False)
        assert isinstance(node, Paragraph)
        raw_tags = [child.content for child in node.content if isinstance(child, HTMLInline)]
        assert raw_tags == ["<p>", "<strong>", "</strong>", "<em>", "</em>", "<code>", "</code>", "</p>"]
        texts = [child.content for child in node.content if isinstance(child, Text)]
        assert texts == ["strong emphasis (aka bold)", " ", "emphasis (aka italic)", " ", "monospace"]

    def test_entities_are_decoded(self):
        """Test that text between tags is unescaped."""
        node = transform_block("<span>a &amp; b</span>", html_to_native=False)
        assert [child.content for child in node.content if isinstance(child, Text)] == ["a & b"]

    def test_comments_become_inline_comments(self):
        """Test that an embedded comment is kept as a comment."""
        node = transform_block("<span>a<!-- note --></span>", html_to_native=False)
        assert any(isinstance(child, CommentInline) and child.content == "note" for child in node.content)

    def test_structural_html_verbatim(self):
        """Test that structural HTML stays one block."""
        node = transform_block("<table><tr><td>x</td></tr></table>", html_to_native=False)
        assert isinstance(node, HTMLBlock)


@pytest.mark.unit
class TestInlineHtml:
    """Tests for inline HTML pairing."""

    def test_pair_becomes_native(self):
        """Test that a matched start/end tag pair becomes a native node."""
        content = transform_inline(
            [Text(content="a "), HTMLInline(content="<b>"), Text(content="bold"), HTMLInline(content="</b>")]
        )
        assert isinstance(content[0], Text)
        assert isinstance(content[1], Strong)
        assert extract_text(content[1].content) == "bold"
        assert len(content) == 2

    def test_nested_pairs(self):
        """Test that pairs nest."""
        content = transform_inline(
            [
                HTMLInline(content="<em>"),
                HTMLInline(content="<code>"),
                Text(content="x"),
                HTMLInline(content="</code>"),
                HTMLInline(content="</em>"),
            ]
        )
        assert isinstance(content[0], Emphasis)
        assert isinstance(content[0].content[0], Code)

    def test_anchor_pair(self):
        """Test that an anchor pair becomes a link."""
        content = transform_inline(
            [HTMLInline(content='<a href="u" title="T">'), Text(content="x"), HTMLInline(content="</a>")]
        )
        assert isinstance(content[0], Link)
        assert content[0].url == "u"
        assert content[0].title == "T"

    def test_void_tags(self):
        """Test br and img."""
        content = transform_inline([HTMLInline(content="<br/>"), HTMLInline(content='<img src="x.png">')])
        assert isinstance(content[0], LineBreak)
        assert isinstance(content[1], Image)

    def test_unmatched_and_unknown_tags_kept(self):
        """Test that an unmatched start tag and non-native tags stay raw."""
        content = transform_inline(
            [HTMLInline(content="<b>"), Text(content="x"), HTMLInline(content="<span>"), HTMLInline(content="</span>")]
        )
        assert [type(node) for node in content] == [HTMLInline, Text, HTMLInline, HTMLInline]

    def test_disabled_policy_keeps_inline_html(self):
        """Test that nothing is paired when html_to_native is off."""
        content = transform_inline(
            [HTMLInline(content="<b>"), Text(content="x"), HTMLInline(content="</b>")], html_to_native=False
        )
        assert [type(node) for node in content] == [HTMLInline, Text, HTMLInline]
