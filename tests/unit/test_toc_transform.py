#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for TOC marker replacement."""

import pytest

from md2asciidoc.ast import BlockQuote, Comment, Document, List, ListItem, Paragraph, Text, TocMacro
from md2asciidoc.options import ConversionOptions
from md2asciidoc.transforms import TocMarkerTransform, TransformContext, is_toc_end, parse_toc_begin


def toc_list():
    return List(ordered=False, items=[ListItem(children=[Paragraph(content=[Text(content="Intro")])])])


def run(children):
    context = TransformContext.create(ConversionOptions())
    result = TocMarkerTransform(context).transform(Document(children=children))
    return result, context


@pytest.mark.unit
class TestMarkerParsing:
    """Tests for parse_toc_begin and is_toc_end."""

    def test_begin_without_parameters(self):
        """Test the full default range."""
        assert parse_toc_begin("TOC") == (1, 6)

    def test_begin_with_parameters(self):
        """Test depthFrom and depthTo parsing, case-insensitively."""
        assert parse_toc_begin("TOC depthFrom:2 depthTo:3") == (2, 3)
        assert parse_toc_begin("toc depthfrom:2") == (2, 6)

    def test_begin_clamps_levels(self):
        """Test that out of range depths are clamped and ordered."""
        assert parse_toc_begin("TOC depthFrom:0 depthTo:9") == (1, 6)
        assert parse_toc_begin("TOC depthFrom:4 depthTo:2") == (4, 4)

    def test_not_a_begin_marker(self):
        """Test that other comments are not begin markers."""
        assert parse_toc_begin("/TOC") is None
        assert parse_toc_begin("TOCTOU race") is None
        assert parse_toc_begin("note") is None

    def test_end_marker(self):
        """Test end marker recognition."""
        assert is_toc_end("/TOC")
        assert is_toc_end(" /toc ")
        assert not is_toc_end("TOC")


@pytest.mark.unit
class TestTocMarkerTransform:
    """Tests for TocMarkerTransform."""

    def test_replaces_marked_range(self):
        """Test that the markers and the list between them become one macro."""
        result, context = run([Comment(content="TOC"), toc_list(), Comment(content="/TOC"), Paragraph()])
        assert isinstance(result.children[0], TocMacro)
        assert isinstance(result.children[1], Paragraph)
        assert len(result.children) == 2
        assert context.header_hints == [("toc", "macro")]

    def test_depth_to_sets_toclevels(self):
        """Test that a limited depth requests toclevels."""
        result, context = run([Comment(content="TOC depthFrom:2 depthTo:3"), Comment(content="/TOC")])
        macro = result.children[0]
        assert (macro.depth_from, macro.depth_to) == (2, 3)
        assert context.header_hints == [("toc", "macro"), ("toclevels", "2")]

    def test_end_marker_nested_in_sibling(self):
        """Test that an end marker inside the following block closes the range."""
        item = ListItem(children=[Paragraph(content=[Text(content="Intro")]), Comment(content="/TOC")])
        result, _ = run([Comment(content="TOC"), List(ordered=False, items=[item]), Paragraph()])
        assert isinstance(result.children[0], TocMacro)
        assert len(result.children) == 2

    def test_unmatched_begin_kept(self):
        """Test that a begin marker without an end stays a comment."""
        result, context = run([Comment(content="TOC"), toc_list()])
        assert isinstance(result.children[0], Comment)
        assert isinstance(result.children[1], List)
        assert context.header_hints == []

    def test_unmatched_end_kept(self):
        """Test that a stray end marker stays a comment."""
        result, _ = run([Paragraph(), Comment(content="/TOC")])
        assert isinstance(result.children[1], Comment)

    def test_second_begin_before_end(self):
        """Test that a new begin marker abandons the earlier one."""
        result, _ = run([Comment(content="TOC"), Comment(content="TOC"), Comment(content="/TOC")])
        assert isinstance(result.children[0], Comment)
        assert isinstance(result.children[1], TocMacro)

    def test_markers_inside_block_quote(self):
        """Test replacement among nested blocks."""
        quote = BlockQuote(children=[Comment(content="TOC"), Comment(content="/TOC")])
        result, _ = run([quote])
        assert isinstance(result.children[0].children[0], TocMacro)

    def test_hint_recorded_once(self):
        """Test that several macros request the toc attribute once."""
        _result, context = run(
            [Comment(content="TOC"), Comment(content="/TOC"), Comment(content="TOC"), Comment(content="/TOC")]
        )
        assert context.header_hints == [("toc", "macro")]
