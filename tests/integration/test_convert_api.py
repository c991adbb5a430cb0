#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the public conversion API."""

from io import StringIO

import pytest

from md2asciidoc import ConversionOptions, convert, convert_file, to_ast
from md2asciidoc.api import default_output_path
from md2asciidoc.ast import Document, Heading
from md2asciidoc.exceptions import FileError, InvalidOptionsError, ValidationError

EXPLICIT_ID_SOURCE = """# Heading 1

## Heading

## Heading

### Heading 3 {#explicit-id}

## Back to Heading 2
"""

NATIVE_HTML_SOURCE = (
    "<p><strong>strong emphasis (aka bold)</strong> <em>emphasis (aka italic)</em> <code>monospace</code></p>\n"
)

TOC_SOURCE = """# Guide

<!-- TOC depthFrom:2 depthTo:6 -->
- [Prerequisites](#prerequisites)
- [Installation](#installation)
- [Deployment](#deployment)
<!-- /TOC -->

...
"""


@pytest.mark.integration
class TestConvert:
    """Tests for convert() on whole documents."""

    def test_heading_and_paragraph(self):
        """Test a title followed by body text."""
        assert convert("# Heading\n\nBody content.") == "= Heading\n\nBody content."

    def test_leading_byte_order_mark(self):
        """Test that a byte order mark before the first heading is ignored."""
        assert convert("\ufeff# Title\n") == "= Title"

    def test_empty_heading(self):
        """Test that a heading marker without text leaves no dangling title."""
        assert convert("Intro\n\n##\n\nBody") == "Intro\n\nBody"
        assert convert("#", auto_ids=True) == "[[_section]]"

    def test_empty_title_does_not_take_header(self):
        """Test that header attributes do not attach to an empty first heading."""
        result = convert("#\n\n![Alt](images/a.png)", imagesdir="images")
        assert result == ":imagesdir: images\n\nimage:a.png[Alt]"

    def test_surrounding_whitespace_removed(self):
        """Test that blank lines and trailing spaces around the source are dropped."""
        source = "\n\n\n\n\n# Heading\n\nBody content.  \n\n\n\n\n"
        assert convert(source) == "= Heading\n\nBody content."

    def test_crlf_newlines(self):
        """Test that CRLF line endings are normalized."""
        source = "\r\n\r\n# Document Title\r\n\r\nFirst paragraph.\r\n\r\nSecond paragraph.\r\n"
        assert convert(source) == "= Document Title\n\nFirst paragraph.\n\nSecond paragraph."

    def test_front_matter_title(self):
        """Test that a front matter title becomes the document title."""
        source = "---\ntitle: Document Title\n---\nBody content.\n"
        assert convert(source) == "= Document Title\n\nBody content."

    def test_list_item(self):
        """Test a single-item unordered list."""
        assert convert("- list item\n") == "* list item"

    def test_heading_offset(self):
        """Test a negative heading offset."""
        assert convert("### Heading 3", heading_offset=-1) == "== Heading 3"

    def test_heading_offset_clamped(self):
        """Test that shifted levels stay within the valid range."""
        assert convert("# Top\n\n###### Deep", heading_offset=3) == "==== Top\n\n====== Deep"

    def test_duplicate_auto_ids(self):
        """Test that a repeated heading text gets a numbered ID."""
        result = convert("## Heading\n\n## Heading", auto_ids=True)
        assert result == "[#_heading]\n== Heading\n\n[#_heading-2]\n== Heading"

    def test_auto_ids_with_explicit_id(self):
        """Test generated IDs alongside an explicit one."""
        expected = (
            "[#_heading-1]\n= Heading 1\n\n"
            "[#_heading]\n== Heading\n\n"
            "[#_heading-2]\n== Heading\n\n"
            "[#explicit-id]\n=== Heading 3\n\n"
            "[#_back-to-heading-2]\n== Back to Heading 2"
        )
        assert convert(EXPLICIT_ID_SOURCE, auto_ids=True, auto_id_prefix="_") == expected

    def test_auto_id_separator(self):
        """Test a custom word separator for generated IDs."""
        expected = (
            "[#_heading_1]\n= Heading 1\n\n"
            "[#_heading]\n== Heading\n\n"
            "[#_heading_2]\n== Heading\n\n"
            "[#explicit-id]\n=== Heading 3\n\n"
            "[#_back_to_heading_2]\n== Back to Heading 2"
        )
        assert convert(EXPLICIT_ID_SOURCE, auto_ids=True, auto_id_separator="_") == expected

    def test_lazy_ids_drop_redundant_explicit_id(self):
        """Test that an explicit ID equal to the generated one is dropped."""
        assert convert("## Install {#_install}", lazy_ids=True) == "== Install"
        assert convert("## Install {#setup}", lazy_ids=True) == "[#setup]\n== Install"

    @pytest.mark.parametrize("auto_ids", [False, True])
    def test_lazy_ids_repeated_titles_match_plain_output(self, auto_ids):
        """Test that a redundant ID on a repeated title renders like no ID at all."""
        with_id = convert("## Heading\n\n## Heading {#_heading-2}", lazy_ids=True, auto_ids=auto_ids)
        without_id = convert("## Heading\n\n## Heading", lazy_ids=True, auto_ids=auto_ids)
        assert with_id == without_id

    def test_lazy_ids_keep_id_of_earlier_title(self):
        """Test that an ID naming an earlier same-titled heading is kept."""
        result = convert("## Heading\n\n## Heading {#_heading}", lazy_ids=True)
        assert result == "== Heading\n\n[#_heading]\n== Heading"

    def test_lazy_ids_repeated_titles_with_auto_ids(self):
        """Test the rendered IDs when lazy and auto IDs are both on."""
        result = convert("## Heading\n\n## Heading {#_heading-2}\n\n## Heading", lazy_ids=True, auto_ids=True)
        assert result == "[#_heading]\n== Heading\n\n[#_heading-2]\n== Heading\n\n[#_heading-3]\n== Heading"

    def test_header_attributes(self):
        """Test that extra attributes follow the title."""
        result = convert(
            "# Document Title\n\nBody content.",
            attributes=[("idprefix", None), ("idseparator", "-")],
        )
        assert result == "= Document Title\n:idprefix:\n:idseparator: -\n\nBody content."

    def test_toc_block_replaced(self):
        """Test that a marked TOC becomes the TOC macro and attribute."""
        assert convert(TOC_SOURCE) == "= Guide\n:toc: macro\n\ntoc::[]\n\n..."

    def test_lax_atx_heading(self):
        """Test that the markdown format accepts a heading without a space."""
        assert convert("#Heading", input_format="markdown") == "= Heading"

    def test_html_passthrough(self):
        """Test raw HTML passed through tag by tag."""
        expected = (
            "+++<p>++++++<strong>+++strong emphasis (aka bold)+++</strong>+++ "
            "+++<em>+++emphasis (aka italic)+++</em>+++ "
            "+++<code>+++monospace+++</code>++++++</p>+++"
        )
        assert convert(NATIVE_HTML_SOURCE, html_to_native=False) == expected

    def test_html_to_native(self):
        """Test raw HTML converted to native markup."""
        expected = "*strong emphasis (aka bold)* _emphasis (aka italic)_ `monospace`"
        assert convert(NATIVE_HTML_SOURCE) == expected

    def test_diagram_block(self):
        """Test that a fenced diagram language becomes a diagram block."""
        source = "```plantuml\nA -> B\n```"
        assert convert(source) == "[plantuml]\n....\nA -> B\n...."
        assert convert(source, diagram_languages=("mermaid",)) == "[source,plantuml]\n----\nA -> B\n----"

    def test_imagesdir_prefix_stripped(self):
        """Test that the image directory prefix is removed and declared in the header."""
        assert convert("![Alt](images/a.png)", imagesdir="images") == ":imagesdir: images\n\nimage:a.png[Alt]"
        result = convert("# Photos\n\n![Alt](images/a.png)", imagesdir="images/")
        assert result == "= Photos\n:imagesdir: images\n\nimage:a.png[Alt]"

    def test_footnote(self):
        """Test a footnote reference and its definition."""
        source = "Fact.[^1]\n\n[^1]: Source."
        assert convert(source) == "Fact.footnote:[Source.]"

    def test_wrap_ventilate(self):
        """Test one sentence per line."""
        assert convert("One. Two?\nThree!", wrap="ventilate") == "One.\nTwo?\nThree!"

    def test_options_object_and_overrides(self):
        """Test that keyword overrides apply on top of an options object."""
        options = ConversionOptions(auto_ids=True, auto_id_prefix="sec-")
        assert convert("## A", options) == "[#sec-a]\n== A"
        assert convert("## A", options, auto_ids=False) == "== A"

    def test_independent_calls(self):
        """Test that ID state does not leak between conversions."""
        first = convert("## A", auto_ids=True)
        second = convert("## A", auto_ids=True)
        assert first == second == "[#_a]\n== A"

    def test_empty_input(self):
        """Test that empty or blank input converts to an empty string."""
        assert convert("") == ""
        assert convert("  \n\n") == ""


@pytest.mark.integration
class TestConvertErrors:
    """Tests for argument errors raised by the API."""

    def test_unknown_keyword(self):
        """Test that an unknown option name is rejected."""
        with pytest.raises(InvalidOptionsError, match="Unknown conversion options: bogus"):
            convert("x", bogus=True)

    def test_invalid_value(self):
        """Test that invalid values fail before conversion."""
        with pytest.raises(InvalidOptionsError):
            convert("x", wrap="sideways")

    def test_wrong_options_type(self):
        """Test that options must be a ConversionOptions."""
        with pytest.raises(InvalidOptionsError):
            convert("x", {"wrap": "none"})

    def test_non_string_input(self):
        """Test that bytes are rejected."""
        with pytest.raises(ValidationError):
            convert(b"# Heading")


@pytest.mark.integration
class TestToAst:
    """Tests for to_ast()."""

    def test_returns_transformed_document(self):
        """Test that the tree reflects the transforms."""
        doc = to_ast("## Setup", auto_ids=True)
        assert isinstance(doc, Document)
        heading = doc.children[0]
        assert isinstance(heading, Heading)
        assert heading.id == "_setup"


@pytest.mark.integration
class TestConvertFile:
    """Tests for convert_file()."""

    def test_default_output_path(self, markdown_file):
        """Test that the output goes next to the input with an .adoc suffix."""
        source = markdown_file("This is just a test.", name="implicit-output.md")
        target = convert_file(source)
        assert target == source.with_suffix(".adoc")
        assert target.read_text(encoding="utf-8") == "This is just a test.\n"

    def test_explicit_output_directories_created(self, markdown_file, tmp_path):
        """Test that missing parent directories are created."""
        source = markdown_file("Everything is going to be fine.")
        target = tmp_path / "path" / "to" / "output" / "file.adoc"
        assert convert_file(source, target) == target
        assert target.read_text(encoding="utf-8") == "Everything is going to be fine.\n"

    def test_same_file_rejected(self, tmp_path):
        """Test that the input cannot be overwritten."""
        source = tmp_path / "implicit-conflict.adoc"
        source.write_text("No can do.", encoding="utf-8")
        with pytest.raises(FileError, match="input and output cannot be the same file"):
            convert_file(source)
        assert source.read_text(encoding="utf-8") == "No can do."

    def test_missing_input(self, tmp_path):
        """Test that an unreadable input raises FileError."""
        with pytest.raises(FileError) as exc_info:
            convert_file(tmp_path / "missing.md")
        assert isinstance(exc_info.value.original_error, OSError)

    def test_bom_ignored(self, tmp_path):
        """Test that a UTF-8 byte order mark does not reach the output."""
        source = tmp_path / "bom.md"
        source.write_bytes("\ufeff# Title\n".encode("utf-8"))
        target = convert_file(source)
        assert target.read_text(encoding="utf-8") == "= Title\n"

    def test_default_output_path_helper(self):
        """Test suffix replacement."""
        assert default_output_path("docs/guide.md").name == "guide.adoc"
        assert default_output_path("README").name == "README.adoc"

    def test_stream_input_and_output(self):
        """Test converting from one text stream to another."""
        buffer = StringIO()
        assert convert_file(StringIO("- list item\n"), buffer, auto_ids=True) is None
        assert buffer.getvalue() == "* list item\n"

    def test_stream_input_to_file(self, tmp_path):
        """Test converting a text stream into a file."""
        target = tmp_path / "out" / "from-stream.adoc"
        assert convert_file(StringIO("# Title"), target) == target
        assert target.read_text(encoding="utf-8") == "= Title\n"

    def test_stream_input_requires_output(self):
        """Test that a stream input has no default output path."""
        with pytest.raises(ValidationError) as exc_info:
            convert_file(StringIO("text"))
        assert exc_info.value.parameter_name == "output_path"

    def test_invalid_options_before_reading(self, tmp_path):
        """Test that bad overrides fail before the output is written."""
        source = tmp_path / "doc.md"
        source.write_text("text", encoding="utf-8")
        with pytest.raises(InvalidOptionsError):
            convert_file(source, wrap="sideways")
        assert not source.with_suffix(".adoc").exists()
