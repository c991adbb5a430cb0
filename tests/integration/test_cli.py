#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the md2asciidoc command-line interface."""

import io
import logging

import pytest

from md2asciidoc import __version__
from md2asciidoc.cli import EXIT_ERROR, EXIT_SUCCESS, build_options, create_parser, main

EXPLICIT_ID_SOURCE = """# Heading 1

## Heading

## Heading

### Heading 3 {#explicit-id}

## Back to Heading 2
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo the handlers installed by the CLI so other tests see default logging."""
    yield
    package_logger = logging.getLogger("md2asciidoc")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def stdin(monkeypatch):
    """Replace standard input with the given text."""

    def _set(text: str) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return _set


@pytest.mark.cli
@pytest.mark.integration
class TestUsage:
    """Tests for usage errors, help and version."""

    def test_no_arguments(self, capsys):
        """Test that a missing input file is an error with usage."""
        assert main([]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert captured.err.strip() == "md2asciidoc: Please specify a Markdown file to convert."
        assert captured.out.startswith("usage: md2asciidoc")

    def test_extra_arguments(self, capsys):
        """Test that more than one input file is rejected."""
        assert main(["foo.md", "bar.md"]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert captured.err.strip() == "md2asciidoc: extra arguments detected (unparsed arguments: bar.md)"
        assert captured.out.startswith("usage: md2asciidoc")

    def test_invalid_option(self, capsys):
        """Test that an unknown flag is reported by name."""
        assert main(["--invalid-option"]) == EXIT_ERROR
        captured = capsys.readouterr()
        assert captured.err.strip() == "md2asciidoc: invalid option: --invalid-option"
        assert captured.out.startswith("usage: md2asciidoc")

    def test_invalid_option_value(self, capsys):
        """Test that a malformed option value is a usage error."""
        assert main(["--wrap", "sideways", "doc.md"]) == EXIT_ERROR
        assert "--wrap" in capsys.readouterr().err

    def test_invalid_attribute(self, capsys):
        """Test that a malformed attribute name is a usage error."""
        assert main(["-a", "bad name", "doc.md"]) == EXIT_ERROR
        assert "Invalid attribute name" in capsys.readouterr().err

    def test_version(self, capsys):
        """Test -v."""
        assert main(["-v"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == f"md2asciidoc {__version__}"

    def test_help(self, capsys):
        """Test -h."""
        assert main(["-h"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("usage: md2asciidoc")
        assert "--auto-ids" in out

    def test_reads_sys_argv_by_default(self, capsys, monkeypatch):
        """Test that main() falls back to sys.argv."""
        monkeypatch.setattr("sys.argv", ["md2asciidoc", "-v"])
        assert main() == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == f"md2asciidoc {__version__}"


@pytest.mark.cli
@pytest.mark.integration
class TestInputOutput:
    """Tests for file and stream handling."""

    def test_computed_output_file(self, markdown_file):
        """Test that the output file is derived from the input file."""
        source = markdown_file("This is just a test.", name="implicit-output.md")
        assert main([str(source)]) == EXIT_SUCCESS
        assert source.with_suffix(".adoc").read_text(encoding="utf-8") == "This is just a test.\n"

    def test_explicit_output_file(self, markdown_file, tmp_path):
        """Test -o with a file path."""
        source = markdown_file("This is only a test.")
        target = tmp_path / "my-explicit-output.adoc"
        assert main(["-o", str(target), str(source)]) == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8") == "This is only a test.\n"

    def test_output_directory_created(self, markdown_file, tmp_path):
        """Test that missing directories of the output file are created."""
        source = markdown_file("Everything is going to be fine.")
        target = tmp_path / "path" / "to" / "output" / "file.adoc"
        assert main(["-o", str(target), str(source)]) == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8") == "Everything is going to be fine.\n"

    def test_computed_output_same_as_input(self, markdown_file, capsys):
        """Test that an .adoc input cannot be overwritten by its computed output."""
        source = markdown_file("No can do.", name="implicit-conflict.adoc")
        assert main([str(source)]) == EXIT_ERROR
        assert capsys.readouterr().err.strip() == f"md2asciidoc: input and output cannot be the same file: {source}"
        assert source.read_text(encoding="utf-8") == "No can do."

    def test_explicit_output_same_as_input(self, markdown_file, capsys):
        """Test that -o cannot point at the input file."""
        source = markdown_file("No can do.", name="explicit-conflict.md")
        assert main(["-o", str(source), str(source)]) == EXIT_ERROR
        assert capsys.readouterr().err.strip() == f"md2asciidoc: input and output cannot be the same file: {source}"

    def test_stdout_output(self, markdown_file, capsys):
        """Test -o -."""
        source = markdown_file("A paragraph that consists of a single line.")
        assert main(["-o", "-", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "A paragraph that consists of a single line.\n"

    def test_stdin_to_stdout(self, stdin, capsys):
        """Test - as input with explicit stdout output."""
        stdin("- list item\n")
        assert main(["-o", "-", "-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "* list item\n"

    def test_stdin_defaults_to_stdout(self, stdin, capsys):
        """Test that stdin input writes to stdout when -o is not given."""
        stdin("- list item\n")
        assert main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "* list item\n"

    def test_stdin_byte_order_mark_ignored(self, stdin, capsys):
        """Test that a byte order mark on standard input does not reach the output."""
        stdin("\ufeff# Title\n")
        assert main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Title\n"

    def test_stdin_to_file(self, stdin, tmp_path):
        """Test stdin input written to an output file."""
        stdin("- list item\n")
        target = tmp_path / "output-from-stdin.adoc"
        assert main(["-o", str(target), "-"]) == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8") == "* list item\n"

    def test_missing_input_file(self, tmp_path, capsys):
        """Test that an unreadable input reports an error."""
        assert main(["-o", "-", str(tmp_path / "missing.md")]) == EXIT_ERROR
        assert capsys.readouterr().err.startswith("md2asciidoc: ")

    def test_whitespace_and_newlines_normalized(self, markdown_file, capsys):
        """Test blank lines, trailing spaces and CRLF in the source."""
        source = markdown_file("\n\n\n\n\n# Heading\n\nBody content.  \n\n\n\n\n")
        assert main(["-o", "-", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Heading\n\nBody content.\n"

    def test_front_matter(self, markdown_file, capsys):
        """Test that the front matter title becomes the document title."""
        source = markdown_file("---\ntitle: Document Title\n---\nBody content.\n")
        assert main(["-o", "-", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Document Title\n\nBody content.\n"


@pytest.mark.cli
@pytest.mark.integration
class TestConversionFlags:
    """Tests for flags that change the conversion."""

    def test_toc(self, markdown_file, capsys):
        """Test that a marked TOC becomes the TOC macro."""
        source = markdown_file(
            "# Guide\n\n<!-- TOC depthFrom:2 depthTo:6 -->\n"
            "- [Prerequisites](#prerequisites)\n- [Installation](#installation)\n"
            "<!-- /TOC -->\n\n...\n"
        )
        assert main(["-o", "-", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Guide\n:toc: macro\n\ntoc::[]\n\n...\n"

    def test_format(self, markdown_file, capsys):
        """Test --format=markdown with a heading that has no space after the marker."""
        source = markdown_file("#Heading")
        assert main(["-o", "-", "--format=markdown", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Heading\n"

    def test_auto_id_prefix(self, markdown_file, capsys):
        """Test --auto-ids with --auto-id-prefix."""
        source = markdown_file(EXPLICIT_ID_SOURCE)
        assert main(["-o", "-", "--auto-id-prefix=_", "--auto-ids", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == (
            "[#_heading-1]\n= Heading 1\n\n"
            "[#_heading]\n== Heading\n\n"
            "[#_heading-2]\n== Heading\n\n"
            "[#explicit-id]\n=== Heading 3\n\n"
            "[#_back-to-heading-2]\n== Back to Heading 2\n"
        )

    def test_auto_id_separator(self, markdown_file, capsys):
        """Test --auto-id-separator."""
        source = markdown_file(EXPLICIT_ID_SOURCE)
        argv = ["-o", "-", "--auto-id-prefix=_", "--auto-id-separator=_", "--auto-ids", str(source)]
        assert main(argv) == EXIT_SUCCESS
        assert capsys.readouterr().out == (
            "[#_heading_1]\n= Heading 1\n\n"
            "[#_heading]\n== Heading\n\n"
            "[#_heading_2]\n== Heading\n\n"
            "[#explicit-id]\n=== Heading 3\n\n"
            "[#_back_to_heading_2]\n== Back to Heading 2\n"
        )

    def test_attributes(self, markdown_file, capsys):
        """Test repeated -a flags."""
        source = markdown_file("# Document Title\n\nBody content.\n")
        assert main(["-o", "-", "-a", "idprefix", "-a", "idseparator=-", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Document Title\n:idprefix:\n:idseparator: -\n\nBody content.\n"

    def test_no_html_to_native(self, markdown_file, capsys):
        """Test that raw HTML is passed through tag by tag."""
        source = markdown_file(
            "<p><strong>strong emphasis (aka bold)</strong> <em>emphasis (aka italic)</em> "
            "<code>monospace</code></p>\n"
        )
        assert main(["-o", "-", "--no-html-to-native", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == (
            "+++<p>++++++<strong>+++strong emphasis (aka bold)+++</strong>+++ "
            "+++<em>+++emphasis (aka italic)+++</em>+++ "
            "+++<code>+++monospace+++</code>++++++</p>+++\n"
        )

    def test_heading_offset(self, markdown_file, capsys):
        """Test --heading-offset with a negative value."""
        source = markdown_file("### Heading 3")
        assert main(["-o", "-", "--heading-offset=-1", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "== Heading 3\n"

    def test_diagram_languages(self, markdown_file, capsys):
        """Test a custom diagram language list."""
        source = markdown_file("```nomnoml\n[A]->[B]\n```\n")
        assert main(["-o", "-", "--diagram-languages", "plantuml,nomnoml", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "[nomnoml]\n....\n[A]->[B]\n....\n"

    def test_wrap_ventilate(self, markdown_file, capsys):
        """Test --wrap=ventilate."""
        source = markdown_file("One. Two? Three!")
        assert main(["-o", "-", "--wrap=ventilate", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "One.\nTwo?\nThree!\n"

    def test_no_auto_links(self, markdown_file, capsys):
        """Test that bare URLs are escaped with --no-auto-links."""
        source = markdown_file("Visit https://example.org today.")
        assert main(["-o", "-", "--no-auto-links", str(source)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Visit \\https://example.org today.\n"

    def test_log_file(self, markdown_file, tmp_path, capsys):
        """Test that --log-file receives debug records."""
        source = markdown_file("# Title")
        log_file = tmp_path / "run.log"
        argv = ["-o", "-", "--log-level", "DEBUG", "--log-file", str(log_file), str(source)]
        assert main(argv) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Title\n"
        logging.getLogger("md2asciidoc").handlers[-1].flush()
        assert "DEBUG" in log_file.read_text(encoding="utf-8")


@pytest.mark.cli
@pytest.mark.unit
class TestBuildOptions:
    """Tests for turning parsed arguments into ConversionOptions."""

    def test_unset_flags_keep_defaults(self):
        """Test that no flags gives the default options."""
        parsed = create_parser().parse_args(["doc.md"])
        options = build_options(parsed)
        assert options.auto_links is True
        assert options.html_to_native is True
        assert options.wrap == "preserve"

    def test_flags_map_to_fields(self):
        """Test each flag's target field."""
        parsed = create_parser().parse_args(
            [
                "--format=gfm",
                "--wrap=width",
                "--wrap-width=60",
                "--imagesdir=img",
                "--heading-offset=2",
                "--auto-ids",
                "--lazy-ids",
                "--no-auto-links",
                "--diagram-languages=ditaa",
                "-a",
                "toc=left",
                "doc.md",
            ]
        )
        options = build_options(parsed)
        assert options.input_format == "gfm"
        assert options.wrap == "width"
        assert options.wrap_width == 60
        assert options.imagesdir == "img"
        assert options.heading_offset == 2
        assert options.auto_ids is True
        assert options.lazy_ids is True
        assert options.auto_links is False
        assert options.diagram_languages == ("ditaa",)
        assert options.attributes == (("toc", "left"),)
