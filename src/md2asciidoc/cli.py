"""Command-line interface for the md2asciidoc converter.

The CLI maps its arguments onto :func:`md2asciidoc.api.convert_file`: one
Markdown file (or standard input) is converted and written to a file or to
standard output.

Examples
--------
Write ``guide.adoc`` next to the source::

    $ md2asciidoc guide.md

Write to standard output::

    $ md2asciidoc -o - guide.md

Convert standard input with generated section IDs::

    $ cat guide.md | md2asciidoc --auto-ids -

Add header attributes::

    $ md2asciidoc -a idprefix -a idseparator=- guide.md

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2asciidoc/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Any, Optional, Sequence, Union

from md2asciidoc import __version__
from md2asciidoc.api import convert_file
from md2asciidoc.constants import DEFAULT_WRAP_WIDTH, INPUT_FORMATS, WRAP_MODES
from md2asciidoc.exceptions import Md2AsciiDocError
from md2asciidoc.logging_utils import LOG_LEVEL_CHOICES, configure_logging
from md2asciidoc.options.conversion import ConversionOptions, parse_attribute_spec

logger = logging.getLogger(__name__)

PROG = "md2asciidoc"
STDIO_PATH = "-"

EXIT_SUCCESS = 0
EXIT_ERROR = 1


class UsageError(Exception):
    """Raised for a command line that cannot be parsed."""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _diagram_languages(value: str) -> tuple[str, ...]:
    """Parse a comma-separated list of diagram languages."""
    languages = tuple(token.strip() for token in value.split(",") if token.strip())
    if not languages:
        raise argparse.ArgumentTypeError(f"no diagram languages in {value!r}")
    return languages


def _attribute(value: str) -> tuple[str, Optional[str]]:
    try:
        return parse_attribute_spec(value)
    except Md2AsciiDocError as e:
        raise argparse.ArgumentTypeError(e.message) from e


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Option help texts come from the ``help`` metadata of
    :class:`ConversionOptions` fields.
    """
    field_help = ConversionOptions.field_help()
    parser = _Parser(
        prog=PROG,
        usage=f"{PROG} [OPTION]... FILE",
        description="Converts Markdown to AsciiDoc.",
        add_help=False,
    )
    parser.add_argument("inputs", nargs="*", metavar="FILE", help="Markdown file to convert, or - for stdin")
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Write output to FILE instead of adjacent to input file (use - for stdout)",
    )
    parser.add_argument("--format", dest="input_format", choices=INPUT_FORMATS, help=field_help["input_format"])
    parser.add_argument(
        "-a",
        "--attribute",
        dest="attributes",
        action="append",
        type=_attribute,
        default=[],
        metavar="KEY[=VALUE]",
        help="Set an attribute in the document header (repeatable)",
    )
    parser.add_argument("--wrap", choices=WRAP_MODES, help=field_help["wrap"])
    parser.add_argument(
        "--wrap-width", type=int, metavar="N", help=f"{field_help['wrap_width']} (default: {DEFAULT_WRAP_WIDTH})"
    )
    parser.add_argument("--imagesdir", metavar="DIR", help=field_help["imagesdir"])
    parser.add_argument("--heading-offset", type=int, metavar="N", help=field_help["heading_offset"])
    parser.add_argument("--auto-ids", action="store_true", default=None, help=field_help["auto_ids"])
    parser.add_argument("--auto-id-prefix", metavar="PREFIX", help=field_help["auto_id_prefix"])
    parser.add_argument("--auto-id-separator", metavar="SEPARATOR", help=field_help["auto_id_separator"])
    parser.add_argument("--lazy-ids", action="store_true", default=None, help=field_help["lazy_ids"])
    parser.add_argument("--auto-links", action=argparse.BooleanOptionalAction, help=field_help["auto_links"])
    parser.add_argument(
        "--html-to-native", action=argparse.BooleanOptionalAction, help=field_help["html_to_native"]
    )
    parser.add_argument(
        "--diagram-languages",
        type=_diagram_languages,
        metavar="LANG,...",
        help=f"{field_help['diagram_languages']} (comma-separated)",
    )
    parser.add_argument("--log-level", choices=LOG_LEVEL_CHOICES, default="WARNING", help="Logging level")
    parser.add_argument("--log-file", metavar="FILE", help="Also write log records to FILE")
    parser.add_argument("--trace", action="store_true", help="Log with timestamps and logger names")
    parser.add_argument("-h", "--help", action="store_true", help="Display this help text and exit")
    parser.add_argument("-v", "--version", action="store_true", help="Display the version and exit")
    return parser


_OPTION_FIELDS = (
    "input_format",
    "wrap",
    "wrap_width",
    "imagesdir",
    "heading_offset",
    "auto_ids",
    "auto_id_prefix",
    "auto_id_separator",
    "lazy_ids",
    "auto_links",
    "html_to_native",
    "diagram_languages",
)


def build_options(parsed_args: argparse.Namespace) -> ConversionOptions:
    """Create conversion options from parsed arguments; unset flags keep their defaults."""
    kwargs: dict[str, Any] = {
        name: getattr(parsed_args, name) for name in _OPTION_FIELDS if getattr(parsed_args, name) is not None
    }
    return ConversionOptions(attributes=tuple(parsed_args.attributes), **kwargs)


def _fail(message: str, parser: Optional[argparse.ArgumentParser] = None) -> int:
    print(f"{PROG}: {message}", file=sys.stderr)
    if parser is not None:
        parser.print_help(sys.stdout)
    return EXIT_ERROR


def main(args: Sequence[str] | None = None) -> int:
    """Execute the CLI and return the exit status.

    Parameters
    ----------
    args : sequence of str, optional
        Command-line arguments; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        ``EXIT_SUCCESS`` or ``EXIT_ERROR``

    """
    parser = create_parser()
    argv = list(sys.argv[1:] if args is None else args)

    try:
        parsed_args, unknown = parser.parse_known_args(argv)
    except UsageError as e:
        return _fail(str(e), parser)

    unknown_options = [arg for arg in unknown if arg.startswith("-") and arg != STDIO_PATH]
    if unknown_options:
        return _fail(f"invalid option: {unknown_options[0]}", parser)

    if parsed_args.help:
        parser.print_help(sys.stdout)
        return EXIT_SUCCESS
    if parsed_args.version:
        print(f"{PROG} {__version__}")
        return EXIT_SUCCESS

    inputs = list(parsed_args.inputs) + unknown
    if not inputs:
        return _fail("Please specify a Markdown file to convert.", parser)
    if len(inputs) > 1:
        return _fail(f"extra arguments detected (unparsed arguments: {' '.join(inputs[1:])})", parser)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    input_arg = inputs[0]
    source: Union[str, IO[str]] = sys.stdin if input_arg == STDIO_PATH else input_arg
    target: Optional[Union[str, IO[str]]] = parsed_args.output
    if target == STDIO_PATH or (target is None and input_arg == STDIO_PATH):
        target = sys.stdout

    try:
        options = build_options(parsed_args)
        written = convert_file(source, target, options)
    except Md2AsciiDocError as e:
        logger.debug("Conversion failed", exc_info=True)
        return _fail(e.message)

    if written is None:
        sys.stdout.flush()
    else:
        logger.info(f"Wrote {written}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
