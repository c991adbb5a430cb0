"""The major exported API functions for Markdown to AsciiDoc conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2asciidoc/api.py
import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, Union

from md2asciidoc.ast.nodes import Document
from md2asciidoc.exceptions import FileError, InvalidOptionsError, ValidationError
from md2asciidoc.normalize import normalize_source
from md2asciidoc.options.conversion import ConversionOptions
from md2asciidoc.options.markdown import MarkdownParserOptions
from md2asciidoc.parsers.markdown import MarkdownToAstConverter
from md2asciidoc.renderers.asciidoc import AsciiDocRenderer
from md2asciidoc.transforms.pipeline import apply_transforms
from md2asciidoc.utils.timing import debug_timer

logger = logging.getLogger(__name__)

ADOC_SUFFIX = ".adoc"


def _resolve_options(options: Optional[ConversionOptions], kwargs: dict[str, Any]) -> ConversionOptions:
    """Merge keyword overrides into an options object.

    Parameters
    ----------
    options : ConversionOptions or None
        Base options; defaults are used when None
    kwargs : dict
        Field overrides

    Returns
    -------
    ConversionOptions
        Validated options

    Raises
    ------
    InvalidOptionsError
        If ``options`` has the wrong type, a keyword is not an option name,
        or a value is invalid

    """
    if options is not None and not isinstance(options, ConversionOptions):
        raise InvalidOptionsError(
            f"options must be a ConversionOptions instance, got {type(options).__name__}",
            parameter_name="options",
            parameter_value=options,
        )

    option_names = {field.name for field in fields(ConversionOptions)}
    unknown = sorted(key for key in kwargs if key not in option_names)
    if unknown:
        raise InvalidOptionsError(
            f"Unknown conversion options: {', '.join(unknown)}",
            parameter_name=unknown[0],
            parameter_value=kwargs[unknown[0]],
        )

    base = options or ConversionOptions()
    return base.create_updated(**kwargs) if kwargs else base


def to_ast(raw_text: str, options: Optional[ConversionOptions] = None, **kwargs: Any) -> Document:
    """Normalize, parse and transform Markdown into the final document tree.

    Parameters
    ----------
    raw_text : str
        Markdown source text
    options : ConversionOptions, optional
        Conversion options
    kwargs : Any
        Individual option overrides applied on top of ``options``

    Returns
    -------
    Document
        Transformed document, ready for rendering

    """
    if not isinstance(raw_text, str):
        raise ValidationError(
            f"raw_text must be a str, got {type(raw_text).__name__}",
            parameter_name="raw_text",
            parameter_value=type(raw_text).__name__,
        )
    options = _resolve_options(options, kwargs)

    source = normalize_source(raw_text)
    parser = MarkdownToAstConverter(MarkdownParserOptions.for_format(options.input_format))
    with debug_timer(logger, f"Parsing ({options.input_format})"):
        document = parser.parse(source.text)
    with debug_timer(logger, "Transforming"):
        return apply_transforms(document, options, source.front_matter)


def convert(raw_text: str, options: Optional[ConversionOptions] = None, **kwargs: Any) -> str:
    """Convert Markdown text to AsciiDoc text.

    This is the main entry point of the library. Every call builds its own
    parser, transform pipeline, heading ID registry and renderer, so calls
    are independent and safe to run concurrently.

    Parameters
    ----------
    raw_text : str
        Markdown source text, already decoded
    options : ConversionOptions, optional
        Conversion options; ``default_options()`` when omitted
    kwargs : Any
        Individual option overrides, e.g. ``auto_ids=True``

    Returns
    -------
    str
        AsciiDoc text without a trailing newline

    Raises
    ------
    InvalidOptionsError
        If the options are invalid (raised before any text is processed)
    ParsingError
        If the Markdown parser fails
    TransformError
        If a transform fails unexpectedly
    RenderingError
        If the tree holds something the renderer cannot express

    Examples
    --------
    >>> convert("# Heading\\n\\nBody content.")
    '= Heading\\n\\nBody content.'
    >>> convert("### Heading 3", heading_offset=-1)
    '== Heading 3'

    """
    options = _resolve_options(options, kwargs)
    document = to_ast(raw_text, options)
    with debug_timer(logger, "Rendering"):
        return AsciiDocRenderer(options).render_to_string(document)


def default_output_path(input_path: Union[str, Path]) -> Path:
    """Return the input path with its suffix replaced by ``.adoc``.

    Examples
    --------
    >>> default_output_path("docs/guide.md").as_posix()
    'docs/guide.adoc'

    """
    return Path(input_path).with_suffix(ADOC_SUFFIX)


def _read_source(source: Union[str, Path, IO[str]]) -> str:
    if not isinstance(source, (str, Path)):
        return source.read()
    source_path = Path(source)
    try:
        return source_path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise FileError(
            f"Failed to read input file: {source_path}", file_path=str(source_path), original_error=e
        ) from e


def convert_file(
    input_path: Union[str, Path, IO[str]],
    output_path: Optional[Union[str, Path, IO[str]]] = None,
    options: Optional[ConversionOptions] = None,
    **kwargs: Any,
) -> Optional[Path]:
    """Convert a Markdown file and write the AsciiDoc result next to it or to ``output_path``.

    Parameters
    ----------
    input_path : str, Path, or IO[str]
        Markdown file to read (UTF-8, an optional BOM is ignored), or a text
        stream such as ``sys.stdin``
    output_path : str, Path, or IO[str], optional
        Destination file or text stream; defaults to the input path with an
        ``.adoc`` suffix. Missing parent directories are created.
    options : ConversionOptions, optional
        Conversion options
    kwargs : Any
        Individual option overrides

    Returns
    -------
    Path or None
        Path of the written file, or None when writing to a stream

    Raises
    ------
    ValidationError
        If the input is a stream and no output is given
    FileError
        If the input cannot be read, or input and output are the same file
    OutputWriteError
        If the output cannot be written

    """
    input_is_path = isinstance(input_path, (str, Path))
    if output_path is None:
        if not input_is_path:
            raise ValidationError(
                "output_path is required when reading from a stream",
                parameter_name="output_path",
                parameter_value=None,
            )
        output_path = default_output_path(input_path)  # type: ignore[arg-type]

    target_path = Path(output_path) if isinstance(output_path, (str, Path)) else None
    source_path = Path(input_path) if input_is_path else None  # type: ignore[arg-type]
    if source_path is not None and target_path is not None and target_path.resolve() == source_path.resolve():
        raise FileError(f"input and output cannot be the same file: {source_path}", file_path=str(source_path))

    options = _resolve_options(options, kwargs)
    document = to_ast(_read_source(input_path), options)
    with debug_timer(logger, "Rendering"):
        AsciiDocRenderer(options).render(document, target_path if target_path is not None else output_path)

    if target_path is not None:
        logger.debug(f"Wrote {target_path}")
    return target_path
