#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for a Markdown to AsciiDoc conversion.

This module defines :class:`ConversionOptions`, the single immutable record
that drives the transform pipeline and the renderer for one conversion.
"""
# src/md2asciidoc/options/conversion.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from md2asciidoc.constants import (
    ATTRIBUTE_NAME_PATTERN,
    DEFAULT_AUTO_ID_PREFIX,
    DEFAULT_AUTO_ID_SEPARATOR,
    DEFAULT_AUTO_IDS,
    DEFAULT_AUTO_LINKS,
    DEFAULT_DIAGRAM_LANGUAGES,
    DEFAULT_HEADING_OFFSET,
    DEFAULT_HTML_TO_NATIVE,
    DEFAULT_INPUT_FORMAT,
    DEFAULT_LAZY_IDS,
    DEFAULT_WRAP,
    DEFAULT_WRAP_WIDTH,
    DIAGRAM_LANGUAGE_PATTERN,
    INPUT_FORMATS,
    WRAP_MODES,
    InputFormat,
    WrapMode,
)
from md2asciidoc.exceptions import InvalidOptionsError
from md2asciidoc.options.base import CloneFrozenMixin

AttributeSpec = tuple[str, Optional[str]]


def parse_attribute_spec(spec: str) -> AttributeSpec:
    """Split a ``name`` or ``name=value`` attribute spec.

    Parameters
    ----------
    spec : str
        Attribute spec as given on the command line

    Returns
    -------
    tuple of (str, str or None)
        Attribute name and value; the value is None when no ``=`` is present

    Raises
    ------
    InvalidOptionsError
        If the attribute name is empty or malformed

    Examples
    --------
    >>> parse_attribute_spec("idseparator=-")
    ('idseparator', '-')
    >>> parse_attribute_spec("sectanchors")
    ('sectanchors', None)

    """
    name, sep, value = spec.partition("=")
    name = name.strip()
    _validate_attribute_name(name)
    return name, (value if sep else None)


def _validate_attribute_name(name: Any) -> None:
    if not isinstance(name, str) or not ATTRIBUTE_NAME_PATTERN.match(name):
        raise InvalidOptionsError(
            f"Invalid attribute name: {name!r}",
            parameter_name="attributes",
            parameter_value=name,
        )


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Options controlling one Markdown to AsciiDoc conversion.

    All fields have defaults, so ``ConversionOptions()`` performs the baseline
    conversion. Invalid values raise :class:`InvalidOptionsError` on
    construction, before any text is processed.

    Parameters
    ----------
    input_format : {"markdown", "gfm", "commonmark"}, default "markdown"
        Source syntax variant.
    heading_offset : int, default 0
        Signed shift applied to every heading level. Results are clamped to
        the range 1 through 6.
    auto_ids : bool, default False
        Generate an ID for every heading that lacks one.
    auto_id_prefix : str, default "_"
        Prefix prepended to generated IDs.
    auto_id_separator : str, default "-"
        Word separator in generated IDs, also used before duplicate suffixes.
    lazy_ids : bool, default False
        Drop an explicit heading ID equal to the one that would be generated.
    wrap : {"preserve", "none", "ventilate", "width"}, default "preserve"
        Paragraph line policy:
        - "preserve": Keep the line breaks of the source
        - "none": Join each paragraph onto a single line
        - "ventilate": One sentence per line
        - "width": Greedy reflow at ``wrap_width`` columns
    wrap_width : int, default 80
        Column limit used by ``wrap="width"``.
    imagesdir : str or None, default None
        Directory prefix stripped from image paths. The same value is
        typically declared as the ``imagesdir`` document attribute.
    auto_links : bool, default True
        Leave bare URLs live. When False, bare URLs in text are escaped.
    html_to_native : bool, default True
        Convert simple raw HTML into native AsciiDoc markup instead of
        passing it through.
    diagram_languages : tuple of str, default ("plantuml", "mermaid")
        Fenced code languages rendered as diagram blocks.
    attributes : tuple of (str, str or None), default ()
        Extra document header attributes in declaration order.

    Examples
    --------
    >>> options = ConversionOptions(auto_ids=True)
    >>> options.create_updated(wrap="none").wrap
    'none'

    """

    input_format: InputFormat = field(
        default=DEFAULT_INPUT_FORMAT,
        metadata={"help": "Source syntax variant", "choices": list(INPUT_FORMATS)},
    )
    heading_offset: int = field(
        default=DEFAULT_HEADING_OFFSET,
        metadata={"help": "Shift heading levels by this amount (clamped to 1-6)", "type": int},
    )
    auto_ids: bool = field(
        default=DEFAULT_AUTO_IDS,
        metadata={"help": "Generate IDs for headings that have none"},
    )
    auto_id_prefix: str = field(
        default=DEFAULT_AUTO_ID_PREFIX,
        metadata={"help": "Prefix for generated heading IDs"},
    )
    auto_id_separator: str = field(
        default=DEFAULT_AUTO_ID_SEPARATOR,
        metadata={"help": "Word separator for generated heading IDs"},
    )
    lazy_ids: bool = field(
        default=DEFAULT_LAZY_IDS,
        metadata={"help": "Drop explicit IDs that match the generated ID"},
    )
    wrap: WrapMode = field(
        default=DEFAULT_WRAP,
        metadata={"help": "Paragraph line policy", "choices": list(WRAP_MODES)},
    )
    wrap_width: int = field(
        default=DEFAULT_WRAP_WIDTH,
        metadata={"help": "Column limit for wrap='width'", "type": int},
    )
    imagesdir: Optional[str] = field(
        default=None,
        metadata={"help": "Directory prefix to strip from image paths"},
    )
    auto_links: bool = field(
        default=DEFAULT_AUTO_LINKS,
        metadata={"help": "Leave bare URLs live instead of escaping them"},
    )
    html_to_native: bool = field(
        default=DEFAULT_HTML_TO_NATIVE,
        metadata={"help": "Convert simple raw HTML into native AsciiDoc"},
    )
    diagram_languages: tuple[str, ...] = field(
        default=DEFAULT_DIAGRAM_LANGUAGES,
        metadata={"help": "Fenced code languages treated as diagrams"},
    )
    attributes: tuple[AttributeSpec, ...] = field(
        default=(),
        metadata={"help": "Extra document header attributes"},
    )

    def __post_init__(self) -> None:
        """Validate option values and freeze collection fields.

        Raises
        ------
        InvalidOptionsError
            If any field value is outside its valid range.

        """
        if self.input_format not in INPUT_FORMATS:
            raise InvalidOptionsError(
                f"Unknown input format: {self.input_format!r} (expected one of {', '.join(INPUT_FORMATS)})",
                parameter_name="input_format",
                parameter_value=self.input_format,
            )

        if self.wrap not in WRAP_MODES:
            raise InvalidOptionsError(
                f"Unknown wrap mode: {self.wrap!r} (expected one of {', '.join(WRAP_MODES)})",
                parameter_name="wrap",
                parameter_value=self.wrap,
            )

        if isinstance(self.wrap_width, bool) or not isinstance(self.wrap_width, int) or self.wrap_width < 1:
            raise InvalidOptionsError(
                f"wrap_width must be a positive integer, got {self.wrap_width!r}",
                parameter_name="wrap_width",
                parameter_value=self.wrap_width,
            )

        if isinstance(self.heading_offset, bool) or not isinstance(self.heading_offset, int):
            raise InvalidOptionsError(
                f"heading_offset must be an integer, got {self.heading_offset!r}",
                parameter_name="heading_offset",
                parameter_value=self.heading_offset,
            )

        for name in ("auto_id_prefix", "auto_id_separator"):
            if not isinstance(getattr(self, name), str):
                raise InvalidOptionsError(
                    f"{name} must be a string, got {getattr(self, name)!r}",
                    parameter_name=name,
                    parameter_value=getattr(self, name),
                )

        if isinstance(self.diagram_languages, str):
            raise InvalidOptionsError(
                "diagram_languages must be a sequence of language names, not a string",
                parameter_name="diagram_languages",
                parameter_value=self.diagram_languages,
            )
        languages = tuple(self.diagram_languages)
        for language in languages:
            if not isinstance(language, str) or not DIAGRAM_LANGUAGE_PATTERN.match(language):
                raise InvalidOptionsError(
                    f"Invalid diagram language: {language!r}",
                    parameter_name="diagram_languages",
                    parameter_value=language,
                )
        object.__setattr__(self, "diagram_languages", languages)

        attributes = []
        for entry in self.attributes:
            if isinstance(entry, str):
                entry = parse_attribute_spec(entry)
            name, value = entry
            _validate_attribute_name(name)
            attributes.append((name, None if value is None else str(value)))
        object.__setattr__(self, "attributes", tuple(attributes))

    @classmethod
    def from_attribute_specs(cls, specs: Iterable[str], **kwargs: Any) -> ConversionOptions:
        """Build options from ``name`` / ``name=value`` attribute specs.

        Parameters
        ----------
        specs : iterable of str
            Attribute specs in declaration order
        **kwargs : Any
            Any other ConversionOptions field

        Returns
        -------
        ConversionOptions
            Options carrying the parsed attributes

        """
        return cls(attributes=tuple(parse_attribute_spec(spec) for spec in specs), **kwargs)

    def is_diagram_language(self, language: str | None) -> bool:
        """Return True when ``language`` names a configured diagram language."""
        if not language:
            return False
        return language.lower() in {name.lower() for name in self.diagram_languages}


def default_options() -> ConversionOptions:
    """Return the options used when no flags are given."""
    return ConversionOptions()
