#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing.

This module defines the options consumed by the mistune adapter. They are
derived from the conversion options' input format.
"""
# src/md2asciidoc/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field

from md2asciidoc.constants import DEFAULT_INPUT_FORMAT, INPUT_FORMATS, MARKDOWN_PLUGINS, InputFormat
from md2asciidoc.exceptions import InvalidOptionsError
from md2asciidoc.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    input_format : {"markdown", "gfm", "commonmark"}, default "markdown"
        Source syntax variant. Selects the mistune plugins to enable.
    lax_atx_headings : bool, default False
        Accept ATX headings with no space after the ``#`` run (``#Heading``).
    explicit_heading_ids : bool, default False
        Recognize a trailing ``{#id}`` on a heading as its explicit ID.

    """

    input_format: InputFormat = field(
        default=DEFAULT_INPUT_FORMAT,
        metadata={"help": "Source syntax variant", "choices": list(INPUT_FORMATS)},
    )
    lax_atx_headings: bool = field(
        default=False,
        metadata={"help": "Accept '#Heading' without a space after the marker"},
    )
    explicit_heading_ids: bool = field(
        default=False,
        metadata={"help": "Recognize a trailing {#id} on headings"},
    )

    def __post_init__(self) -> None:
        """Validate the input format."""
        if self.input_format not in INPUT_FORMATS:
            raise InvalidOptionsError(
                f"Unknown input format: {self.input_format!r}",
                parameter_name="input_format",
                parameter_value=self.input_format,
            )

    @property
    def plugins(self) -> list[str]:
        """Mistune plugin names enabled for the input format."""
        return list(MARKDOWN_PLUGINS[self.input_format])

    @classmethod
    def for_format(cls, input_format: InputFormat) -> MarkdownParserOptions:
        """Build parser options for an input format.

        The kramdown-flavored ``markdown`` format also accepts lax ATX headings
        and explicit heading IDs.
        """
        kramdown_like = input_format == "markdown"
        return cls(
            input_format=input_format,
            lax_atx_headings=kramdown_like,
            explicit_heading_ids=kramdown_like,
        )
