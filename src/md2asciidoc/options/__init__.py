#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/options/__init__.py
"""Configuration options for md2asciidoc conversions."""

from md2asciidoc.options.base import CloneFrozenMixin
from md2asciidoc.options.conversion import ConversionOptions, default_options, parse_attribute_spec
from md2asciidoc.options.markdown import MarkdownParserOptions

__all__ = [
    "CloneFrozenMixin",
    "ConversionOptions",
    "MarkdownParserOptions",
    "default_options",
    "parse_attribute_spec",
]
