#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/parsers/__init__.py
"""Source parsers producing the md2asciidoc AST."""

from md2asciidoc.parsers.markdown import MarkdownToAstConverter, parse_markdown, relax_atx_headings

__all__ = ["MarkdownToAstConverter", "parse_markdown", "relax_atx_headings"]
