"""md2asciidoc - Convert Markdown documents to AsciiDoc.

md2asciidoc reads Markdown (the Kramdown-flavoured default, GitHub Flavored
Markdown or CommonMark), builds a typed document tree, rewrites that tree
with a fixed pipeline of transforms and renders it as AsciiDoc text.

Key Features
------------
- Document title and header attributes from YAML front matter
- Generated section IDs with configurable prefix and separator
- Heading level offsets and table-of-contents markers
- Paragraph wrapping policies: preserve, none, ventilate and width
- Native conversion of simple inline HTML, passthrough for the rest
- Diagram blocks for configured fenced code languages

Examples
--------
Basic conversion:

    >>> from md2asciidoc import convert
    >>> convert("# Heading\\n\\nBody content.")
    '= Heading\\n\\nBody content.'

Options as keyword overrides:

    >>> convert("### Heading 3", heading_offset=-1)
    '== Heading 3'

Working with the tree directly:

    >>> from md2asciidoc import to_ast
    >>> from md2asciidoc.renderers import AsciiDocRenderer
    >>> doc = to_ast("- list item\\n")
    >>> AsciiDocRenderer().render_to_string(doc)
    '* list item'

See Also
--------
md2asciidoc.ast : Document tree node definitions
md2asciidoc.transforms : Tree rewriting pipeline

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from md2asciidoc.api import convert, convert_file, default_output_path, to_ast
from md2asciidoc.exceptions import (
    FileError,
    InvalidOptionsError,
    Md2AsciiDocError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    TransformError,
    ValidationError,
)
from md2asciidoc.options import ConversionOptions, MarkdownParserOptions, default_options

__all__ = [
    "__version__",
    "convert",
    "convert_file",
    "default_output_path",
    "to_ast",
    "ConversionOptions",
    "MarkdownParserOptions",
    "default_options",
    "Md2AsciiDocError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "OutputWriteError",
    "ParsingError",
    "TransformError",
    "RenderingError",
]
