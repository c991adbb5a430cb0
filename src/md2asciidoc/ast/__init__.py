#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

The Markdown parser produces this tree, the transforms rewrite it, and the
AsciiDoc renderer walks it. The module consists of:

- nodes: AST node classes representing document structure
- visitors: Visitor pattern base class with one abstract method per node kind
- transforms: The identity NodeTransformer and traversal helpers
- utils: Plain-text extraction

Examples
--------
    >>> from md2asciidoc.ast import Document, Heading, Paragraph, Text
    >>> from md2asciidoc.renderers.asciidoc import AsciiDocRenderer
    >>>
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> AsciiDocRenderer().render_to_string(doc)
    '= Title\\n\\nHello world'

"""

from __future__ import annotations

from md2asciidoc.ast.nodes import (
    BLOCK_NODE_TYPES,
    Alignment,
    AttributeEntry,
    BlockQuote,
    Code,
    CodeBlock,
    Comment,
    CommentInline,
    DiagramBlock,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    TocMacro,
    get_node_children,
    replace_node_children,
)
from md2asciidoc.ast.transforms import NodeTransformer, iter_nodes
from md2asciidoc.ast.utils import extract_text, is_blank_heading
from md2asciidoc.ast.visitors import NodeVisitor

__all__ = [
    "BLOCK_NODE_TYPES",
    "Alignment",
    "AttributeEntry",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Comment",
    "CommentInline",
    "DiagramBlock",
    "Document",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "TocMacro",
    "get_node_children",
    "replace_node_children",
    "NodeTransformer",
    "NodeVisitor",
    "extract_text",
    "is_blank_heading",
    "iter_nodes",
]
