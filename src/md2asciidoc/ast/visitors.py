#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Every node kind has an abstract ``visit_*`` method on :class:`NodeVisitor`,
so a concrete visitor cannot be instantiated until it handles each kind.
Both the base :class:`~md2asciidoc.ast.transforms.NodeTransformer` and the
AsciiDoc renderer derive from it.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from md2asciidoc.ast.nodes import (
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
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    TocMacro,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for each node type. Nodes
    dispatch to the matching method through ``Node.accept``.

    Examples
    --------
    Visitor that collects heading levels:

        >>> class LevelCollector(NodeTransformer):
        ...     def __init__(self):
        ...         self.levels = []
        ...     def visit_heading(self, node):
        ...         self.levels.append(node.level)
        ...         return super().visit_heading(node)

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_diagram_block(self, node: DiagramBlock) -> Any:
        """Visit a DiagramBlock node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit an HTMLBlock node."""

    @abstractmethod
    def visit_comment(self, node: Comment) -> Any:
        """Visit a Comment node."""

    @abstractmethod
    def visit_toc_macro(self, node: TocMacro) -> Any:
        """Visit a TocMacro node."""

    @abstractmethod
    def visit_attribute_entry(self, node: AttributeEntry) -> Any:
        """Visit an AttributeEntry node."""

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a FootnoteDefinition node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit an HTMLInline node."""

    @abstractmethod
    def visit_comment_inline(self, node: CommentInline) -> Any:
        """Visit a CommentInline node."""

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""
