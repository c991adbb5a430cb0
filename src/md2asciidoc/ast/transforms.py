#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/ast/transforms.py
"""AST transformation utilities.

This module provides the identity :class:`NodeTransformer`, which rebuilds a
tree node by node. Option-driven rewrites in :mod:`md2asciidoc.transforms`
subclass it and override only the ``visit_*`` methods they care about.

Examples
--------
Uppercase every text run:

    >>> class UppercaseTransformer(NodeTransformer):
    ...     def visit_text(self, node):
    ...         return Text(content=node.content.upper())
    >>> new_doc = UppercaseTransformer().transform(doc)

"""

from __future__ import annotations

import copy
from dataclasses import replace

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
from md2asciidoc.ast.visitors import NodeVisitor


class NodeTransformer(NodeVisitor):
    """Base class for transforming AST nodes.

    Subclasses implement visit_* methods that return modified nodes or None
    to remove nodes. The transformer creates a new AST with the
    transformations applied; the input tree is never mutated.

    """

    def transform(self, node: Node) -> Node | None:
        """Transform an AST node.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node or None
            Transformed node or None to remove

        """
        return node.accept(self)

    def _transform_children(self, children: list[Node]) -> list[Node]:
        """Transform a list of child nodes, dropping removed ones."""
        result = []
        for child in children:
            transformed = self.transform(child)
            if transformed is not None:
                result.append(transformed)
        return result

    def _generic_transform(self, node: Node) -> Node:
        """Transform nodes generically using traversal helpers.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node
            Transformed node with children replaced

        """
        children = get_node_children(node)
        if not children:
            # Leaf node - return a copy
            return copy.copy(node)

        transformed_children = self._transform_children(children)
        return replace_node_children(node, transformed_children)

    def visit_document(self, node: Document) -> Document:
        """Transform a Document node."""
        return Document(
            children=self._transform_children(node.children),
            metadata=node.metadata.copy(),
        )

    def visit_heading(self, node: Heading) -> Heading:
        """Transform a Heading node."""
        return replace(node, content=self._transform_children(node.content), metadata=node.metadata.copy())

    def visit_paragraph(self, node: Paragraph) -> Paragraph:
        """Transform a Paragraph node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_code_block(self, node: CodeBlock) -> CodeBlock:
        """Transform a CodeBlock node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_diagram_block(self, node: DiagramBlock) -> DiagramBlock:
        """Transform a DiagramBlock node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_block_quote(self, node: BlockQuote) -> BlockQuote:
        """Transform a BlockQuote node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_list(self, node: List) -> List:
        """Transform a List node."""
        return List(
            ordered=node.ordered,
            items=self._transform_children(node.items),  # type: ignore
            start=node.start,
            tight=node.tight,
            metadata=node.metadata.copy(),
        )

    def visit_list_item(self, node: ListItem) -> ListItem:
        """Transform a ListItem node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_table(self, node: Table) -> Table:
        """Transform a Table node."""
        return Table(
            rows=self._transform_children(node.rows),  # type: ignore
            header=self.transform(node.header) if node.header else None,  # type: ignore
            alignments=node.alignments.copy(),
            metadata=node.metadata.copy(),
        )

    def visit_table_row(self, node: TableRow) -> TableRow:
        """Transform a TableRow node."""
        return TableRow(
            cells=self._transform_children(node.cells),  # type: ignore
            is_header=node.is_header,
            metadata=node.metadata.copy(),
        )

    def visit_table_cell(self, node: TableCell) -> TableCell:
        """Transform a TableCell node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_thematic_break(self, node: ThematicBreak) -> ThematicBreak:
        """Transform a ThematicBreak node."""
        return ThematicBreak(metadata=node.metadata.copy())

    def visit_html_block(self, node: HTMLBlock) -> HTMLBlock:
        """Transform an HTMLBlock node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_comment(self, node: Comment) -> Comment:
        """Transform a Comment node (block-level)."""
        return replace(node, metadata=node.metadata.copy())

    def visit_toc_macro(self, node: TocMacro) -> TocMacro:
        """Transform a TocMacro node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_attribute_entry(self, node: AttributeEntry) -> AttributeEntry:
        """Transform an AttributeEntry node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_footnote_definition(self, node: FootnoteDefinition) -> FootnoteDefinition:
        """Transform a FootnoteDefinition node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_text(self, node: Text) -> Text:
        """Transform a Text node."""
        return Text(content=node.content, metadata=node.metadata.copy())

    def visit_emphasis(self, node: Emphasis) -> Emphasis:
        """Transform an Emphasis node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_strong(self, node: Strong) -> Strong:
        """Transform a Strong node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_strikethrough(self, node: Strikethrough) -> Strikethrough:
        """Transform a Strikethrough node."""
        return self._generic_transform(node)  # type: ignore[return-value]

    def visit_code(self, node: Code) -> Code:
        """Transform a Code node."""
        return Code(content=node.content, metadata=node.metadata.copy())

    def visit_link(self, node: Link) -> Link:
        """Transform a Link node."""
        return replace(node, content=self._transform_children(node.content), metadata=node.metadata.copy())

    def visit_image(self, node: Image) -> Image:
        """Transform an Image node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_line_break(self, node: LineBreak) -> LineBreak:
        """Transform a LineBreak node."""
        return LineBreak(soft=node.soft, metadata=node.metadata.copy())

    def visit_html_inline(self, node: HTMLInline) -> HTMLInline:
        """Transform an HTMLInline node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_comment_inline(self, node: CommentInline) -> CommentInline:
        """Transform a CommentInline node."""
        return replace(node, metadata=node.metadata.copy())

    def visit_footnote_reference(self, node: FootnoteReference) -> FootnoteReference:
        """Transform a FootnoteReference node."""
        return replace(node, metadata=node.metadata.copy())


def iter_nodes(node: Node) -> list[Node]:
    """Return ``node`` and all of its descendants in document order.

    Parameters
    ----------
    node : Node
        Root of the subtree to flatten

    Returns
    -------
    list of Node
        Pre-order list of nodes

    """
    collected: list[Node] = []
    stack = [node]
    while stack:
        current = stack.pop()
        collected.append(current)
        stack.extend(reversed(get_node_children(current)))
    return collected
