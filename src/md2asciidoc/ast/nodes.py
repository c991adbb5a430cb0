#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy produced by the Markdown parser,
rewritten by the transforms and consumed by the AsciiDoc renderer. Each node
represents a structural or inline element in the document.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, DiagramBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock, Comment
    - TocMacro, AttributeEntry, FootnoteDefinition

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Strikethrough, Code
    - Link, Image, LineBreak
    - HTMLInline, CommentInline, FootnoteReference

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Optional

from md2asciidoc.constants import MAX_HEADING_LEVEL, MIN_HEADING_LEVEL

Alignment = Literal["left", "center", "right"]


class Node(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node

    """

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata (front matter fields)

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (ATX ``#`` or setext style in the source).

    Parameters
    ----------
    level : int
        Heading level, 1 through 6
    content : list of Node
        Inline content of the heading
    id : str or None, default = None
        Explicit or generated section ID

    """

    level: int
    content: list[Node] = field(default_factory=list)
    id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate heading level is within the supported range."""
        if not MIN_HEADING_LEVEL <= self.level <= MAX_HEADING_LEVEL:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    content : str
        Raw code, one line per source line
    language : str or None, default = None
        First token of the fence info string
    info_string : str or None, default = None
        Complete fence info string as written in the source

    """

    content: str
    language: Optional[str] = None
    info_string: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code_block``."""
        return visitor.visit_code_block(self)


@dataclass
class DiagramBlock(Node):
    """Fenced block whose language designates diagram source.

    Produced from a CodeBlock by diagram reclassification; the raw content is
    carried over unchanged.

    """

    content: str
    language: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_diagram_block``."""
        return visitor.visit_diagram_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote containing block-level children."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block_quote``."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool
        True for numbered lists
    items : list of ListItem
        List items in document order
    start : int, default = 1
        First number of an ordered list
    tight : bool, default = True
        False when items are separated by blank lines in the source

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item containing block-level children.

    Parameters
    ----------
    children : list of Node
        Blocks of the item; the first paragraph shares the marker line
    task_status : {"checked", "unchecked"} or None
        Checkbox state for task list items

    """

    children: list[Node] = field(default_factory=list)
    task_status: Optional[Literal["checked", "unchecked"]] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table with an optional header row."""

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Alignment | None] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table``."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Row of table cells."""

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_row``."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell containing inline content."""

    content: list[Node] = field(default_factory=list)
    alignment: Alignment | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_cell``."""
        return visitor.visit_table_cell(self)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_thematic_break``."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw block-level HTML kept verbatim."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_html_block``."""
        return visitor.visit_html_block(self)


@dataclass
class Comment(Node):
    """Block-level HTML comment, without the ``<!--`` and ``-->`` markers."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_comment``."""
        return visitor.visit_comment(self)


@dataclass
class TocMacro(Node):
    """Table of contents placeholder rendered as the ``toc::[]`` block macro.

    Parameters
    ----------
    depth_from : int, default = 1
        Shallowest heading level listed by the source TOC marker
    depth_to : int, default = 6
        Deepest heading level listed by the source TOC marker

    """

    depth_from: int = 1
    depth_to: int = 6
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_toc_macro``."""
        return visitor.visit_toc_macro(self)


@dataclass
class AttributeEntry(Node):
    """Document header attribute declaration (``:name: value``).

    Parameters
    ----------
    name : str
        Attribute name, optionally ending in ``!`` to unset it
    value : str or None, default = None
        Attribute value; None declares the attribute with an empty value

    """

    name: str
    value: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_attribute_entry``."""
        return visitor.visit_attribute_entry(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote body, referenced from the text by its identifier."""

    identifier: str
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_footnote_definition``."""
        return visitor.visit_footnote_definition(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text run."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasized (italic) inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_emphasis``."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_strong``."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Struck-through inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_strikethrough``."""
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Inline code span."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code``."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Hyperlink.

    Parameters
    ----------
    url : str
        Link target
    content : list of Node
        Link text
    title : str or None, default = None
        Optional link title

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_link``."""
        return visitor.visit_link(self)

    @property
    def is_autolink(self) -> bool:
        """True when the link text is the target itself (``<https://...>``)."""
        if len(self.content) != 1 or not isinstance(self.content[0], Text):
            return False
        text = self.content[0].content
        return text == self.url or f"mailto:{text}" == self.url


@dataclass
class Image(Node):
    """Image reference.

    Parameters
    ----------
    url : str
        Image source path or URL
    alt_text : str, default = ""
        Alternative text
    title : str or None, default = None
        Optional image title

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_image``."""
        return visitor.visit_image(self)


@dataclass
class LineBreak(Node):
    """Line break; soft breaks are source newlines inside a paragraph."""

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_line_break``."""
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Raw inline HTML, typically a single start or end tag."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_html_inline``."""
        return visitor.visit_html_inline(self)


@dataclass
class CommentInline(Node):
    """Inline HTML comment, without the comment markers."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_comment_inline``."""
        return visitor.visit_comment_inline(self)


@dataclass
class FootnoteReference(Node):
    """Reference to a footnote definition."""

    identifier: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_footnote_reference``."""
        return visitor.visit_footnote_reference(self)


BLOCK_NODE_TYPES: tuple[type[Node], ...] = (
    Heading,
    Paragraph,
    CodeBlock,
    DiagramBlock,
    BlockQuote,
    List,
    Table,
    ThematicBreak,
    HTMLBlock,
    Comment,
    TocMacro,
    AttributeEntry,
    FootnoteDefinition,
)

_CONTENT_NODE_TYPES = (Heading, Paragraph, Emphasis, Strong, Strikethrough, Link, TableCell, FootnoteDefinition)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(node, _CONTENT_NODE_TYPES):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    return []


def replace_node_children(node: Node, new_children: list[Node]) -> Node:
    """Create a copy of a node with replaced children.

    Parameters
    ----------
    node : Node
        The node to copy and modify
    new_children : list of Node
        New children to use in the copy

    Returns
    -------
    Node
        New node with replaced children; leaf nodes are returned unchanged

    Raises
    ------
    ValueError
        If a Table receives children that are not TableRow instances

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return replace(node, children=new_children)

    if isinstance(node, _CONTENT_NODE_TYPES):
        return replace(node, content=new_children)

    if isinstance(node, List):
        return replace(node, items=new_children)  # type: ignore[arg-type]

    if isinstance(node, Table):
        header_row: TableRow | None = None
        body_rows: list[TableRow] = []
        for child in new_children:
            if not isinstance(child, TableRow):
                raise ValueError(f"Table children must be TableRow instances, got {type(child).__name__}")
            if child.is_header and header_row is None:
                header_row = child
            else:
                body_rows.append(child)
        return replace(node, header=header_row, rows=body_rows)

    if isinstance(node, TableRow):
        return replace(node, cells=new_children)  # type: ignore[arg-type]

    return node
