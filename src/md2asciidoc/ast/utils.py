#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/ast/utils.py
"""Utility functions for working with AST nodes."""

from __future__ import annotations

from typing import Union

from md2asciidoc.ast.nodes import Code, Heading, Image, LineBreak, Node, Text, get_node_children


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Text runs and inline code contribute their content, images their alt
    text, and line breaks a single space. Markup nodes contribute the text
    of their children.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String used to join the text of sibling nodes. The default keeps the
        text exactly as written, which is what heading ID generation needs.

    Returns
    -------
    str
        Concatenated plain text

    Examples
    --------
        >>> from md2asciidoc.ast import Paragraph, Strong, Text
        >>> para = Paragraph(content=[
        ...     Text(content="This is "),
        ...     Strong(content=[Text(content="bold")]),
        ...     Text(content=" text.")
        ... ])
        >>> extract_text(para)
        'This is bold text.'

    """
    if isinstance(node_or_nodes, list):
        text_parts = []
        for node in node_or_nodes:
            extracted = extract_text(node, joiner=joiner)
            if extracted:
                text_parts.append(extracted)
        return joiner.join(text_parts)

    node = node_or_nodes
    if isinstance(node, (Text, Code)):
        return node.content
    if isinstance(node, Image):
        return node.alt_text
    if isinstance(node, LineBreak):
        return " "

    return extract_text(get_node_children(node), joiner=joiner)


def is_blank_heading(node: Heading) -> bool:
    """Return True when a heading holds nothing but whitespace text."""
    return all(isinstance(child, Text) and not child.content.strip() for child in node.content)
