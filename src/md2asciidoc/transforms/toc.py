#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/transforms/toc.py
"""TOC marker replacement.

Markdown TOC generators surround the list they maintain with a pair of HTML
comments::

    <!-- TOC depthFrom:2 depthTo:3 -->
    - [Prerequisites](#prerequisites)
    <!-- /TOC -->

The pair and everything between it is replaced by a single
:class:`~md2asciidoc.ast.nodes.TocMacro` and the document header gains
``:toc: macro``. An unmatched marker is left in place as a comment.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from md2asciidoc.ast.nodes import (
    BlockQuote,
    Comment,
    CommentInline,
    Document,
    ListItem,
    Node,
    TocMacro,
)
from md2asciidoc.ast.transforms import NodeTransformer, iter_nodes
from md2asciidoc.constants import (
    MAX_HEADING_LEVEL,
    MIN_HEADING_LEVEL,
    TOC_BEGIN_PATTERN,
    TOC_END_PATTERN,
    TOC_PARAM_PATTERN,
)

if TYPE_CHECKING:
    from md2asciidoc.transforms.context import TransformContext

logger = logging.getLogger(__name__)


def parse_toc_begin(text: str) -> Optional[tuple[int, int]]:
    """Parse the text of a TOC begin comment.

    Parameters
    ----------
    text : str
        Comment text without the ``<!--`` and ``-->`` markers

    Returns
    -------
    tuple of (int, int) or None
        ``(depth_from, depth_to)`` with missing values defaulting to the full
        range, or None when ``text`` is not a begin marker

    Examples
    --------
        >>> parse_toc_begin("TOC depthFrom:2 depthTo:3")
        (2, 3)
        >>> parse_toc_begin("TOC")
        (1, 6)
        >>> parse_toc_begin("/TOC") is None
        True

    """
    match = TOC_BEGIN_PATTERN.match(text.strip())
    if not match:
        return None

    depth_from, depth_to = MIN_HEADING_LEVEL, MAX_HEADING_LEVEL
    for name, value in TOC_PARAM_PATTERN.findall(match.group("params")):
        level = max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, int(value)))
        if name.lower() == "depthfrom":
            depth_from = level
        else:
            depth_to = level
    return depth_from, max(depth_from, depth_to)


def is_toc_end(text: str) -> bool:
    """Return True when comment text is the TOC end marker."""
    return bool(TOC_END_PATTERN.match(text.strip()))


def _toc_begin_of(node: Node) -> Optional[tuple[int, int]]:
    return parse_toc_begin(node.content) if isinstance(node, Comment) else None


def _contains_toc_end(node: Node) -> bool:
    return any(
        isinstance(candidate, (Comment, CommentInline)) and is_toc_end(candidate.content)
        for candidate in iter_nodes(node)
    )


class TocMarkerTransform(NodeTransformer):
    """Replace TOC marker pairs with a TOC macro.

    Parameters
    ----------
    context : TransformContext
        Conversion context that receives the ``toc`` header hints

    """

    def __init__(self, context: TransformContext):
        """Initialize with the conversion context."""
        self.context = context

    def _replace_markers(self, children: list[Node]) -> list[Node]:
        """Replace each matched begin/end range in a list of sibling blocks."""
        result: list[Node] = []
        index = 0
        while index < len(children):
            child = children[index]
            depth = _toc_begin_of(child)
            if depth is None:
                result.append(child)
                index += 1
                continue

            end_index = self._find_end(children, index)
            if end_index is None:
                logger.debug("TOC begin marker without end marker left as a comment")
                result.append(child)
                index += 1
                continue

            depth_from, depth_to = depth
            result.append(TocMacro(depth_from=depth_from, depth_to=depth_to))
            self._record_hints(depth_to)
            index = end_index + 1
        return result

    @staticmethod
    def _find_end(children: list[Node], begin_index: int) -> Optional[int]:
        """Index of the sibling that is, or contains, the matching end marker."""
        for index in range(begin_index + 1, len(children)):
            candidate = children[index]
            if _contains_toc_end(candidate):
                return index
            if _toc_begin_of(candidate) is not None:
                return None
        return None

    def _record_hints(self, depth_to: int) -> None:
        hints = dict(self.context.header_hints)
        if "toc" in hints:
            return
        self.context.add_header_hint("toc", "macro")
        if depth_to < MAX_HEADING_LEVEL:
            # Markdown level 1 is the document title, so section levels start one lower
            self.context.add_header_hint("toclevels", str(max(1, depth_to - 1)))

    def visit_document(self, node: Document) -> Document:
        """Replace markers among top-level blocks, then among nested blocks."""
        return Document(
            children=self._transform_children(self._replace_markers(node.children)),
            metadata=node.metadata.copy(),
        )

    def visit_block_quote(self, node: BlockQuote) -> BlockQuote:
        """Replace markers inside a block quote."""
        return BlockQuote(
            children=self._transform_children(self._replace_markers(node.children)),
            metadata=node.metadata.copy(),
        )

    def visit_list_item(self, node: ListItem) -> ListItem:
        """Replace markers inside a list item."""
        return ListItem(
            children=self._transform_children(self._replace_markers(node.children)),
            task_status=node.task_status,
            metadata=node.metadata.copy(),
        )
