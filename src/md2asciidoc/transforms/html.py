#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/transforms/html.py
"""Raw HTML policy.

Markdown allows raw HTML anywhere. With ``html_to_native`` enabled, simple
phrasing markup (bold, italic, code, strikethrough, links, images and line
breaks) is rewritten into native nodes so it renders as AsciiDoc markup.
Everything else stays raw and is rendered as passthrough.

With ``html_to_native`` disabled, nothing is converted. An HTML block made
only of phrasing markup is split into a paragraph of one passthrough per tag
so the surrounding text is still rendered (and escaped) as text.

"""

from __future__ import annotations

import html
import logging
import re
from typing import Any, Callable, Optional

from bs4 import BeautifulSoup
from bs4.element import Comment as HtmlComment
from bs4.element import NavigableString, Tag

from md2asciidoc.ast.nodes import (
    Code,
    CommentInline,
    Emphasis,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
)
from md2asciidoc.ast.transforms import NodeTransformer
from md2asciidoc.ast.utils import extract_text

logger = logging.getLogger(__name__)

# Tags that have a native inline equivalent
_PAIRED_TAG_NODES: dict[str, Callable[[list[Node]], Node]] = {
    "strong": lambda content: Strong(content=content),
    "b": lambda content: Strong(content=content),
    "em": lambda content: Emphasis(content=content),
    "i": lambda content: Emphasis(content=content),
    "code": lambda content: Code(content=extract_text(content)),
    "tt": lambda content: Code(content=extract_text(content)),
    "kbd": lambda content: Code(content=extract_text(content)),
    "del": lambda content: Strikethrough(content=content),
    "s": lambda content: Strikethrough(content=content),
    "strike": lambda content: Strikethrough(content=content),
}
_VOID_TAGS = frozenset({"br", "img"})
NATIVE_TAGS = frozenset(_PAIRED_TAG_NODES) | {"a"} | _VOID_TAGS

# Tags that may appear in an HTML block split into per-tag passthroughs
PHRASING_TAGS = NATIVE_TAGS | {
    "p",
    "span",
    "sub",
    "sup",
    "mark",
    "small",
    "u",
    "abbr",
    "q",
    "cite",
    "var",
    "samp",
    "ins",
}

_OPEN_TAG_PATTERN = re.compile(r"^<(?P<name>[A-Za-z][A-Za-z0-9]*)\b[^>]*?/?>$", re.DOTALL)
_CLOSE_TAG_PATTERN = re.compile(r"^</(?P<name>[A-Za-z][A-Za-z0-9]*)\s*>$")
_HTML_TOKEN_PATTERN = re.compile(r"(<!--.*?-->|<[^>]+>)", re.DOTALL)
_WHITESPACE_RUN = re.compile(r"\s+")


def _parse_fragment(raw: str) -> BeautifulSoup:
    return BeautifulSoup(raw, "html.parser")


def _open_tag(raw: str) -> Optional[Tag]:
    """Return the element of a single opening or void tag, or None."""
    match = _OPEN_TAG_PATTERN.match(raw.strip())
    if not match:
        return None
    element = _parse_fragment(raw).find(match.group("name").lower())
    return element if isinstance(element, Tag) else None


def _close_tag_name(raw: str) -> Optional[str]:
    match = _CLOSE_TAG_PATTERN.match(raw.strip())
    return match.group("name").lower() if match else None


def _void_node(element: Tag) -> Optional[Node]:
    if element.name == "br":
        return LineBreak(soft=False)
    if element.name == "img" and element.get("src"):
        return Image(
            url=str(element.get("src")),
            alt_text=str(element.get("alt") or ""),
            title=str(element["title"]) if element.get("title") else None,
        )
    return None


def _is_native_element(element: Tag) -> bool:
    if element.name not in NATIVE_TAGS:
        return False
    if element.name == "a":
        return bool(element.get("href"))
    if element.name == "img":
        return bool(element.get("src"))
    return True


def _top_level_elements(soup: BeautifulSoup) -> list[Any]:
    """Top-level children of a parsed fragment, without blank text."""
    return [child for child in soup.contents if not (isinstance(child, NavigableString) and not child.strip())]


def _phrasing_root(
    soup: BeautifulSoup, allowed: frozenset[str], require_native: bool = False
) -> Optional[list[Any]]:
    """Return the phrasing children of a fragment made of one ``<p>`` or only phrasing content.

    Returns None when the fragment holds any tag outside ``allowed``, or a
    link or image lacking its target when ``require_native`` is set.
    """
    top = _top_level_elements(soup)
    if not top:
        return None
    if len(top) == 1 and isinstance(top[0], Tag) and top[0].name == "p":
        root: list[Any] = list(top[0].children)
    else:
        root = list(soup.contents)

    for element in soup.find_all(True):
        if element.name == "p" and element is top[0]:
            continue
        if element.name not in allowed:
            return None
        if require_native and not _is_native_element(element):
            return None
    return root


class HtmlPolicyTransform(NodeTransformer):
    """Apply the raw HTML policy to HTML blocks and inline HTML.

    Parameters
    ----------
    html_to_native : bool, default = True
        Convert simple HTML into native nodes

    Examples
    --------
        >>> transform = HtmlPolicyTransform(html_to_native=True)
        >>> new_doc = transform.transform(doc)

    """

    def __init__(self, html_to_native: bool = True):
        """Initialize with the HTML policy."""
        self.html_to_native = html_to_native

    def _transform_children(self, children: list[Node]) -> list[Node]:
        """Transform children, then pair inline start and end tags."""
        transformed = super()._transform_children(children)
        if self.html_to_native and any(isinstance(child, HTMLInline) for child in transformed):
            return self._pair_inline_tags(transformed)
        return transformed

    def _pair_inline_tags(self, nodes: list[Node]) -> list[Node]:
        """Replace matched native start/end tag pairs with native nodes."""
        result: list[Node] = []
        index = 0
        while index < len(nodes):
            node = nodes[index]
            element = _open_tag(node.content) if isinstance(node, HTMLInline) else None
            if element is not None and element.name in _VOID_TAGS:
                void_node = _void_node(element)
                if void_node is not None:
                    result.append(void_node)
                    index += 1
                    continue
            elif element is not None and _is_native_element(element):
                close_index = self._find_close_tag(nodes, index, element.name)
                if close_index is not None:
                    inner = self._pair_inline_tags(nodes[index + 1 : close_index])
                    result.append(self._native_node(element, inner))
                    index = close_index + 1
                    continue
            result.append(node)
            index += 1
        return result

    @staticmethod
    def _find_close_tag(nodes: list[Node], open_index: int, name: str) -> Optional[int]:
        """Index of the end tag matching the start tag at ``open_index``."""
        depth = 0
        for index in range(open_index + 1, len(nodes)):
            node = nodes[index]
            if not isinstance(node, HTMLInline):
                continue
            if _close_tag_name(node.content) == name:
                if depth == 0:
                    return index
                depth -= 1
            else:
                element = _open_tag(node.content)
                if element is not None and element.name == name:
                    depth += 1
        return None

    @staticmethod
    def _native_node(element: Tag, content: list[Node]) -> Node:
        if element.name == "a":
            return Link(
                url=str(element.get("href")),
                content=content,
                title=str(element["title"]) if element.get("title") else None,
            )
        return _PAIRED_TAG_NODES[element.name](content)

    def _element_to_inline(self, element: Any) -> list[Node]:
        """Convert a parsed HTML node (known to be native phrasing) into inline nodes."""
        if isinstance(element, HtmlComment):
            return [CommentInline(content=str(element).strip())]
        if isinstance(element, NavigableString):
            text = _WHITESPACE_RUN.sub(" ", str(element))
            return [Text(content=text)] if text else []
        if not isinstance(element, Tag):
            return []
        if element.name in _VOID_TAGS:
            void_node = _void_node(element)
            return [void_node] if void_node is not None else []

        content: list[Node] = []
        for child in element.children:
            content.extend(self._element_to_inline(child))
        return [self._native_node(element, content)]

    @staticmethod
    def _trim_edges(content: list[Node]) -> list[Node]:
        if content and isinstance(content[0], Text):
            content[0] = Text(content=content[0].content.lstrip())
        if content and isinstance(content[-1], Text):
            content[-1] = Text(content=content[-1].content.rstrip())
        return [node for node in content if not (isinstance(node, Text) and not node.content)]

    @staticmethod
    def _split_passthrough(raw: str) -> list[Node]:
        """Split raw phrasing HTML into one HTMLInline per tag plus text runs."""
        content: list[Node] = []
        for piece in _HTML_TOKEN_PATTERN.split(raw.strip()):
            if not piece:
                continue
            if piece.startswith("<!--"):
                content.append(CommentInline(content=piece[4:-3].strip()))
            elif piece.startswith("<"):
                content.append(HTMLInline(content=piece))
            else:
                lines = html.unescape(piece).split("\n")
                for line_index, line in enumerate(lines):
                    if line_index:
                        content.append(LineBreak(soft=True))
                    if line:
                        content.append(Text(content=line))
        return content

    def visit_html_block(self, node: HTMLBlock) -> Node:  # type: ignore[override]
        """Convert a phrasing-only HTML block into a paragraph when the policy allows."""
        soup = _parse_fragment(node.content)

        if self.html_to_native:
            root = _phrasing_root(soup, NATIVE_TAGS, require_native=True)
            if root is None:
                return super().visit_html_block(node)
            content: list[Node] = []
            for child in root:
                content.extend(self._element_to_inline(child))
            content = self._trim_edges(content)
            if not content:
                return super().visit_html_block(node)
            logger.debug("Converted HTML block into a native paragraph")
            return Paragraph(content=content, metadata=node.metadata.copy())

        if _phrasing_root(soup, PHRASING_TAGS) is None:
            return super().visit_html_block(node)
        return Paragraph(
            content=self._split_passthrough(node.content),
            metadata=node.metadata.copy(),
        )
