#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/transforms/builtin.py
"""Built-in option-driven transforms.

Available Transforms
--------------------
- HeadingOffsetTransform: Shift heading levels, clamped to 1-6
- ImagesDirTransform: Strip the images directory from image paths
- DiagramBlockTransform: Turn diagram-language code blocks into diagram blocks
- HeaderAttributesTransform: Inject the document title and header attributes

Examples
--------
Offset headings by -1 level:

    >>> transform = HeadingOffsetTransform(offset=-1)
    >>> new_doc = transform.transform(doc)

"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Iterable, Optional

from md2asciidoc.ast.nodes import (
    AttributeEntry,
    CodeBlock,
    DiagramBlock,
    Document,
    Heading,
    Image,
    Node,
    Text,
)
from md2asciidoc.ast.transforms import NodeTransformer
from md2asciidoc.ast.utils import is_blank_heading
from md2asciidoc.constants import ATTRIBUTE_NAME_PATTERN, MAX_HEADING_LEVEL, MIN_HEADING_LEVEL

if TYPE_CHECKING:
    from md2asciidoc.transforms.context import TransformContext

logger = logging.getLogger(__name__)


class HeadingOffsetTransform(NodeTransformer):
    """Shift heading levels by a specified offset.

    This transform adjusts all heading levels in the document by adding
    an offset value. Levels are clamped to the valid range of 1-6, so a
    heading pushed past either end renders at the nearest boundary.

    Parameters
    ----------
    offset : int, default = 0
        Number of levels to shift (positive to increase, negative to decrease)

    Examples
    --------
    Decrease all heading levels by 1 (H2 becomes H1):

        >>> transform = HeadingOffsetTransform(offset=-1)
        >>> new_doc = transform.transform(document)

    """

    def __init__(self, offset: int = 0):
        """Initialize with heading level offset."""
        self.offset = offset

    def visit_heading(self, node: Heading) -> Heading:
        """Adjust heading level."""
        new_level = max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, node.level + self.offset))

        return Heading(
            level=new_level,
            content=self._transform_children(node.content),
            id=node.id,
            metadata=node.metadata.copy(),
        )


def _strip_dot_slash(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path


class ImagesDirTransform(NodeTransformer):
    """Make image paths relative to the images directory.

    An image whose path starts with ``imagesdir`` followed by ``/`` loses that
    prefix. A leading ``./`` on either side is ignored. Other paths, including
    URLs, are left untouched.

    Parameters
    ----------
    imagesdir : str
        Directory prefix to strip
    context : TransformContext or None, default = None
        When given, the ``imagesdir`` header attribute is requested so the
        shortened paths still resolve

    Examples
    --------
        >>> transform = ImagesDirTransform("images")
        >>> transform.rewrite("images/sunset.jpg")
        'sunset.jpg'
        >>> transform.rewrite("assets/sunset.jpg")
        'assets/sunset.jpg'

    """

    def __init__(self, imagesdir: str, context: Optional[TransformContext] = None):
        """Initialize with the images directory."""
        self.imagesdir = imagesdir
        self._prefix = _strip_dot_slash(imagesdir).rstrip("/") + "/"
        self.context = context

    def rewrite(self, url: str) -> str:
        """Return ``url`` relative to the images directory, when it lies inside it."""
        path = _strip_dot_slash(url)
        if self._prefix != "/" and path.startswith(self._prefix) and len(path) > len(self._prefix):
            return path[len(self._prefix) :]
        return url

    def visit_document(self, node: Document) -> Document:
        """Request the ``imagesdir`` header attribute, then rewrite the tree."""
        if self.context is not None:
            self.context.add_header_hint("imagesdir", self.imagesdir.rstrip("/") or self.imagesdir)
        return super().visit_document(node)

    def visit_image(self, node: Image) -> Image:
        """Strip the images directory from the image path."""
        new_url = self.rewrite(node.url)
        if new_url != node.url:
            logger.debug("Image path %r rewritten to %r", node.url, new_url)
        return replace(node, url=new_url, metadata=node.metadata.copy())


class DiagramBlockTransform(NodeTransformer):
    """Reclassify code blocks written in a diagram language.

    Parameters
    ----------
    languages : iterable of str
        Diagram language names, matched case-insensitively against the
        code block language

    Examples
    --------
        >>> transform = DiagramBlockTransform(["plantuml", "mermaid"])
        >>> new_doc = transform.transform(doc)

    """

    def __init__(self, languages: Iterable[str]):
        """Initialize with the diagram languages."""
        self.languages = {language.lower() for language in languages}

    def visit_code_block(self, node: CodeBlock) -> CodeBlock | DiagramBlock:  # type: ignore[override]
        """Return a DiagramBlock for diagram languages, otherwise a copy of the code block."""
        if node.language and node.language.lower() in self.languages:
            return DiagramBlock(
                content=node.content,
                language=node.language.lower(),
                metadata=node.metadata.copy(),
            )
        return super().visit_code_block(node)


def _front_matter_attribute(key: str, value: Any) -> tuple[str, Optional[str]] | None:
    """Convert one front matter entry into a header attribute, if it is a scalar."""
    if not ATTRIBUTE_NAME_PATTERN.match(key):
        logger.debug("Skipping front matter key %r: not a valid attribute name", key)
        return None
    if isinstance(value, (list, dict, set, tuple)):
        logger.debug("Skipping front matter key %r: value is not a scalar", key)
        return None
    if value is None or value is True:
        return key, None
    if value is False:
        return f"{key.rstrip('!')}!", None
    if isinstance(value, (date, datetime)):
        return key, value.isoformat()
    return key, str(value).replace("\n", " ").strip()


class HeaderAttributesTransform(NodeTransformer):
    """Place the document title and header attributes at the top of the document.

    The front matter ``title`` becomes a level-1 heading when the document
    does not already start with one; otherwise it is declared as the
    ``title`` attribute. The remaining scalar front matter entries, the hints
    recorded by earlier transforms, and the user attributes follow as
    :class:`AttributeEntry` nodes directly after the title, in that order.

    Parameters
    ----------
    context : TransformContext
        Conversion context providing front matter, hints and options

    """

    def __init__(self, context: TransformContext):
        """Initialize with the conversion context."""
        self.context = context

    def _collect_entries(self, has_title: bool) -> list[tuple[str, Optional[str]]]:
        entries: list[tuple[str, Optional[str]]] = []
        for key, value in self.context.front_matter.items():
            if key == "title":
                if has_title and value is not None:
                    entries.append(("title", str(value).strip()))
                continue
            entry = _front_matter_attribute(key, value)
            if entry is not None:
                entries.append(entry)
        entries.extend(self.context.header_hints)
        entries.extend(self.context.options.attributes)
        return entries

    def visit_document(self, node: Document) -> Document:
        """Insert the title heading and attribute entries."""
        document = super().visit_document(node)
        children: list[Node] = list(document.children)

        first = children[0] if children else None
        starts_with_title = isinstance(first, Heading) and first.level == 1 and not is_blank_heading(first)
        title = self.context.front_matter.get("title")
        title_text = str(title).strip() if title is not None else ""

        if title_text and not starts_with_title:
            children.insert(0, Heading(level=1, content=[Text(content=title_text)]))
            starts_with_title = True
            entries = self._collect_entries(has_title=False)
        else:
            entries = self._collect_entries(has_title=bool(title_text))

        position = 1 if starts_with_title else 0
        attribute_nodes: list[Node] = [AttributeEntry(name=name, value=value) for name, value in entries]
        children[position:position] = attribute_nodes

        if attribute_nodes:
            logger.debug("Injected %d header attributes", len(attribute_nodes))

        document.children = children
        return document
