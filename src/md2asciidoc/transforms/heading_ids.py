#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/transforms/heading_ids.py
"""Heading ID assignment.

Every heading passes through :class:`HeadingIdTransform` in document order.
An explicit ID is kept unless lazy IDs are enabled and it equals the ID that
would be generated. Headings without an ID get a generated one when auto IDs
are enabled. All final IDs go through a :class:`HeadingIdRegistry` so no ID
is used twice.

Examples
--------
    >>> registry = HeadingIdRegistry()
    >>> registry.register("_heading"), registry.register("_heading")
    ('_heading', '_heading-2')

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from md2asciidoc.ast.nodes import Heading
from md2asciidoc.ast.transforms import NodeTransformer
from md2asciidoc.ast.utils import extract_text
from md2asciidoc.constants import DEFAULT_AUTO_ID_SEPARATOR
from md2asciidoc.options.conversion import ConversionOptions
from md2asciidoc.utils.text import make_unique_slug, slugify

if TYPE_CHECKING:
    from md2asciidoc.transforms.context import TransformContext

logger = logging.getLogger(__name__)


class HeadingIdRegistry:
    """IDs in use within one document, with the number of requests for each.

    Parameters
    ----------
    separator : str, default = "-"
        Separator placed before the numeric suffix of a duplicate

    """

    def __init__(self, separator: str = DEFAULT_AUTO_ID_SEPARATOR):
        """Initialize an empty registry."""
        self.separator = separator
        self._counts: dict[str, int] = {}

    def __contains__(self, candidate: object) -> bool:
        """Return True when ``candidate`` has already been handed out."""
        return candidate in self._counts

    def __len__(self) -> int:
        """Return the number of distinct IDs handed out."""
        return len(self._counts)

    def register(self, candidate: str) -> str:
        """Reserve ``candidate`` or the first free suffixed form of it.

        Parameters
        ----------
        candidate : str
            Desired ID

        Returns
        -------
        str
            ``candidate`` when unused, otherwise ``candidate`` followed by the
            separator and the next free number starting at 2

        """
        final_id = make_unique_slug(candidate, self._counts, separator=self.separator)
        if final_id != candidate:
            logger.debug("Duplicate heading ID %r renamed to %r", candidate, final_id)
        return final_id

    def preview(self, candidate: str) -> str:
        """Return what :meth:`register` would return, without reserving it."""
        return make_unique_slug(candidate, dict(self._counts), separator=self.separator)


def generate_heading_id(heading: Heading, options: ConversionOptions) -> str:
    """Compute the base generated ID for a heading, before disambiguation.

    Parameters
    ----------
    heading : Heading
        Heading whose plain text is slugified
    options : ConversionOptions
        Supplies the ID prefix and separator

    Returns
    -------
    str
        Generated ID

    """
    text = extract_text(heading.content)
    return slugify(text, prefix=options.auto_id_prefix, separator=options.auto_id_separator)


class HeadingIdTransform(NodeTransformer):
    """Assign final IDs to headings in document order.

    Lazy IDs are compared against the IDs auto-generation would hand out.
    With auto IDs off those IDs are never emitted, so they are tracked in a
    separate registry that replays the auto-ID run without reserving
    anything in the document's real registry.

    Parameters
    ----------
    context : TransformContext
        Conversion context providing options and the ID registry

    Examples
    --------
        >>> context = TransformContext.create(ConversionOptions(auto_ids=True))
        >>> new_doc = HeadingIdTransform(context).transform(document)

    """

    def __init__(self, context: TransformContext):
        """Initialize with the conversion context."""
        self.context = context
        if context.options.auto_ids:
            self._auto_registry = context.registry
        else:
            self._auto_registry = HeadingIdRegistry(separator=context.options.auto_id_separator)

    def visit_heading(self, node: Heading) -> Heading:
        """Resolve the heading's final ID.

        Parameters
        ----------
        node : Heading
            Heading to process

        Returns
        -------
        Heading
            Heading with its final ID, or no ID

        """
        options = self.context.options
        registry = self.context.registry
        explicit_id: Optional[str] = node.id

        if explicit_id is not None and options.lazy_ids:
            generated_id = self._auto_registry.preview(generate_heading_id(node, options))
            if explicit_id == generated_id:
                logger.debug("Dropping explicit heading ID %r equal to the generated one", explicit_id)
                explicit_id = None

        if explicit_id is not None:
            final_id: Optional[str] = registry.register(explicit_id)
            if self._auto_registry is not registry:
                self._auto_registry.register(explicit_id)
        elif options.auto_ids:
            final_id = registry.register(generate_heading_id(node, options))
        else:
            final_id = None
            if options.lazy_ids:
                self._auto_registry.register(generate_heading_id(node, options))

        return replace(
            node,
            id=final_id,
            content=self._transform_children(node.content),
            metadata=node.metadata.copy(),
        )
