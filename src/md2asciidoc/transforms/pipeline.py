#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/transforms/pipeline.py
"""Ordered transform pipeline.

The transforms run in a fixed order so that every stage sees the tree shape
it expects:

1. TOC markers are replaced while they are still plain comments
2. Raw HTML is converted (or split) before anything inspects inline content
3. Diagram languages are reclassified
4. Image paths are made relative to ``imagesdir``
5. Heading levels are shifted
6. Heading IDs are assigned, after levels and content are final
7. The title and header attributes are injected last, so they never receive
   generated IDs and see every hint recorded above

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from md2asciidoc.ast.nodes import Document
from md2asciidoc.ast.transforms import NodeTransformer
from md2asciidoc.exceptions import Md2AsciiDocError, TransformError
from md2asciidoc.options.conversion import ConversionOptions
from md2asciidoc.transforms.builtin import (
    DiagramBlockTransform,
    HeaderAttributesTransform,
    HeadingOffsetTransform,
    ImagesDirTransform,
)
from md2asciidoc.transforms.context import TransformContext
from md2asciidoc.transforms.heading_ids import HeadingIdTransform
from md2asciidoc.transforms.html import HtmlPolicyTransform
from md2asciidoc.transforms.toc import TocMarkerTransform

logger = logging.getLogger(__name__)


def build_pipeline(
    options: ConversionOptions,
    front_matter: Optional[dict[str, Any]] = None,
    context: Optional[TransformContext] = None,
) -> list[NodeTransformer]:
    """Create the transforms for one conversion, in application order.

    Parameters
    ----------
    options : ConversionOptions
        Options of the conversion
    front_matter : dict or None, default = None
        Front matter extracted from the source; ignored when ``context`` is given
    context : TransformContext or None, default = None
        Shared state for the transforms; a fresh one is created when omitted

    Returns
    -------
    list of NodeTransformer
        Transform instances sharing one context

    """
    if context is None:
        context = TransformContext.create(options, front_matter)

    transforms: list[NodeTransformer] = [
        TocMarkerTransform(context),
        HtmlPolicyTransform(html_to_native=options.html_to_native),
        DiagramBlockTransform(options.diagram_languages),
    ]
    if options.imagesdir:
        transforms.append(ImagesDirTransform(options.imagesdir, context=context))
    if options.heading_offset:
        transforms.append(HeadingOffsetTransform(offset=options.heading_offset))
    transforms.append(HeadingIdTransform(context))
    transforms.append(HeaderAttributesTransform(context))
    return transforms


def apply_transforms(
    document: Document,
    options: ConversionOptions,
    front_matter: Optional[dict[str, Any]] = None,
) -> Document:
    """Run the full pipeline over a parsed document.

    Parameters
    ----------
    document : Document
        Parsed document; it is not mutated
    options : ConversionOptions
        Options of the conversion
    front_matter : dict or None, default = None
        Front matter extracted from the source

    Returns
    -------
    Document
        Transformed document ready for rendering

    Raises
    ------
    TransformError
        If a transform fails or does not return a Document

    """
    result = document
    transforms = build_pipeline(options, front_matter)

    logger.debug(f"Applying {len(transforms)} transform(s)")

    for transformer in transforms:
        name = transformer.__class__.__name__
        logger.debug(f"Applying transform: {name}")
        try:
            transformed = transformer.transform(result)
        except Md2AsciiDocError:
            raise
        except Exception as e:
            raise TransformError(f"Transform {name} failed: {e}", transform_name=name, original_error=e) from e

        if not isinstance(transformed, Document):
            raise TransformError(
                f"Transform {name} must return Document, got {type(transformed).__name__}",
                transform_name=name,
            )
        result = transformed

    return result
