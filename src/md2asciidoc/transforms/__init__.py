#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/transforms/__init__.py
"""Option-driven AST rewrites applied between parsing and rendering.

Every transform is a :class:`~md2asciidoc.ast.transforms.NodeTransformer`.
Transforms that need per-conversion state (the heading ID registry, header
attribute hints) receive a :class:`TransformContext` explicitly.

Examples
--------
Run the whole pipeline:

    >>> from md2asciidoc.transforms import apply_transforms
    >>> doc = apply_transforms(doc, ConversionOptions(auto_ids=True))

Use a single transform:

    >>> from md2asciidoc.transforms import HeadingOffsetTransform
    >>> doc = HeadingOffsetTransform(offset=1).transform(doc)

"""

from __future__ import annotations

from .builtin import (
    DiagramBlockTransform,
    HeaderAttributesTransform,
    HeadingOffsetTransform,
    ImagesDirTransform,
)
from .context import TransformContext
from .heading_ids import HeadingIdRegistry, HeadingIdTransform, generate_heading_id
from .html import HtmlPolicyTransform
from .pipeline import apply_transforms, build_pipeline
from .toc import TocMarkerTransform, is_toc_end, parse_toc_begin

__all__ = [
    # Pipeline
    "apply_transforms",
    "build_pipeline",
    "TransformContext",
    # Transforms
    "DiagramBlockTransform",
    "HeaderAttributesTransform",
    "HeadingIdTransform",
    "HeadingOffsetTransform",
    "HtmlPolicyTransform",
    "ImagesDirTransform",
    "TocMarkerTransform",
    # Helpers
    "HeadingIdRegistry",
    "generate_heading_id",
    "is_toc_end",
    "parse_toc_begin",
]
