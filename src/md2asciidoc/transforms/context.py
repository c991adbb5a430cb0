#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/transforms/context.py
"""Per-conversion state shared by the transforms.

A :class:`TransformContext` is created for every conversion and handed
explicitly to the transforms that need it. Nothing in it outlives the call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from md2asciidoc.options.conversion import ConversionOptions
from md2asciidoc.transforms.heading_ids import HeadingIdRegistry


@dataclass
class TransformContext:
    """Traversal state for one conversion.

    Parameters
    ----------
    options : ConversionOptions
        Options of the running conversion
    front_matter : dict, default = empty dict
        Mapping extracted by the source normalizer
    registry : HeadingIdRegistry
        Heading IDs assigned so far, in document order
    header_hints : list of (str, str or None)
        Header attributes requested by earlier transforms (e.g. ``toc``)

    """

    options: ConversionOptions
    front_matter: dict[str, Any] = field(default_factory=dict)
    registry: HeadingIdRegistry = field(default_factory=HeadingIdRegistry)
    header_hints: list[tuple[str, Optional[str]]] = field(default_factory=list)

    @classmethod
    def create(cls, options: ConversionOptions, front_matter: Optional[dict[str, Any]] = None) -> TransformContext:
        """Build a fresh context whose registry uses the configured ID separator."""
        return cls(
            options=options,
            front_matter=dict(front_matter or {}),
            registry=HeadingIdRegistry(separator=options.auto_id_separator),
        )

    def add_header_hint(self, name: str, value: Optional[str] = None) -> None:
        """Request a header attribute; a repeated name keeps its first position and latest value."""
        for index, (existing, _value) in enumerate(self.header_hints):
            if existing == name:
                self.header_hints[index] = (name, value)
                return
        self.header_hints.append((name, value))
