#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/renderers/__init__.py
"""Renderers that turn the AST into output text."""

from __future__ import annotations

from .asciidoc import AsciiDocRenderer
from .base import BaseRenderer
from .wrap import WRAP_STRATEGIES, wrap_text

__all__ = [
    "AsciiDocRenderer",
    "BaseRenderer",
    "WRAP_STRATEGIES",
    "wrap_text",
]
