#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/utils/__init__.py
"""Text helpers shared by the transforms and the renderer."""
