#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that renderers inherit from. It
fixes the rendering interface and centralizes writing the result.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from md2asciidoc.ast import Document
from md2asciidoc.exceptions import OutputWriteError
from md2asciidoc.options.conversion import ConversionOptions


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Parameters
    ----------
    options : ConversionOptions or None, default = None
        Conversion options; defaults are used when None

    """

    def __init__(self, options: ConversionOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options or ConversionOptions()

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        Raises
        ------
        RenderingError
            If a node cannot be expressed in the output format

        """

    def render(self, doc: Document, output: Union[str, Path, IO[str]]) -> None:
        """Render the AST and write it, with a trailing newline, to a path or text stream.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, or IO[str]
            Output destination

        Raises
        ------
        OutputWriteError
            If the output file cannot be written

        """
        self.write_text_output(self.render_to_string(doc) + "\n", output)

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[str]]) -> None:
        """Write text to a file path (UTF-8, parent directories created) or to a text stream.

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("= Hello", buffer)
            >>> print(buffer.getvalue())
            = Hello

        """
        if isinstance(output, (str, Path)):
            path = Path(output)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(text, encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(str(path), original_error=e) from e
            return
        output.write(text)

