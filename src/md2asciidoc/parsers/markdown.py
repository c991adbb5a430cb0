#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/parsers/markdown.py
"""Markdown to AST converter.

This module converts normalized Markdown text into the md2asciidoc AST using
the mistune parser. Mistune produces a token stream; each token type has a
small handler that builds the matching node.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Literal

import mistune

from md2asciidoc.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Comment,
    CommentInline,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    extract_text,
)
from md2asciidoc.constants import MAX_HEADING_LEVEL, MIN_HEADING_LEVEL
from md2asciidoc.exceptions import ParsingError
from md2asciidoc.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

_LAX_ATX_PATTERN = re.compile(r"^( {0,3})(#{1,6})(?=[^#\s])")
_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_EXPLICIT_ID_PATTERN = re.compile(r"\s*\{#(?P<id>[A-Za-z_][\w.:-]*)\}\s*$")


def relax_atx_headings(text: str) -> str:
    """Insert the missing space in ATX headings written as ``#Heading``.

    Lines inside fenced code blocks are left untouched.

    Parameters
    ----------
    text : str
        Normalized Markdown text

    Returns
    -------
    str
        Text where every ``#Heading`` line reads ``# Heading``

    Examples
    --------
    >>> relax_atx_headings("#Heading\\n\\n```\\n#not-a-heading\\n```")
    '# Heading\\n\\n```\\n#not-a-heading\\n```'

    """
    lines = text.split("\n")
    fence: str | None = None
    for index, line in enumerate(lines):
        fence_match = _FENCE_PATTERN.match(line)
        if fence is not None:
            if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                fence = None
            continue
        if fence_match:
            fence = fence_match.group(1)
            continue
        lines[index] = _LAX_ATX_PATTERN.sub(r"\1\2 ", line)
    return "\n".join(lines)


class MarkdownToAstConverter:
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\n\nThis is **bold**.")

    With options:

        >>> options = MarkdownParserOptions.for_format("gfm")
        >>> doc = MarkdownToAstConverter(options).parse(markdown_text)

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        self.options = options or MarkdownParserOptions()
        self._footnote_definitions: dict[str, list[Node]] = {}

    def parse(self, markdown_content: str) -> Document:
        """Parse normalized Markdown text into an AST Document.

        Parameters
        ----------
        markdown_content : str
            Normalized Markdown text (see :func:`md2asciidoc.normalize.normalize_source`)

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        # Reset parser state to prevent leakage across parse calls
        self._footnote_definitions = {}

        if self.options.lax_atx_headings:
            markdown_content = relax_atx_headings(markdown_content)

        markdown = mistune.create_markdown(plugins=self.options.plugins, renderer=None)
        try:
            tokens, _state = markdown.parse(markdown_content)
        except Exception as exc:
            raise ParsingError(
                f"Failed to parse Markdown: {exc}", parsing_stage="tokenize", original_error=exc
            ) from exc

        children = self._process_tokens(tokens if isinstance(tokens, list) else [])

        # Add footnote definitions at end if present
        for identifier, content in self._footnote_definitions.items():
            children.append(FootnoteDefinition(identifier=identifier, content=content))

        logger.debug("Parsed %d top-level blocks (format=%s)", len(children), self.options.input_format)
        return Document(children=children)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of block tokens into AST nodes."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is None:
                continue
            if isinstance(node, list):
                nodes.extend(node)
            else:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single mistune block token into an AST node.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node, list of Node, or None
            Resulting AST node(s)

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items - treat like paragraph
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return self._process_html_block(token)
        elif token_type == "footnotes":
            self._process_footnotes(token)
            return None
        elif token_type == "blank_line":
            return None

        logger.debug("Skipping unsupported block token: %s", token_type)
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token, splitting off a trailing ``{#id}``."""
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or not MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
            level = MIN_HEADING_LEVEL

        content = self._process_inline_tokens(token.get("children", []))
        explicit_id = None
        if self.options.explicit_heading_ids:
            content, explicit_id = self._split_explicit_id(content)

        return Heading(level=level, content=content, id=explicit_id)

    @staticmethod
    def _split_explicit_id(content: list[Node]) -> tuple[list[Node], str | None]:
        """Remove a trailing ``{#id}`` from heading content."""
        if not content or not isinstance(content[-1], Text):
            return content, None
        match = _EXPLICIT_ID_PATTERN.search(content[-1].content)
        if not match:
            return content, None

        remaining = content[-1].content[: match.start()]
        new_content = content[:-1]
        if remaining:
            new_content.append(Text(content=remaining))
        return new_content, match.group("id")

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph token."""
        return Paragraph(content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The first word of the fence info string becomes the language.
        """
        content = token.get("raw", "")
        if content.endswith("\n"):
            content = content[:-1]

        attrs = token.get("attrs", {})
        info = (attrs.get("info") if isinstance(attrs, dict) else None) or ""
        info = info.strip()
        language = info.split()[0] if info else None

        return CodeBlock(content=content, language=language, info_string=info or None)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = token.get("tight", attrs.get("tight", True))

        items = [
            self._process_list_item(child)
            for child in token.get("children", [])
            if isinstance(child, dict) and child.get("type") in ("list_item", "task_list_item")
        ]
        return List(ordered=ordered, items=items, start=start, tight=bool(tight))

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        """Process list item token, including task list checkboxes."""
        content = self._process_tokens(token.get("children", []))

        task_status: Literal["checked", "unchecked"] | None = None
        attrs = token.get("attrs", {})
        if isinstance(attrs, dict) and "checked" in attrs:
            task_status = "checked" if attrs["checked"] else "unchecked"

        return ListItem(children=content, task_status=task_status)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Mistune places header cells directly under ``table_head`` and body
        rows under ``table_body``.
        """
        header = None
        rows: list[TableRow] = []
        alignments: list[Any] = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                cells = self._process_table_cells(section.get("children", []))
                alignments = [cell.alignment for cell in cells]
                header = TableRow(cells=cells, is_header=True)
            elif section_type == "table_body":
                for row_token in section.get("children", []):
                    if row_token.get("type") == "table_row":
                        rows.append(TableRow(cells=self._process_table_cells(row_token.get("children", []))))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, cell_tokens: list[dict[str, Any]]) -> list[TableCell]:
        """Process the cell tokens of one table row."""
        cells = []
        for cell_token in cell_tokens:
            if cell_token.get("type") != "table_cell":
                continue
            attrs = cell_token.get("attrs", {})
            align = attrs.get("align") if isinstance(attrs, dict) else None
            cells.append(
                TableCell(
                    content=self._process_inline_tokens(cell_token.get("children", [])),
                    alignment=align if align in ("left", "center", "right") else None,
                )
            )
        return cells

    def _process_html_block(self, token: dict[str, Any]) -> HTMLBlock | Comment:
        """Process HTML block token; a lone comment becomes a Comment node."""
        content = token.get("raw", "").rstrip("\n")
        if self._is_html_comment(content):
            return Comment(content=self._extract_comment_text(content))
        return HTMLBlock(content=content)

    def _process_footnotes(self, token: dict[str, Any]) -> None:
        """Record the footnote definitions collected by the footnotes plugin."""
        for item in token.get("children", []):
            attrs = item.get("attrs", {})
            identifier = str(attrs.get("key") or attrs.get("label") or attrs.get("index", ""))
            content = self._process_tokens(item.get("children", []))
            inline_content: list[Node] = []
            for block in content:
                if isinstance(block, Paragraph):
                    if inline_content:
                        inline_content.append(LineBreak(soft=False))
                    inline_content.extend(block.content)
                else:
                    logger.debug(
                        "Footnote %s contains a %s block; keeping its text only", identifier, type(block).__name__
                    )
                    inline_content.append(Text(content=extract_text(block, joiner=" ")))
            self._footnote_definitions[identifier] = inline_content

    def _process_inline_tokens(self, tokens: Any) -> list[Node]:
        """Process inline tokens into AST nodes."""
        if not isinstance(tokens, list):
            return []
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if node is None:
                continue
            if isinstance(node, list):
                nodes.extend(node)
            else:
                nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        """Handle strong token."""
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle emphasis token."""
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs", {})
        return Link(
            url=attrs.get("url", ""),
            content=self._process_inline_tokens(token.get("children", [])),
            title=attrs.get("title"),
        )

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; the alt text is the plain text of its children."""
        attrs = token.get("attrs", {})
        alt_text = extract_text(self._process_inline_tokens(token.get("children", [])))
        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle hard line break token."""
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle soft line break token."""
        return LineBreak(soft=True)

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        """Handle strikethrough token."""
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_inline_html_token(self, token: dict[str, Any]) -> Node:
        """Handle inline_html token."""
        content = token.get("raw", "")
        if self._is_html_comment(content):
            return CommentInline(content=self._extract_comment_text(content))
        return HTMLInline(content=content)

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> FootnoteReference:
        """Handle footnote_ref token."""
        attrs = token.get("attrs", {})
        identifier = attrs.get("label") or attrs.get("key") or token.get("raw", "")
        return FootnoteReference(identifier=str(identifier))

    def _process_inline_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node, list of Node, or None
            Inline AST node(s)

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "strikethrough": self._handle_strikethrough_token,
            "inline_html": self._handle_inline_html_token,
            "footnote_ref": self._handle_footnote_ref_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug("Skipping unsupported inline token: %s", token_type)
        return None

    @staticmethod
    def _is_html_comment(content: str) -> bool:
        """Check if HTML content is a single comment."""
        stripped = content.strip()
        return stripped.startswith("<!--") and stripped.endswith("-->") and stripped.count("-->") == 1

    @staticmethod
    def _extract_comment_text(content: str) -> str:
        """Extract text from an HTML comment, without the markers."""
        return content.strip()[4:-3].strip()


def parse_markdown(text: str, options: MarkdownParserOptions | None = None) -> Document:
    """Parse normalized Markdown into a Document.

    Parameters
    ----------
    text : str
        Normalized Markdown text
    options : MarkdownParserOptions or None, default None
        Parser options; defaults to the ``markdown`` input format

    Returns
    -------
    Document
        Parsed document tree

    """
    return MarkdownToAstConverter(options or MarkdownParserOptions.for_format("markdown")).parse(text)
