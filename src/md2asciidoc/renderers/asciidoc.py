#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/renderers/asciidoc.py
"""AsciiDoc rendering from AST.

This module provides the AsciiDocRenderer class which converts the final,
transformed AST into AsciiDoc text. Every node kind has a fixed template;
where the template depends on an option (line wrapping, bare URLs, the
delimiter of a listing block) the choice is made through a lookup table
instead of scattered conditionals.

"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Callable

from md2asciidoc.ast.nodes import (
    AttributeEntry,
    BlockQuote,
    Code,
    CodeBlock,
    Comment,
    CommentInline,
    DiagramBlock,
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
    TocMacro,
)
from md2asciidoc.ast.transforms import iter_nodes
from md2asciidoc.ast.utils import is_blank_heading
from md2asciidoc.ast.visitors import NodeVisitor
from md2asciidoc.constants import (
    ASCIIDOC_EMPTY_ATTRIBUTE,
    ASCIIDOC_HARD_BREAK,
    ASCIIDOC_LIST_CONTINUATION,
    ASCIIDOC_LIST_SEPARATOR,
    ASCIIDOC_LISTING_DELIMITER,
    ASCIIDOC_LITERAL_DELIMITER,
    ASCIIDOC_PASS_DELIMITER,
    ASCIIDOC_QUOTE_DELIMITER,
    ASCIIDOC_TABLE_DELIMITER,
    ASCIIDOC_THEMATIC_BREAK,
    TABLE_ALIGNMENT_SPECS,
)
from md2asciidoc.exceptions import RenderingError
from md2asciidoc.options.conversion import ConversionOptions
from md2asciidoc.renderers.base import BaseRenderer
from md2asciidoc.renderers.wrap import wrap_text
from md2asciidoc.utils.escape import (
    escape_asciidoc_text,
    escape_attribute_value,
    escape_macro_text,
    escape_structural_line,
    escape_table_cell,
    format_inline_code,
)

logger = logging.getLogger(__name__)

_FOOTNOTE_ID_INVALID = re.compile(r"[^\w-]")

# Inline formatting marks: (constrained, unconstrained) open and close pairs
_FORMATTING_MARKS: dict[type, tuple[tuple[str, str], tuple[str, str]]] = {
    Strong: (("*", "*"), ("**", "**")),
    Emphasis: (("_", "_"), ("__", "__")),
    Strikethrough: (("[.line-through]#", "#"), ("[.line-through]##", "##")),
}
_BOUNDARY_SENSITIVE = (Strong, Emphasis, Strikethrough, Code)

# Bare autolink policy, keyed by ``auto_links``
_AUTOLINK_STYLES: dict[bool, Callable[[str, str], str]] = {
    True: lambda url, text: text,
    False: lambda url, text: f"link:{url}[]",
}

# Delimited block style per node kind: (attribute line template, delimiter)
_DELIMITED_BLOCK_STYLES: dict[type, tuple[str, str]] = {
    CodeBlock: ("[source,{language}]", ASCIIDOC_LISTING_DELIMITER),
    DiagramBlock: ("[{language}]", ASCIIDOC_LITERAL_DELIMITER),
}


def _is_word_char(char: str) -> bool:
    return bool(char) and (char.isalnum() or char == "_")


def _merge_text_runs(content: list[Node]) -> list[Node]:
    """Join adjacent Text nodes so escaping sees whole runs of text."""
    merged: list[Node] = []
    for node in content:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(content=merged[-1].content + node.content)
        else:
            merged.append(node)
    return merged


def _delimiter_for(content: str, delimiter: str) -> str:
    """Lengthen ``delimiter`` so no line of ``content`` can close the block early."""
    char = delimiter[0]
    longest = max(
        (len(line) for line in content.split("\n") if len(line) >= len(delimiter) and set(line) == {char}),
        default=0,
    )
    return char * (longest + 1) if longest else delimiter


def _macro_target(url: str) -> str:
    return url.replace(" ", "%20")


def _quote_positional(text: str, force: bool = False) -> str:
    """Double-quote a macro's first positional attribute when it would be misread."""
    if force or "," in text or "=" in text or '"' in text:
        return '"' + text.replace('"', '\\"') + '"'
    return text


def _single_line(text: str) -> str:
    return text.replace(f"{ASCIIDOC_HARD_BREAK}\n", " ").replace("\n", " ").strip()


class AsciiDocRenderer(NodeVisitor, BaseRenderer):
    """Render AST nodes to AsciiDoc text.

    This class implements the visitor pattern to traverse an AST and
    generate AsciiDoc output. Visitor methods append to an output buffer;
    block visitors never emit leading or trailing blank lines, the caller
    joins sibling blocks.

    Parameters
    ----------
    options : ConversionOptions or None, default = None
        Conversion options (wrap mode and width, ``auto_links``)

    Examples
    --------
    Basic usage:

        >>> from md2asciidoc.ast import Document, Heading, Text
        >>> from md2asciidoc.renderers.asciidoc import AsciiDocRenderer
        >>> doc = Document(children=[
        ...     Heading(level=1, content=[Text(content="Title")])
        ... ])
        >>> AsciiDocRenderer().render_to_string(doc)
        '= Title'

    """

    def __init__(self, options: ConversionOptions | None = None):
        """Initialize the AsciiDoc renderer with options."""
        BaseRenderer.__init__(self, options)
        self._output: list[str] = []
        self._list_depths: dict[str, int] = {"*": 0, ".": 0}
        self._item_marker: str = "*"
        self._quote_depth: int = 0
        self._macro_depth: int = 0
        self._unconstrained: bool = False
        self._footnote_definitions: dict[str, FootnoteDefinition] = {}
        self._footnote_use_counts: Counter[str] = Counter()
        self._footnotes_emitted: set[str] = set()
        self._autolink_style = _AUTOLINK_STYLES[self.options.auto_links]

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to an AsciiDoc string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            AsciiDoc text without a trailing newline

        Raises
        ------
        RenderingError
            If the tree holds an object that is not an AST node

        """
        self._output = []
        self._list_depths = {"*": 0, ".": 0}
        self._quote_depth = 0
        self._macro_depth = 0
        self._unconstrained = False
        self._footnotes_emitted = set()

        return self._render_node(doc)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render_node(self, node: Node, unconstrained: bool = False) -> str:
        """Render one node to a string without touching the current output."""
        if not isinstance(node, Node):
            raise RenderingError(
                f"Cannot render object of type {type(node).__name__}",
                rendering_stage="dispatch",
            )
        saved_output, saved_flag = self._output, self._unconstrained
        self._output = []
        self._unconstrained = unconstrained
        try:
            node.accept(self)
            return "".join(self._output)
        finally:
            self._output, self._unconstrained = saved_output, saved_flag

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render inline nodes, doubling formatting marks that touch a word character."""
        nodes = _merge_text_runs(content)
        pieces: list[str] = []
        emitted_before: dict[int, set[str]] = {}
        for index, node in enumerate(nodes):
            if isinstance(node, _BOUNDARY_SENSITIVE):
                emitted_before[index] = set(self._footnotes_emitted)
            pieces.append(self._render_node(node))

        for index, node in enumerate(nodes):
            if not isinstance(node, _BOUNDARY_SENSITIVE):
                continue
            piece = pieces[index]
            before = pieces[index - 1][-1:] if index > 0 and not piece[:1].isspace() else ""
            after = pieces[index + 1][:1] if index + 1 < len(pieces) and not piece[-1:].isspace() else ""
            if _is_word_char(before) or _is_word_char(after):
                # A footnote inside the node must render as it did the first time
                emitted_after = self._footnotes_emitted
                self._footnotes_emitted = emitted_before[index]
                try:
                    pieces[index] = self._render_node(node, unconstrained=True)
                finally:
                    self._footnotes_emitted = emitted_after

        return "".join(pieces)

    def _render_macro_text(self, content: list[Node]) -> str:
        """Render inline content placed inside macro brackets."""
        self._macro_depth += 1
        try:
            return self._render_inline_content(content)
        finally:
            self._macro_depth -= 1

    def _format_text_block(self, text: str, prefix: str = "") -> str:
        """Apply the wrap policy, then guard lines that would start a block."""
        wrapped = wrap_text(text, self.options.wrap, self.options.wrap_width, prefix=prefix)
        lines = wrapped.split("\n")
        first = 1 if prefix else 0
        lines[first:] = [escape_structural_line(line) for line in lines[first:]]
        return "\n".join(lines)

    def _join_blocks(self, children: list[Node]) -> str:
        """Render sibling blocks separated by one blank line."""
        parts: list[str] = []
        previous: Node | None = None
        for child in children:
            if isinstance(child, FootnoteDefinition):
                continue
            rendered = self._render_node(child)
            if not rendered:
                continue
            if isinstance(previous, List) and isinstance(child, List):
                parts.append(ASCIIDOC_LIST_SEPARATOR)
            parts.append(rendered)
            previous = child
        return "\n\n".join(parts)

    @staticmethod
    def _header_length(children: list[Node]) -> int:
        """Number of leading children forming the document header."""
        index = 0
        first = children[0] if children else None
        if isinstance(first, Heading) and first.level == 1 and not is_blank_heading(first):
            index = 1
        while index < len(children) and isinstance(children[index], AttributeEntry):
            index += 1
        return index

    def _collect_footnotes(self, node: Document) -> None:
        self._footnote_definitions = {
            child.identifier: child for child in node.children if isinstance(child, FootnoteDefinition)
        }
        self._footnote_use_counts = Counter(
            candidate.identifier for candidate in iter_nodes(node) if isinstance(candidate, FootnoteReference)
        )

    def _wrap_marks(self, node: Strong | Emphasis | Strikethrough, unconstrained: bool) -> str:
        constrained_marks, unconstrained_marks = _FORMATTING_MARKS[type(node)]
        open_mark, close_mark = unconstrained_marks if unconstrained else constrained_marks
        inner = self._render_inline_content(node.content)
        core = inner.strip()
        if not core:
            return inner
        # Constrained marks cannot sit against whitespace, so move it outside
        leading = inner[: len(inner) - len(inner.lstrip())]
        trailing = inner[len(inner.rstrip()) :]
        return f"{leading}{open_mark}{core}{close_mark}{trailing}"

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node.

        The title and the attribute entries directly after it are kept on
        consecutive lines; every other block is separated by a blank line.

        Parameters
        ----------
        node : Document
            Document to render

        """
        self._collect_footnotes(node)

        children = [child for child in node.children if not isinstance(child, FootnoteDefinition)]
        header_length = self._header_length(children)

        parts: list[str] = []
        if header_length:
            parts.append("\n".join(self._render_node(child) for child in children[:header_length]))
        body = self._join_blocks(children[header_length:])
        if body:
            parts.append(body)
        self._output.append("\n\n".join(parts))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node.

        The number of ``=`` characters equals the heading level; an ID is
        written as a block anchor on the line above. A heading without text
        cannot be a section title, so only its ID survives, as an inline
        anchor.

        Parameters
        ----------
        node : Heading
            Heading to render

        """
        if is_blank_heading(node):
            if node.id:
                self._output.append(f"[[{node.id}]]")
            return
        if node.id:
            self._output.append(f"[#{node.id}]\n")
        content = _single_line(self._render_inline_content(node.content))
        self._output.append(f"{'=' * node.level} {content}")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node with the configured wrap mode.

        Parameters
        ----------
        node : Paragraph
            Paragraph to render

        """
        content = self._render_inline_content(node.content)
        self._output.append(self._format_text_block(content))

    def _render_delimited(self, node: CodeBlock | DiagramBlock) -> None:
        attribute_template, delimiter = _DELIMITED_BLOCK_STYLES[type(node)]
        if node.language:
            self._output.append(attribute_template.format(language=node.language) + "\n")
        fence = _delimiter_for(node.content, delimiter)
        body = f"{node.content}\n" if node.content else ""
        self._output.append(f"{fence}\n{body}{fence}")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node as a ``----`` listing block.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        self._render_delimited(node)

    def visit_diagram_block(self, node: DiagramBlock) -> None:
        """Render a DiagramBlock node as a ``....`` literal block named after its language."""
        self._render_delimited(node)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node.

        Nested quotes use a longer delimiter than the quote around them.

        Parameters
        ----------
        node : BlockQuote
            Block quote to render

        """
        delimiter = ASCIIDOC_QUOTE_DELIMITER + "_" * self._quote_depth
        self._quote_depth += 1
        try:
            body = self._join_blocks(node.children)
        finally:
            self._quote_depth -= 1

        if body:
            self._output.append(f"{delimiter}\n{body}\n{delimiter}")
        else:
            self._output.append(f"{delimiter}\n{delimiter}")

    def visit_list(self, node: List) -> None:
        """Render a List node.

        The marker character repeats once per nesting level of lists of the
        same kind.

        Parameters
        ----------
        node : List
            List to render

        """
        marker_char = "." if node.ordered else "*"
        self._list_depths[marker_char] += 1
        marker = marker_char * self._list_depths[marker_char]

        lines: list[str] = []
        if node.ordered and node.start != 1:
            lines.append(f"[start={node.start}]")
        try:
            for item in node.items:
                self._item_marker = marker
                lines.append(self._render_node(item))
        finally:
            self._list_depths[marker_char] -= 1

        self._output.append("\n".join(lines))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node.

        Blocks after the first paragraph are attached with a ``+`` list
        continuation line; nested lists attach without one.

        Parameters
        ----------
        node : ListItem
            List item to render

        """
        marker = self._item_marker
        if node.task_status:
            marker = f"{marker} {'[x]' if node.task_status == 'checked' else '[ ]'}"

        parts: list[str] = []
        remaining = list(node.children)
        if remaining and isinstance(remaining[0], Paragraph):
            text = self._render_inline_content(remaining.pop(0).content)
            parts.append(self._format_text_block(text, prefix=f"{marker} "))
        else:
            parts.append(f"{marker} {ASCIIDOC_EMPTY_ATTRIBUTE}")

        for child in remaining:
            if isinstance(child, FootnoteDefinition):
                continue
            rendered = self._render_node(child)
            if not rendered:
                continue
            if not isinstance(child, List):
                parts.append(ASCIIDOC_LIST_CONTINUATION)
            parts.append(rendered)

        self._output.append("\n".join(parts))

    def visit_table(self, node: Table) -> None:
        """Render a Table node.

        The header row is followed by a blank line, which makes it the
        table's header row in AsciiDoc.

        Parameters
        ----------
        node : Table
            Table to render

        """
        lines: list[str] = []
        if any(alignment for alignment in node.alignments):
            col_specs = [TABLE_ALIGNMENT_SPECS.get(alignment, "") or "1" for alignment in node.alignments]
            lines.append(f'[cols="{",".join(col_specs)}"]')

        lines.append(ASCIIDOC_TABLE_DELIMITER)
        if node.header:
            lines.append(self._render_node(node.header))
            lines.append("")
        for row in node.rows:
            lines.append(self._render_node(row))
        lines.append(ASCIIDOC_TABLE_DELIMITER)

        self._output.append("\n".join(lines))

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node as one line of cells."""
        self._output.append(" ".join(self._render_node(cell) for cell in node.cells))

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node with its separator escaped out of the content."""
        hard_break = f"{ASCIIDOC_HARD_BREAK}\n"
        segments = self._render_inline_content(node.content).split(hard_break)
        content = hard_break.join(segment.replace("\n", " ") for segment in segments)
        self._output.append(f"|{escape_table_cell(content)}")

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append(ASCIIDOC_THEMATIC_BREAK)

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node as a passthrough block.

        Parameters
        ----------
        node : HTMLBlock
            HTML block to render

        """
        fence = _delimiter_for(node.content, ASCIIDOC_PASS_DELIMITER)
        self._output.append(f"{fence}\n{node.content}\n{fence}")

    def visit_comment(self, node: Comment) -> None:
        """Render a Comment node (block-level).

        Each line of the comment becomes an AsciiDoc line comment.

        Parameters
        ----------
        node : Comment
            Comment block to render

        """
        lines = [f"// {line}".rstrip() for line in node.content.split("\n")]
        self._output.append("\n".join(lines))

    def visit_toc_macro(self, node: TocMacro) -> None:
        """Render a TocMacro node."""
        self._output.append("toc::[]")

    def visit_attribute_entry(self, node: AttributeEntry) -> None:
        """Render an AttributeEntry node as ``:name: value`` or ``:name:``."""
        value = _single_line(node.value) if node.value else ""
        self._output.append(f":{node.name}: {value}" if value else f":{node.name}:")

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Render a FootnoteDefinition node.

        Definitions are emitted inline at their first reference, so there is
        nothing to render here.

        """

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node with AsciiDoc markup escaped.

        Parameters
        ----------
        node : Text
            Text to render

        """
        text = escape_asciidoc_text(node.content, escape_urls=not self.options.auto_links)
        if self._macro_depth:
            text = escape_macro_text(text)
        self._output.append(text)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(self._wrap_marks(node, self._unconstrained))

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(self._wrap_marks(node, self._unconstrained))

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node with the ``line-through`` role."""
        self._output.append(self._wrap_marks(node, self._unconstrained))

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        Parameters
        ----------
        node : Code
            Code to render

        """
        self._output.append(format_inline_code(node.content, unconstrained=self._unconstrained))

    def visit_link(self, node: Link) -> None:
        """Render a Link node.

        Links to a fragment of the same document become cross references,
        autolinks follow the ``auto_links`` policy, and every other link uses
        the ``link:`` macro. A link wrapping a single image is expressed as
        the image's ``link`` attribute.

        Parameters
        ----------
        node : Link
            Link to render

        """
        if node.url.startswith("#") and len(node.url) > 1:
            text = _single_line(self._render_inline_content(node.content))
            target = node.url[1:]
            self._output.append(f"<<{target},{text}>>" if text else f"<<{target}>>")
            return

        if node.is_autolink:
            text = node.content[0].content if node.url.startswith("mailto:") else node.url
            self._output.append(self._autolink_style(_macro_target(node.url), text))
            return

        if len(node.content) == 1 and isinstance(node.content[0], Image):
            image = node.content[0]
            self._output.append(self._image_macro(image, extra=f"link={_macro_target(node.url)}"))
            return

        text = _single_line(self._render_macro_text(node.content))
        if node.title:
            attrs = f'{_quote_positional(text, force=not text)},title="{escape_attribute_value(node.title)}"'
        else:
            attrs = _quote_positional(text) if "=" in text else text
        self._output.append(f"link:{_macro_target(node.url)}[{attrs}]")

    def _image_macro(self, node: Image, extra: str | None = None) -> str:
        attrs: list[str] = []
        alt = escape_macro_text(node.alt_text)
        if alt or node.title or extra:
            attrs.append(_quote_positional(alt) if alt else "")
        if node.title:
            attrs.append(f'title="{escape_attribute_value(node.title)}"')
        if extra:
            attrs.append(extra)
        return f"image:{_macro_target(node.url)}[{','.join(attrs)}]"

    def visit_image(self, node: Image) -> None:
        """Render an Image node as an inline ``image:`` macro.

        Parameters
        ----------
        node : Image
            Image to render

        """
        self._output.append(self._image_macro(node))

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node.

        Soft breaks are plain newlines that the wrap policy may reflow; hard
        breaks end the line with `` +``.

        """
        self._output.append("\n" if node.soft else f"{ASCIIDOC_HARD_BREAK}\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node as an inline passthrough.

        Parameters
        ----------
        node : HTMLInline
            Inline HTML to render

        """
        if "+++" in node.content:
            self._output.append(f"pass:[{escape_macro_text(node.content)}]")
        else:
            self._output.append(f"+++{node.content}+++")

    def visit_comment_inline(self, node: CommentInline) -> None:
        """Render a CommentInline node as a passthrough HTML comment."""
        self._output.append(f"+++<!-- {node.content} -->+++")

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a FootnoteReference node.

        The first reference carries the footnote text. A footnote referenced
        more than once is named so later references can point back to it.

        Parameters
        ----------
        node : FootnoteReference
            Footnote reference to render

        """
        footnote_id = _FOOTNOTE_ID_INVALID.sub("_", node.identifier)
        if node.identifier in self._footnotes_emitted:
            self._output.append(f"footnote:{footnote_id}[]")
            return

        self._footnotes_emitted.add(node.identifier)
        definition = self._footnote_definitions.get(node.identifier)
        if definition is None:
            logger.debug(f"Footnote reference '{node.identifier}' has no definition")
            self._output.append(f"footnote:{footnote_id}[]")
            return

        text = _single_line(self._render_macro_text(definition.content))
        if self._footnote_use_counts[node.identifier] > 1:
            self._output.append(f"footnote:{footnote_id}[{text}]")
        else:
            self._output.append(f"footnote:[{text}]")
