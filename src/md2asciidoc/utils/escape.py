#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/utils/escape.py
"""AsciiDoc text escaping utilities.

Markdown text can contain character sequences that AsciiDoc would read as
markup. The functions here neutralize them with the least intrusive form:
a backslash before inline markup, and an ``{empty}`` attribute reference in
front of lines that would otherwise start a block.

"""

from __future__ import annotations

import re

from md2asciidoc.constants import ASCIIDOC_EMPTY_ATTRIBUTE

# Lines that AsciiDoc parses as block structure rather than paragraph text
_STRUCTURAL_LINE_PATTERNS = (
    re.compile(r"^=+\s+\S"),  # section title
    re.compile(r"^(\*+|-|\.+|\d+\.|[a-zA-Z]\.|[ivxIVX]+\))\s+\S"),  # list markers
    re.compile(r"^<\d+>\s+\S"),  # callout list
    re.compile(r"^//"),  # comment
    re.compile(r"^\.[^\s.]"),  # block title
    re.compile(r"^:[\w!-]*:(\s|$)"),  # attribute entry
    re.compile(r"^\[.*\]$"),  # block attribute list
    re.compile(r"^(-{2,}|\.{4,}|_{4,}|\+{4,}|\*{4,}|={4,}|/{4,}|'{3,}|<{3,}|\|={3,}|~{4,})$"),  # delimiters
    re.compile(r"^>(\s|$)"),  # markdown-style quote
    re.compile(r"^(NOTE|TIP|IMPORTANT|WARNING|CAUTION):\s"),  # admonition paragraph
    re.compile(r"^[^\s:][^:]*?(:{2,4}|;;)(\s|$)"),  # description list term
    re.compile(r"^[\w-]+::\S*\[.*\]$"),  # block macro
    re.compile(r"^\s"),  # literal paragraph
)

_ATTRIBUTE_REFERENCE = re.compile(r"(?<!\\)\{(?=[\w-]+\})")
_DOUBLE_ANGLE = re.compile(r"(?<!\\)<<")
_DOUBLE_BRACKET = re.compile(r"(?<!\\)\[\[")
_BARE_URL = re.compile(r"(?<![\\\w])((?:https?|ftp|irc)://|mailto:)(?=\S)")

# Constrained formatting pairs: an opening mark at a word boundary, content
# that does not start or end with a space, and a closing mark at a boundary.
_CONSTRAINED_MARKS = ("*", "_", "`", "#", "+")


def _constrained_pair_pattern(mark: str) -> re.Pattern[str]:
    m = re.escape(mark)
    return re.compile(rf"(?<![\w\\{m}]){m}(?=[^\s{m}])(?:[^\n]*?\S)??{m}(?!\w)")


def _unconstrained_pair_pattern(mark: str) -> re.Pattern[str]:
    m = re.escape(mark * 2)
    return re.compile(rf"(?<!\\){m}(?=\S).*?{m}")


_CONSTRAINED_PAIR_PATTERNS = {mark: _constrained_pair_pattern(mark) for mark in _CONSTRAINED_MARKS}
_UNCONSTRAINED_PAIR_PATTERNS = {mark: _unconstrained_pair_pattern(mark) for mark in _CONSTRAINED_MARKS}
_SUPERSCRIPT_PAIR = re.compile(r"(?<!\\)\^(?=\S)[^\s^]*\^")
_SUBSCRIPT_PAIR = re.compile(r"(?<!\\)~(?=\S)[^\s~]*~")

_CODE_SPECIAL_CHARACTERS = re.compile(r"[*_`#^~{}\[\]<>\\'\"|&]")


def escape_structural_line(line: str) -> str:
    """Prefix ``{empty}`` to a line that would start an AsciiDoc block.

    Parameters
    ----------
    line : str
        One rendered line of paragraph or list item text

    Returns
    -------
    str
        The line, guarded when it matches a block-level construct

    Examples
    --------
        >>> escape_structural_line("= not a title")
        '{empty}= not a title'
        >>> escape_structural_line("plain text")
        'plain text'

    """
    if not line:
        return line
    for pattern in _STRUCTURAL_LINE_PATTERNS:
        if pattern.match(line):
            return f"{ASCIIDOC_EMPTY_ATTRIBUTE}{line}"
    return line


def escape_structural_lines(text: str) -> str:
    """Apply :func:`escape_structural_line` to every line of ``text``."""
    return "\n".join(escape_structural_line(line) for line in text.split("\n"))


def _escape_pairs(text: str, pattern: re.Pattern[str], width: int = 1) -> str:
    # Scanning resumes right after each escaped opening mark, so a pair that
    # starts inside a previous candidate is found too.
    result = []
    position = 0
    match = pattern.search(text)
    while match:
        result.append(text[position : match.start()])
        result.append("\\")
        result.append(text[match.start() : match.start() + width])
        position = match.start() + width
        match = pattern.search(text, position)
    result.append(text[position:])
    return "".join(result)


def escape_asciidoc_text(text: str, *, escape_urls: bool = False) -> str:
    r"""Escape inline AsciiDoc markup in literal text content.

    Parameters
    ----------
    text : str
        Literal text from a Markdown text run
    escape_urls : bool, default = False
        Backslash-escape bare URLs so AsciiDoc does not turn them into links

    Returns
    -------
    str
        Text whose markup-like sequences are neutralized

    Examples
    --------
        >>> escape_asciidoc_text("use *args and *kwargs*")
        'use \\*args and \\*kwargs*'
        >>> escape_asciidoc_text("see {version}")
        'see \\{version}'
        >>> escape_asciidoc_text("https://example.org", escape_urls=True)
        '\\https://example.org'

    """
    if not text:
        return text

    result = _ATTRIBUTE_REFERENCE.sub(r"\\{", text)
    result = _DOUBLE_ANGLE.sub(r"\\<<", result)
    result = _DOUBLE_BRACKET.sub(r"\\[[", result)

    for mark in _CONSTRAINED_MARKS:
        if mark * 2 in result:
            result = _escape_pairs(result, _UNCONSTRAINED_PAIR_PATTERNS[mark], width=2)
        if result.count(mark) >= 2:
            result = _escape_pairs(result, _CONSTRAINED_PAIR_PATTERNS[mark])

    if "^" in result:
        result = _escape_pairs(result, _SUPERSCRIPT_PAIR)
    if "~" in result:
        result = _escape_pairs(result, _SUBSCRIPT_PAIR)

    if escape_urls:
        result = _BARE_URL.sub(r"\\\1", result)

    return result


def escape_table_cell(text: str) -> str:
    r"""Escape the cell separator in rendered table cell content.

    Examples
    --------
        >>> escape_table_cell("a|b")
        'a\\|b'

    """
    return re.sub(r"(?<!\\)\|", r"\\|", text)


def escape_attribute_value(text: str) -> str:
    """Escape text for a double-quoted attribute value, such as a link title.

    Examples
    --------
        >>> escape_attribute_value('A "quoted" title')
        'A \\\\"quoted\\\\" title'

    """
    return text.replace("\\", "\\\\").replace('"', '\\"')


def escape_macro_text(text: str) -> str:
    r"""Escape a closing bracket inside macro brackets (``link:url[text]``).

    Examples
    --------
        >>> escape_macro_text("see [1]")
        'see [1\\]'

    """
    return re.sub(r"(?<!\\)\]", r"\\]", text)


def format_inline_code(code: str, unconstrained: bool = False) -> str:
    """Render an inline code span.

    Plain content uses a literal monospace span; content with markup
    characters is wrapped in a ``+`` passthrough; content containing ``+``
    itself uses the ``pass:c[]`` macro.

    Parameters
    ----------
    code : str
        Raw code span content
    unconstrained : bool, default = False
        Use doubled backticks because the span touches a word character

    Returns
    -------
    str
        AsciiDoc inline code markup

    Examples
    --------
        >>> format_inline_code("name")
        '`name`'
        >>> format_inline_code("*args")
        '`+*args+`'
        >>> format_inline_code("a + b")
        '`pass:c[a + b]`'

    """
    fence = "``" if unconstrained else "`"
    if "+" in code:
        body = "pass:c[" + escape_macro_text(code) + "]"
    elif _CODE_SPECIAL_CHARACTERS.search(code) or code != code.strip():
        body = f"+{code}+"
    else:
        body = code
    return f"{fence}{body}{fence}"
