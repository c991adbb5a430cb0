#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/normalize.py
"""Source text normalization.

Before parsing, raw Markdown is brought into a canonical shape: no leading
byte order mark, LF line endings, no trailing whitespace on any line, no
leading or trailing blank lines, and any leading YAML front matter block
split off into a mapping.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from md2asciidoc.constants import FRONT_MATTER_CLOSERS, FRONT_MATTER_DELIMITER

logger = logging.getLogger(__name__)

_LINE_ENDING_PATTERN = re.compile(r"\r\n?")
BYTE_ORDER_MARK = "\ufeff"


@dataclass(frozen=True)
class NormalizedSource:
    """Normalized Markdown body plus extracted front matter.

    Parameters
    ----------
    text : str
        Body text with LF line endings and no trailing newline
    front_matter : dict
        Parsed front matter mapping (empty when the source had none)

    """

    text: str
    front_matter: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> Optional[str]:
        """Front matter ``title`` field as a string, when set."""
        value = self.front_matter.get("title")
        if value is None:
            return None
        title = str(value).strip()
        return title or None


def normalize_whitespace(text: str) -> str:
    """Normalize line endings and strip surrounding whitespace.

    Parameters
    ----------
    text : str
        Raw source text

    Returns
    -------
    str
        Text without a leading byte order mark, with LF line endings, every
        line right-stripped, and no leading or trailing blank lines

    Examples
    --------
    >>> normalize_whitespace("\\r\\n\\nfoo  \\r\\nbar\\n\\n")
    'foo\\nbar'

    """
    text = _LINE_ENDING_PATTERN.sub("\n", text)
    lines = [line.rstrip() for line in text.split("\n")]

    start = 0
    while start < len(lines) and not lines[start].lstrip(BYTE_ORDER_MARK):
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1]:
        end -= 1
    if start < end:
        lines[start] = lines[start].lstrip(BYTE_ORDER_MARK)

    return "\n".join(lines[start:end])


def split_front_matter(text: str) -> tuple[str, dict[str, Any]]:
    """Split a leading YAML front matter block from whitespace-normalized text.

    The block opens with a ``---`` line and closes with the next ``---`` or
    ``...`` line. It is removed only when its body parses to a mapping;
    anything else (a thematic break, a YAML scalar, invalid YAML) is left in
    place as document content.

    Parameters
    ----------
    text : str
        Text already passed through :func:`normalize_whitespace`

    Returns
    -------
    tuple of (str, dict)
        Remaining body and the parsed mapping (empty when nothing was removed)

    """
    lines = text.split("\n")
    if not lines or lines[0] != FRONT_MATTER_DELIMITER:
        return text, {}

    end_index = -1
    for index in range(1, len(lines)):
        if lines[index] in FRONT_MATTER_CLOSERS:
            end_index = index
            break

    if end_index <= 0:
        return text, {}

    yaml_content = "\n".join(lines[1:end_index])
    try:
        data = yaml.safe_load(yaml_content) if yaml_content.strip() else {}
    except yaml.YAMLError as exc:
        logger.debug("Leading '---' block is not valid YAML, keeping it as content: %s", exc)
        return text, {}

    if not isinstance(data, dict):
        logger.debug("Leading '---' block is not a mapping, keeping it as content")
        return text, {}

    body = "\n".join(lines[end_index + 1 :])
    return body, {str(key): value for key, value in data.items()}


def normalize_source(text: str) -> NormalizedSource:
    """Normalize raw Markdown and extract its front matter.

    Parameters
    ----------
    text : str
        Raw source text, already decoded

    Returns
    -------
    NormalizedSource
        Normalized body and front matter mapping

    Examples
    --------
    >>> source = normalize_source("---\\ntitle: Document Title\\n---\\nBody content.\\n")
    >>> source.text, source.title
    ('Body content.', 'Document Title')

    """
    normalized = normalize_whitespace(text)
    body, front_matter = split_front_matter(normalized)
    if front_matter or body != normalized:
        body = normalize_whitespace(body)
        logger.debug("Extracted front matter with keys: %s", ", ".join(front_matter) or "(none)")
    return NormalizedSource(text=body, front_matter=front_matter)
