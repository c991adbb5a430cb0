#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/renderers/wrap.py
"""Line policies for paragraph and list item text.

The renderer produces the inline text of a block with ``\\n`` for soft line
breaks and `` +\\n`` for hard line breaks. One strategy per wrap mode then
decides where the lines end. Hard breaks always end a line.

Examples
--------
    >>> wrap_text("One. Two? Three!", "ventilate")
    'One.\\nTwo?\\nThree!'
    >>> wrap_text("a\\nb +\\nc", "none")
    'a b +\\nc'

"""

from __future__ import annotations

import re
import textwrap
from typing import Callable

from md2asciidoc.constants import ASCIIDOC_HARD_BREAK, DEFAULT_WRAP_WIDTH

_HARD_BREAK_SPLIT = re.compile(r" \+\n")
_SENTENCE_END = re.compile(r"(?<=[.?!])\s+")

# Joins the hard break marker to the last word so it counts toward the width
_GLUE = "\ue000"

WrapStrategy = Callable[[list[str], int, str], list[str]]


def _split_hard_breaks(text: str) -> list[str]:
    return _HARD_BREAK_SPLIT.split(text)


def _join_hard_breaks(lines: list[str]) -> str:
    return f"{ASCIIDOC_HARD_BREAK}\n".join(lines)


def _single_line(segment: str) -> str:
    return " ".join(line.strip() for line in segment.split("\n") if line.strip())


def _preserve(segments: list[str], width: int, prefix: str) -> list[str]:
    return [prefix + segments[0], *segments[1:]]


def _none(segments: list[str], width: int, prefix: str) -> list[str]:
    lines = [_single_line(segment) for segment in segments]
    lines[0] = prefix + lines[0]
    return lines


def _ventilate(segments: list[str], width: int, prefix: str) -> list[str]:
    lines = ["\n".join(_SENTENCE_END.split(_single_line(segment))) for segment in segments]
    lines[0] = prefix + lines[0]
    return lines


def _width(segments: list[str], width: int, prefix: str) -> list[str]:
    result: list[str] = []
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        text = _single_line(segment)
        if index < last:
            text = f"{text}{_GLUE}+" if text else "+"
        wrapped = textwrap.wrap(
            text,
            width=width,
            initial_indent=prefix if index == 0 else "",
            break_long_words=False,
            break_on_hyphens=False,
        )
        if not wrapped:
            wrapped = [prefix.rstrip() if index == 0 else ""]
        joined = "\n".join(wrapped).replace(_GLUE, " ")
        if index < last:
            # The trailing marker is re-added by _join_hard_breaks
            joined = joined[: -len(ASCIIDOC_HARD_BREAK)] if joined.endswith(ASCIIDOC_HARD_BREAK) else joined[:-1]
        result.append(joined)
    return result


WRAP_STRATEGIES: dict[str, WrapStrategy] = {
    "preserve": _preserve,
    "none": _none,
    "ventilate": _ventilate,
    "width": _width,
}


def wrap_text(text: str, mode: str = "preserve", width: int = DEFAULT_WRAP_WIDTH, prefix: str = "") -> str:
    """Apply a wrap mode to rendered block text.

    Parameters
    ----------
    text : str
        Rendered inline text of one paragraph or list item
    mode : {"preserve", "none", "ventilate", "width"}, default "preserve"
        Wrap mode
    width : int, default 80
        Column limit for ``"width"``
    prefix : str, default ""
        Text placed in front of the first line, such as a list marker. Its
        length counts toward the first line in ``"width"`` mode.

    Returns
    -------
    str
        Text with its lines ended according to ``mode``

    Raises
    ------
    KeyError
        If ``mode`` is not a known wrap mode

    Examples
    --------
        >>> wrap_text("the quick brown fox", "width", width=10)
        'the quick\\nbrown fox'

    """
    strategy = WRAP_STRATEGIES[mode]
    return _join_hard_breaks(strategy(_split_hard_breaks(text), width, prefix))
