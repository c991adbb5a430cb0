#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/utils/text.py
"""Text processing utilities for AST transforms.

Functions
---------
slugify : Convert heading text to an AsciiDoc section ID
make_unique_slug : Generate unique slug with duplicate handling

Examples
--------
    >>> slugify("Back to Heading 2", prefix="_")
    '_back-to-heading-2'
    >>> slugify("Back to Heading 2", prefix="_", separator="_")
    '_back_to_heading_2'

"""

from __future__ import annotations

import re

from md2asciidoc.constants import EMPTY_HEADING_SLUG

_NON_ALNUM_RUN = re.compile(r"[\W_]+")


def slugify(text: str, *, prefix: str = "", separator: str = "-") -> str:
    """Create a section ID from heading text.

    The text is lowercased, every run of non-alphanumeric characters is
    replaced by ``separator``, separators at either end are trimmed and the
    prefix is prepended. Unicode letters and digits are kept.

    Parameters
    ----------
    text : str
        Plain heading text
    prefix : str, default = ""
        String prepended to the slug
    separator : str, default = "-"
        Word separator

    Returns
    -------
    str
        Section ID. Text without any alphanumeric character yields
        ``prefix + "section"``.

    Examples
    --------
        >>> slugify("What's New?")
        'what-s-new'
        >>> slugify("***")
        'section'

    """
    slug = _NON_ALNUM_RUN.sub(separator, text.lower())
    if separator:
        slug = slug.strip(separator)
    if not slug:
        slug = EMPTY_HEADING_SLUG
    return f"{prefix}{slug}"


def make_unique_slug(slug: str, seen_slugs: dict[str, int], separator: str = "-") -> str:
    """Generate unique slug with duplicate handling.

    The ``seen_slugs`` dictionary maps every slug handed out so far to the
    number of times its base was requested, and is mutated in place. The
    first occurrence keeps the slug; later ones get ``{separator}2``,
    ``{separator}3`` and so on, skipping any suffixed form already taken.

    Parameters
    ----------
    slug : str
        Base slug to make unique
    seen_slugs : dict[str, int]
        Occurrence counts (mutated in place)
    separator : str, default = "-"
        Separator to use before numeric suffix

    Returns
    -------
    str
        Unique slug (with numeric suffix if needed)

    Examples
    --------
        >>> seen = {}
        >>> make_unique_slug("heading", seen)
        'heading'
        >>> make_unique_slug("heading", seen)
        'heading-2'
        >>> make_unique_slug("heading-2", seen)
        'heading-2-2'

    """
    if slug not in seen_slugs:
        seen_slugs[slug] = 1
        return slug

    while True:
        seen_slugs[slug] += 1
        candidate = f"{slug}{separator}{seen_slugs[slug]}"
        if candidate not in seen_slugs:
            seen_slugs[candidate] = 1
            return candidate
