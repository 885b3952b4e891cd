#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/utils/text.py
"""Text processing utilities for the node renderer.

This module provides the plain-text helpers used when turning rendered
heading markup into anchor ids and attribute values.

Functions
---------
strip_html_tags : Remove markup from an HTML fragment
html_to_attribute_text : Plain, attribute-safe text from an HTML fragment
slugize : Convert text to a URL-fragment-safe slug

Examples
--------
Basic slugification keeps the original case:

    >>> from sitemark.utils.text import slugize
    >>> slugize("Hello world")
    'Hello-world'

Case transforms follow the ``modifyAnchors`` option:

    >>> slugize("Hello world", transform=1)
    'hello-world'

Non-ASCII letters pass through untouched:

    >>> slugize("中文")
    '中文'

"""

from __future__ import annotations

import html
import re
import unicodedata

from sitemark.constants import (
    ANCHOR_TRANSFORM_LOWER,
    ANCHOR_TRANSFORM_UPPER,
    DEFAULT_SLUG_SEPARATOR,
)

_TAG_PATTERN = re.compile(r"<[^>]*>")
_CONTROL_PATTERN = re.compile(r"[\u0000-\u001f]")
# Whitespace and punctuation that is unsafe or ambiguous in a URL fragment
_SPECIAL_PATTERN = re.compile(r"""[\s~`!@#$%^&*()\-_+=\[\]{}|\\;:"'<>,.?/]+""")


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return html.escape(text)


def strip_html_tags(content: str) -> str:
    """Remove all HTML tags from content, leaving entities as they are.

    Parameters
    ----------
    content : str
        HTML content

    Returns
    -------
    str
        Content with tags removed

    Examples
    --------
    >>> strip_html_tags("Hello <code>world</code>")
    'Hello world'

    """
    return _TAG_PATTERN.sub("", content)


def html_to_attribute_text(content: str) -> str:
    """Convert an HTML fragment into text safe for a double-quoted attribute."""
    return html.escape(html.unescape(strip_html_tags(content)))


def _fold_latin_char(char: str) -> str:
    if char.isascii():
        return char
    decomposed = unicodedata.normalize("NFD", char)
    base, marks = decomposed[0], decomposed[1:]
    # Only accented ASCII letters fold; kana voicing marks and Indic vowel signs stay
    if base.isascii() and marks and all(unicodedata.category(mark) == "Mn" for mark in marks):
        return base
    return char


def _remove_diacritics(text: str) -> str:
    return "".join(_fold_latin_char(char) for char in unicodedata.normalize("NFC", text))


def slugize(text: str, *, transform: int | None = None, separator: str = DEFAULT_SLUG_SEPARATOR) -> str:
    """Create a URL-fragment-safe slug from text.

    Unlike typical slug helpers this keeps the original letter case unless a
    transform is requested, and it never replaces non-ASCII letters: a CJK
    heading produces a CJK id.

    The function:
    - Folds accented Latin letters to their ASCII base (other scripts keep
      their combining marks)
    - Removes ASCII control characters
    - Replaces runs of whitespace and URL-unsafe punctuation with the separator
    - Collapses repeated separators and trims them from both ends
    - Applies the optional case transform

    Parameters
    ----------
    text : str
        Plain text to slugize
    transform : int or None, default None
        1 for lower case, 2 for upper case, anything else leaves case alone
    separator : str, default "-"
        Separator placed between words

    Returns
    -------
    str
        The slug, possibly empty

    """
    escaped_separator = re.escape(separator)

    slug = _remove_diacritics(text)
    slug = _CONTROL_PATTERN.sub("", slug)
    slug = _SPECIAL_PATTERN.sub(separator, slug)
    slug = re.sub(rf"(?:{escaped_separator}){{2,}}", separator, slug)
    slug = re.sub(rf"^(?:{escaped_separator})+|(?:{escaped_separator})+$", "", slug)

    if transform == ANCHOR_TRANSFORM_LOWER:
        return slug.lower()
    if transform == ANCHOR_TRANSFORM_UPPER:
        return slug.upper()
    return slug


__all__ = [
    "escape_html",
    "strip_html_tags",
    "html_to_attribute_text",
    "slugize",
]
