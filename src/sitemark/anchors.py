#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/anchors.py
"""Heading anchor id allocation.

Every render owns one ``HeadingIdTable``. Ids are derived from the heading's
plain text and made unique within the document by suffixing ``-1``, ``-2``
and so on for repeated headings:

    >>> table = HeadingIdTable()
    >>> allocate_anchor_id("Hello world", 0, table)
    'Hello-world'
    >>> allocate_anchor_id("Hello <em>world</em>", 0, table)
    'Hello-world-1'

"""

from __future__ import annotations

import html
import logging

from sitemark.utils.text import slugize, strip_html_tags

logger = logging.getLogger(__name__)


class HeadingIdTable:
    """Per-render record of allocated heading ids.

    Maps a candidate id to the suffix the next colliding heading receives.
    A table must never be shared between renders.
    """

    def __init__(self) -> None:
        """Create an empty table."""
        self._counters: dict[str, int] = {}

    def __contains__(self, anchor: object) -> bool:
        return anchor in self._counters

    def __len__(self) -> int:
        return len(self._counters)

    def claim(self, anchor: str) -> str:
        """Reserve ``anchor`` and return the unique id to use for it."""
        counter = self._counters.get(anchor)
        if counter is None:
            self._counters[anchor] = 1
            return anchor

        # A suffixed id may collide with a heading whose own text produced it
        unique = f"{anchor}-{counter}"
        while unique in self._counters:
            counter += 1
            unique = f"{anchor}-{counter}"

        self._counters[anchor] = counter + 1
        self._counters[unique] = 1
        return unique

    def reset(self) -> None:
        """Forget every allocated id."""
        self._counters.clear()


def heading_plain_text(heading_html: str) -> str:
    """Return the trimmed plain text of rendered heading content."""
    return html.unescape(strip_html_tags(heading_html)).strip()


def allocate_anchor_id(heading_html: str, transform: int | None, table: HeadingIdTable) -> str:
    """Allocate a unique anchor id for a heading.

    Parameters
    ----------
    heading_html : str
        Rendered inline content of the heading (may contain markup)
    transform : int or None
        Case transform: 1 lower case, 2 upper case, otherwise unchanged
    table : HeadingIdTable
        The current render's id table

    Returns
    -------
    str
        Unique id, or an empty string when the heading has no usable text.
        Empty ids are not recorded in the table.

    """
    anchor = slugize(heading_plain_text(heading_html), transform=transform)
    if not anchor:
        return ""

    unique = table.claim(anchor)
    if unique != anchor:
        logger.debug("Heading id %r already used, allocated %r", anchor, unique)
    return unique


__all__ = ["HeadingIdTable", "allocate_anchor_id", "heading_plain_text"]
