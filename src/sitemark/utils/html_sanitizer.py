#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/utils/html_sanitizer.py
"""HTML sanitization of rendered output.

The final HTML of a render can optionally be passed through bleach to strip
elements and attributes that are unsafe to publish. The ``dompurify`` render
option either enables the defaults (``True``) or supplies a mapping of
overrides:

- ``tags``: allowed tag names
- ``attributes``: allowed attributes per tag (``"*"`` for all tags)
- ``protocols``: allowed URL schemes
- ``css_properties``: allowed properties inside ``style`` attributes
- ``strip``: remove disallowed tags instead of escaping them
- ``strip_comments``: drop HTML comments

Extra ``add_tags`` / ``add_attributes`` keys extend the defaults instead of
replacing them.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import bleach
from bleach.css_sanitizer import CSSSanitizer

from sitemark.constants import (
    DEFAULT_ALLOWED_ATTRIBUTES,
    DEFAULT_ALLOWED_CSS_PROPERTIES,
    DEFAULT_ALLOWED_PROTOCOLS,
    DEFAULT_ALLOWED_TAGS,
)

logger = logging.getLogger(__name__)


def _merge_attributes(
    base: Mapping[str, list[str]], extra: Mapping[str, list[str]] | None
) -> dict[str, list[str]]:
    merged = {tag: list(names) for tag, names in base.items()}
    for tag, names in (extra or {}).items():
        merged.setdefault(tag, [])
        merged[tag].extend(name for name in names if name not in merged[tag])
    return merged


def build_cleaner(options: Mapping[str, Any] | None = None) -> bleach.Cleaner:
    """Create a bleach Cleaner from sanitizer options.

    Parameters
    ----------
    options : Mapping, optional
        Sanitizer overrides as described in the module docstring

    Returns
    -------
    bleach.Cleaner
        Configured cleaner

    """
    options = options or {}

    tags = set(options.get("tags", DEFAULT_ALLOWED_TAGS))
    tags.update(options.get("add_tags", ()))

    attributes = _merge_attributes(options.get("attributes", DEFAULT_ALLOWED_ATTRIBUTES), options.get("add_attributes"))

    css_sanitizer = CSSSanitizer(
        allowed_css_properties=frozenset(options.get("css_properties", DEFAULT_ALLOWED_CSS_PROPERTIES))
    )

    return bleach.Cleaner(
        tags=frozenset(tags),
        attributes=attributes,
        protocols=frozenset(options.get("protocols", DEFAULT_ALLOWED_PROTOCOLS)),
        strip=bool(options.get("strip", True)),
        strip_comments=bool(options.get("strip_comments", True)),
        css_sanitizer=css_sanitizer,
    )


def sanitize_html(content: str, options: bool | Mapping[str, Any] | None = None) -> str:
    """Sanitize rendered HTML.

    Parameters
    ----------
    content : str
        HTML fragment produced by the node renderer
    options : bool or Mapping, optional
        ``True``/``None`` for the default policy, or a mapping of overrides

    Returns
    -------
    str
        Sanitized HTML

    Examples
    --------
    >>> sanitize_html('<p>Hi<script>alert(1)</script></p>')
    '<p>Hialert(1)</p>'

    """
    cleaner = build_cleaner(options if isinstance(options, Mapping) else None)
    cleaned = cleaner.clean(content)
    if len(cleaned) != len(content):
        logger.debug("Sanitizer changed output (%d -> %d characters)", len(content), len(cleaned))
    return cleaned


__all__ = ["build_cleaner", "sanitize_html"]
