#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/constants.py
"""Constants and default values for sitemark.

This module centralizes the default render options, the literal markup
fragments emitted by the node renderer and the tables used for link
classification and sanitization.
"""

from __future__ import annotations

from typing import Literal

# Anchor case transforms (modifyAnchors)
AnchorTransform = Literal[0, 1, 2]
ANCHOR_TRANSFORM_NONE: AnchorTransform = 0
ANCHOR_TRANSFORM_LOWER: AnchorTransform = 1
ANCHOR_TRANSFORM_UPPER: AnchorTransform = 2

DEFAULT_SLUG_SEPARATOR = "-"

# Smart punctuation: open-double, close-double, open-single, close-single
DEFAULT_QUOTES = "“”‘’"

# Render option defaults
DEFAULT_GFM = True
DEFAULT_PEDANTIC = False
DEFAULT_BREAKS = True
DEFAULT_SMART_LISTS = True
DEFAULT_SMARTYPANTS = True
DEFAULT_HEADER_IDS = True
DEFAULT_MODIFY_ANCHORS: AnchorTransform = ANCHOR_TRANSFORM_NONE
DEFAULT_ANCHOR_ALIAS = False
DEFAULT_AUTOLINK = True
DEFAULT_SANITIZE_URL = False
DEFAULT_MANGLE = True
DEFAULT_LAZYLOAD = False
DEFAULT_FIGCAPTION = False
DEFAULT_DESCRIPTION_LISTS = True
DEFAULT_PREPEND_ROOT = False
DEFAULT_POST_ASSET = False
DEFAULT_HIGHLIGHT = True
DEFAULT_LANG_PREFIX = ""

# Site defaults
DEFAULT_SITE_ROOT = "/"
DEFAULT_SOURCE_DIR = "source"
CONFIG_ENV_VAR = "SITEMARK_CONFIG"

# Raw href prefixes blanked when sanitizeUrl is enabled (case-sensitive)
UNSAFE_URL_PREFIXES = ("javascript:", "vbscript:", "data:")

# Schemes that can be classified as external links
EXTERNAL_LINK_SCHEMES = frozenset({"http", "https"})

# rel/target attributes for external links keyed by (enable, nofollow)
EXTERNAL_LINK_ATTRIBUTES: dict[tuple[bool, bool], str] = {
    (False, False): "",
    (True, False): ' target="_blank" rel="noopener"',
    (False, True): ' rel="noopener external nofollow noreferrer"',
    (True, True): ' target="_blank" rel="noopener external nofollow noreferrer"',
}

# mistune plugins enabled by the gfm option
GFM_PLUGINS = ("strikethrough", "table", "url")

# Characters left untouched when percent-encoding URL paths
URL_SAFE_CHARS = "/:?#[]@!$&'()*+,;=%~"

# Sanitizer defaults (bleach)
DEFAULT_ALLOWED_TAGS = frozenset(
    {
        "a",
        "abbr",
        "b",
        "blockquote",
        "br",
        "code",
        "dd",
        "del",
        "div",
        "dl",
        "dt",
        "em",
        "figcaption",
        "figure",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "i",
        "img",
        "input",
        "li",
        "ol",
        "p",
        "pre",
        "span",
        "strong",
        "sub",
        "sup",
        "table",
        "tbody",
        "td",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

DEFAULT_ALLOWED_ATTRIBUTES: dict[str, list[str]] = {
    "a": ["href", "title", "rel", "target", "class"],
    "img": ["src", "alt", "title", "loading", "width", "height"],
    "input": ["type", "checked", "disabled"],
    "figcaption": ["aria-hidden"],
    "code": ["class"],
    "span": ["class"],
    "li": ["style"],
    "td": ["align", "style"],
    "th": ["align", "style"],
    "*": ["id"],
}

DEFAULT_ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "ftp", "tel"})

DEFAULT_ALLOWED_CSS_PROPERTIES = frozenset({"list-style", "text-align"})

