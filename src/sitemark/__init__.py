"""sitemark - Markdown to HTML rendering for static site publishing.

sitemark renders Markdown documents into HTML fragments ready to publish:
headings get stable, unique anchor ids with header links, image paths are
resolved against the site root and post asset folders, external links get
``target``/``rel`` attributes, and the result can be sanitized.

Parsing is done by mistune; sitemark supplies the node renderer that builds
the HTML for each token, driven by a table of replaceable handler functions.

Key Features
------------
- Unique heading ids per document (``Hello-world``, ``Hello-world-1``, ...)
- Site root and post asset resolution for images
- External link classification with ``target``/``rel`` attributes
- Smart punctuation with configurable quote glyphs
- Description lists and to-do list items
- Pygments highlighting for fenced code
- Optional output sanitization with bleach
- Pre-render hooks to customize handlers, tokenizers and mistune plugins

Requirements
------------
- Python 3.10+
- mistune, bleach, Pygments, PyYAML

Examples
--------
Render a string with the default options:

    >>> from sitemark import render
    >>> html = render("# Hello world")

Bind a renderer to a site configuration and add a hook:

    >>> from sitemark import HookManager, MarkdownRenderer
    >>> hooks = HookManager()
    >>> hooks.register_hook("renderer", lambda r, ctx: r.set_handler("thematic_break", lambda r: "<hr>"))
    >>> site = MarkdownRenderer({"url": "http://example.com", "marked": {"lazyload": True}}, hooks=hooks)
    >>> html = site.render({"text": "![cat](cat.jpg)\\n\\n---", "path": "source/_posts/cat.md"})

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "sitemark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from sitemark.anchors import HeadingIdTable, allocate_anchor_id
from sitemark.api import MarkdownRenderer, RenderDocument, render
from sitemark.config import load_site_config
from sitemark.exceptions import ConfigurationError, HookError, InvalidOptionsError, SitemarkError, ValidationError
from sitemark.hooks import HookContext, HookManager
from sitemark.logging_utils import configure_logging
from sitemark.options import ExternalLinkOptions, RenderOptions, merge_render_options
from sitemark.renderer import NodeRenderer
from sitemark.site import AssetRecord, InMemoryAssetIndex, PostAssetResolver, PostRecord, SiteContext

__all__ = [
    "__version__",
    "render",
    "MarkdownRenderer",
    "RenderDocument",
    "RenderOptions",
    "ExternalLinkOptions",
    "merge_render_options",
    "NodeRenderer",
    "HeadingIdTable",
    "allocate_anchor_id",
    "HookManager",
    "HookContext",
    "SiteContext",
    "PostAssetResolver",
    "PostRecord",
    "AssetRecord",
    "InMemoryAssetIndex",
    "load_site_config",
    "configure_logging",
    "SitemarkError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigurationError",
    "HookError",
]
