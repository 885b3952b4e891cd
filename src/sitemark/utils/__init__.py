#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/utils/__init__.py
"""Utility modules for the sitemark package.

This package contains the pure helpers used by the node renderer: slug and
text helpers, URL encoding and classification, smart punctuation, code
highlighting and output sanitization.
"""

from sitemark.utils.smartypants import smartypants
from sitemark.utils.text import slugize, strip_html_tags
from sitemark.utils.urls import encode_url, is_external_link, url_for

__all__ = [
    "encode_url",
    "is_external_link",
    "slugize",
    "smartypants",
    "strip_html_tags",
    "url_for",
]
