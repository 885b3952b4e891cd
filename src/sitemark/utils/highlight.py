#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/utils/highlight.py
"""Code block highlighting with Pygments.

The formatter is created once per process and never mutated, so concurrent
renders can share it safely. Lexers are looked up per call.
"""

from __future__ import annotations

import html
import logging
import textwrap

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

# nowrap: emit only the token spans, the node renderer supplies <pre><code>
_FORMATTER = HtmlFormatter(nowrap=True)


def language_from_info(info: str | None) -> str | None:
    """Extract the language name from a fenced code block info string."""
    if not info:
        return None
    parts = info.split(None, 1)
    return parts[0] if parts else None


def highlight_code(code: str, lang: str | None = None, *, enabled: bool = True) -> str:
    """Render a code block body as HTML.

    Common indentation and trailing newlines are removed first. If
    highlighting is enabled and Pygments has a lexer for ``lang`` the body is
    returned as Pygments token spans; otherwise it is HTML-escaped.

    Parameters
    ----------
    code : str
        Raw code block content
    lang : str, optional
        Language name from the fence info string
    enabled : bool, default True
        Whether to run Pygments at all

    Returns
    -------
    str
        HTML for the inside of ``<code>``

    """
    code = textwrap.dedent(code).rstrip("\n")

    if not enabled or not lang:
        return html.escape(code, quote=False)

    try:
        lexer = get_lexer_by_name(lang, stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.debug("No Pygments lexer for language %r, emitting plain code", lang)
        return html.escape(code, quote=False)

    return highlight(code, lexer, _FORMATTER)


__all__ = ["highlight_code", "language_from_info"]
