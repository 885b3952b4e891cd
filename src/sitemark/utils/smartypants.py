#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/utils/smartypants.py
"""Typographic punctuation for inline text runs.

Straight quotes, double and triple hyphens and three dots are replaced with
their typographic equivalents. The transform works on plain text: callers
apply it before HTML-escaping and never to raw inline HTML or autolink text.

Examples
--------
    >>> smartypants('"Hello" -- it\\'s done...')
    '“Hello” – it’s done…'

Custom glyphs (open-double, close-double, open-single, close-single):

    >>> smartypants('"quoted"', quotes="«»‹›")
    '«quoted»'

"""

from __future__ import annotations

import logging
import re

from sitemark.constants import DEFAULT_QUOTES

logger = logging.getLogger(__name__)

_EM_DASH = "—"
_EN_DASH = "–"
_ELLIPSIS = "…"

_EM_DASH_PATTERN = re.compile(r"---")
_EN_DASH_PATTERN = re.compile(r"--")
_ELLIPSIS_PATTERN = re.compile(r"\.{3}")
# A single quote opens after start of text, a dash, a slash, an opening bracket, a double quote or whitespace
_OPEN_SINGLE_PATTERN = re.compile(r"""(^|[-—/(\[{"\s])'""")


def resolve_quotes(quotes: str | None) -> str:
    """Return the four quote glyphs to use, falling back to the defaults.

    Anything other than a string of exactly four characters selects
    ``DEFAULT_QUOTES``.
    """
    if isinstance(quotes, str) and len(quotes) == 4:
        return quotes
    if quotes is not None:
        logger.debug("Ignoring quotes option %r: expected exactly 4 characters", quotes)
    return DEFAULT_QUOTES


def smartypants(text: str, quotes: str | None = None) -> str:
    """Replace straight punctuation in ``text`` with typographic glyphs.

    Parameters
    ----------
    text : str
        Plain (unescaped) text run
    quotes : str, optional
        Four glyphs: open-double, close-double, open-single, close-single

    Returns
    -------
    str
        Transformed text, still unescaped

    """
    open_double, close_double, open_single, close_single = resolve_quotes(quotes)
    open_double_pattern = re.compile(r"(^|[-—/(\[{" + re.escape(open_single) + r'\s])"')

    text = _EM_DASH_PATTERN.sub(_EM_DASH, text)
    text = _EN_DASH_PATTERN.sub(_EN_DASH, text)
    text = _OPEN_SINGLE_PATTERN.sub(lambda m: m.group(1) + open_single, text)
    text = text.replace("'", close_single)
    text = open_double_pattern.sub(lambda m: m.group(1) + open_double, text)
    text = text.replace('"', close_double)
    return _ELLIPSIS_PATTERN.sub(_ELLIPSIS, text)


__all__ = ["resolve_quotes", "smartypants"]
