#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/utils/urls.py
"""URL helpers used by the link and image handlers.

This module provides the URL primitives the node renderer relies on:

- ``encode_url``: percent-encode a URL for embedding in an HTML attribute
- ``is_unsafe_url``: detect script-capable hrefs for ``sanitizeUrl``
- ``is_external_link``: classify a link target against the site URL
- ``external_link_attributes``: the fixed target/rel table for external links
- ``url_for``: prepend the site root to a site-relative path
- ``mangle_email``: obfuscate an address as numeric character references

All helpers are pure and never raise for malformed input.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Iterable
from urllib.parse import quote, unquote, urljoin, urlsplit, urlunsplit

from sitemark.constants import (
    DEFAULT_SITE_ROOT,
    EXTERNAL_LINK_ATTRIBUTES,
    EXTERNAL_LINK_SCHEMES,
    UNSAFE_URL_PREFIXES,
    URL_SAFE_CHARS,
)

logger = logging.getLogger(__name__)

# Fragment, protocol-relative and http(s) URLs are never rewritten against the site root
_ABSOLUTE_URL_PATTERN = re.compile(r"^(#|//|https?:)")
_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def _encode_host(netloc: str) -> str:
    """IDNA-encode the host part of a netloc, keeping userinfo and port."""
    userinfo, at, hostport = netloc.rpartition("@")
    if hostport.startswith("["):
        return netloc

    host, colon, port = hostport.partition(":")
    if host.isascii():
        return netloc

    encoded_host = host.encode("idna").decode("ascii")
    return f"{userinfo}{at}{encoded_host}{colon}{port}"


def encode_url(url: str) -> str:
    """Percent-encode a URL and escape it for an HTML attribute.

    The input may already be encoded and HTML-escaped (mistune escapes link
    destinations while tokenizing), so the value is unescaped and unquoted
    before being encoded again. Non-ASCII host names are converted with IDNA.

    Parameters
    ----------
    url : str
        URL or path to encode

    Returns
    -------
    str
        Encoded URL; if encoding fails the raw input is returned unchanged

    Examples
    --------
    >>> encode_url("/foo/bár.jpg")
    '/foo/b%C3%A1r.jpg'
    >>> encode_url("http://fóo.com/bar.jpg")
    'http://xn--fo-5ja.com/bar.jpg'

    """
    try:
        parts = urlsplit(html.unescape(url))
        netloc = _encode_host(unquote(parts.netloc)) if parts.netloc else ""
        encoded = urlunsplit(
            (
                parts.scheme,
                netloc,
                quote(unquote(parts.path), safe=URL_SAFE_CHARS),
                quote(unquote(parts.query), safe=URL_SAFE_CHARS),
                quote(unquote(parts.fragment), safe=URL_SAFE_CHARS),
            )
        )
    except ValueError as exc:
        logger.debug("Could not encode URL %r: %s", url, exc)
        return url

    return html.escape(encoded)


def is_unsafe_url(url: str) -> bool:
    """Return True when an href starts with a script-capable scheme.

    The match is a case-sensitive prefix test on the string as given.
    """
    return url.startswith(UNSAFE_URL_PREFIXES)


def _normalize_exclude(exclude: str | Iterable[str] | None) -> list[str]:
    if not exclude:
        return []
    if isinstance(exclude, str):
        return [exclude]
    return list(exclude)


def is_external_link(url: str, site_url: str, exclude: str | Iterable[str] | None = None) -> bool:
    """Check whether a link target points outside the site.

    The URL is resolved against the site host, so relative and
    protocol-relative URLs are handled. Non-http(s) targets (``mailto:``,
    ``javascript:`` and so on) are never external.

    Parameters
    ----------
    url : str
        Link target as written in the document
    site_url : str
        The site's base URL (e.g. ``"http://example.com"``)
    exclude : str or iterable of str, optional
        Host names treated as part of the site; exact match only

    Returns
    -------
    bool
        True if the link is external

    Examples
    --------
    >>> is_external_link("http://example.com/foo", "http://example.com")
    False
    >>> is_external_link("http://bar.com/", "http://example.com")
    True
    >>> is_external_link("http://bar.com/", "http://example.com", exclude=["bar.com"])
    False

    """
    try:
        site_host = urlsplit(site_url).hostname if site_url else None
    except ValueError:
        site_host = None
    if not site_host:
        return False

    try:
        resolved = urlsplit(urljoin(f"http://{site_host}/", html.unescape(url)))
        host = resolved.hostname
    except ValueError:
        return False

    if resolved.scheme not in EXTERNAL_LINK_SCHEMES or not host:
        return False

    if host in _normalize_exclude(exclude):
        return False

    return host != site_host


def external_link_attributes(enable: bool, nofollow: bool) -> str:
    """Return the attribute string appended to an external link."""
    return EXTERNAL_LINK_ATTRIBUTES[(bool(enable), bool(nofollow))]


def is_site_relative(url: str) -> bool:
    """Return True for paths that should be resolved against the site root."""
    return not _ABSOLUTE_URL_PATTERN.match(url)


def url_for(path: str, root: str = DEFAULT_SITE_ROOT) -> str:
    """Prepend the site root to a site-relative path.

    Absolute, protocol-relative and fragment URLs pass through unchanged.
    Duplicate slashes produced by joining are collapsed.

    Examples
    --------
    >>> url_for("/bar/baz.jpg", "/blog/")
    '/blog/bar/baz.jpg'
    >>> url_for("https://example.com/a.png", "/blog/")
    'https://example.com/a.png'

    """
    if not is_site_relative(path):
        return path
    return _DUPLICATE_SLASHES.sub("/", f"{root or DEFAULT_SITE_ROOT}/{path}")


def mangle_email(text: str) -> str:
    """Write every character as a decimal numeric character reference."""
    return "".join(f"&#{ord(char)};" for char in text)


__all__ = [
    "encode_url",
    "is_unsafe_url",
    "is_external_link",
    "external_link_attributes",
    "is_site_relative",
    "url_for",
    "mangle_email",
]
