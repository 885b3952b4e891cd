#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/site.py
"""Site context and post asset resolution.

The node renderer needs a read-only view of the host site (base URL, root
path, link mode) and, for image paths inside posts, a way to look up the
post a document belongs to and the assets stored next to it. The lookups are
delegated to a ``PostAssetResolver``; hosts plug in their own content model,
and ``InMemoryAssetIndex`` covers scripts and tests.

A lookup miss is never an error: the caller keeps the path it already has.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from sitemark.constants import DEFAULT_SITE_ROOT, DEFAULT_SOURCE_DIR
from sitemark.options import CloneFrozenMixin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostRecord:
    """A post known to the host.

    Parameters
    ----------
    slug : str
        Post slug
    path : str
        Published path of the post
    source : str
        Post file path relative to the source directory, forward slashes
        (e.g. ``"_posts/hello.md"``)

    """

    slug: str
    path: str
    source: str


@dataclass(frozen=True)
class AssetRecord:
    """An asset stored in a post's asset folder; ``path`` is its published path."""

    path: str


class PostAssetResolver(Protocol):
    """Lookups the renderer performs against the host's content model."""

    def find_post_by_source_path(self, source: str) -> Optional[PostRecord]:
        """Return the post whose source file is ``source``, if any."""
        ...

    def find_asset_by_key(self, key: str) -> Optional[AssetRecord]:
        """Return the asset stored under ``key`` (post asset dir + relative path), if any."""
        ...


class InMemoryAssetIndex:
    """Dictionary-backed ``PostAssetResolver``.

    Examples
    --------
        >>> index = InMemoryAssetIndex()
        >>> post = index.add_post("_posts/hello.md", slug="hello", path="2020/01/hello/")
        >>> _ = index.add_asset("source/_posts/hello/cat.jpg", "2020/01/hello/cat.jpg")
        >>> index.find_asset_by_key("source/_posts/hello/cat.jpg").path
        '2020/01/hello/cat.jpg'

    """

    def __init__(self) -> None:
        """Create an empty index."""
        self._posts: dict[str, PostRecord] = {}
        self._assets: dict[str, AssetRecord] = {}

    def add_post(self, source: str, *, slug: str, path: str) -> PostRecord:
        """Register a post by its source-relative file path."""
        post = PostRecord(slug=slug, path=path, source=source.replace("\\", "/"))
        self._posts[post.source] = post
        return post

    def add_asset(self, key: str, path: str) -> AssetRecord:
        """Register an asset under its composite key."""
        asset = AssetRecord(path=path)
        self._assets[key.replace("\\", "/")] = asset
        return asset

    def find_post_by_source_path(self, source: str) -> Optional[PostRecord]:
        """Return the registered post for ``source``."""
        return self._posts.get(source)

    def find_asset_by_key(self, key: str) -> Optional[AssetRecord]:
        """Return the registered asset for ``key``."""
        return self._assets.get(key)


@dataclass(frozen=True)
class SiteContext(CloneFrozenMixin):
    """Read-only view of the site configuration used for URL resolution.

    Parameters
    ----------
    url : str, default ""
        Base URL of the site, used to classify external links
    root : str, default "/"
        Root path the site is served from
    relative_link : bool, default False
        Site emits relative links; images are then left untouched
    source_dir : str, default "source"
        Directory holding the site sources
    post_asset_folder : bool, default False
        Posts keep their assets in a folder named after the post

    """

    url: str = ""
    root: str = DEFAULT_SITE_ROOT
    relative_link: bool = False
    source_dir: str = DEFAULT_SOURCE_DIR
    post_asset_folder: bool = False

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any] | None) -> SiteContext:
        """Build a site context from a host configuration mapping."""
        config = config or {}
        return cls(
            url=str(config.get("url") or ""),
            root=str(config.get("root") or DEFAULT_SITE_ROOT),
            relative_link=bool(config.get("relative_link", False)),
            source_dir=str(config.get("source_dir") or DEFAULT_SOURCE_DIR),
            post_asset_folder=bool(config.get("post_asset_folder", False)),
        )


def source_relative_path(path: str, source_dir: str) -> str:
    """Return ``path`` relative to ``source_dir`` with forward slashes.

    Paths outside the source directory are returned normalized but otherwise
    unchanged.
    """
    normalized = path.replace("\\", "/")
    base = source_dir.replace("\\", "/").rstrip("/") + "/"
    if normalized.startswith(base):
        return normalized[len(base) :]

    marker = "/" + base.lstrip("/")
    index = normalized.find(marker)
    if index != -1:
        return normalized[index + len(marker) :]
    return normalized


def resolve_post_asset_dir(
    document_path: str | None, site: SiteContext, resolver: PostAssetResolver | None
) -> str | None:
    """Find the asset directory of the post a document belongs to.

    Parameters
    ----------
    document_path : str or None
        File path of the document being rendered
    site : SiteContext
        Site configuration
    resolver : PostAssetResolver or None
        Host content model

    Returns
    -------
    str or None
        ``<source_dir>/<post dir>/<post stem>`` or None when unknown

    """
    if not document_path or resolver is None:
        return None

    source = source_relative_path(document_path, site.source_dir)
    try:
        post = resolver.find_post_by_source_path(source)
    except Exception as exc:
        logger.warning("Post lookup failed for %s: %s", source, exc)
        return None

    if post is None:
        logger.debug("No post registered for source %s", source)
        return None

    post_source = post.source.replace("\\", "/")
    stem = posixpath.splitext(posixpath.basename(post_source))[0]
    return posixpath.join(site.source_dir.replace("\\", "/"), posixpath.dirname(post_source), stem)


def resolve_post_asset(href: str, post_asset_dir: str, resolver: PostAssetResolver) -> str | None:
    """Look up ``href`` among a post's assets.

    Returns the asset's published path with forward slashes, or None on a
    miss or a failing resolver.
    """
    key = posixpath.join(post_asset_dir, href.replace("\\", "/"))
    try:
        asset = resolver.find_asset_by_key(key)
    except Exception as exc:
        logger.warning("Asset lookup failed for %s: %s", key, exc)
        return None

    if asset is None:
        logger.debug("No post asset registered under %s", key)
        return None
    return asset.path.replace("\\", "/")


__all__ = [
    "AssetRecord",
    "InMemoryAssetIndex",
    "PostAssetResolver",
    "PostRecord",
    "SiteContext",
    "resolve_post_asset",
    "resolve_post_asset_dir",
    "source_relative_path",
]
