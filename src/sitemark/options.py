#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/options.py
"""Render configuration for sitemark.

``RenderOptions`` is an immutable snapshot of every option the node renderer
consults. It is built fresh for each render by layering plain mappings:

    built-in defaults < site ``marked`` block < call-site overrides

Layers merge shallowly. Keys may use either the Python field name
(``header_ids``) or the configuration spelling (``headerIds``). Invalid
values never raise; they fall back to the default for that option.

Examples
--------
    >>> options = merge_render_options({"headerIds": False}, {"lazyload": True})
    >>> options.header_ids, options.lazyload
    (False, True)

"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Mapping, Union

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from sitemark.constants import (
    ANCHOR_TRANSFORM_LOWER,
    ANCHOR_TRANSFORM_NONE,
    ANCHOR_TRANSFORM_UPPER,
    DEFAULT_ANCHOR_ALIAS,
    DEFAULT_AUTOLINK,
    DEFAULT_BREAKS,
    DEFAULT_DESCRIPTION_LISTS,
    DEFAULT_FIGCAPTION,
    DEFAULT_GFM,
    DEFAULT_HEADER_IDS,
    DEFAULT_HIGHLIGHT,
    DEFAULT_LANG_PREFIX,
    DEFAULT_LAZYLOAD,
    DEFAULT_MANGLE,
    DEFAULT_MODIFY_ANCHORS,
    DEFAULT_PEDANTIC,
    DEFAULT_POST_ASSET,
    DEFAULT_PREPEND_ROOT,
    DEFAULT_QUOTES,
    DEFAULT_SANITIZE_URL,
    DEFAULT_SMART_LISTS,
    DEFAULT_SMARTYPANTS,
    AnchorTransform,
)
from sitemark.exceptions import InvalidOptionsError
from sitemark.utils.smartypants import resolve_quotes

logger = logging.getLogger(__name__)

SanitizerSetting = Union[bool, Mapping[str, Any]]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


def _normalize_exclude(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class ExternalLinkOptions(CloneFrozenMixin):
    """External link handling.

    Parameters
    ----------
    enable : bool, default False
        Open external links in a new tab (``target="_blank" rel="noopener"``)
    exclude : tuple of str, default ()
        Host names that are treated as part of the site. A single string is
        accepted and normalized to a one-element tuple.
    nofollow : bool, default False
        Mark external links ``rel="noopener external nofollow noreferrer"``

    """

    enable: bool = field(default=False, metadata={"help": "Open external links in a new tab"})
    exclude: tuple[str, ...] = field(default=(), metadata={"help": "Host names that are never external"})
    nofollow: bool = field(default=False, metadata={"help": "Add nofollow/noreferrer to external links"})

    def __post_init__(self) -> None:
        """Normalize ``exclude`` to a tuple of host names."""
        object.__setattr__(self, "enable", bool(self.enable))
        object.__setattr__(self, "nofollow", bool(self.nofollow))
        object.__setattr__(self, "exclude", _normalize_exclude(self.exclude))

    @property
    def active(self) -> bool:
        """True when any external link rewriting is configured."""
        return self.enable or self.nofollow

    @classmethod
    def coerce(cls, value: Any) -> ExternalLinkOptions:
        """Build options from a mapping, a bool or an existing instance."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                enable=value.get("enable", False),
                exclude=value.get("exclude", ()),
                nofollow=value.get("nofollow", False),
            )
        return cls(enable=bool(value))


def _coerce_anchor_transform(value: Any) -> AnchorTransform:
    if value in (None, ""):
        return ANCHOR_TRANSFORM_NONE
    try:
        number: int | None = int(value)
    except (TypeError, ValueError):
        number = None
    if number == ANCHOR_TRANSFORM_LOWER:
        return ANCHOR_TRANSFORM_LOWER
    if number == ANCHOR_TRANSFORM_UPPER:
        return ANCHOR_TRANSFORM_UPPER
    if number != ANCHOR_TRANSFORM_NONE:
        logger.debug("Invalid modifyAnchors value %r, leaving anchor case unchanged", value)
    return ANCHOR_TRANSFORM_NONE


def _coerce_sanitizer(value: Any) -> SanitizerSetting:
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    return bool(value)


@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Options consulted by the node renderer during one render.

    Parameters
    ----------
    gfm : bool, default True
        Enable GitHub-flavored extensions (tables, strikethrough, bare URL autolinks).
    pedantic : bool, default False
        Stick to original Markdown; disables the GFM extensions.
    breaks : bool, default True
        Render single newlines inside paragraphs as ``<br>``.
    smart_lists : bool, default True
        Accepted for compatibility; list parsing is always CommonMark.
    smartypants : bool, default True
        Apply typographic punctuation to text runs.
    quotes : str, default "“”‘’"
        Quote glyphs used by smartypants. Must be exactly 4 characters.
    header_ids : bool, default True
        Emit ``id`` attributes and header links on headings.
    modify_anchors : {0, 1, 2}, default 0
        Case transform for heading ids: none, lower, upper.
    anchor_alias : bool, default False
        Use an in-document link inside a heading as the heading's id source.
    autolink : bool, default True
        Render autolinks as anchors; when disabled they become plain text.
    sanitize_url : bool, default False
        Blank ``javascript:``, ``vbscript:`` and ``data:`` link targets.
    mangle : bool, default True
        Obfuscate autolinked email addresses.
    lazyload : bool, default False
        Add ``loading="lazy"`` to images.
    figcaption : bool, default False
        Wrap images with alt text in ``<figure>`` with a caption.
    description_lists : bool, default True
        Turn ``Term<br>: Description`` paragraphs into description lists.
    prepend_root : bool, default False
        Prepend the site root to site-relative image paths.
    post_asset : bool, default False
        Resolve relative image paths against the post's asset folder.
    external_link : ExternalLinkOptions
        External link handling.
    dompurify : bool or Mapping, default False
        Sanitize the final HTML; a mapping supplies sanitizer overrides.
    highlight : bool, default True
        Highlight fenced code blocks with Pygments.
    lang_prefix : str, default ""
        Prefix for the language class on ``<code>`` elements.

    """

    gfm: bool = field(default=DEFAULT_GFM, metadata={"config_key": "gfm"})
    pedantic: bool = field(default=DEFAULT_PEDANTIC, metadata={"config_key": "pedantic"})
    breaks: bool = field(default=DEFAULT_BREAKS, metadata={"config_key": "breaks"})
    smart_lists: bool = field(default=DEFAULT_SMART_LISTS, metadata={"config_key": "smartLists"})
    smartypants: bool = field(default=DEFAULT_SMARTYPANTS, metadata={"config_key": "smartypants"})
    quotes: str = field(default=DEFAULT_QUOTES, metadata={"config_key": "quotes"})
    header_ids: bool = field(default=DEFAULT_HEADER_IDS, metadata={"config_key": "headerIds"})
    modify_anchors: AnchorTransform = field(default=DEFAULT_MODIFY_ANCHORS, metadata={"config_key": "modifyAnchors"})
    anchor_alias: bool = field(default=DEFAULT_ANCHOR_ALIAS, metadata={"config_key": "anchorAlias"})
    autolink: bool = field(default=DEFAULT_AUTOLINK, metadata={"config_key": "autolink"})
    sanitize_url: bool = field(default=DEFAULT_SANITIZE_URL, metadata={"config_key": "sanitizeUrl"})
    mangle: bool = field(default=DEFAULT_MANGLE, metadata={"config_key": "mangle"})
    lazyload: bool = field(default=DEFAULT_LAZYLOAD, metadata={"config_key": "lazyload"})
    figcaption: bool = field(default=DEFAULT_FIGCAPTION, metadata={"config_key": "figcaption"})
    description_lists: bool = field(default=DEFAULT_DESCRIPTION_LISTS, metadata={"config_key": "descriptionLists"})
    prepend_root: bool = field(default=DEFAULT_PREPEND_ROOT, metadata={"config_key": "prependRoot"})
    post_asset: bool = field(default=DEFAULT_POST_ASSET, metadata={"config_key": "postAsset"})
    external_link: ExternalLinkOptions = field(
        default_factory=ExternalLinkOptions, metadata={"config_key": "external_link"}
    )
    dompurify: SanitizerSetting = field(default=False, metadata={"config_key": "dompurify"})
    highlight: bool = field(default=DEFAULT_HIGHLIGHT, metadata={"config_key": "highlight"})
    lang_prefix: str = field(default=DEFAULT_LANG_PREFIX, metadata={"config_key": "langPrefix"})

    def __post_init__(self) -> None:
        """Coerce option values, replacing invalid ones with defaults."""
        for option in fields(self):
            if option.type in ("bool", bool):
                object.__setattr__(self, option.name, bool(getattr(self, option.name)))

        object.__setattr__(self, "quotes", resolve_quotes(self.quotes))
        object.__setattr__(self, "modify_anchors", _coerce_anchor_transform(self.modify_anchors))
        object.__setattr__(self, "external_link", ExternalLinkOptions.coerce(self.external_link))
        object.__setattr__(self, "dompurify", _coerce_sanitizer(self.dompurify))
        object.__setattr__(self, "lang_prefix", str(self.lang_prefix or ""))

    @property
    def gfm_enabled(self) -> bool:
        """GFM extensions are on unless pedantic mode overrides them."""
        return self.gfm and not self.pedantic

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> RenderOptions:
        """Build options from a configuration mapping.

        Keys may use field names or configuration spellings; unknown keys
        are ignored.
        """
        return cls(**_normalize_keys(mapping))


_KEY_ALIASES: dict[str, str] = {}
for _option in fields(RenderOptions):
    _KEY_ALIASES[_option.name] = _option.name
    _KEY_ALIASES[_option.metadata["config_key"]] = _option.name


def _normalize_keys(mapping: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in mapping.items():
        name = _KEY_ALIASES.get(key)
        if name is None:
            logger.debug("Ignoring unknown render option %r", key)
            continue
        normalized[name] = value
    return normalized


OptionsLayer = Union[RenderOptions, Mapping[str, Any], None]


def _layer_to_mapping(layer: OptionsLayer) -> dict[str, Any]:
    if layer is None:
        return {}
    if isinstance(layer, RenderOptions):
        return {option.name: getattr(layer, option.name) for option in fields(layer)}
    if isinstance(layer, Mapping):
        return _normalize_keys(layer)
    raise InvalidOptionsError("render", RenderOptions, type(layer))


def merge_render_options(*layers: OptionsLayer) -> RenderOptions:
    """Merge option layers, later layers winning, into ``RenderOptions``.

    Parameters
    ----------
    *layers : RenderOptions, Mapping or None
        Layers in increasing priority. ``None`` layers are skipped.

    Returns
    -------
    RenderOptions
        The merged options

    Raises
    ------
    InvalidOptionsError
        If a layer is not a mapping, ``RenderOptions`` or ``None``

    Notes
    -----
    The merge is shallow: an ``external_link`` mapping in a later layer
    replaces the earlier one entirely.

    """
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(_layer_to_mapping(layer))
    return RenderOptions(**merged)


__all__ = [
    "CloneFrozenMixin",
    "ExternalLinkOptions",
    "RenderOptions",
    "merge_render_options",
]
