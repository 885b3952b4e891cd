#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/api.py
"""The render entry point.

Every call builds its own node renderer, tokenizers and heading id table,
runs the registered hooks against them, renders the document with mistune
and optionally sanitizes the result. Nothing is carried over between calls,
so rendering the same document twice yields the same HTML.

Examples
--------
One-off render with the default options:

    >>> from sitemark import render
    >>> render("# Hello world")
    '<h1 id="Hello-world"><a href="#Hello-world" class="headerlink" title="Hello world"></a>Hello world</h1>'

A renderer bound to a site configuration:

    >>> from sitemark import MarkdownRenderer
    >>> site = MarkdownRenderer({"root": "/blog/", "marked": {"prependRoot": True}})
    >>> site.render("![](/a.png)")
    '<p><img src="/blog/a.png"></p>\\n'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union, cast

from mistune import BlockParser, InlineParser, Markdown
from mistune.plugins import Plugin, PluginRef, import_plugin

from sitemark.constants import GFM_PLUGINS
from sitemark.exceptions import ValidationError
from sitemark.hooks import HookContext, HookManager
from sitemark.options import OptionsLayer, RenderOptions, merge_render_options
from sitemark.renderer import NodeRenderer
from sitemark.site import PostAssetResolver, SiteContext, resolve_post_asset_dir
from sitemark.utils.decorators import debug_timer
from sitemark.utils.html_sanitizer import sanitize_html

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderDocument:
    """A document to render.

    Parameters
    ----------
    text : str
        Markdown source
    path : str, optional
        File path of the document; needed for post asset resolution

    """

    text: str = ""
    path: Optional[str] = None

    @classmethod
    def coerce(cls, document: DocumentInput) -> RenderDocument:
        """Build a document from a ``RenderDocument``, a mapping or a string."""
        if isinstance(document, cls):
            return document
        if isinstance(document, str):
            return cls(text=document)
        if isinstance(document, Mapping):
            return cls(text=document.get("text") or "", path=document.get("path"))
        raise ValidationError(
            f"Expected a RenderDocument, mapping or str, got {type(document).__name__}",
            parameter_name="document",
            parameter_value=document,
        )


DocumentInput = Union[RenderDocument, Mapping[str, Any], str]


def _load_plugins(names: list[PluginRef]) -> list[Plugin]:
    plugins: list[Plugin] = []
    for name in names:
        try:
            plugins.append(import_plugin(name))
        except (ImportError, AttributeError, ValueError) as e:
            logger.warning(f"Skipping unknown mistune plugin {name!r}: {e}")
    return plugins


class MarkdownRenderer:
    """Markdown renderer bound to a site configuration.

    Parameters
    ----------
    site_config : Mapping or SiteContext, optional
        Host site configuration. Site keys (``url``, ``root``,
        ``relative_link``, ``source_dir``, ``post_asset_folder``) sit at the
        top level and render options under ``marked``.
    resolver : PostAssetResolver, optional
        Host lookups for post assets
    hooks : HookManager, optional
        Hooks dispatched on every render

    Notes
    -----
    Instances hold configuration only and can be shared between threads,
    provided hooks are registered before rendering starts.

    """

    def __init__(
        self,
        site_config: Union[Mapping[str, Any], SiteContext, None] = None,
        resolver: Optional[PostAssetResolver] = None,
        hooks: Optional[HookManager] = None,
    ) -> None:
        if isinstance(site_config, SiteContext):
            self.site = site_config
            self.site_options: Mapping[str, Any] = {}
        else:
            config = site_config or {}
            self.site = SiteContext.from_mapping(config)
            self.site_options = config.get("marked") or {}
        self.resolver = resolver
        self.hooks = hooks

    def options_for(self, overrides: OptionsLayer = None) -> RenderOptions:
        """Merge defaults, the site ``marked`` block and ``overrides``."""
        return merge_render_options(self.site_options, overrides)

    def render(self, document: DocumentInput, overrides: OptionsLayer = None) -> str:
        """Render a document to an HTML fragment.

        Parameters
        ----------
        document : RenderDocument, Mapping or str
            The document; a mapping needs ``text`` and may carry ``path``
        overrides : Mapping or RenderOptions, optional
            Call-site options, highest priority

        Returns
        -------
        str
            The HTML fragment

        Raises
        ------
        HookError
            If a hook fails and the hook manager is strict

        """
        doc = RenderDocument.coerce(document)
        options = self.options_for(overrides)

        post_asset_dir = None
        if doc.path and self.site.post_asset_folder and options.prepend_root and options.post_asset:
            post_asset_dir = resolve_post_asset_dir(doc.path, self.site, self.resolver)

        renderer: Any = NodeRenderer(options, self.site, self.resolver, post_asset_dir)
        block: Any = BlockParser()
        inline: Any = InlineParser(hard_wrap=options.breaks)
        extensions: list[PluginRef] = list(GFM_PLUGINS) if options.gfm_enabled else []

        if self.hooks is not None:
            context = HookContext(options=options, site=self.site, document_path=doc.path)
            renderer = self.hooks.dispatch("renderer", renderer, context)
            block = self.hooks.dispatch("block_tokenizer", block, context)
            inline = self.hooks.dispatch("inline_tokenizer", inline, context)
            extensions = self.hooks.dispatch("extensions", extensions, context)

        markdown = Markdown(renderer=renderer, block=block, inline=inline, plugins=_load_plugins(extensions))

        with debug_timer(logger, f"Rendering ({doc.path or '<string>'})"):
            html = cast(str, markdown(doc.text))

        if options.dompurify:
            sanitizer_options = None if options.dompurify is True else options.dompurify
            html = sanitize_html(html, sanitizer_options)

        return html


def render(
    document: DocumentInput,
    overrides: OptionsLayer = None,
    *,
    site: Union[Mapping[str, Any], SiteContext, None] = None,
    resolver: Optional[PostAssetResolver] = None,
    hooks: Optional[HookManager] = None,
) -> str:
    """Render a document to an HTML fragment.

    Parameters
    ----------
    document : RenderDocument, Mapping or str
        The document to render
    overrides : Mapping or RenderOptions, optional
        Call-site options, highest priority
    site : Mapping or SiteContext, optional
        Site configuration; a mapping may carry a ``marked`` options block
    resolver : PostAssetResolver, optional
        Host lookups for post assets
    hooks : HookManager, optional
        Hooks dispatched before rendering

    Returns
    -------
    str
        The HTML fragment

    """
    return MarkdownRenderer(site, resolver=resolver, hooks=hooks).render(document, overrides)


__all__ = ["DocumentInput", "MarkdownRenderer", "RenderDocument", "render"]
