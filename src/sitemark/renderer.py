#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/renderer.py
"""Node renderer for sitemark.

``NodeRenderer`` is a mistune ``HTMLRenderer`` whose output construction for
selected token types goes through a handler table instead of methods. A
handler is a plain function ``handler(renderer, *args, **attrs) -> str``:

- inline and block content (rendered children or raw text) is the first
  positional argument when the token has any
- the token's ``attrs`` are passed as keyword arguments

Token types without a handler keep mistune's default HTML output. Hooks can
replace or wrap any entry with ``set_handler``.

One ``NodeRenderer`` serves exactly one render call; it owns the heading id
table of that call.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Optional
from urllib.parse import unquote

from mistune import HTMLRenderer
from mistune.util import escape_url, safe_entity, striptags

from sitemark.anchors import HeadingIdTable, allocate_anchor_id
from sitemark.options import RenderOptions
from sitemark.site import PostAssetResolver, SiteContext, resolve_post_asset
from sitemark.utils.highlight import highlight_code, language_from_info
from sitemark.utils.smartypants import smartypants
from sitemark.utils.text import escape_html, html_to_attribute_text
from sitemark.utils.urls import (
    encode_url,
    external_link_attributes,
    is_external_link,
    is_site_relative,
    is_unsafe_url,
    mangle_email,
    url_for,
)

if TYPE_CHECKING:
    from mistune.core import BlockState

logger = logging.getLogger(__name__)

NodeHandler = Callable[..., str]

MAILTO_PREFIX = "mailto:"

# Heading whose whole content is one in-document link
_ALIAS_LINK_PATTERN = re.compile(
    r"""^<a(?:\s[^<>]*?)?\shref=["']#(?P<target>[^<>"']+)["'][^<>]*>(?:(?!</a>).)*</a>$""",
    re.DOTALL,
)

# Term<br>: Description
_DESCRIPTION_LIST_PATTERN = re.compile(r"(^|\s)(\S.+)(<br>:(\s+))(\S.+)")
_DESCRIPTION_LIST_TEMPLATE = r"<dl><dt>\2</dt><dd>\5</dd></dl>"

_TODO_UNCHECKED_PATTERN = re.compile(r"^\s*\[ \]\s*")
_TODO_CHECKED_PATTERN = re.compile(r"^\s*\[x\]\s*")


def render_heading(renderer: NodeRenderer, text: str, level: int, **attrs: Any) -> str:
    """Render a heading with a unique id and a header link.

    With ``anchor_alias`` a heading made of a single ``#target`` link takes
    its id from the link target and the link is pointed at that id; the
    header link is emitted in both cases.
    """
    options = renderer.options
    tag = f"h{level}"
    if not options.header_ids:
        return f"<{tag}>{text}</{tag}>"

    alias = _ALIAS_LINK_PATTERN.match(text) if options.anchor_alias else None
    source = unquote(alias.group("target")) if alias else text

    anchor = allocate_anchor_id(source, options.modify_anchors, renderer.heading_ids)
    if not anchor:
        return f"<{tag}>{text}</{tag}>"

    if alias:
        text = text[: alias.start("target")] + anchor + text[alias.end("target") :]

    title = html_to_attribute_text(text)
    return f'<{tag} id="{anchor}"><a href="#{anchor}" class="headerlink" title="{title}"></a>{text}</{tag}>'


def render_link(
    renderer: NodeRenderer,
    text: str,
    url: str,
    title: Optional[str] = None,
    autolink: bool = False,
    **attrs: Any,
) -> str:
    """Render a link.

    Parameters
    ----------
    renderer : NodeRenderer
        The renderer of the current call
    text : str
        Rendered link text
    url : str
        Link destination as tokenized by mistune
    title : str, optional
        Link title
    autolink : bool, default False
        True when the link is autolink shorthand (``<http://...>``, a bare
        URL or ``<user@example.com>``)

    Returns
    -------
    str
        The ``<a>`` element, or just the text for autolinks when autolinking
        is disabled

    """
    options = renderer.options

    href = url
    if options.sanitize_url and is_unsafe_url(unquote(href)):
        logger.debug("Blanking unsafe link target %r", href)
        href = ""

    if autolink and not options.autolink:
        return text

    if autolink and options.mangle and href.startswith(MAILTO_PREFIX):
        address = unquote(href[len(MAILTO_PREFIX) :])
        href_attr = mangle_email(MAILTO_PREFIX + address)
        text = mangle_email(address)
    else:
        href_attr = encode_url(href)

    out = f'<a href="{href_attr}"'
    if title:
        out += f' title="{escape_html(title)}"'

    external_link = options.external_link
    if external_link.active and href and is_external_link(href, renderer.site.url, external_link.exclude):
        out += external_link_attributes(external_link.enable, external_link.nofollow)

    return out + f">{text}</a>"


def render_image(renderer: NodeRenderer, text: str, url: str, title: Optional[str] = None, **attrs: Any) -> str:
    """Render an image, resolving site-relative paths and post assets."""
    options = renderer.options
    site = renderer.site

    href = unquote(url)
    if options.prepend_root and not site.relative_link and is_site_relative(href):
        if (
            options.post_asset
            and renderer.post_asset_dir
            and renderer.resolver is not None
            and not href.startswith(("/", "\\"))
        ):
            asset_path = resolve_post_asset(href, renderer.post_asset_dir, renderer.resolver)
            if asset_path:
                href = asset_path
        href = url_for(href, site.root)

    out = f'<img src="{encode_url(href)}"'
    alt = striptags(text)
    if alt:
        out += f' alt="{alt}"'
    if title:
        out += f' title="{escape_html(title)}"'
    if options.lazyload:
        out += ' loading="lazy"'
    out += ">"

    if options.figcaption and text:
        return f'<figure>{out}<figcaption aria-hidden="true">{text}</figcaption></figure>'
    return out


def render_paragraph(renderer: NodeRenderer, text: str) -> str:
    """Render a paragraph, or a description list for ``Term<br>: Description``."""
    if renderer.options.description_lists:
        result, count = _DESCRIPTION_LIST_PATTERN.subn(_DESCRIPTION_LIST_TEMPLATE, text, count=1)
        if count:
            return result
    return f"<p>{text}</p>\n"


def render_list_item(renderer: NodeRenderer, text: str, **attrs: Any) -> str:
    """Render a list item; ``[ ]`` and ``[x]`` items become checkboxes."""
    if _TODO_UNCHECKED_PATTERN.match(text):
        text = _TODO_UNCHECKED_PATTERN.sub('<input type="checkbox"> ', text, count=1)
        return f'<li style="list-style: none">{text}</li>\n'
    if _TODO_CHECKED_PATTERN.match(text):
        text = _TODO_CHECKED_PATTERN.sub('<input type="checkbox" checked> ', text, count=1)
        return f'<li style="list-style: none">{text}</li>\n'
    return f"<li>{text}</li>\n"


def render_text(renderer: NodeRenderer, text: str) -> str:
    """Escape a text run, applying smart punctuation when enabled."""
    options = renderer.options
    if options.smartypants:
        text = smartypants(text, options.quotes)
    return safe_entity(text)


def render_linebreak(renderer: NodeRenderer) -> str:
    return "<br>"


def render_softbreak(renderer: NodeRenderer) -> str:
    return "\n"


def render_block_code(renderer: NodeRenderer, code: str, info: Optional[str] = None, **attrs: Any) -> str:
    """Render a code block, highlighted with Pygments when possible."""
    options = renderer.options
    lang = language_from_info(info)
    body = highlight_code(code, lang, enabled=options.highlight)
    if lang:
        css_class = safe_entity(options.lang_prefix + lang)
        return f'<pre><code class="{css_class}">{body}</code></pre>'
    return f"<pre><code>{body}</code></pre>"


DEFAULT_HANDLERS: dict[str, NodeHandler] = {
    "heading": render_heading,
    "link": render_link,
    "image": render_image,
    "paragraph": render_paragraph,
    "list_item": render_list_item,
    "text": render_text,
    "linebreak": render_linebreak,
    "softbreak": render_softbreak,
    "block_code": render_block_code,
}


def is_autolink_token(token: dict[str, Any]) -> bool:
    """Return True for link tokens produced by autolink shorthand.

    mistune emits these with a single text child whose raw text is the URL
    (or the address, for email autolinks) and no title.
    """
    attrs = token.get("attrs") or {}
    children = token.get("children") or []
    if attrs.get("title") or len(children) != 1 or children[0].get("type") != "text":
        return False

    raw = children[0].get("raw", "")
    url = attrs.get("url", "")
    return url in (escape_url(raw), escape_url(MAILTO_PREFIX + raw))


class NodeRenderer(HTMLRenderer):
    """Per-render HTML renderer driven by a handler table.

    Parameters
    ----------
    options : RenderOptions
        Options of the current render
    site : SiteContext, optional
        Site configuration; defaults to an empty context
    resolver : PostAssetResolver, optional
        Host lookups for post assets
    post_asset_dir : str, optional
        Asset directory of the post being rendered, when known
    handlers : dict, optional
        Handler overrides applied on top of ``DEFAULT_HANDLERS``

    Notes
    -----
    Raw HTML is passed through unescaped, matching static site generators
    where the author is trusted. Use the ``dompurify`` option to sanitize
    the final output instead.

    """

    def __init__(
        self,
        options: RenderOptions,
        site: Optional[SiteContext] = None,
        resolver: Optional[PostAssetResolver] = None,
        post_asset_dir: Optional[str] = None,
        handlers: Optional[dict[str, NodeHandler]] = None,
    ) -> None:
        super().__init__(escape=False)
        self.options = options
        self.site = site or SiteContext()
        self.resolver = resolver
        self.post_asset_dir = post_asset_dir
        self.heading_ids = HeadingIdTable()
        self.handlers: dict[str, NodeHandler] = dict(DEFAULT_HANDLERS)
        if handlers:
            self.handlers.update(handlers)

    def set_handler(self, name: str, handler: NodeHandler) -> None:
        """Install ``handler`` for token type ``name``."""
        self.handlers[name] = handler

    def get_handler(self, name: str) -> Optional[NodeHandler]:
        """Return the handler for token type ``name``, if any."""
        return self.handlers.get(name)

    def render_token(self, token: dict[str, Any], state: BlockState) -> str:
        """Render one token through the handler table, or mistune's default."""
        token_type = token["type"]
        handler = self.handlers.get(token_type)
        if handler is None:
            return super().render_token(token, state)

        attrs = dict(token.get("attrs") or {})

        if token_type == "link" and is_autolink_token(token):
            attrs["autolink"] = True
            # URL text never gets smart punctuation
            return handler(self, safe_entity(token["children"][0]["raw"]), **attrs)

        if "raw" in token:
            return handler(self, token["raw"], **attrs)
        if "children" in token:
            return handler(self, self.render_tokens(token["children"], state), **attrs)
        return handler(self, **attrs)


__all__ = [
    "DEFAULT_HANDLERS",
    "NodeHandler",
    "NodeRenderer",
    "is_autolink_token",
    "render_block_code",
    "render_heading",
    "render_image",
    "render_link",
    "render_linebreak",
    "render_list_item",
    "render_paragraph",
    "render_softbreak",
    "render_text",
]
