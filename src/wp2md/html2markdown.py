"""HTML to Markdown conversion module.

This module converts the HTML body of a blog post into Markdown for a static
site generator, resolving embedded images to locally cached asset references.

The converter walks the parsed tree depth-first. Each recognized tag has a
rendering rule that produces a Markdown string from the element and its
children; unrecognized tags are passed through as raw markup so no content is
ever silently dropped.

Output Conventions
------------------
- ``\\r\\n`` line terminators and ``<br />`` for forced line breaks
- ATX headings (``#`` .. ``######``) carrying the raw inner markup
- ``**bold**``, ``_italic_`` and ``~~strikethrough~~``
- ``- `` / ``1. `` list item prefixes (ordered items are never renumbered)
- Blockquotes as fenced code blocks of their literal text
- ``[text](href)`` links and ``![]({{site.assets_url}}<cache-name>)`` images

Special Cases
-------------
- A link wrapping an image collapses to the image, with the link target used
  as the image source (the full-size version).
- ``<font color>`` and ``<span style="color: ...">`` are kept as raw HTML,
  since Markdown cannot express color.
- Tag-list blocks injected by the blogging platform are dropped.
- An image inside a blockquote cannot survive the literal-text rendering;
  depending on ``ConversionOptions.image_in_blockquote`` this either fails
  the conversion or is logged and skipped.

Dependencies
------------
- beautifulsoup4: For HTML parsing
- httpx: For downloading cached assets

Examples
--------
Basic conversion:

    >>> from wp2md.html2markdown import html_to_markdown
    >>> html_to_markdown("<strong>asterisks and <i>underscores</i></strong>")
    '**asterisks and _underscores_**'

Cache images under a date prefix without downloading them:

    >>> from wp2md.options import ConversionOptions
    >>> options = ConversionOptions(asset_directory="assets", cache_prefix="2017-11-25-", skip_download=True)
    >>> html_to_markdown('<img src="http://host/lena.jpg">', options=options)
    '![]({{site.assets_url}}2017-11-25-lena.jpg)'
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
#  Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
#  documentation files (the “Software”), to deal in the Software without restriction, including without limitation
#  the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
#  and to permit persons to whom the Software is furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in all copies or substantial
#  portions of the Software.
#
#  THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING
#  BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
#  IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY,
#  WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
#  SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

import logging
from typing import Any, Optional

from .constants import (
    BOLD_DELIMITER,
    CODE_FENCE,
    HEADING_MARKER,
    ITALIC_DELIMITER,
    LINE_BREAK_TOKEN,
    LINE_TERMINATOR,
    MAX_HEADING_LEVEL,
    ORDERED_ITEM_PREFIX,
    SITE_ASSETS_PLACEHOLDER,
    STRIKETHROUGH_DELIMITER,
    UNORDERED_ITEM_PREFIX,
)
from .context import ConversionContext, ConversionResult, IssueKind
from .dom import (
    NodeKind,
    get_attribute,
    has_children,
    inner_markup,
    literal_text,
    node_kind,
    outer_markup,
    parse_fragment,
    style_color,
    tag_name,
)
from .exceptions import AssetFetchError, ConversionError, ImageInBlockquoteError, Wp2MdError
from .options import ConversionOptions, ImageInBlockquotePolicy
from .utils.assets import AssetFetcher, cache_filename, resolve_asset_name
from .utils.escape import sanitize_text

logger = logging.getLogger(__name__)


def heading_marker(level: int) -> str:
    """Return the ATX heading marker for a level, clamped to six."""
    return HEADING_MARKER * min(level, MAX_HEADING_LEVEL)


class HTMLToMarkdown:
    """HTML to Markdown Converter

    Converts post body fragments to Markdown. The converter holds only its
    options and an optional shared asset fetcher; all traversal state lives
    in a ``ConversionContext`` created per call, so one instance may be
    reused for many posts.

    Parameters
    ----------
    options : ConversionOptions or None, default None
        Conversion options. If None, uses default settings.
    fetcher : AssetFetcher or None, default None
        Downloader shared across conversions. When None and downloads are
        needed, a fetcher is created for the duration of each call.
    """

    _ELEMENT_HANDLERS = {
        "HTML": "_render_children",
        "BODY": "_render_children",
        "HEAD": "_render_nothing",
        "TITLE": "_render_nothing",
        "BR": "_render_line_break",
        "A": "_render_anchor",
        "IMG": "_render_image",
        "P": "_render_paragraph",
        "DIV": "_render_div",
        "B": "_render_bold",
        "STRONG": "_render_bold",
        "S": "_render_strikethrough",
        "I": "_render_italic",
        "FONT": "_render_font",
        "SPAN": "_render_span",
        "UL": "_render_unordered_list",
        "OL": "_render_ordered_list",
        "LI": "_render_list_item",
        "BLOCKQUOTE": "_render_blockquote",
        "H1": "_render_heading",
        "H2": "_render_heading",
        "H3": "_render_heading",
        "H4": "_render_heading",
        "H5": "_render_heading",
        "H6": "_render_heading",
    }

    # Rendered even when they have no children
    _VOID_ELEMENTS = frozenset({"BR", "IMG"})

    def __init__(self, options: ConversionOptions | None = None, fetcher: Optional[AssetFetcher] = None):
        self.options = options or ConversionOptions()
        self._fetcher = fetcher

    def convert(self, html: str, post_label: str | None = None) -> str:
        """Convert an HTML fragment to Markdown.

        Parameters
        ----------
        html : str
            Post body fragment
        post_label : str, optional
            Name of the post, used in diagnostics

        Returns
        -------
        str
            Markdown text

        """
        return self.convert_with_report(html, post_label=post_label).markdown

    def convert_with_report(self, html: str, post_label: str | None = None) -> ConversionResult:
        """Convert an HTML fragment and report the issues found on the way.

        Parameters
        ----------
        html : str
            Post body fragment
        post_label : str, optional
            Name of the post, used in diagnostics

        Returns
        -------
        ConversionResult
            Markdown text and the list of recorded issues

        Raises
        ------
        ImageInBlockquoteError
            If an image is nested in a blockquote and the policy is ``fail``
        ConversionError
            If parsing or rendering fails for any other reason, including
            markup nested too deeply to walk

        """
        try:
            if self._fetcher is None and self._downloads_assets():
                with AssetFetcher(
                    self.options.asset_directory or ".",
                    timeout=self.options.fetch_timeout,
                    user_agent=self.options.user_agent,
                    overwrite=self.options.overwrite_assets,
                ) as fetcher:
                    return self._convert(html, post_label, fetcher)
            return self._convert(html, post_label, self._fetcher)
        except Wp2MdError:
            raise
        except Exception as e:
            raise ConversionError(
                f"Failed to convert HTML to Markdown: {str(e)}", post_label=post_label, original_error=e
            ) from e

    def _downloads_assets(self) -> bool:
        return self.options.asset_directory is not None and not self.options.skip_download

    def _convert(self, html: str, post_label: str | None, fetcher: Optional[AssetFetcher]) -> ConversionResult:
        root = parse_fragment(html, self.options.html_parser)
        ctx = ConversionContext(post_label=post_label, fetcher=fetcher if self._downloads_assets() else None)
        markdown = self.render(root, ctx)
        return ConversionResult(markdown=markdown, issues=list(ctx.issues))

    def render(self, node: Any, ctx: ConversionContext) -> str:
        """Render one node (and its subtree) to Markdown."""
        kind = node_kind(node)
        if kind is NodeKind.COMMENT:
            return ""

        if kind is NodeKind.TEXT:
            if ctx.suppress_text:
                return ""
            raw = str(node)
            if raw == "\n":
                return ""
            return sanitize_text(raw) if ctx.sanitize_text else raw

        name = tag_name(node)
        if name not in self._VOID_ELEMENTS and not has_children(node):
            return ""

        handler_name = self._ELEMENT_HANDLERS.get(name)
        if handler_name is None:
            return self._render_unhandled(node, ctx)
        handler = getattr(self, handler_name)
        return handler(node, ctx)

    def _render_children(self, node: Any, ctx: ConversionContext) -> str:
        return "".join(self.render(child, ctx) for child in node.children)

    def _render_nothing(self, node: Any, ctx: ConversionContext) -> str:
        return ""

    def _render_unhandled(self, node: Any, ctx: ConversionContext) -> str:
        name = tag_name(node)
        logger.warning("Unhandled element: %s%s", name, _in_post(ctx))
        ctx.record(IssueKind.UNHANDLED_TAG, name)
        return outer_markup(node)

    def _render_line_break(self, node: Any, ctx: ConversionContext) -> str:
        return LINE_BREAK_TOKEN + LINE_TERMINATOR

    def _render_paragraph(self, node: Any, ctx: ConversionContext) -> str:
        return LINE_TERMINATOR + self._render_children(node, ctx) + LINE_TERMINATOR * 2

    def _wrap(self, delimiter: str, node: Any, ctx: ConversionContext) -> str:
        return f"{delimiter}{self._render_children(node, ctx)}{delimiter}"

    def _render_bold(self, node: Any, ctx: ConversionContext) -> str:
        return self._wrap(BOLD_DELIMITER, node, ctx)

    def _render_italic(self, node: Any, ctx: ConversionContext) -> str:
        return self._wrap(ITALIC_DELIMITER, node, ctx)

    def _render_strikethrough(self, node: Any, ctx: ConversionContext) -> str:
        return self._wrap(STRIKETHROUGH_DELIMITER, node, ctx)

    def _render_heading(self, node: Any, ctx: ConversionContext) -> str:
        """Render h1-h6 with the raw inner markup as heading text."""
        level = int(tag_name(node)[1:])
        return f"{LINE_TERMINATOR}{heading_marker(level)} {inner_markup(node)}{LINE_TERMINATOR * 2}"

    def _render_font(self, node: Any, ctx: ConversionContext) -> str:
        if get_attribute(node, "color"):
            return outer_markup(node)
        return self._render_children(node, ctx)

    def _render_span(self, node: Any, ctx: ConversionContext) -> str:
        if style_color(node) is not None:
            return outer_markup(node)
        return self._render_children(node, ctx)

    def _render_div(self, node: Any, ctx: ConversionContext) -> str:
        """Render a div, dropping tag-list blocks injected by the blog platform."""
        content = self._render_children(node, ctx)
        if content.lstrip().startswith(self.options.boilerplate_prefixes):
            logger.debug("Dropped platform boilerplate block%s", _in_post(ctx))
            return ""
        return content

    def _render_list(self, node: Any, ctx: ConversionContext, ordered: bool) -> str:
        with ctx.list_scope(ordered):
            content = self._render_children(node, ctx)
        return LINE_TERMINATOR + content + LINE_TERMINATOR

    def _render_unordered_list(self, node: Any, ctx: ConversionContext) -> str:
        return self._render_list(node, ctx, ordered=False)

    def _render_ordered_list(self, node: Any, ctx: ConversionContext) -> str:
        return self._render_list(node, ctx, ordered=True)

    def _render_list_item(self, node: Any, ctx: ConversionContext) -> str:
        with ctx.scoped(suppress_text=False):
            content = self._render_children(node, ctx)
        # A stray <li> outside any list renders as a bullet
        ordered = bool(ctx.list_modes) and ctx.in_ordered_list
        prefix = ORDERED_ITEM_PREFIX if ordered else UNORDERED_ITEM_PREFIX
        return prefix + content + LINE_TERMINATOR

    def _render_blockquote(self, node: Any, ctx: ConversionContext) -> str:
        """Render a blockquote as a fenced block of its literal text.

        The children are still walked so that embedded images trigger the
        image-in-blockquote policy; their Markdown is discarded.
        """
        with ctx.scoped(inside_blockquote=True):
            self._render_children(node, ctx)
        text = literal_text(node)
        return f"{LINE_TERMINATOR}{CODE_FENCE}{LINE_TERMINATOR}{text}{LINE_TERMINATOR}{CODE_FENCE}{LINE_TERMINATOR}"

    def _render_anchor(self, node: Any, ctx: ConversionContext) -> str:
        """Render a link, or let an embedded image take its place.

        The label is rendered without sanitizing so the literal text next to
        the href is not escaped. If an image was rendered inside the anchor,
        the image already used the href as its source and is returned alone.
        """
        href = get_attribute(node, "href")
        with ctx.scoped(saw_image=False, hyperlink_target=href, sanitize_text=False):
            child_text = self._render_children(node, ctx)
            saw_image = ctx.saw_image

        if saw_image:
            return child_text
        return f"[{child_text}]({href})"

    def _render_image(self, node: Any, ctx: ConversionContext) -> str:
        """Render an image, preferring the enclosing link as the source."""
        ctx.saw_image = True
        source = ctx.hyperlink_target or get_attribute(node, "src")

        if ctx.inside_blockquote:
            if self.options.image_in_blockquote is ImageInBlockquotePolicy.FAIL:
                raise ImageInBlockquoteError(source, post_label=ctx.post_label)
            logger.warning("> %s in BlockQuote%s", source, _in_post(ctx))
            ctx.record(IssueKind.IMAGE_IN_BLOCKQUOTE, source)
            return ""

        if self.options.asset_directory is None:
            return f"![]({source})"

        if ctx.fetcher is not None:
            try:
                ctx.fetcher.fetch(source, cache_filename(source, self.options.cache_prefix))
            except AssetFetchError as e:
                logger.warning("Could not cache %s%s: %s", source, _in_post(ctx), e.message)
                ctx.record(IssueKind.ASSET_FETCH_FAILED, source)

        return f"![]({SITE_ASSETS_PLACEHOLDER}{resolve_asset_name(source, self.options.cache_prefix)})"


def _in_post(ctx: ConversionContext) -> str:
    return f" in {ctx.post_label}" if ctx.post_label else ""


def html_to_markdown(html: str, options: ConversionOptions | None = None, post_label: str | None = None) -> str:
    """Convert an HTML fragment to Markdown.

    Parameters
    ----------
    html : str
        Post body fragment
    options : ConversionOptions or None, default None
        Configuration options for conversion. If None, uses default settings.
    post_label : str, optional
        Name of the post, used in diagnostics

    Returns
    -------
    str
        Markdown representation of the fragment

    Raises
    ------
    ImageInBlockquoteError
        If an image sits in a blockquote and the policy is ``fail``
    ConversionError
        If parsing or conversion fails for any other reason

    Examples
    --------
        >>> html_to_markdown("<p>hello</p>")
        '\\r\\nhello\\r\\n\\r\\n'

    """
    if options is None:
        options = ConversionOptions()

    return HTMLToMarkdown(options).convert(html, post_label=post_label)
