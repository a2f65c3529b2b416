#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for wp2md library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Output Tokens - Exact strings emitted by the converter
3. Conversion Behavior - Defaults for conversion options
4. Asset Fetching - Network defaults for asset downloads
5. WordPress Export Format - Namespaces and element names
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]

# =============================================================================
# Markdown Output Tokens
# =============================================================================

LINE_TERMINATOR = "\r\n"
LINE_BREAK_TOKEN = "<br />"

BOLD_DELIMITER = "**"
ITALIC_DELIMITER = "_"
STRIKETHROUGH_DELIMITER = "~~"
CODE_FENCE = "```"
HEADING_MARKER = "#"
MAX_HEADING_LEVEL = 6

ORDERED_ITEM_PREFIX = "1. "
UNORDERED_ITEM_PREFIX = "- "

# Liquid variable resolved by the static site at build time
SITE_ASSETS_PLACEHOLDER = "{{site.assets_url}}"

# Replacement entities used by the text sanitizer
SANITIZE_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("[", "&#x5b;"),
    ("]", "&#x5d;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)

# =============================================================================
# Conversion Behavior
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html.parser"
DEFAULT_CACHE_PREFIX = "cache_"
DEFAULT_ASSET_FILENAME = "image"

# Tag list block injected into post bodies by the Livedoor blog platform
DEFAULT_BOILERPLATE_PREFIXES: tuple[str, ...] = ("Livedoor タグ",)

DOCUMENT_SKELETON_HEAD = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    '<meta http-equiv="x-ua-compatible" content="IE=edge">\n'
    "</head>\n"
    "<body>"
)
DOCUMENT_SKELETON_TAIL = "</body></html>"

# Descendants of a blockquote that start a new line in its literal text
LITERAL_TEXT_BLOCK_TAGS = frozenset(
    {"p", "div", "li", "ul", "ol", "pre", "blockquote", "table", "tr", "h1", "h2", "h3", "h4", "h5", "h6"}
)

# =============================================================================
# Asset Fetching
# =============================================================================

DEFAULT_USER_AGENT = "wp2md-fetcher/1.0"
DEFAULT_FETCH_TIMEOUT = 30.0

# =============================================================================
# WordPress Export Format
# =============================================================================

WXR_NAMESPACES = {
    "wp": "http://wordpress.org/export/1.2/",
    "content": "http://purl.org/rss/1.0/modules/content/",
}

_WP = WXR_NAMESPACES["wp"]
_CONTENT = WXR_NAMESPACES["content"]

# Clark notation names as used by ElementTree
WXR_STATUS = f"{{{_WP}}}status"
WXR_POST_TYPE = f"{{{_WP}}}post_type"
WXR_POST_NAME = f"{{{_WP}}}post_name"
WXR_POST_ID = f"{{{_WP}}}post_id"
WXR_POST_DATE = f"{{{_WP}}}post_date"
WXR_POST_DATE_GMT = f"{{{_WP}}}post_date_gmt"
WXR_CONTENT = f"{{{_CONTENT}}}encoded"
WXR_TITLE = "title"
WXR_CATEGORY = "category"
WXR_ITEM = "item"

WXR_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CATEGORY_DOMAIN_TAG = "post_tag"
CATEGORY_DOMAIN_CATEGORY = "category"

DEFAULT_POST_STATUSES: tuple[str, ...] = ("publish",)
DEFAULT_POST_TYPES: tuple[str, ...] = ("post",)
DEFAULT_LAYOUT = "post"

# Prefix for environment variables that provide CLI defaults
ENV_PREFIX = "WP2MD_"
