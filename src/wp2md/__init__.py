"""wp2md - Convert WordPress exports into Jekyll Markdown posts.

wp2md reads WordPress eXtended RSS (WXR) export files, converts the HTML
body of every published post into Markdown and writes one Jekyll post per
record, prefixed with YAML front matter. Images referenced by a post can
be cached locally and rewritten to a site-relative placeholder.

Key Features
------------
- Recursive HTML to Markdown conversion tuned for blog post bodies
- Image caching with stable, date-prefixed filenames
- Per-record error isolation: one broken post never aborts an export
- Jekyll front matter with layout, title, date, categories and tags

Examples
--------
Convert a fragment:

    >>> from wp2md import html_to_markdown
    >>> html_to_markdown("<p><b>hi</b></p>")
    '\\r\\n**hi**\\r\\n\\r\\n'

Export a blog:

    >>> from wp2md import ExportOptions, export_wordpress
    >>> summary = export_wordpress("blog.wordpress.xml", ExportOptions(output_dir="_posts"))  # doctest: +SKIP

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from wp2md.context import ConversionIssue, ConversionResult, IssueKind
from wp2md.exceptions import (
    AssetFetchError,
    ConversionError,
    ExportFormatError,
    ImageInBlockquoteError,
    MissingPostDateError,
    OutputWriteError,
    RecordError,
    UnknownCategoryDomainError,
    ValidationError,
    Wp2MdError,
)
from wp2md.exporter import ExportFailure, ExportSummary, WordPressExporter, export_wordpress
from wp2md.html2markdown import HTMLToMarkdown, html_to_markdown
from wp2md.options import ConversionOptions, ExportOptions, ImageInBlockquotePolicy
from wp2md.wxr import PostRecord, iter_posts

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Conversion
    "HTMLToMarkdown",
    "html_to_markdown",
    "ConversionOptions",
    "ImageInBlockquotePolicy",
    "ConversionResult",
    "ConversionIssue",
    "IssueKind",
    # Export
    "WordPressExporter",
    "export_wordpress",
    "ExportOptions",
    "ExportSummary",
    "ExportFailure",
    "PostRecord",
    "iter_posts",
    # Errors
    "Wp2MdError",
    "ValidationError",
    "ExportFormatError",
    "RecordError",
    "UnknownCategoryDomainError",
    "MissingPostDateError",
    "ConversionError",
    "ImageInBlockquoteError",
    "AssetFetchError",
    "OutputWriteError",
]
