"""Test utilities for wp2md test suite.

This module provides helpers for building WordPress export documents and
managing temporary directories.
"""

import base64
import tempfile
from pathlib import Path
from xml.sax.saxutils import escape

# Base64 encoded 1x1 pixel PNG for testing
MINIMAL_PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/w8AAn8B9FpQHLwAAAAASUVORK5CYII="
MINIMAL_PNG_BYTES = base64.b64decode(MINIMAL_PNG_B64)

WXR_HEADER = """<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0"
    xmlns:excerpt="http://wordpress.org/export/1.2/excerpt/"
    xmlns:content="http://purl.org/rss/1.0/modules/content/"
    xmlns:wfw="http://wellformedweb.org/CommentAPI/"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:wp="http://wordpress.org/export/1.2/">
<channel>
<title>Test Blog</title>
<wp:wxr_version>1.2</wp:wxr_version>
"""
WXR_FOOTER = """</channel>
</rss>
"""


def make_item(
    title="Hello World",
    post_name="hello-world",
    post_id="1",
    content="<p>Hello</p>",
    status="publish",
    post_type="post",
    post_date="2017-11-25 21:30:00",
    post_date_gmt="2017-11-25 12:30:00",
    categories=(),
    tags=(),
    extra_categories=(),
):
    """Build the XML of one export item.

    ``content=None`` omits ``content:encoded``; a date of None omits that field.
    ``extra_categories`` is a sequence of ``(domain, name)`` pairs.
    """
    parts = ["<item>", f"<title>{escape(title)}</title>"]
    for name in categories:
        parts.append(f'<category domain="category" nicename="{escape(name)}"><![CDATA[{name}]]></category>')
    for name in tags:
        parts.append(f'<category domain="post_tag" nicename="{escape(name)}"><![CDATA[{name}]]></category>')
    for domain, name in extra_categories:
        parts.append(f'<category domain="{domain}"><![CDATA[{name}]]></category>')
    if content is not None:
        parts.append(f"<content:encoded><![CDATA[{content}]]></content:encoded>")
    parts.append(f"<wp:post_id>{post_id}</wp:post_id>")
    if post_date is not None:
        parts.append(f"<wp:post_date>{post_date}</wp:post_date>")
    if post_date_gmt is not None:
        parts.append(f"<wp:post_date_gmt>{post_date_gmt}</wp:post_date_gmt>")
    parts.append(f"<wp:post_name>{post_name}</wp:post_name>")
    parts.append(f"<wp:status>{status}</wp:status>")
    parts.append(f"<wp:post_type>{post_type}</wp:post_type>")
    parts.append("</item>")
    return "\n".join(parts)


def make_wxr(*items):
    """Wrap item XML strings into a complete export document."""
    return WXR_HEADER + "\n".join(items) + "\n" + WXR_FOOTER


def write_wxr(directory: Path, *items, name="export.xml") -> Path:
    """Write an export document into ``directory`` and return its path."""
    path = directory / name
    path.write_text(make_wxr(*items), encoding="utf-8")
    return path


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
