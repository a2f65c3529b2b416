#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/utils/static_site.py
"""Front matter generation for Jekyll posts.

Converted posts are prefixed with a YAML front matter block carrying the
layout, title, date, categories and tags of the exported record.

Classes
-------
- FrontmatterGenerator: Serialize post metadata to a YAML front matter block
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import yaml

from wp2md.constants import DEFAULT_LAYOUT, LINE_TERMINATOR

if TYPE_CHECKING:
    from wp2md.wxr import PostRecord


class FrontmatterGenerator:
    """Generate Jekyll front matter.

    Parameters
    ----------
    layout : str, default "post"
        Layout written when the metadata does not name one
    line_terminator : str, default "\\r\\n"
        Line terminator of the emitted block, matching the Markdown body

    Examples
    --------
    Generate front matter from a metadata dictionary:

        >>> generator = FrontmatterGenerator(line_terminator="\\n")
        >>> print(generator.generate({"title": "My Post", "tags": ["python"]}), end="")
        ---
        layout: post
        title: My Post
        tags:
        - python
        ---

    """

    def __init__(self, layout: str = DEFAULT_LAYOUT, line_terminator: str = LINE_TERMINATOR):
        """Initialize the front matter generator."""
        self.layout = layout
        self.line_terminator = line_terminator

    def generate(self, metadata: Dict[str, Any]) -> str:
        """Generate front matter from post metadata.

        Parameters
        ----------
        metadata : dict
            Post metadata (``title``, ``date``, ``categories``, ``tags``,
            optionally ``layout`` and ``permalink``)

        Returns
        -------
        str
            Front matter block with ``---`` delimiters

        """
        normalized = self._normalize_metadata(metadata)
        content = yaml.safe_dump(
            normalized,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
        lines = ["---", *content.splitlines(), "---"]
        return self.line_terminator.join(lines) + self.line_terminator

    def generate_for_post(self, post: "PostRecord") -> str:
        """Generate front matter for an exported post record."""
        return self.generate(
            {
                "title": post.title,
                "date": post.date,
                "categories": post.categories,
                "tags": post.tags,
            }
        )

    def _normalize_metadata(self, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """Order and clean metadata fields for Jekyll.

        Parameters
        ----------
        metadata : dict
            Raw post metadata

        Returns
        -------
        dict
            Normalized metadata, empty taxonomies omitted

        """
        normalized: Dict[str, Any] = {"layout": metadata.get("layout") or self.layout}

        if "title" in metadata:
            normalized["title"] = metadata["title"] or ""

        date_value = metadata.get("date")
        if date_value:
            normalized["date"] = self._format_date(date_value)

        categories = self._extract_taxonomy(metadata, "categories")
        if categories:
            normalized["categories"] = categories

        tags = self._extract_taxonomy(metadata, "tags")
        if tags:
            normalized["tags"] = tags

        if "permalink" in metadata:
            normalized["permalink"] = metadata["permalink"]

        return normalized

    @staticmethod
    def _extract_taxonomy(metadata: Dict[str, Any], key: str) -> Optional[List[str]]:
        value = metadata.get(key)
        if not value:
            return None
        if isinstance(value, str):
            terms = [term.strip() for term in value.split(",")]
            return [t for t in terms if t]
        return [str(term) for term in value]

    @staticmethod
    def _format_date(date_value: Any) -> Any:
        """Keep datetimes as YAML timestamps; pass other values through as text."""
        if isinstance(date_value, (datetime, date)):
            return date_value
        return str(date_value)


__all__ = ["FrontmatterGenerator"]
