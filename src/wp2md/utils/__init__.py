#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/utils/__init__.py
"""Utility modules for wp2md package.

This package contains text escaping, asset caching, front matter generation
and slug helpers used by the converter and the exporter.
"""

from wp2md.utils.assets import AssetFetcher, cache_filename, resolve_asset_name
from wp2md.utils.escape import sanitize_text
from wp2md.utils.static_site import FrontmatterGenerator
from wp2md.utils.text import slugify

__all__ = [
    "AssetFetcher",
    "cache_filename",
    "resolve_asset_name",
    "sanitize_text",
    "FrontmatterGenerator",
    "slugify",
]
