#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/options.py
"""Configuration options for conversion and export.

This module defines the frozen dataclasses that configure the HTML to
Markdown converter and the batch exporter. Options are immutable; derive a
modified copy with ``create_updated``.

Examples
--------
Cache images into a local directory without downloading them:

    >>> from wp2md.options import ConversionOptions
    >>> options = ConversionOptions(asset_directory="assets", skip_download=True)
    >>> options.create_updated(cache_prefix="2017-11-25-").cache_prefix
    '2017-11-25-'

"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from wp2md.constants import (
    DEFAULT_BOILERPLATE_PREFIXES,
    DEFAULT_CACHE_PREFIX,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_HTML_PARSER,
    DEFAULT_LAYOUT,
    DEFAULT_POST_STATUSES,
    DEFAULT_POST_TYPES,
    HtmlParser,
)
from wp2md.exceptions import ValidationError

_HTML_PARSERS = ("html.parser", "html5lib", "lxml")


class ImageInBlockquotePolicy(str, Enum):
    """What to do with an image found inside a blockquote."""

    FAIL = "fail"
    WARN = "warn"


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


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Options for converting a single HTML fragment to Markdown.

    Parameters
    ----------
    asset_directory : str or None, default None
        Directory that holds cached images. When unset, images are emitted
        with their original source URL and nothing is cached.
    cache_prefix : str, default "cache_"
        String prefixed to every derived asset filename, typically the post date.
    skip_download : bool, default False
        Compute cached names without performing any network I/O.
    image_in_blockquote : ImageInBlockquotePolicy, default FAIL
        Fail the conversion, or log a warning and omit the image.
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used to parse fragments.
    boilerplate_prefixes : tuple of str
        Rendered ``<div>`` content starting with any of these is dropped.
    overwrite_assets : bool, default False
        Download assets again even when the cached file already exists.
    fetch_timeout : float, default 30.0
        Timeout in seconds for a single asset download.
    user_agent : str or None, default None
        User-Agent header for asset downloads.

    """

    asset_directory: str | None = field(
        default=None,
        metadata={"help": "Directory for cached images; unset emits original image URLs", "importance": "core"},
    )
    cache_prefix: str = field(
        default=DEFAULT_CACHE_PREFIX,
        metadata={"help": "Prefix added to cached asset filenames", "importance": "core"},
    )
    skip_download: bool = field(
        default=False,
        metadata={"help": "Compute cached asset names without downloading", "importance": "core"},
    )
    image_in_blockquote: ImageInBlockquotePolicy = field(
        default=ImageInBlockquotePolicy.FAIL,
        metadata={
            "help": "Policy for images inside blockquotes: 'fail' aborts the post, 'warn' logs and omits the image",
            "choices": ["fail", "warn"],
            "importance": "core",
        },
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": (
                "BeautifulSoup parser to use: 'html.parser' (built-in), "
                "'html5lib' (matches browser behavior), 'lxml' (fast, requires C library)"
            ),
            "choices": list(_HTML_PARSERS),
            "importance": "advanced",
        },
    )
    boilerplate_prefixes: tuple[str, ...] = field(
        default=DEFAULT_BOILERPLATE_PREFIXES,
        metadata={"help": "Drop <div> blocks whose rendered text starts with one of these", "importance": "advanced"},
    )
    overwrite_assets: bool = field(
        default=False,
        metadata={"help": "Re-download assets that are already cached", "importance": "advanced"},
    )
    fetch_timeout: float = field(
        default=DEFAULT_FETCH_TIMEOUT,
        metadata={"help": "Timeout in seconds for each asset download", "type": float, "importance": "advanced"},
    )
    user_agent: str | None = field(
        default=None,
        metadata={"help": "User-Agent header for asset downloads", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate and normalize option values.

        Raises
        ------
        ValidationError
            If any field value is invalid.

        """
        if not isinstance(self.image_in_blockquote, ImageInBlockquotePolicy):
            try:
                policy = ImageInBlockquotePolicy(self.image_in_blockquote)
            except ValueError as e:
                raise ValidationError(
                    f"image_in_blockquote must be one of 'fail' or 'warn', got {self.image_in_blockquote!r}",
                    parameter_name="image_in_blockquote",
                    parameter_value=self.image_in_blockquote,
                    original_error=e,
                ) from e
            object.__setattr__(self, "image_in_blockquote", policy)

        if self.html_parser not in _HTML_PARSERS:
            raise ValidationError(
                f"html_parser must be one of {', '.join(_HTML_PARSERS)}, got {self.html_parser!r}",
                parameter_name="html_parser",
                parameter_value=self.html_parser,
            )

        if self.fetch_timeout <= 0:
            raise ValidationError(
                f"fetch_timeout must be positive, got {self.fetch_timeout}",
                parameter_name="fetch_timeout",
                parameter_value=self.fetch_timeout,
            )

        if isinstance(self.boilerplate_prefixes, str):
            object.__setattr__(self, "boilerplate_prefixes", (self.boilerplate_prefixes,))
        else:
            object.__setattr__(self, "boilerplate_prefixes", tuple(self.boilerplate_prefixes))


@dataclass(frozen=True)
class ExportOptions(CloneFrozenMixin):
    """Options for exporting the posts of a WordPress export file.

    Parameters
    ----------
    output_dir : str, default "."
        Directory receiving the ``.md`` (and ``.html``) files.
    statuses : tuple of str, default ("publish",)
        Only records with one of these ``wp:status`` values are exported.
    post_types : tuple of str, default ("post",)
        Only records with one of these ``wp:post_type`` values are exported.
    write_html : bool, default True
        Also write the raw HTML body next to the Markdown file.
    layout : str, default "post"
        Jekyll layout written into the front matter.
    conversion : ConversionOptions
        Options passed to the HTML to Markdown converter.

    """

    output_dir: str = field(
        default=".",
        metadata={"help": "Directory receiving the converted posts", "importance": "core"},
    )
    statuses: tuple[str, ...] = field(
        default=DEFAULT_POST_STATUSES,
        metadata={"help": "Export records with these wp:status values", "importance": "advanced"},
    )
    post_types: tuple[str, ...] = field(
        default=DEFAULT_POST_TYPES,
        metadata={"help": "Export records with these wp:post_type values", "importance": "advanced"},
    )
    write_html: bool = field(
        default=True,
        metadata={"help": "Write the raw HTML body next to each Markdown file", "importance": "core"},
    )
    layout: str = field(
        default=DEFAULT_LAYOUT,
        metadata={"help": "Jekyll layout name for the front matter", "importance": "advanced"},
    )
    conversion: ConversionOptions = field(
        default_factory=ConversionOptions,
        metadata={"help": "HTML to Markdown conversion options", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate export option values.

        Raises
        ------
        ValidationError
            If any field value is invalid.

        """
        if not self.statuses:
            raise ValidationError(
                "statuses must not be empty", parameter_name="statuses", parameter_value=self.statuses
            )
        if not self.post_types:
            raise ValidationError(
                "post_types must not be empty", parameter_name="post_types", parameter_value=self.post_types
            )
        object.__setattr__(self, "statuses", tuple(self.statuses))
        object.__setattr__(self, "post_types", tuple(self.post_types))


__all__ = [
    "ImageInBlockquotePolicy",
    "CloneFrozenMixin",
    "ConversionOptions",
    "ExportOptions",
]
