#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/exporter.py
"""Batch export of WordPress posts to Jekyll Markdown files.

For every qualifying record of an export file the exporter converts the
post body, prefixes it with front matter and writes ``<stem>.md`` (and the
raw ``<stem>.html``) into the output directory, where the stem is the post
date followed by the post name, e.g. ``2017-11-25-hello-world``.

Records are processed independently: a metadata or conversion error is
logged against the offending post and the batch moves on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, Optional, Union

from wp2md.context import ConversionIssue
from wp2md.exceptions import ExportFormatError, OutputWriteError, Wp2MdError
from wp2md.html2markdown import HTMLToMarkdown
from wp2md.options import ExportOptions
from wp2md.utils.assets import AssetFetcher
from wp2md.utils.static_site import FrontmatterGenerator
from wp2md.utils.text import slugify
from wp2md.wxr import PostRecord, build_post, item_label, load_items, qualifies

logger = logging.getLogger(__name__)


@dataclass
class ExportFailure:
    """A record that could not be exported."""

    post_label: str
    error: Wp2MdError

    @property
    def message(self) -> str:
        return self.error.message


@dataclass
class ExportSummary:
    """Outcome of exporting one or more export files.

    Attributes
    ----------
    written : list of str
        Output stems written, in processing order
    skipped : list of str
        Qualifying records without a post body
    failed : list of ExportFailure
        Records aborted by an error
    issues : list of ConversionIssue
        Non-fatal conversion diagnostics of the written posts

    """

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[ExportFailure] = field(default_factory=list)
    issues: list[ConversionIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if no record failed."""
        return not self.failed

    def merge(self, other: "ExportSummary") -> None:
        """Append the outcome of another export to this one."""
        self.written.extend(other.written)
        self.skipped.extend(other.skipped)
        self.failed.extend(other.failed)
        self.issues.extend(other.issues)


class WordPressExporter:
    """Export the posts of WordPress export files as Markdown.

    Parameters
    ----------
    options : ExportOptions or None, default None
        Export options. If None, uses default settings.
    fetcher : AssetFetcher or None, default None
        Asset downloader shared by all posts. When None and downloads are
        enabled, one is created per export file.

    """

    def __init__(self, options: ExportOptions | None = None, fetcher: Optional[AssetFetcher] = None):
        self.options = options or ExportOptions()
        self._fetcher = fetcher
        self._frontmatter = FrontmatterGenerator(layout=self.options.layout)

    def export_file(self, source: Union[str, Path, IO[bytes]]) -> ExportSummary:
        """Export every qualifying post of one export file.

        Parameters
        ----------
        source : str, Path or binary file-like object
            Export file

        Returns
        -------
        ExportSummary
            What was written, skipped and failed

        Raises
        ------
        ExportFormatError
            If the export file itself cannot be read

        """
        items = load_items(source)
        conversion = self.options.conversion
        if self._fetcher is None and conversion.asset_directory is not None and not conversion.skip_download:
            with AssetFetcher(
                conversion.asset_directory,
                timeout=conversion.fetch_timeout,
                user_agent=conversion.user_agent,
                overwrite=conversion.overwrite_assets,
            ) as fetcher:
                return self._export_items(items, fetcher)
        return self._export_items(items, self._fetcher)

    def export_files(self, sources: Iterable[Union[str, Path]]) -> ExportSummary:
        """Export several files into one summary; unreadable files are recorded as failures."""
        summary = ExportSummary()
        for source in sources:
            try:
                summary.merge(self.export_file(source))
            except ExportFormatError as e:
                logger.error("Skipping %s: %s", source, e.message)
                summary.failed.append(ExportFailure(post_label=str(source), error=e))
        return summary

    def _export_items(self, items: list, fetcher: Optional[AssetFetcher]) -> ExportSummary:
        summary = ExportSummary()
        for item in items:
            if not qualifies(item, self.options.statuses, self.options.post_types):
                continue
            label = item_label(item)
            try:
                post = build_post(item)
                label = self.output_stem(post)
                self._export_post(post, label, fetcher, summary)
            except Wp2MdError as e:
                logger.error("Failed to export %s: %s", label, e.message)
                summary.failed.append(ExportFailure(post_label=label, error=e))
        return summary

    def _export_post(
        self, post: PostRecord, stem: str, fetcher: Optional[AssetFetcher], summary: ExportSummary
    ) -> None:
        logger.info("Processing .. %s", stem)
        if post.content_html is None:
            logger.info("No post body in %s, skipped", stem)
            summary.skipped.append(stem)
            return

        options = self.options.conversion.create_updated(cache_prefix=post.date_prefix)
        result = HTMLToMarkdown(options, fetcher=fetcher).convert_with_report(post.content_html, post_label=stem)
        self.write_post(stem, post.content_html, self._frontmatter.generate_for_post(post) + result.markdown)
        summary.written.append(stem)
        summary.issues.extend(result.issues)

    @staticmethod
    def output_stem(post: PostRecord) -> str:
        """Return the output filename stem: date prefix plus post name (or title slug)."""
        name = post.post_name or slugify(post.title, default=post.post_id or "post")
        return post.date_prefix + name

    def write_post(self, stem: str, html: str, markdown: str) -> Path:
        """Write the Markdown (and raw HTML) of one post.

        Returns
        -------
        Path
            Path of the Markdown file

        Raises
        ------
        OutputWriteError
            If the output directory or files cannot be written

        """
        output_dir = Path(self.options.output_dir)
        md_path = output_dir / f"{stem}.md"
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            if self.options.write_html:
                (output_dir / f"{stem}.html").write_text(html, encoding="utf-8", newline="")
            md_path.write_text(markdown, encoding="utf-8", newline="")
        except OSError as e:
            raise OutputWriteError(f"Could not write {md_path}: {e}", output_path=str(md_path), original_error=e) from e
        return md_path


def export_wordpress(
    sources: Union[str, Path, Iterable[Union[str, Path]]], options: ExportOptions | None = None
) -> ExportSummary:
    """Export the posts of one or more WordPress export files.

    Parameters
    ----------
    sources : str, Path or iterable of them
        Export file(s)
    options : ExportOptions or None, default None
        Export options. If None, uses default settings.

    Returns
    -------
    ExportSummary
        What was written, skipped and failed

    """
    if isinstance(sources, (str, Path)):
        sources = [sources]
    return WordPressExporter(options).export_files(sources)


__all__ = [
    "ExportFailure",
    "ExportSummary",
    "WordPressExporter",
    "export_wordpress",
]
