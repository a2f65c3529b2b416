#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/context.py
"""Traversal state for a single HTML to Markdown conversion.

A ``ConversionContext`` is created at the start of every conversion and
threaded through the recursive walk as an explicit argument. Handlers that
change a flag for the duration of their children use ``ConversionContext.scoped``
(or ``list_scope`` for list nesting), which restores the previous values when
the children have been rendered, whichever way the block is left.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator, Optional

if TYPE_CHECKING:
    from wp2md.utils.assets import AssetFetcher


class IssueKind(str, Enum):
    """Named kinds of non-fatal problems found during a conversion."""

    UNHANDLED_TAG = "unhandled_tag"
    IMAGE_IN_BLOCKQUOTE = "image_in_blockquote"
    ASSET_FETCH_FAILED = "asset_fetch_failed"


@dataclass(frozen=True)
class ConversionIssue:
    """A diagnostic recorded while converting one fragment.

    Parameters
    ----------
    kind : IssueKind
        What went wrong
    detail : str
        Offending tag name or source URI
    post_label : str or None
        Post being converted, when known

    """

    kind: IssueKind
    detail: str
    post_label: str | None = None


@dataclass(frozen=True)
class ConversionResult:
    """Markdown produced by a conversion together with its diagnostics."""

    markdown: str
    issues: list[ConversionIssue] = field(default_factory=list)

    def issues_of(self, kind: IssueKind) -> list[ConversionIssue]:
        """Return the issues of one kind, in document order."""
        return [issue for issue in self.issues if issue.kind is kind]


_SCOPED_FLAGS = ("inside_blockquote", "hyperlink_target", "saw_image", "suppress_text", "sanitize_text")


@dataclass
class ConversionContext:
    """Mutable state of one conversion call.

    Attributes
    ----------
    list_modes : list of bool
        Stack of enclosing list kinds, True for ordered lists
    inside_blockquote : bool
        True while a blockquote's descendants are rendered
    hyperlink_target : str
        href of the anchor being rendered, empty outside anchors
    saw_image : bool
        Set when an image is rendered inside the current anchor
    suppress_text : bool
        True between list and list item boundaries
    sanitize_text : bool
        False while an anchor's label is rendered
    post_label : str or None
        Post being converted, used in diagnostics
    issues : list of ConversionIssue
        Diagnostics collected so far
    fetcher : AssetFetcher or None
        Downloader for cached assets, None when nothing is downloaded

    """

    list_modes: list[bool] = field(default_factory=list)
    inside_blockquote: bool = False
    hyperlink_target: str = ""
    saw_image: bool = False
    suppress_text: bool = False
    sanitize_text: bool = True
    post_label: str | None = None
    issues: list[ConversionIssue] = field(default_factory=list)
    fetcher: Optional["AssetFetcher"] = None

    @property
    def in_ordered_list(self) -> bool:
        """True if the innermost enclosing list is ordered.

        Raises
        ------
        IndexError
            If no list encloses the current node.

        """
        return self.list_modes[-1]

    @contextmanager
    def scoped(self, **overrides: Any) -> Iterator["ConversionContext"]:
        """Temporarily override traversal flags.

        Parameters
        ----------
        **overrides : Any
            New values for any of ``inside_blockquote``, ``hyperlink_target``,
            ``saw_image``, ``suppress_text`` or ``sanitize_text``

        Yields
        ------
        ConversionContext
            This context, with the overrides applied

        """
        unknown = set(overrides) - set(_SCOPED_FLAGS)
        if unknown:
            raise AttributeError(f"Not a scoped conversion flag: {', '.join(sorted(unknown))}")

        saved = {name: getattr(self, name) for name in overrides}
        for name, value in overrides.items():
            setattr(self, name, value)
        try:
            yield self
        finally:
            for name, value in saved.items():
                setattr(self, name, value)

    @contextmanager
    def list_scope(self, ordered: bool) -> Iterator["ConversionContext"]:
        """Enter a list: push its kind and suppress stray text until an item starts."""
        self.list_modes.append(ordered)
        try:
            with self.scoped(suppress_text=True):
                yield self
        finally:
            self.list_modes.pop()

    def record(self, kind: IssueKind, detail: str) -> ConversionIssue:
        """Record a diagnostic for the current post."""
        issue = ConversionIssue(kind=kind, detail=detail, post_label=self.post_label)
        self.issues.append(issue)
        return issue


__all__ = [
    "IssueKind",
    "ConversionIssue",
    "ConversionResult",
    "ConversionContext",
]
