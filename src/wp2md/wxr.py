#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/wxr.py
"""WordPress eXtended RSS (WXR) export reader.

A WordPress export is an RSS document whose ``<item>`` elements hold one
post, page or attachment each, with WordPress-specific fields in the ``wp``
namespace and the post body in ``content:encoded``.

Records are read in two steps so that a broken record never aborts a batch:
``load_items`` parses the file and returns the raw item elements, and
``build_post`` turns one item into a ``PostRecord``, raising a
``RecordError`` subclass when its metadata is unusable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, Union

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from wp2md.constants import (
    CATEGORY_DOMAIN_CATEGORY,
    CATEGORY_DOMAIN_TAG,
    DEFAULT_POST_STATUSES,
    DEFAULT_POST_TYPES,
    WXR_CATEGORY,
    WXR_CONTENT,
    WXR_DATE_FORMAT,
    WXR_ITEM,
    WXR_POST_DATE,
    WXR_POST_DATE_GMT,
    WXR_POST_ID,
    WXR_POST_NAME,
    WXR_POST_TYPE,
    WXR_STATUS,
    WXR_TITLE,
)
from wp2md.exceptions import ExportFormatError, MissingPostDateError, UnknownCategoryDomainError

logger = logging.getLogger(__name__)


@dataclass
class PostRecord:
    """One qualifying post of a WordPress export.

    Parameters
    ----------
    title : str
        Post title
    post_name : str
        URL slug chosen in WordPress (may be empty)
    date : datetime
        Publication date, aware, in the author's local offset
    content_html : str or None
        Raw HTML body, None when the item has no ``content:encoded``
    categories : list of str
        Category names
    tags : list of str
        Tag names
    status : str
        ``wp:status`` value
    post_type : str
        ``wp:post_type`` value
    post_id : str
        ``wp:post_id`` value

    """

    title: str
    post_name: str
    date: datetime
    content_html: str | None
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    status: str = "publish"
    post_type: str = "post"
    post_id: str = ""

    @property
    def date_prefix(self) -> str:
        """Date prefix used for cached asset names and output files, ``YYYY-MM-DD-``."""
        return self.date.strftime("%Y-%m-%d-")


def load_items(source: Union[str, Path, IO[bytes]]) -> list[Any]:
    """Parse an export file and return its ``<item>`` elements.

    Parameters
    ----------
    source : str, Path or binary file-like object
        Export file

    Returns
    -------
    list
        Item elements in document order

    Raises
    ------
    ExportFormatError
        If the file cannot be read, is not well-formed XML, or uses
        forbidden XML constructs (entity expansion, external references).

    """
    file_path = str(source) if isinstance(source, (str, Path)) else None
    try:
        tree = ET.parse(source)
    except ET.ParseError as e:
        raise ExportFormatError(f"Malformed export file: {e}", file_path=file_path, original_error=e) from e
    except DefusedXmlException as e:
        raise ExportFormatError(f"Unsafe XML in export file: {e}", file_path=file_path, original_error=e) from e
    except OSError as e:
        raise ExportFormatError(f"Could not read export file: {e}", file_path=file_path, original_error=e) from e

    items = list(tree.getroot().iter(WXR_ITEM))
    logger.debug("Loaded %d items from %s", len(items), file_path or "stream")
    return items


def _child_text(item: Any, tag: str) -> str | None:
    """Return the text of the first child ``tag``, or None if there is none."""
    element = item.find(tag)
    if element is None:
        return None
    return element.text or ""


def item_label(item: Any) -> str:
    """Best available identifier of an item before its metadata is validated."""
    return _child_text(item, WXR_POST_NAME) or _child_text(item, WXR_POST_ID) or _child_text(item, WXR_TITLE) or "?"


def qualifies(
    item: Any,
    statuses: Iterable[str] = DEFAULT_POST_STATUSES,
    post_types: Iterable[str] = DEFAULT_POST_TYPES,
) -> bool:
    """Return True if the item has one of the wanted statuses and post types."""
    status = _child_text(item, WXR_STATUS)
    post_type = _child_text(item, WXR_POST_TYPE)
    if status is None or post_type is None:
        return False
    return status in set(statuses) and post_type in set(post_types)


def collect_categories(category_elements: Iterable[Any], post_label: str | None = None) -> tuple[list[str], list[str]]:
    """Split category elements into categories and tags.

    Parameters
    ----------
    category_elements : iterable
        ``<category>`` elements of one item
    post_label : str, optional
        Identifier of the item, for error reporting

    Returns
    -------
    tuple of (list of str, list of str)
        Category names and tag names, in document order

    Raises
    ------
    UnknownCategoryDomainError
        If an element's ``domain`` is neither ``category`` nor ``post_tag``

    """
    categories: list[str] = []
    tags: list[str] = []
    for element in category_elements:
        domain = element.get("domain")
        value = element.text or ""
        if domain == CATEGORY_DOMAIN_TAG:
            tags.append(value)
        elif domain == CATEGORY_DOMAIN_CATEGORY:
            categories.append(value)
        else:
            raise UnknownCategoryDomainError(domain, post_label=post_label)
    return categories, tags


def get_post_date(item: Any, post_label: str | None = None) -> datetime:
    """Combine the local and GMT post dates into an aware datetime.

    The UTC offset is the difference between ``wp:post_date`` (local time)
    and ``wp:post_date_gmt``.

    Parameters
    ----------
    item : Element
        Export item
    post_label : str, optional
        Identifier of the item, for error reporting

    Returns
    -------
    datetime
        Post date in the author's local offset

    Raises
    ------
    MissingPostDateError
        If either field is absent or cannot be parsed

    """
    local_text = _child_text(item, WXR_POST_DATE)
    gmt_text = _child_text(item, WXR_POST_DATE_GMT)
    if not local_text or not gmt_text:
        raise MissingPostDateError(post_label=post_label)

    try:
        local = datetime.strptime(local_text.strip(), WXR_DATE_FORMAT)
        gmt = datetime.strptime(gmt_text.strip(), WXR_DATE_FORMAT)
        offset = timezone(timedelta(seconds=(local - gmt).total_seconds()))
    except ValueError as e:
        raise MissingPostDateError(
            f"Unparseable post date {local_text!r} / {gmt_text!r}", post_label=post_label, original_error=e
        ) from e

    return gmt.replace(tzinfo=timezone.utc).astimezone(offset)


def build_post(item: Any) -> PostRecord:
    """Build a ``PostRecord`` from an export item.

    Raises
    ------
    UnknownCategoryDomainError
        If a category has an unrecognized domain
    MissingPostDateError
        If the post date is missing or unparseable

    """
    label = item_label(item)
    post_date = get_post_date(item, post_label=label)
    categories, tags = collect_categories(item.findall(WXR_CATEGORY), post_label=label)
    return PostRecord(
        title=_child_text(item, WXR_TITLE) or "",
        post_name=_child_text(item, WXR_POST_NAME) or "",
        date=post_date,
        content_html=_child_text(item, WXR_CONTENT),
        categories=categories,
        tags=tags,
        status=_child_text(item, WXR_STATUS) or "",
        post_type=_child_text(item, WXR_POST_TYPE) or "",
        post_id=_child_text(item, WXR_POST_ID) or "",
    )


def iter_posts(
    source: Union[str, Path, IO[bytes]],
    statuses: Iterable[str] = DEFAULT_POST_STATUSES,
    post_types: Iterable[str] = DEFAULT_POST_TYPES,
) -> Iterator[PostRecord]:
    """Yield the qualifying posts of an export file.

    Metadata errors propagate from the offending record; use ``load_items``
    and ``build_post`` directly to keep going past them.
    """
    statuses = tuple(statuses)
    post_types = tuple(post_types)
    for item in load_items(source):
        if qualifies(item, statuses, post_types):
            yield build_post(item)


__all__ = [
    "PostRecord",
    "load_items",
    "item_label",
    "qualifies",
    "collect_categories",
    "get_post_date",
    "build_post",
    "iter_posts",
]
