#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/dom.py
"""Thin DOM layer over BeautifulSoup.

The converter only needs a small node surface: the kind of a node, the
upper-cased tag name, attribute lookup, the inline style color, the inner
and outer markup serializations and the plain literal text of a subtree.
This module provides exactly that on top of a BeautifulSoup tree, so the
converter never touches parser-specific APIs directly.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from wp2md.constants import (
    DOCUMENT_SKELETON_HEAD,
    DOCUMENT_SKELETON_TAIL,
    LINE_TERMINATOR,
    LITERAL_TEXT_BLOCK_TAGS,
    HtmlParser,
)
from wp2md.exceptions import ConversionError

_COLLAPSIBLE_WHITESPACE = re.compile(r"[ \t\r\n\f]+")


class NodeKind(str, Enum):
    """Kinds of DOM nodes the converter distinguishes."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


def parse_fragment(html: str, parser: HtmlParser = "html.parser") -> Tag:
    """Parse an HTML fragment inside a minimal document skeleton.

    Parameters
    ----------
    html : str
        Post body fragment
    parser : {"html.parser", "html5lib", "lxml"}
        BeautifulSoup tree builder

    Returns
    -------
    Tag
        The ``<html>`` root element

    Raises
    ------
    ConversionError
        If the parser produced no ``<html>`` element

    """
    soup = BeautifulSoup(DOCUMENT_SKELETON_HEAD + html + DOCUMENT_SKELETON_TAIL, parser)
    root = soup.find("html")
    if not isinstance(root, Tag):
        raise ConversionError("Parsed document has no <html> root element")
    return root


def node_kind(node: Any) -> NodeKind:
    """Classify a BeautifulSoup node.

    Comments, doctypes, CDATA sections and processing instructions are all
    reported as ``COMMENT``: none of them produce output.
    """
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, PreformattedString):
        return NodeKind.COMMENT
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    return NodeKind.COMMENT


def tag_name(element: Tag) -> str:
    """Return the upper-cased tag name of an element."""
    return element.name.upper()


def is_specified(element: Tag, name: str) -> bool:
    """Return True if the attribute was explicitly set in the markup."""
    return name.lower() in element.attrs


def get_attribute(element: Tag, name: str) -> str:
    """Look up an attribute by case-insensitive name.

    Parameters
    ----------
    element : Tag
        Element to inspect
    name : str
        Attribute name

    Returns
    -------
    str
        Attribute value, or an empty string when it is not specified

    """
    if not is_specified(element, name):
        return ""
    value = element.attrs[name.lower()]
    # Multi-valued attributes such as class come back as lists
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return "" if value is None else str(value)


def style_color(element: Tag) -> str | None:
    """Return the ``color`` declared in the element's inline style, if any.

    Parameters
    ----------
    element : Tag
        Element to inspect

    Returns
    -------
    str or None
        Declared color value, or None when no non-empty color is declared

    """
    style = get_attribute(element, "style")
    color = None
    for declaration in style.split(";"):
        prop, sep, value = declaration.partition(":")
        if not sep:
            continue
        if prop.strip().lower() == "color":
            color = value.strip() or None
    return color


def has_children(element: Tag) -> bool:
    """Return True if the element has at least one child node."""
    return bool(element.contents)


def inner_markup(element: Tag) -> str:
    """Serialize the children of an element."""
    return element.decode_contents()


def outer_markup(element: Tag) -> str:
    """Serialize an element including its own tags."""
    return element.decode()


def literal_text(element: Tag) -> str:
    """Return the plain text content of an element as it would read on screen.

    Whitespace in text nodes collapses the way a browser renders it (except
    inside ``<pre>``), ``<br>`` produces a line terminator, block-level
    descendants start on a new line and non-breaking spaces become plain
    spaces. Leading and trailing blank lines are removed.

    Parameters
    ----------
    element : Tag
        Element whose text is extracted

    Returns
    -------
    str
        Literal text with ``\\r\\n`` line terminators

    """
    parts: list[str] = []
    _collect_literal_text(element, parts, preformatted=False)
    lines = "".join(parts).split(LINE_TERMINATOR)
    lines = [line.rstrip(" ") for line in lines]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return LINE_TERMINATOR.join(lines)


def _at_line_start(parts: list[str]) -> bool:
    return not parts or parts[-1].endswith(LINE_TERMINATOR)


def _start_line(parts: list[str]) -> None:
    if not _at_line_start(parts):
        parts.append(LINE_TERMINATOR)


def _collect_literal_text(node: Tag, parts: list[str], preformatted: bool) -> None:
    for child in node.children:
        kind = node_kind(child)
        if kind is NodeKind.TEXT:
            text = str(child)
            if preformatted:
                text = text.replace("\r\n", "\n").replace("\n", LINE_TERMINATOR)
            else:
                text = _COLLAPSIBLE_WHITESPACE.sub(" ", text)
                if _at_line_start(parts) or parts[-1].endswith(" "):
                    text = text.lstrip(" ")
            if text:
                parts.append(text.replace("\u00a0", " "))
        elif kind is NodeKind.ELEMENT:
            name = child.name.lower()
            if name == "br":
                parts.append(LINE_TERMINATOR)
            elif name in LITERAL_TEXT_BLOCK_TAGS:
                _start_line(parts)
                _collect_literal_text(child, parts, preformatted or name == "pre")
                _start_line(parts)
            else:
                _collect_literal_text(child, parts, preformatted)


__all__ = [
    "NodeKind",
    "parse_fragment",
    "node_kind",
    "tag_name",
    "is_specified",
    "get_attribute",
    "style_color",
    "has_children",
    "inner_markup",
    "outer_markup",
    "literal_text",
]
