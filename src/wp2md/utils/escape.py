#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/utils/escape.py
"""Text escaping for Markdown output.

Text nodes of a post body are copied into Markdown as-is, so characters that
Markdown (or the Liquid templates of the static site) would interpret need to
be neutralized first.

"""

from __future__ import annotations

import re

from wp2md.constants import SANITIZE_REPLACEMENTS

_WHITESPACE_RUN = re.compile(r"\s+")

# Underscore-delimited token starting at a word boundary: ``_abc_`` or ``__def__``
# but not ``1_abc_2``.
_UNDERSCORE_TOKEN = re.compile(r"\b_\S*_")


def sanitize_text(text: str) -> str:
    r"""Collapse whitespace and escape characters that collide with Markdown.

    Whitespace runs become a single space, square and angle brackets become
    HTML character references, and underscore-delimited tokens get a leading
    backslash so they are not read as italics.

    Parameters
    ----------
    text : str
        Raw character data of a text node

    Returns
    -------
    str
        Text safe to embed in Markdown

    Examples
    --------
        >>> sanitize_text("<> [def]")
        '&lt;&gt; &#x5b;def&#x5d;'
        >>> sanitize_text("_abc_ 1_abc_2")
        '\\_abc_ 1_abc_2'

    """
    if not text:
        return text

    sanitized = _WHITESPACE_RUN.sub(" ", text)

    for char, replacement in SANITIZE_REPLACEMENTS:
        sanitized = sanitized.replace(char, replacement)

    return _UNDERSCORE_TOKEN.sub(lambda match: "\\" + match.group(0), sanitized)


__all__ = ["sanitize_text"]
