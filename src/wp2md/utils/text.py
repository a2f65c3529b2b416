#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/utils/text.py
"""Text helpers for naming exported posts.

Functions
---------
slugify : Convert a post title to a filename-safe slug
"""

from __future__ import annotations

import re
import unicodedata


def slugify(text: str, *, max_length: int = 100, separator: str = "-", default: str = "post") -> str:
    """Create a filename-safe slug from a post title.

    Parameters
    ----------
    text : str
        Text to slugify
    max_length : int, default = 100
        Maximum length of the slug
    separator : str, default = "-"
        The separator between words in the slug
    default : str, default = "post"
        Returned when nothing usable is left after cleanup

    Returns
    -------
    str
        Lower-case ASCII slug

    Examples
    --------
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Café résumé")
        'cafe-resume'

    """
    # Decompose accented characters and drop the combining marks
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    slug = normalized.lower()
    slug = re.sub(r"[\s_]+", separator, slug)
    slug = re.sub(rf"[^a-z0-9\-{re.escape(separator)}]", "", slug)
    slug = re.sub(rf"{re.escape(separator)}+", separator, slug)
    slug = slug.strip(separator)

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip(separator)

    return slug or default


__all__ = ["slugify"]
