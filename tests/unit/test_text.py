#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for slug generation."""

import pytest

from wp2md.utils.text import slugify


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,expected",
    [
        ("Hello World!", "hello-world"),
        ("Café résumé", "cafe-resume"),
        ("  multiple   spaces__and_underscores ", "multiple-spaces-and-underscores"),
        ("日本語", "post"),
        ("", "post"),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


@pytest.mark.unit
def test_slugify_max_length_and_default():
    assert slugify("a b c d e f", max_length=5) == "a-b-c"
    assert slugify("!!!", default="42") == "42"
