#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for front matter generation."""

from datetime import date, datetime, timedelta, timezone

import pytest
import yaml

from wp2md.utils.static_site import FrontmatterGenerator
from wp2md.wxr import PostRecord


def parse_block(block):
    lines = block.split("\r\n")
    assert lines[0] == "---"
    end = lines.index("---", 1)
    return yaml.safe_load("\n".join(lines[1:end]))


@pytest.mark.unit
class TestFrontmatterGenerator:
    """Tests for FrontmatterGenerator."""

    def test_post_front_matter(self):
        post = PostRecord(
            title="Hello World",
            post_name="hello-world",
            date=datetime(2017, 11, 25, 21, 30, tzinfo=timezone(timedelta(hours=9))),
            content_html="<p>x</p>",
            categories=["Diary"],
            tags=["python", "blog"],
        )
        block = FrontmatterGenerator().generate_for_post(post)
        assert block == (
            "---\r\n"
            "layout: post\r\n"
            "title: Hello World\r\n"
            "date: 2017-11-25 21:30:00+09:00\r\n"
            "categories:\r\n"
            "- Diary\r\n"
            "tags:\r\n"
            "- python\r\n"
            "- blog\r\n"
            "---\r\n"
        )

    def test_empty_taxonomies_omitted(self):
        block = FrontmatterGenerator().generate({"title": "T", "categories": [], "tags": None})
        assert parse_block(block) == {"layout": "post", "title": "T"}

    def test_title_needing_quotes(self):
        title = "Q&A: [draft] #1"
        assert parse_block(FrontmatterGenerator().generate({"title": title}))["title"] == title

    def test_unicode_title_not_escaped(self):
        block = FrontmatterGenerator().generate({"title": "日本語"})
        assert "title: 日本語" in block

    def test_custom_layout_and_terminator(self):
        generator = FrontmatterGenerator(layout="article", line_terminator="\n")
        assert generator.generate({"title": "T"}) == "---\nlayout: article\ntitle: T\n---\n"

    def test_metadata_layout_wins(self):
        assert "layout: page" in FrontmatterGenerator().generate({"layout": "page"})

    def test_comma_separated_tags(self):
        block = FrontmatterGenerator().generate({"tags": "a, b,,c"})
        assert parse_block(block)["tags"] == ["a", "b", "c"]

    def test_date_only(self):
        block = FrontmatterGenerator().generate({"date": date(2017, 11, 25)})
        assert "date: 2017-11-25\r\n" in block

    def test_permalink(self):
        block = FrontmatterGenerator().generate({"title": "T", "permalink": "/2017/11/t/"})
        assert block.endswith("permalink: /2017/11/t/\r\n---\r\n")
