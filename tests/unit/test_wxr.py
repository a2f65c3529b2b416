#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the WordPress export reader."""

import io
from datetime import datetime, timedelta, timezone

import pytest
from utils import make_item, make_wxr

from wp2md.exceptions import ExportFormatError, MissingPostDateError, UnknownCategoryDomainError
from wp2md.wxr import build_post, get_post_date, item_label, iter_posts, load_items, qualifies


def load(*items):
    return load_items(io.BytesIO(make_wxr(*items).encode("utf-8")))


@pytest.mark.unit
class TestLoadItems:
    """Tests for load_items."""

    def test_items_in_document_order(self):
        items = load(make_item(post_name="a"), make_item(post_name="b"))
        assert [item_label(item) for item in items] == ["a", "b"]

    def test_from_path(self, temp_dir):
        path = temp_dir / "export.xml"
        path.write_text(make_wxr(make_item()), encoding="utf-8")
        assert len(load_items(path)) == 1

    def test_malformed_xml(self):
        with pytest.raises(ExportFormatError, match="Malformed"):
            load_items(io.BytesIO(b"<rss><channel><item></channel>"))

    def test_entity_expansion_rejected(self):
        xml = b'<?xml version="1.0"?><!DOCTYPE rss [<!ENTITY a "aaaa">]><rss>&a;</rss>'
        with pytest.raises(ExportFormatError, match="Unsafe XML"):
            load_items(io.BytesIO(xml))

    def test_missing_file(self, temp_dir):
        with pytest.raises(ExportFormatError) as exc_info:
            load_items(temp_dir / "missing.xml")
        assert exc_info.value.file_path == str(temp_dir / "missing.xml")


@pytest.mark.unit
class TestQualifies:
    """Tests for record filtering."""

    def test_published_post(self):
        (item,) = load(make_item())
        assert qualifies(item)

    @pytest.mark.parametrize("status,post_type", [("draft", "post"), ("publish", "page"), ("publish", "attachment")])
    def test_excluded_by_default(self, status, post_type):
        (item,) = load(make_item(status=status, post_type=post_type))
        assert not qualifies(item)

    def test_custom_filters(self):
        (item,) = load(make_item(status="private", post_type="page"))
        assert qualifies(item, statuses=["publish", "private"], post_types=["page"])


@pytest.mark.unit
class TestPostDate:
    """Tests for get_post_date."""

    def test_positive_offset(self):
        (item,) = load(make_item(post_date="2017-11-25 21:30:00", post_date_gmt="2017-11-25 12:30:00"))
        post_date = get_post_date(item)
        assert post_date == datetime(2017, 11, 25, 21, 30, tzinfo=timezone(timedelta(hours=9)))
        assert post_date.utcoffset() == timedelta(hours=9)

    def test_negative_offset_changes_day(self):
        (item,) = load(make_item(post_date="2017-11-24 19:00:00", post_date_gmt="2017-11-25 00:00:00"))
        post_date = get_post_date(item)
        assert post_date.utcoffset() == timedelta(hours=-5)
        assert post_date.strftime("%Y-%m-%d %H:%M") == "2017-11-24 19:00"

    @pytest.mark.parametrize("field_name", ["post_date", "post_date_gmt"])
    def test_missing_field(self, field_name):
        (item,) = load(make_item(post_name="p", **{field_name: None}))
        with pytest.raises(MissingPostDateError, match="No date info") as exc_info:
            get_post_date(item, post_label="p")
        assert exc_info.value.post_label == "p"

    def test_unparseable(self):
        (item,) = load(make_item(post_date="yesterday"))
        with pytest.raises(MissingPostDateError, match="Unparseable"):
            get_post_date(item)


@pytest.mark.unit
class TestBuildPost:
    """Tests for build_post and iter_posts."""

    def test_fields(self):
        (item,) = load(
            make_item(
                title="Hello & Welcome",
                post_name="hello",
                post_id="42",
                content="<p>Hi</p>",
                categories=["Diary"],
                tags=["python", "blog"],
            )
        )
        post = build_post(item)
        assert post.title == "Hello & Welcome"
        assert post.post_name == "hello"
        assert post.post_id == "42"
        assert post.content_html == "<p>Hi</p>"
        assert post.categories == ["Diary"]
        assert post.tags == ["python", "blog"]
        assert post.date_prefix == "2017-11-25-"

    def test_missing_content(self):
        (item,) = load(make_item(content=None))
        assert build_post(item).content_html is None

    def test_unknown_category_domain(self):
        (item,) = load(make_item(post_name="odd", extra_categories=[("series", "Odd")]))
        with pytest.raises(UnknownCategoryDomainError) as exc_info:
            build_post(item)
        assert exc_info.value.domain == "series"
        assert exc_info.value.post_label == "odd"

    def test_iter_posts_filters(self, sample_wxr):
        posts = iter_posts(sample_wxr, post_types=("post", "page"))
        assert [next(posts).post_name for _ in range(3)] == ["hello-world", "about", "empty"]
        with pytest.raises(UnknownCategoryDomainError):
            next(posts)

    def test_item_label_fallbacks(self):
        (item,) = load(make_item(post_name="", post_id="9"))
        assert item_label(item) == "9"
