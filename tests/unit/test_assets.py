#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for asset naming and downloading."""

import httpx
import pytest
from utils import MINIMAL_PNG_BYTES

from wp2md.exceptions import AssetFetchError
from wp2md.utils.assets import AssetFetcher, cache_filename, resolve_asset_name


@pytest.mark.unit
class TestCacheFilename:
    """Tests for cache_filename and resolve_asset_name."""

    def test_query_dropped(self):
        assert cache_filename("http://host/image.bmp?abc", "cache_") == "cache_image.bmp"

    def test_fragment_dropped(self):
        assert cache_filename("http://host/a/b/photo.jpg#top", "2017-11-25-") == "2017-11-25-photo.jpg"

    def test_relative_uri(self):
        assert cache_filename("lena.jpg", "cache_") == "cache_lena.jpg"

    def test_trailing_slash(self):
        assert cache_filename("http://host/dir/", "cache_") == "cache_dir"

    def test_empty_path_falls_back(self):
        assert cache_filename("http://host", "cache_") == "cache_image"

    def test_resolve_percent_encodes(self):
        assert resolve_asset_name("http://host/my photo.jpg", "cache_") == "cache_my%20photo.jpg"

    def test_resolve_encodes_reserved_characters(self):
        assert resolve_asset_name("http://host/a+b.png", "x&y_") == "x%26y_a%2Bb.png"


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.mark.unit
@pytest.mark.network
class TestAssetFetcher:
    """Tests for AssetFetcher with a mock transport."""

    def test_fetch_writes_file(self, temp_dir):
        target_dir = temp_dir / "assets"
        client = _client(lambda request: httpx.Response(200, content=MINIMAL_PNG_BYTES))
        fetcher = AssetFetcher(target_dir, client=client)

        path = fetcher.fetch("http://host/a.png", "cache_a.png")

        assert path == target_dir / "cache_a.png"
        assert path.read_bytes() == MINIMAL_PNG_BYTES

    def test_existing_file_not_downloaded_again(self, temp_dir):
        (temp_dir / "cache_a.png").write_bytes(b"old")

        def handler(request):
            raise AssertionError("no request expected")

        fetcher = AssetFetcher(temp_dir, client=_client(handler))
        assert fetcher.fetch("http://host/a.png", "cache_a.png").read_bytes() == b"old"

    def test_name_collision_keeps_first_download(self, temp_dir, caplog):
        requested = []

        def handler(request):
            requested.append(request.url.host)
            return httpx.Response(200, content=request.url.host.encode())

        fetcher = AssetFetcher(temp_dir, client=_client(handler))
        fetcher.fetch("http://one/a.png", "cache_a.png")
        fetcher.fetch("http://one/a.png", "cache_a.png")
        assert "collision" not in caplog.text

        path = fetcher.fetch("http://two/a.png", "cache_a.png")

        assert requested == ["one"]
        assert path.read_bytes() == b"one"
        assert "Cache name collision: http://one/a.png and http://two/a.png" in caplog.text

    def test_overwrite_downloads_again(self, temp_dir):
        (temp_dir / "cache_a.png").write_bytes(b"old")
        fetcher = AssetFetcher(
            temp_dir, overwrite=True, client=_client(lambda request: httpx.Response(200, content=b"new"))
        )
        assert fetcher.fetch("http://host/a.png", "cache_a.png").read_bytes() == b"new"

    def test_http_error_status(self, temp_dir):
        fetcher = AssetFetcher(temp_dir, client=_client(lambda request: httpx.Response(500)))
        with pytest.raises(AssetFetchError) as exc_info:
            fetcher.fetch("http://host/a.png", "cache_a.png")
        assert exc_info.value.uri == "http://host/a.png"
        assert isinstance(exc_info.value.original_error, httpx.HTTPStatusError)

    def test_transport_error(self, temp_dir):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        fetcher = AssetFetcher(temp_dir, client=_client(handler))
        with pytest.raises(AssetFetchError, match="Failed to download"):
            fetcher.fetch("http://host/a.png", "cache_a.png")

    def test_injected_client_not_closed(self, temp_dir):
        client = _client(lambda request: httpx.Response(200))
        with AssetFetcher(temp_dir, client=client):
            pass
        assert not client.is_closed

    def test_owned_client_closed(self, temp_dir):
        fetcher = AssetFetcher(temp_dir, user_agent="test-agent/1.0")
        assert fetcher._client.headers["User-Agent"] == "test-agent/1.0"
        fetcher.close()
        assert fetcher._client.is_closed

    def test_user_agent_from_environment(self, temp_dir, monkeypatch):
        monkeypatch.setenv("WP2MD_USER_AGENT", "env-agent/2.0")
        with AssetFetcher(temp_dir) as fetcher:
            assert fetcher._client.headers["User-Agent"] == "env-agent/2.0"
