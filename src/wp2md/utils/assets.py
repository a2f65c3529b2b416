#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/utils/assets.py
"""Asset name resolution and download for cached post images.

Images referenced from a post body are cached under a name derived from the
last path segment of their URI plus a caller-supplied prefix (usually the
post date), so two posts embedding ``photo.jpg`` do not collide.

Functions
---------
- cache_filename: Derive the on-disk cache filename for a URI
- resolve_asset_name: Derive the percent-encoded name used in Markdown

Classes
-------
- AssetFetcher: Download assets into the asset directory with httpx
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import Optional, Type
from urllib.parse import quote, urlsplit

import httpx

from wp2md.constants import DEFAULT_ASSET_FILENAME, DEFAULT_FETCH_TIMEOUT, DEFAULT_USER_AGENT, ENV_PREFIX
from wp2md.exceptions import AssetFetchError

logger = logging.getLogger(__name__)


def cache_filename(uri: str, prefix: str) -> str:
    """Derive the cache filename for an asset URI.

    The query string and fragment are dropped and only the last path segment
    is kept.

    Parameters
    ----------
    uri : str
        Source URI of the asset
    prefix : str
        Prefix prepended to the filename

    Returns
    -------
    str
        Unencoded filename, e.g. ``cache_image.bmp``

    Examples
    --------
        >>> cache_filename("http://host/image.bmp?abc", "cache_")
        'cache_image.bmp'

    """
    path = urlsplit(uri).path
    name = path.rstrip("/").rsplit("/", 1)[-1]
    return prefix + (name or DEFAULT_ASSET_FILENAME)


def resolve_asset_name(uri: str, prefix: str) -> str:
    """Derive the percent-encoded asset name embedded in Markdown.

    Parameters
    ----------
    uri : str
        Source URI of the asset
    prefix : str
        Prefix prepended to the filename

    Returns
    -------
    str
        Filename with every character outside the unreserved set percent-encoded

    """
    return quote(cache_filename(uri, prefix), safe="")


class AssetFetcher:
    """Download assets into a local directory.

    The fetcher owns an ``httpx.Client`` and should be closed after use, or
    used as a context manager.

    Parameters
    ----------
    asset_directory : str or Path
        Directory receiving downloaded files
    timeout : float, default 30.0
        Request timeout in seconds
    user_agent : str, optional
        User-Agent header; falls back to ``WP2MD_USER_AGENT`` then a default
    overwrite : bool, default False
        Download again even if the target file already exists. Otherwise the
        first download wins: a different URI that maps to an already cached
        name reuses that file and a warning is logged.
    client : httpx.Client, optional
        Pre-built client (mainly for tests); not closed by the fetcher

    """

    def __init__(
        self,
        asset_directory: str | Path,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        user_agent: Optional[str] = None,
        overwrite: bool = False,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the fetcher."""
        self.asset_directory = Path(asset_directory)
        self.overwrite = overwrite
        self._sources: dict[Path, str] = {}
        self._owns_client = client is None
        if client is None:
            effective_user_agent = user_agent or os.getenv(f"{ENV_PREFIX}USER_AGENT") or DEFAULT_USER_AGENT
            client = httpx.Client(
                timeout=timeout,
                follow_redirects=True,
                headers={"User-Agent": effective_user_agent},
            )
        self._client = client

    def fetch(self, uri: str, filename: str) -> Path:
        """Download ``uri`` into the asset directory as ``filename``.

        Parameters
        ----------
        uri : str
            Source URI
        filename : str
            Unencoded target filename

        Returns
        -------
        Path
            Path of the cached file

        Raises
        ------
        AssetFetchError
            If the request fails, the server answers with an error status,
            or the file cannot be written.

        """
        target = self.asset_directory / filename
        previous = self._sources.setdefault(target, uri)
        if previous != uri:
            logger.warning("Cache name collision: %s and %s both map to %s", previous, uri, target)
        if target.exists() and not self.overwrite:
            logger.debug("Already cached: %s -> %s", uri, target)
            return target

        try:
            response = self._client.get(uri)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AssetFetchError(f"Failed to download {uri}: {e}", uri=uri, original_error=e) from e

        try:
            self.asset_directory.mkdir(parents=True, exist_ok=True)
            target.write_bytes(response.content)
        except OSError as e:
            raise AssetFetchError(f"Failed to write {target}: {e}", uri=uri, original_error=e) from e

        logger.info("Download: %s\t%s", uri, filename)
        return target

    def close(self) -> None:
        """Close the underlying HTTP client if the fetcher created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "AssetFetcher":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


__all__ = [
    "cache_filename",
    "resolve_asset_name",
    "AssetFetcher",
]
