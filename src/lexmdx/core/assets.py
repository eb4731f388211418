"""Remote image download with per-run filename deduplication"""

import logging
import posixpath
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

import httpx


logger = logging.getLogger(__name__)


class AssetCache:
    """Decoded basenames already downloaded in the current run."""

    def __init__(self) -> None:
        self._names: set[str] = set()

    def __contains__(self, filename: str) -> bool:
        return filename in self._names

    def __len__(self) -> int:
        return len(self._names)

    def add(self, filename: str) -> None:
        self._names.add(filename)


def asset_filename(url: str) -> str:
    """Return the URL-decoded final path segment (e.g. '%E5%9B%BE.png' -> '图.png')."""
    return unquote(posixpath.basename(urlsplit(url).path))


def resolve_fetch_url(url: str, api_base_url: str) -> str:
    """Absolute URLs pass through; relative ones are rebased on the API origin without their '/api' prefix."""
    if url.startswith("http"):
        return url
    path = url[4:] if url.startswith("/api") else url
    return f"{api_base_url.rstrip('/')}{path}"


class AssetFetcher:
    """Downloads images into assets_dir, fetching each distinct filename at most once.

    Failures are logged and reported as None so callers can omit the image;
    they never populate the cache, so a later reference retries the download.
    """

    def __init__(
        self,
        client: httpx.Client,
        assets_dir: Path,
        api_base_url: str,
        cache: Optional[AssetCache] = None,
        chunk_size: int = 8192,
        ):
        self.client = client
        self.assets_dir = assets_dir
        self.api_base_url = api_base_url
        self.cache = cache if cache is not None else AssetCache()
        self.chunk_size = chunk_size

    def resolve(self, url: Optional[str]) -> Optional[str]:
        """Return the local filename for url, downloading it if needed, or None on failure."""
        if not url:
            return None

        filename = asset_filename(url)
        if filename in ("", ".", "..") or "/" in filename or "\\" in filename:
            logger.error("  Cannot derive a safe filename from %s", url)
            return None
        if filename in self.cache:
            return filename

        fetch_url = resolve_fetch_url(url, self.api_base_url)
        out_path = self.assets_dir / filename
        logger.info("  Downloading: %s", filename)
        try:
            with self.client.stream("GET", fetch_url) as response:
                if not response.is_success:
                    logger.error("  Failed to download %s: %s", fetch_url, response.status_code)
                    return None
                with out_path.open("wb") as fh:
                    for chunk in response.iter_bytes(self.chunk_size):
                        fh.write(chunk)
        except (httpx.HTTPError, OSError) as e:
            logger.error("  Error downloading %s: %s", fetch_url, e)
            return None

        self.cache.add(filename)
        return filename


def make_client(timeout: Optional[float] = None) -> httpx.Client:
    """Build the shared HTTP client for a run. timeout=None disables timeouts."""
    return httpx.Client(timeout=timeout, follow_redirects=True)
