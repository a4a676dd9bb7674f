"""Content-addressed download cache for stock clips.

Layout: ``{cache_dir}/vid-{md5(url without query string)}.mp4``.
A file at that path with a non-zero size is the only validity signal; there
is no manifest. Downloads are streamed into a temporary file in the same
directory and renamed into place once complete, so a file at the final path
is always a whole download. Concurrent writers of the same URL each use
their own temporary file; the last atomic rename wins with identical content.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path

import requests

from stockreel.types import CacheStats
from stockreel.utils.http import HttpClient

logger = logging.getLogger(__name__)

CACHE_PREFIX = "vid-"
CACHE_SUFFIX = ".mp4"


def cache_key(source_url: str) -> str:
    """Stable key for a URL: md5 of the URL with its query string removed.

    Signed CDN links differ only in their query string, so they share a key.
    """
    url_no_query = source_url.split("?", 1)[0]
    return hashlib.md5(url_no_query.encode("utf-8")).hexdigest()


def cache_path(source_url: str, cache_dir: str | Path) -> Path:
    """Local path a URL is cached at. Pure, no I/O."""
    return Path(cache_dir) / f"{CACHE_PREFIX}{cache_key(source_url)}{CACHE_SUFFIX}"


def _is_valid(path: Path) -> bool:
    return path.is_file() and path.stat().st_size > 0


def _current_umask() -> int:
    # mkstemp creates files 0600; cached clips get the usual umask-derived mode
    mask = os.umask(0)
    os.umask(mask)
    return mask


def cache_stats(cache_dir: str | Path) -> CacheStats:
    """Count and total size of valid entries in a cache directory."""
    cache_dir = Path(cache_dir)
    if not cache_dir.is_dir():
        return CacheStats(files=0, total_bytes=0)
    sizes = [
        p.stat().st_size
        for p in cache_dir.glob(f"{CACHE_PREFIX}*{CACHE_SUFFIX}")
        if p.is_file()
    ]
    sizes = [s for s in sizes if s > 0]
    return CacheStats(files=len(sizes), total_bytes=sum(sizes))


class ContentCache:
    """Fetch remote clips into a local content-addressed cache.

    ``fetch`` returns the cached path, or None when nothing usable was
    obtained (network failure, empty body). Filesystem errors propagate.
    """

    def __init__(
        self,
        cache_dir: str | Path,
        http: HttpClient,
        chunk_size: int = 1024 * 1024,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.http = http
        self.chunk_size = chunk_size

    def path_for(self, source_url: str) -> Path:
        return cache_path(source_url, self.cache_dir)

    def contains(self, source_url: str) -> bool:
        """True if a valid cached file exists for the URL."""
        return _is_valid(self.path_for(source_url))

    def fetch(self, source_url: str) -> Path | None:
        """Return the local file for ``source_url``, downloading it on a cache miss."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        local_path = self.path_for(source_url)

        if _is_valid(local_path):
            logger.debug("Cache hit: %s", local_path.name)
            return local_path

        response = self.http.open_stream(source_url)
        if response is None:
            return None

        with response:
            written = self._write_atomic(response, local_path, source_url)

        if written and _is_valid(local_path):
            logger.info("Downloaded %s (%.1f MB)", local_path.name, written / (1024 * 1024))
            return local_path
        return None

    def stats(self) -> CacheStats:
        return cache_stats(self.cache_dir)

    # ------------------------------------------------------------------

    def _write_atomic(
        self, response: requests.Response, local_path: Path, source_url: str,
    ) -> int:
        """Stream ``response`` to a temp file, then rename onto ``local_path``.

        Returns the number of bytes written (0 when nothing was kept).
        """
        fd, tmp_name = tempfile.mkstemp(
            dir=self.cache_dir, prefix=f".{local_path.stem}.", suffix=".part",
        )
        tmp_path = Path(tmp_name)
        written = 0
        try:
            with os.fdopen(fd, "wb") as f:
                for chunk in response.iter_content(chunk_size=self.chunk_size):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
        except requests.RequestException as e:
            tmp_path.unlink(missing_ok=True)
            logger.error("Download interrupted for %s: %s", source_url, e)
            return 0
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

        if written == 0:
            tmp_path.unlink(missing_ok=True)
            logger.warning("Empty download for %s", source_url)
            return 0

        try:
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, local_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        return written
