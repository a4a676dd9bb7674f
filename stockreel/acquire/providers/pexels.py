"""Pexels video search provider."""

from __future__ import annotations

import json
import logging
from typing import Any

from stockreel.acquire.errors import ConfigurationError
from stockreel.acquire.resolution import matches, orientation_for, target_resolution
from stockreel.config import AcquisitionConfig, PexelsConfig
from stockreel.types import MaterialCandidate, ResolutionTarget
from stockreel.utils.http import HttpClient
from stockreel.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

_SEARCH_PATH = "/videos/search"


class PexelsSearchProvider:
    """Video search via the Pexels API.

    Each catalog item lists several encodes of the same clip
    (``video_files``); the first encode whose resolution matches the target
    aspect is selected.

    Satisfies the ``SearchProvider`` protocol.
    """

    name = "pexels"

    def __init__(
        self,
        http: HttpClient,
        base_url: str = "https://api.pexels.com",
        per_page: int = 20,
    ) -> None:
        self.http = http
        self.search_url = base_url.rstrip("/") + _SEARCH_PATH
        self.per_page = per_page

    @classmethod
    def from_config(cls, config: PexelsConfig, http: HttpClient | None = None) -> PexelsSearchProvider:
        """Build a provider (and its HTTP client) from configuration."""
        if http is None:
            http = create_http_client(config)
        return cls(http, base_url=config.base_url, per_page=config.per_page)

    # ------------------------------------------------------------------

    def search(
        self, term: str, min_duration: float, config: AcquisitionConfig,
    ) -> list[MaterialCandidate]:
        target = target_resolution(config.aspect)
        params = {
            "query": term,
            "per_page": self.per_page,
            "orientation": orientation_for(config.aspect),
        }
        data = self.http.get_json(self.search_url, params=params)
        if data is None:
            logger.warning("No search data for %r", term)
            return []

        videos = data.get("videos") if isinstance(data, dict) else None
        if not isinstance(videos, list):
            logger.error("Search videos failed for %r: %s", term, _preview(data))
            return []

        candidates: list[MaterialCandidate] = []
        for video in videos:
            if not isinstance(video, dict):
                continue
            duration = _as_float(video.get("duration"))
            if duration is None or duration < min_duration:
                continue

            link = _first_matching_link(video.get("video_files") or [], target)
            if link is None:
                continue
            candidates.append(MaterialCandidate(
                provider=self.name,
                source_url=link,
                duration_seconds=duration,
            ))

        logger.info(
            "Search %r: %d of %d videos match %dx%d",
            term, len(candidates), len(videos), target.width, target.height,
        )
        return candidates


def create_http_client(config: PexelsConfig) -> HttpClient:
    """HTTP client carrying the Pexels API key. Raises if no key is configured."""
    api_key = config.resolve_api_key()
    if not api_key:
        raise ConfigurationError(
            f"No Pexels API key. Set the {config.api_key_env_var} env var "
            f"or 'pexels.api_key' in the config file."
        )
    return HttpClient(
        "pexels",
        api_key,
        rate_limiter=RateLimiter(config.requests_per_hour),
        timeout=config.timeout_seconds,
        download_timeout=config.download_timeout_seconds,
        max_retries=config.max_retries,
        retry_delay_seconds=config.retry_delay_seconds,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _first_matching_link(files: Any, target: ResolutionTarget) -> str | None:
    """Link of the first encode whose resolution matches ``target`` (first match wins)."""
    if not isinstance(files, list):
        return None
    for f in files:
        if not isinstance(f, dict):
            continue
        try:
            w = int(float(f.get("width")))
            h = int(float(f.get("height")))
        except (TypeError, ValueError, OverflowError):
            continue
        link = f.get("link")
        if w <= 0 or h <= 0 or not isinstance(link, str) or not link:
            continue
        if matches(w, h, target):
            return link
    return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _preview(data: Any, limit: int = 300) -> str:
    try:
        text = json.dumps(data)
    except (TypeError, ValueError):
        text = repr(data)
    return text if len(text) <= limit else text[:limit] + "..."
