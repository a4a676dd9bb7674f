"""Clip acquisition: local library or search -> dedup -> cache, within a duration budget.

Workflow:
    1. If a local library is configured and non-empty, use it as-is
    2. Otherwise search each term in order, dropping URLs seen for earlier terms
    3. Fetch candidates through the content cache, in term-then-catalog order
    4. Stop once accepted clips cover the target duration

Acquisition is the middle phase of a larger render pipeline, so progress is
reported on the 40-85 sub-range of the caller's 0-100 scale.
"""

from __future__ import annotations

import logging
from pathlib import Path

from stockreel.acquire.base import SearchProvider
from stockreel.acquire.cache import ContentCache
from stockreel.acquire.dedup import Deduplicator
from stockreel.acquire.errors import ConfigurationError
from stockreel.acquire.library import LocalLibraryScanner
from stockreel.config import AcquisitionConfig, PexelsConfig, StockReelConfig
from stockreel.types import (
    AcquisitionResult,
    MaterialCandidate,
    MaterialSource,
    ProgressCallback,
)
from stockreel.utils.http import HttpClient

logger = logging.getLogger(__name__)

PROGRESS_START = 40
PROGRESS_SPAN = 45


def progress_value(index: int, total: int) -> int:
    """Progress after obtaining candidate ``index`` (0-based) of ``total``."""
    return PROGRESS_START + (index + 1) * PROGRESS_SPAN // total


# ---------------------------------------------------------------------------
# AcquisitionOrchestrator
# ---------------------------------------------------------------------------


class AcquisitionOrchestrator:
    """Drive one or more acquisition runs.

    ``provider`` and ``http`` may be injected; otherwise they are created
    from ``pexels_config`` the first time a run needs the network, so a run
    served entirely from the local library needs no API key.
    """

    def __init__(
        self,
        provider: SearchProvider | None = None,
        http: HttpClient | None = None,
        scanner: LocalLibraryScanner | None = None,
        *,
        pexels_config: PexelsConfig | None = None,
    ) -> None:
        self.provider = provider
        self.http = http
        self.scanner = scanner or LocalLibraryScanner()
        self.pexels_config = pexels_config or PexelsConfig()
        self._owns_http = False

    def acquire(
        self,
        search_terms: list[str],
        target_total_duration: float,
        cache_dir: str | Path,
        config: AcquisitionConfig,
        on_progress: ProgressCallback | None = None,
    ) -> list[Path]:
        """Return local clip paths, in the order they were accepted."""
        return self.run(
            search_terms,
            config,
            target_total_duration=target_total_duration,
            cache_dir=cache_dir,
            on_progress=on_progress,
        ).paths

    def run(
        self,
        search_terms: list[str],
        config: AcquisitionConfig,
        *,
        target_total_duration: float | None = None,
        cache_dir: str | Path | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> AcquisitionResult:
        """Acquire clips and return the full result with reporting fields.

        ``target_total_duration`` and ``cache_dir`` default to the values in
        ``config``.
        """
        if target_total_duration is None:
            target_total_duration = config.target_total_duration
        cache_dir = Path(cache_dir) if cache_dir is not None else config.cache_dir

        if config.use_local_library and config.local_library_path:
            local_paths = self.scanner.scan(config.local_library_path)
            if local_paths:
                logger.info("Using %d clips from local library", len(local_paths))
                return AcquisitionResult(
                    paths=local_paths,
                    source=MaterialSource.local,
                    candidates=len(local_paths),
                )
            logger.info("Local library yielded no clips, falling back to search")

        provider, http = self._connect(config)

        candidates = self._collect_candidates(provider, search_terms, config)
        cache = ContentCache(cache_dir, http, chunk_size=self.pexels_config.chunk_size)
        result = self._download(candidates, cache, target_total_duration, config, on_progress)

        if result.is_empty:
            logger.warning("No clips obtained for terms %s", search_terms)
        logger.info(
            "Total videos: %d (%.1fs of %.1fs requested)",
            len(result.paths), result.total_duration, target_total_duration,
        )
        return result

    def close(self) -> None:
        """Close the HTTP client if this orchestrator created it."""
        if self._owns_http and self.http is not None:
            self.http.close()
            self.http = None
            self._owns_http = False

    # ------------------------------------------------------------------

    def _connect(self, config: AcquisitionConfig) -> tuple[SearchProvider, HttpClient]:
        if self.http is None:
            self.http = _create_http_client(config.provider, self.pexels_config)
            self._owns_http = True
        if self.provider is None:
            self.provider = _create_provider(config.provider, self.pexels_config, self.http)
        return self.provider, self.http

    def _collect_candidates(
        self,
        provider: SearchProvider,
        search_terms: list[str],
        config: AcquisitionConfig,
    ) -> list[MaterialCandidate]:
        """Search every term in order and merge results without duplicate URLs."""
        dedup = Deduplicator()
        candidates: list[MaterialCandidate] = []
        min_duration = config.effective_min_duration
        for term in search_terms:
            found = provider.search(term, min_duration, config)
            fresh = dedup.accept(found)
            if len(fresh) < len(found):
                logger.debug("Term %r: dropped %d duplicate URLs", term, len(found) - len(fresh))
            candidates.extend(fresh)

        logger.info(
            "Found %d unique candidates for %d search terms", len(candidates), len(search_terms),
        )
        return candidates

    def _download(
        self,
        candidates: list[MaterialCandidate],
        cache: ContentCache,
        target_total_duration: float,
        config: AcquisitionConfig,
        on_progress: ProgressCallback | None,
    ) -> AcquisitionResult:
        result = AcquisitionResult(source=MaterialSource.remote, candidates=len(candidates))

        for i, candidate in enumerate(candidates):
            try:
                local_path = cache.fetch(candidate.source_url)
            except Exception as e:
                logger.error("Failed to download video: %s => %s", candidate.to_dict(), e)
                result.failures += 1
                continue

            if local_path is None:
                result.failures += 1
                continue

            result.paths.append(local_path)
            if on_progress is not None:
                on_progress(progress_value(i, len(candidates)))
            result.total_duration += min(config.max_clip_duration, candidate.duration_seconds)
            if result.total_duration >= target_total_duration:
                break

        return result


# ---------------------------------------------------------------------------
# Pipeline entry point
# ---------------------------------------------------------------------------


def acquire_materials(
    search_terms: list[str],
    config: StockReelConfig,
    *,
    target_total_duration: float | None = None,
    cache_dir: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
    provider: SearchProvider | None = None,
    http: HttpClient | None = None,
) -> AcquisitionResult:
    """Full acquisition pipeline: library or search -> dedup -> cache -> budget.

    Args:
        search_terms: Keywords, searched in order.
        config: StockReel configuration.
        target_total_duration: Seconds of material wanted (default from config).
        cache_dir: Download cache directory (default from config).
        on_progress: Called with 40-85 after each successfully obtained clip.
        provider: Optional search provider (default built from config).
        http: Optional HTTP client used for downloads (default built from config).

    Returns:
        AcquisitionResult; ``paths`` is the ordered list for the renderer.
    """
    orchestrator = AcquisitionOrchestrator(
        provider=provider, http=http, pexels_config=config.pexels,
    )
    try:
        return orchestrator.run(
            search_terms,
            config.acquisition,
            target_total_duration=target_total_duration,
            cache_dir=cache_dir,
            on_progress=on_progress,
        )
    finally:
        orchestrator.close()


def _create_http_client(provider_name: str, pexels_config: PexelsConfig) -> HttpClient:
    """Instantiate the authenticated HTTP client for a provider."""
    if provider_name == "pexels":
        from stockreel.acquire.providers.pexels import create_http_client

        return create_http_client(pexels_config)
    raise ConfigurationError(f"Unknown search provider: {provider_name!r}")


def _create_provider(
    provider_name: str, pexels_config: PexelsConfig, http: HttpClient,
) -> SearchProvider:
    """Instantiate the appropriate search provider."""
    if provider_name == "pexels":
        from stockreel.acquire.providers.pexels import PexelsSearchProvider

        return PexelsSearchProvider.from_config(pexels_config, http)
    raise ConfigurationError(f"Unknown search provider: {provider_name!r}")
