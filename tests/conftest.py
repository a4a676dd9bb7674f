"""Shared test fixtures for StockReel."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from stockreel.config import AcquisitionConfig, StockReelConfig
from stockreel.types import MaterialCandidate, VideoAspect


# ---------------------------------------------------------------------------
# Fake HTTP layer
# ---------------------------------------------------------------------------


class FakeResponse:
    """Streamed response stand-in: yields preset chunks, optionally raising."""

    def __init__(self, chunks: list[bytes], error: Exception | None = None) -> None:
        self.chunks = chunks
        self.error = error
        self.closed = False

    def iter_content(self, chunk_size: int = 1024):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class FakeHttp:
    """Records calls; serves JSON by search term and bodies by URL.

    ``search_results`` maps a search term to the decoded JSON body (or None
    for a failed request). ``bodies`` maps a download URL to its chunks; a
    missing URL behaves like a failed download.
    """

    def __init__(
        self,
        search_results: dict[str, Any] | None = None,
        bodies: dict[str, list[bytes]] | None = None,
    ) -> None:
        self.search_results = search_results or {}
        self.bodies = bodies or {}
        self.json_calls: list[tuple[str, dict[str, Any] | None]] = []
        self.stream_calls: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.json_calls) + len(self.stream_calls)

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any | None:
        self.json_calls.append((url, params))
        term = (params or {}).get("query")
        return self.search_results.get(term)

    def open_stream(self, url: str) -> FakeResponse | None:
        self.stream_calls.append(url)
        if url not in self.bodies:
            return None
        return FakeResponse(list(self.bodies[url]))

    def close(self) -> None:
        pass


class StaticProvider:
    """Search provider returning preset candidates per term."""

    name = "static"

    def __init__(self, results: dict[str, list[MaterialCandidate]]) -> None:
        self.results = results
        self.calls: list[tuple[str, float]] = []

    def search(self, term: str, min_duration: float, config: AcquisitionConfig) -> list[MaterialCandidate]:
        self.calls.append((term, min_duration))
        return list(self.results.get(term, []))


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def video_file(width: int, height: int, link: str) -> dict[str, Any]:
    return {"width": width, "height": height, "link": link, "file_type": "video/mp4"}


def pexels_video(video_id: int, duration: float, files: list[dict[str, Any]]) -> dict[str, Any]:
    return {"id": video_id, "duration": duration, "video_files": files}


def candidate(url: str, duration: float = 10.0) -> MaterialCandidate:
    return MaterialCandidate(provider="static", source_url=url, duration_seconds=duration)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def acquisition_config(tmp_path) -> AcquisitionConfig:
    """Portrait config with a per-test cache directory."""
    return AcquisitionConfig(
        aspect=VideoAspect.portrait,
        max_clip_duration=5.0,
        target_total_duration=16.0,
        cache_dir=tmp_path / "cache",
    )


@pytest.fixture
def stockreel_config(acquisition_config) -> StockReelConfig:
    config = StockReelConfig(acquisition=acquisition_config)
    config.pexels.api_key = "test-key"
    config.pexels.requests_per_hour = 0
    config.pexels.retry_delay_seconds = 0.0
    return config


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def portrait_search_payload() -> dict[str, Any]:
    """Four videos: two usable portrait clips, one too short, one landscape-only."""
    return {
        "page": 1,
        "per_page": 20,
        "videos": [
            pexels_video(1, 12, [
                video_file(540, 960, "https://videos.example.com/1/sd.mp4"),
                video_file(1080, 1920, "https://videos.example.com/1/hd.mp4?token=a"),
                video_file(1088, 1920, "https://videos.example.com/1/hd2.mp4"),
            ]),
            pexels_video(2, 3, [
                video_file(1080, 1920, "https://videos.example.com/2/hd.mp4"),
            ]),
            pexels_video(3, 20, [
                video_file(1920, 1080, "https://videos.example.com/3/landscape.mp4"),
            ]),
            pexels_video(4, 8, [
                video_file(1090, 1910, "https://videos.example.com/4/hd.mp4"),
            ]),
        ],
    }
