"""Core data types for StockReel.

Every stage of the acquisition pipeline produces/consumes these types:
- Search providers emit MaterialCandidate objects
- The content cache turns candidates into local files
- The orchestrator collects local files into an AcquisitionResult
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class VideoAspect(str, enum.Enum):
    """Target aspect ratio of the final video.

    The member name doubles as the orientation label sent to providers:
        landscape: 16:9 -> 1920x1080
        portrait:  9:16 -> 1080x1920
        square:    1:1  -> 1080x1080
    """

    landscape = "16:9"
    portrait = "9:16"
    square = "1:1"

    @classmethod
    def from_label(cls, label: str) -> VideoAspect:
        """Accept either the member name ('portrait') or the ratio ('9:16')."""
        key = label.strip().lower()
        if key in cls.__members__:
            return cls[key]
        return cls(key)


class MaterialSource(str, enum.Enum):
    """Where the clips of an acquisition run came from."""

    local = "local"
    remote = "remote"


# Progress callback: receives an integer on a caller-defined 0-100 scale
ProgressCallback = Callable[[int], None]


# ---------------------------------------------------------------------------
# Core data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolutionTarget:
    """Target pixel resolution derived from a VideoAspect."""

    width: int
    height: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class MaterialCandidate:
    """A prospective clip that matched search and resolution criteria.

    Not yet downloaded. Identity is ``source_url``: it is the deduplication
    key and the input of the cache key.
    """

    provider: str
    source_url: str
    duration_seconds: float

    def to_dict(self) -> dict[str, object]:
        return {
            "provider": self.provider,
            "source_url": self.source_url,
            "duration_seconds": self.duration_seconds,
        }


@dataclass
class AcquisitionResult:
    """Outcome of one acquisition run.

    ``paths`` is ordered as clips were accepted and is what the rendering
    pipeline consumes. The remaining fields are for reporting.
    """

    paths: list[Path] = field(default_factory=list)
    total_duration: float = 0.0
    source: MaterialSource = MaterialSource.remote
    candidates: int = 0
    failures: int = 0

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def is_empty(self) -> bool:
        return len(self.paths) == 0

    def to_dict(self) -> dict[str, object]:
        return {
            "paths": [str(p) for p in self.paths],
            "total_duration": self.total_duration,
            "source": self.source.value,
            "candidates": self.candidates,
            "failures": self.failures,
        }


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the on-disk cache directory."""

    files: int
    total_bytes: int

    @property
    def total_mb(self) -> float:
        return self.total_bytes / (1024 * 1024)
