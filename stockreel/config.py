"""Configuration models for StockReel.

Pydantic v2 models with sensible defaults; works without a config file.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from stockreel.types import VideoAspect

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "stockreel" / "videos"


class AcquisitionConfig(BaseModel):
    """Configuration for a single clip acquisition run."""

    aspect: VideoAspect = Field(VideoAspect.portrait, description="Target aspect ratio")
    provider: str = Field("pexels", description="Search provider: 'pexels'")

    # Clip durations (seconds)
    max_clip_duration: float = Field(
        5.0, description="Seconds each clip contributes to the duration budget"
    )
    min_clip_duration: float | None = Field(
        None,
        description=(
            "Minimum catalog duration for a clip to be considered. "
            "When None, max_clip_duration is used so every clip can fill its slot."
        ),
    )
    target_total_duration: float = Field(
        0.0,
        description=(
            "Stop acquiring once accepted clips cover this many seconds. "
            "Checked after each download, so 0 still yields the first clip."
        ),
    )

    # Local library
    use_local_library: bool = Field(False, description="Prefer clips from local_library_path")
    local_library_path: Path | None = Field(None, description="Directory of .mp4/.mov clips")

    cache_dir: Path = Field(DEFAULT_CACHE_DIR, description="Content-addressed download cache")

    @field_validator("aspect", mode="before")
    @classmethod
    def _parse_aspect(cls, value: object) -> object:
        # YAML files use the orientation name; the enum values are ratios
        if isinstance(value, str):
            return VideoAspect.from_label(value)
        return value

    @property
    def effective_min_duration(self) -> float:
        """Minimum clip duration passed to search providers."""
        if self.min_clip_duration is None:
            return self.max_clip_duration
        return self.min_clip_duration


class PexelsConfig(BaseModel):
    """Configuration for the Pexels video search provider."""

    api_key: str | None = Field(None, description="Explicit API key (overrides env var)")
    api_key_env_var: str = Field("PEXELS_API_KEY", description="Env var holding the API key")
    base_url: str = Field("https://api.pexels.com", description="Pexels API host")
    per_page: int = Field(20, description="Results requested per search term")
    timeout_seconds: float = Field(30.0, description="Search request timeout")
    download_timeout_seconds: float = Field(120.0, description="Per-chunk download timeout")
    chunk_size: int = Field(1024 * 1024, description="Streamed download chunk size in bytes")

    requests_per_hour: float = Field(200.0, description="API rate limit (0=unlimited)")
    max_retries: int = Field(3, description="Max attempts per request")
    retry_delay_seconds: float = Field(1.0, description="Exponential backoff base")

    def resolve_api_key(self) -> str | None:
        """Explicit key first, then the configured environment variable."""
        if self.api_key:
            return self.api_key
        key = os.environ.get(self.api_key_env_var, "").strip()
        return key or None


class StockReelConfig(BaseModel):
    """Top-level configuration for StockReel."""

    acquisition: AcquisitionConfig = Field(default_factory=AcquisitionConfig)
    pexels: PexelsConfig = Field(default_factory=PexelsConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> StockReelConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    @classmethod
    def default(cls) -> StockReelConfig:
        """Return configuration with all defaults."""
        return cls()
