"""Aspect-ratio to resolution mapping and tolerant resolution matching.

Providers encode each clip at a fixed ladder of sizes (e.g. 1080x1920,
1088x1920, 720x1280) that rarely hits a target exactly, so matching is an
approximate-equality check on both dimensions.
"""

from __future__ import annotations

from stockreel.types import ResolutionTarget, VideoAspect

DEFAULT_TOLERANCE_PX = 10

_RESOLUTIONS: dict[VideoAspect, ResolutionTarget] = {
    VideoAspect.landscape: ResolutionTarget(width=1920, height=1080),
    VideoAspect.portrait: ResolutionTarget(width=1080, height=1920),
    VideoAspect.square: ResolutionTarget(width=1080, height=1080),
}


def target_resolution(aspect: VideoAspect) -> ResolutionTarget:
    """Pixel resolution clips must have for the given aspect."""
    return _RESOLUTIONS[VideoAspect(aspect)]


def orientation_for(aspect: VideoAspect) -> str:
    """Orientation label sent to search providers ('portrait', 'landscape', 'square')."""
    return VideoAspect(aspect).name


def matches(
    width: int,
    height: int,
    target: ResolutionTarget,
    tolerance: int = DEFAULT_TOLERANCE_PX,
) -> bool:
    """True if both dimensions are within ±``tolerance`` pixels (inclusive) of ``target``."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Resolution must be positive, got {width}x{height}")
    return (
        abs(width - target.width) <= tolerance
        and abs(height - target.height) <= tolerance
    )
