"""StockReel: stock-video clip acquisition with a content-addressed cache."""

__version__ = "0.1.0"

from stockreel.types import AcquisitionResult, MaterialCandidate, ResolutionTarget, VideoAspect

__all__ = [
    "AcquisitionResult",
    "MaterialCandidate",
    "ResolutionTarget",
    "VideoAspect",
    "__version__",
]
