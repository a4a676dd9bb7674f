"""Local clip library scanner."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = {".mp4", ".mov"}


class LocalLibraryScanner:
    """Lists user-provided clips in a directory, bypassing search and download."""

    def __init__(self, extensions: set[str] | None = None) -> None:
        self.extensions = {e.lower() for e in (extensions or VIDEO_EXTENSIONS)}

    def scan(self, path: str | Path) -> list[Path]:
        """Absolute paths of usable clips in ``path``, sorted by file name.

        Returned in name order, not raw directory-listing order.

        Subdirectories are not descended into. A missing directory is an
        empty library rather than an error.
        """
        library = Path(path).expanduser()
        if not library.is_dir():
            logger.warning("Local library not found: %s", library)
            return []

        clips = [
            p.absolute() for p in sorted(library.iterdir())
            if p.is_file() and p.suffix.lower() in self.extensions
        ]
        logger.info("Local library %s: %d clips", library, len(clips))
        return clips
