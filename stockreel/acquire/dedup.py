"""Cross-term deduplication of search candidates."""

from __future__ import annotations

from stockreel.types import MaterialCandidate


class Deduplicator:
    """Tracks source URLs already accepted during one acquisition run.

    Each search term returns its own candidate list; overlapping catalog
    items across terms (or within one response) are passed on only once.
    Create one instance per run.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def accept(self, candidates: list[MaterialCandidate]) -> list[MaterialCandidate]:
        """Return the candidates whose URL has not been accepted yet, and record them."""
        fresh: list[MaterialCandidate] = []
        for candidate in candidates:
            if candidate.source_url in self._seen:
                continue
            self._seen.add(candidate.source_url)
            fresh.append(candidate)
        return fresh

    @property
    def seen(self) -> frozenset[str]:
        return frozenset(self._seen)

    def __contains__(self, url: object) -> bool:
        return url in self._seen

    def __len__(self) -> int:
        return len(self._seen)
