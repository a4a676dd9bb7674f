"""Protocol for stock-video search providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from stockreel.types import MaterialCandidate

if TYPE_CHECKING:
    from stockreel.config import AcquisitionConfig


@runtime_checkable
class SearchProvider(Protocol):
    """Protocol for catalog search providers.

    Implementations: PexelsSearchProvider.
    """

    name: str

    def search(
        self, term: str, min_duration: float, config: AcquisitionConfig,
    ) -> list[MaterialCandidate]:
        """Search the catalog for clips matching a keyword.

        Args:
            term: Search keyword(s).
            min_duration: Clips shorter than this (seconds) are skipped.
            config: Acquisition config; ``config.aspect`` selects orientation
                and target resolution.

        Returns:
            One candidate per matching catalog item, in catalog order.
            Network failures and malformed responses yield an empty list.
        """
        ...
