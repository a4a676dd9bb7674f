"""Error types for clip acquisition."""

from __future__ import annotations


class AcquisitionError(Exception):
    """Base exception for acquisition operations."""


class ConfigurationError(AcquisitionError):
    """Raised when a provider cannot be set up (missing key, unknown name)."""


class ProviderAPIError(AcquisitionError):
    """Raised when a provider HTTP call fails."""

    def __init__(
        self,
        provider: str,
        message: str,
        retryable: bool = False,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.retryable = retryable
        self.status_code = status_code
        super().__init__(f"[{provider}] {message}")
