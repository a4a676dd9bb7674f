"""Authenticated HTTP transport shared by search providers and the cache."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from stockreel.acquire.errors import ProviderAPIError
from stockreel.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class HttpClient:
    """GET requests with provider credentials, retries and an API rate limit.

    Every request carries the ``Authorization`` header. Only API calls
    (``get_json``) count against the rate limiter; file downloads are served
    from the provider's CDN and are not metered.

    The public methods never raise for network-level failures: they log and
    return ``None`` so callers can degrade to "no data".
    """

    def __init__(
        self,
        provider: str,
        api_key: str | None = None,
        *,
        session: requests.Session | None = None,
        rate_limiter: RateLimiter | None = None,
        timeout: float = 30.0,
        download_timeout: float = 120.0,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
    ) -> None:
        self.provider = provider
        self._api_key = api_key
        self.session = session or requests.Session()
        self.rate_limiter = rate_limiter or RateLimiter(0)
        self.timeout = timeout
        self.download_timeout = download_timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay_seconds = retry_delay_seconds

    @property
    def headers(self) -> dict[str, str]:
        if not self._api_key:
            return {}
        return {"Authorization": self._api_key}

    # ------------------------------------------------------------------

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any | None:
        """GET ``url`` and decode the JSON body. Returns None on any failure."""
        try:
            response = self._send(url, params=params, stream=False, rate_limited=True)
        except ProviderAPIError as e:
            logger.error("Request failed: %s", e)
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("[%s] Undecodable response from %s: %s", self.provider, url, e)
            return None
        finally:
            response.close()

    def open_stream(self, url: str) -> requests.Response | None:
        """Open a streamed GET on ``url``. The caller must close the response."""
        try:
            return self._send(url, stream=True, rate_limited=False)
        except ProviderAPIError as e:
            logger.error("Download failed: %s", e)
            return None

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------

    def _send(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        stream: bool,
        rate_limited: bool,
    ) -> requests.Response:
        """Send a GET with retry and exponential backoff on retryable errors."""
        for attempt in range(self.max_retries):
            if rate_limited and not self.rate_limiter.acquire(timeout=60.0):
                raise ProviderAPIError(self.provider, "rate limiter timeout")
            try:
                return self._request_once(url, params=params, stream=stream)
            except ProviderAPIError as e:
                if e.retryable and attempt < self.max_retries - 1:
                    delay = self.retry_delay_seconds * (2 ** attempt)
                    logger.warning(
                        "Retryable error (attempt %d): %s, retrying in %.1fs",
                        attempt + 1, e, delay,
                    )
                    time.sleep(delay)
                else:
                    raise
        raise ProviderAPIError(self.provider, f"GET {url} exhausted retries")

    def _request_once(
        self, url: str, *, params: dict[str, Any] | None, stream: bool,
    ) -> requests.Response:
        timeout = self.download_timeout if stream else self.timeout
        try:
            response = self.session.get(
                url, params=params, headers=self.headers, timeout=timeout, stream=stream,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise ProviderAPIError(self.provider, f"GET {url} failed: {exc}", retryable=True) from exc
        except requests.RequestException as exc:
            raise ProviderAPIError(self.provider, f"GET {url} failed: {exc}") from exc

        status = response.status_code
        if status >= 400:
            response.close()
            raise ProviderAPIError(
                self.provider,
                f"GET {url} returned HTTP {status}",
                retryable=_is_retryable_status(status),
                status_code=status,
            )
        return response


def _is_retryable_status(status: int) -> bool:
    return status == 429 or status >= 500
