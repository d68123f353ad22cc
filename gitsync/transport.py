"""
HTTP Transport for the GitHub catalog API.

Handles HTTP communication with token authentication and optional retry
on transient failures. Status semantics are left to the resource clients.
"""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from gitsync import __version__
from gitsync.exceptions import ApiError
from gitsync.logging import log_http_request, log_http_response


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior.

    Retries are off by default: a non-success response is returned to the
    caller on the first attempt.
    """

    max_retries: int = 0
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class HTTPTransport:
    """
    HTTP transport layer for authenticated catalog requests.

    Handles:
    - ``Authorization: token <TOKEN>`` on every request
    - A uniform client-level timeout
    - Optional exponential backoff with jitter for 429/5xx and connection errors
    - Retry-After header respect for rate limiting
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Access token sent with every request
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self._token = token

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"token {token}",
                "User-Agent": f"gitsync/{__version__}",
            },
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Make an authenticated GET request.

        Args:
            path: API path (e.g., "/user/repos")
            params: Query parameters

        Returns:
            The final response, whatever its status

        Raises:
            ApiError: If the request could not be completed at all
        """
        def make_request() -> httpx.Response:
            log_http_request("GET", f"{self.base_url}{path}", dict(self._client.headers), params)
            started = time.monotonic()
            response = self._client.request("GET", path, params=params)
            log_http_response(
                response.status_code,
                f"{self.base_url}{path}",
                elapsed_ms=(time.monotonic() - started) * 1000,
            )
            return response

        return self._execute_with_retry(make_request)

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response]
    ) -> httpx.Response:
        """
        Execute a request, retrying retryable statuses and network errors.

        Args:
            request_fn: Function that makes the HTTP request

        Returns:
            The last response received

        Raises:
            ApiError: On a network error once retries are exhausted
        """
        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = request_fn()
            except httpx.RequestError as e:
                if attempt >= self.retry_config.max_retries:
                    raise ApiError(f"Request to {self.base_url} failed: {e}", code="CONNECTION_ERROR") from e
                time.sleep(self._get_backoff_time(attempt, None))
                continue

            if not self._should_retry(response.status_code, attempt):
                return response

            retry_after = response.headers.get("Retry-After")
            time.sleep(self._get_backoff_time(attempt, retry_after))

        # Unreachable: the final attempt never retries
        raise ApiError("Request failed with no response", code="UNKNOWN_ERROR")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        # Exponential backoff: backoff_factor ^ attempt
        base_wait = self.retry_config.backoff_factor ** attempt

        # Apply jitter (±jitter%)
        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)
