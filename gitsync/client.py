"""
gitsync GitHub client.

Provides the catalog interface: who the token is, and what it can see.
"""

import os
from typing import Any

from gitsync.clients import ReposClient, UsersClient
from gitsync.exceptions import ConfigurationError
from gitsync.transport import HTTPTransport, RetryConfig


class GitHubClient:
    """
    Client for the GitHub catalog API.

    Aggregates the resource clients over a single authenticated transport.

    Example:
        ```python
        from gitsync import GitHubClient

        with GitHubClient(token="ghp_...") as client:
            user = client.users.get_authenticated()
            repos = client.repos.list(include_private=True)
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        if not token:
            raise ConfigurationError("GitHub token must not be empty")

        self.base_url = base_url
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.users = UsersClient(self._transport)
        self.repos = ReposClient(self._transport)

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "GitHubClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_TOKEN: Personal access token (required)
            GITSYNC_API_URL: Base URL for API (optional, default: https://api.github.com)

        Raises:
            ConfigurationError: If GITHUB_TOKEN is missing or empty
        """
        token = os.environ.get("GITHUB_TOKEN")
        base_url = os.environ.get("GITSYNC_API_URL", cls.DEFAULT_BASE_URL)

        if not token:
            raise ConfigurationError("GITHUB_TOKEN environment variable not set")

        return cls(
            token=token,
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
