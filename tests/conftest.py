"""Shared test fixtures."""

from gitsync.testing.fixtures import (  # noqa: F401
    git_host,
    git_remote,
    mock_client,
    sample_repository,
    sample_user,
)
