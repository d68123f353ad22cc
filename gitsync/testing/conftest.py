"""
Pytest plugin for gitsync testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["gitsync.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from gitsync.testing.fixtures import (
    git_host,
    git_remote,
    mock_client,
    sample_repository,
    sample_user,
)

__all__ = [
    "mock_client",
    "sample_user",
    "sample_repository",
    "git_host",
    "git_remote",
]
