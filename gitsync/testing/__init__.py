"""gitsync testing utilities.

Provides a mock catalog client, descriptor builders, and local git remotes
for testing code that uses gitsync.
"""

from gitsync.testing.fixtures import (
    GitRemote,
    create_mock_repository,
    local_git,
    repository_payload,
)
from gitsync.testing.mock import MockCall, MockGitHubClient, MockResponse

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    # Git remotes
    "GitRemote",
    "local_git",
    # Helper functions
    "create_mock_repository",
    "repository_payload",
]
