"""gitsync - mirror a GitHub account into a local directory."""

__version__ = "0.1.0"

from gitsync.client import GitHubClient  # noqa: E402
from gitsync.config import SyncConfig  # noqa: E402
from gitsync.exceptions import (  # noqa: E402
    ApiError,
    AuthError,
    CheckoutError,
    CloneError,
    ConfigurationError,
    FetchError,
    FilesystemError,
    GitCommandError,
    GitSyncError,
    RefError,
    RemoteError,
    RepoOpenError,
    SyncAborted,
    SyncError,
    format_error_chain,
)
from gitsync.git import Credentials, GitHelper, token_credentials  # noqa: E402
from gitsync.logging import configure_logging, get_logger  # noqa: E402
from gitsync.reconciler import Reconciler  # noqa: E402
from gitsync.sync import SyncReport, SyncRunner  # noqa: E402
from gitsync.transport import HTTPTransport, RetryConfig  # noqa: E402
from gitsync.types import (  # noqa: E402
    MergeAnalysis,
    Repository,
    SyncOutcome,
    SyncResult,
    SyncTarget,
    User,
)

__all__ = [
    "__version__",
    # Catalog
    "GitHubClient",
    "HTTPTransport",
    "RetryConfig",
    # Reconciliation
    "Reconciler",
    "GitHelper",
    "Credentials",
    "token_credentials",
    # Driver
    "SyncRunner",
    "SyncReport",
    "SyncConfig",
    # Types
    "Repository",
    "User",
    "SyncTarget",
    "MergeAnalysis",
    "SyncOutcome",
    "SyncResult",
    # Exceptions
    "GitSyncError",
    "ConfigurationError",
    "AuthError",
    "ApiError",
    "GitCommandError",
    "SyncError",
    "FilesystemError",
    "CloneError",
    "RepoOpenError",
    "RemoteError",
    "FetchError",
    "RefError",
    "CheckoutError",
    "SyncAborted",
    "format_error_chain",
    # Logging
    "configure_logging",
    "get_logger",
]
