"""gitsync exception classes."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gitsync.sync import SyncReport


class GitSyncError(Exception):
    """Base exception for all gitsync errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GitSyncError):
    """Raised when the token or sync directory is missing or unusable."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthError(GitSyncError):
    """Raised when the hosting API rejects the token."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__("AUTH_ERROR", message)
        self.status = status


class ApiError(GitSyncError):
    """Raised when a repository listing request fails."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str = "API_ERROR",
    ) -> None:
        super().__init__(code, message)
        self.status = status


class GitCommandError(GitSyncError):
    """Raised when a ``git`` invocation exits non-zero or cannot start."""

    def __init__(
        self,
        args: list[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(
            "GIT_COMMAND_FAILED",
            f"git {' '.join(args)} exited with {returncode}: {detail}",
        )


class SyncError(GitSyncError):
    """Base for failures while reconciling one repository."""

    code = "SYNC_ERROR"

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(type(self).code, message)
        self.path = path


class FilesystemError(SyncError):
    """Raised when the existing directory cannot be removed."""

    code = "FILESYSTEM_ERROR"


class CloneError(SyncError):
    """Raised when a clone fails (network, auth rejection, disk)."""

    code = "CLONE_ERROR"


class RepoOpenError(SyncError):
    """Raised when the existing local repository cannot be opened."""

    code = "REPO_OPEN_ERROR"


class RemoteError(SyncError):
    """Raised when the local repository has no ``origin`` remote."""

    code = "REMOTE_ERROR"


class FetchError(SyncError):
    """Raised when fetching the default branch fails."""

    code = "FETCH_ERROR"


class RefError(SyncError):
    """Raised on reference lookup or merge analysis failures."""

    code = "REF_ERROR"


class CheckoutError(SyncError):
    """Raised when checkout or hard reset fails."""

    code = "CHECKOUT_ERROR"


class SyncAborted(GitSyncError):
    """Raised by the runner when a repository fails and continuing is disabled."""

    def __init__(self, message: str, report: "SyncReport") -> None:
        super().__init__("SYNC_ABORTED", message)
        self.report = report


def format_error_chain(exc: BaseException) -> list[str]:
    """
    Render an exception and its ``__cause__`` chain, outermost first.

    Args:
        exc: The exception to render

    Returns:
        One line per level of the chain
    """
    lines: list[str] = []
    seen: set[int] = set()
    current: Any = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        lines.append(str(current) or type(current).__name__)
        current = current.__cause__
    return lines
