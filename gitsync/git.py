"""
Git helper utilities for gitsync.

Wraps the ``git`` executable for the clone, fetch, ref and checkout
primitives the reconciler needs. Transport credentials are handed to git
through a credential helper that reads them from the child environment, so
the token never appears in a URL, on the command line or in repository
configuration.
"""

import os
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from gitsync.exceptions import GitCommandError
from gitsync.logging import get_logger, log_git_command, mask_sensitive_data
from gitsync.types.sync import MergeAnalysis

logger = get_logger("git")

# Placeholder username for token authentication over HTTPS
TOKEN_USERNAME = "x-access-token"

_USERNAME_ENV = "GITSYNC_GIT_USERNAME"
_PASSWORD_ENV = "GITSYNC_GIT_PASSWORD"

# Answers "get" requests from the environment and ignores store/erase
_CREDENTIAL_HELPER = (
    "!f() { test \"$1\" = get || exit 0; "
    f"echo username=\"${_USERNAME_ENV}\"; "
    f"echo password=\"${_PASSWORD_ENV}\"; }}; f"
)


@dataclass(frozen=True)
class Credentials:
    """Username/password pair for HTTP basic authentication."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='[REDACTED]')"


# Given the URL git is about to contact, produce credentials for it
CredentialProvider = Callable[[str], Credentials]


def token_credentials(token: str, username: str = TOKEN_USERNAME) -> CredentialProvider:
    """
    Build a credential provider that answers every request with a token.

    Args:
        token: Access token used as the password
        username: Placeholder username (default: x-access-token)

    Returns:
        A provider returning the same credentials for any URL
    """
    def provide(url: str) -> Credentials:
        return Credentials(username=username, password=token)

    return provide


class GitHelper:
    """
    Thin wrapper over the ``git`` executable.

    Every method raises GitCommandError when git fails; callers translate it
    into the error for the step they were performing.

    Example:
        ```python
        from gitsync.git import GitHelper, token_credentials

        git = GitHelper()
        creds = token_credentials("ghp_...")
        git.clone("https://github.com/owner/repo.git", "./repo", credentials=creds)
        ```
    """

    def __init__(self, executable: str = "git") -> None:
        """
        Initialize GitHelper.

        Args:
            executable: Name or path of the git binary
        """
        self.executable = executable

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def clone(
        self,
        url: str,
        local_path: str | Path,
        credentials: CredentialProvider | None = None,
    ) -> None:
        """
        Clone a repository to a local path, checking out the remote HEAD.

        Args:
            url: Repository URL, without embedded credentials
            local_path: Directory to clone into; must be absent or empty
            credentials: Provider consulted when the remote asks for auth
        """
        self._run(
            ["clone", "--quiet", url, str(local_path)],
            credentials=credentials,
            url=url,
        )

    def fetch(
        self,
        local_path: str | Path,
        remote: str,
        refspecs: list[str],
        credentials: CredentialProvider | None = None,
    ) -> None:
        """
        Fetch refs from a remote, recording them in FETCH_HEAD.

        Args:
            local_path: Path to local repository
            remote: Remote name
            refspecs: Branch names or refspecs to fetch
            credentials: Provider consulted when the remote asks for auth
        """
        url = self.remote_url(local_path, remote)
        self._run(
            ["fetch", "--quiet", remote, *refspecs],
            cwd=local_path,
            credentials=credentials,
            url=url,
        )

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def toplevel(self, local_path: str | Path) -> Path:
        """Return the root of the working tree containing ``local_path``."""
        result = self._run(["rev-parse", "--show-toplevel"], cwd=local_path)
        return Path(result.stdout.strip())

    def remote_url(self, local_path: str | Path, remote: str) -> str:
        """Return the fetch URL of a configured remote."""
        result = self._run(["remote", "get-url", remote], cwd=local_path)
        return result.stdout.strip()

    def rev_parse(self, local_path: str | Path, rev: str) -> str | None:
        """
        Resolve a revision to an object id.

        Returns:
            The full object id, or None if ``rev`` does not resolve
        """
        result = self._run(
            ["rev-parse", "--verify", "--quiet", rev],
            cwd=local_path,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def is_ancestor(self, local_path: str | Path, ancestor: str, descendant: str) -> bool:
        """Return True if ``ancestor`` is reachable from ``descendant``."""
        args = ["merge-base", "--is-ancestor", ancestor, descendant]
        result = self._run(args, cwd=local_path, check=False)
        if result.returncode in (0, 1):
            return result.returncode == 0
        raise GitCommandError(args, result.returncode, mask_sensitive_data(result.stderr))

    def merge_analysis(self, local_path: str | Path, fetched: str) -> MergeAnalysis:
        """
        Classify how HEAD relates to a fetched commit.

        An unborn HEAD counts as fast-forwardable. A fetched commit already
        reachable from HEAD counts as up to date.

        Args:
            local_path: Path to local repository
            fetched: Object id of the fetched commit

        Returns:
            The merge relationship
        """
        head = self.rev_parse(local_path, "HEAD^{commit}")
        if head is None:
            return MergeAnalysis.FAST_FORWARD
        if head == fetched or self.is_ancestor(local_path, fetched, head):
            return MergeAnalysis.UP_TO_DATE
        if self.is_ancestor(local_path, head, fetched):
            return MergeAnalysis.FAST_FORWARD
        return MergeAnalysis.DIVERGED

    # ------------------------------------------------------------------
    # Working tree mutation
    # ------------------------------------------------------------------

    def update_ref(
        self, local_path: str | Path, ref: str, oid: str, message: str
    ) -> None:
        """Point ``ref`` at ``oid``, creating it if needed."""
        self._run(["update-ref", "-m", message, ref, oid], cwd=local_path)

    def set_head(self, local_path: str | Path, ref: str) -> None:
        """Make HEAD a symbolic reference to ``ref``."""
        self._run(["symbolic-ref", "HEAD", ref], cwd=local_path)

    def checkout_head(self, local_path: str | Path) -> None:
        """
        Force the index and working tree to match HEAD.

        Tracked files absent from HEAD are removed; local modifications to
        tracked files are overwritten. Untracked files are left alone.
        """
        self._run(["read-tree", "-u", "--reset", "HEAD"], cwd=local_path)

    def reset_hard(self, local_path: str | Path, oid: str) -> None:
        """Move the current branch to ``oid`` and overwrite index and tree."""
        self._run(["reset", "--quiet", "--hard", oid], cwd=local_path)

    # ------------------------------------------------------------------
    # Process plumbing
    # ------------------------------------------------------------------

    def _run(
        self,
        args: list[str],
        cwd: str | Path | None = None,
        credentials: CredentialProvider | None = None,
        url: str | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        """
        Run git and capture its output.

        Args:
            args: Arguments after the executable
            cwd: Working directory
            credentials: Provider whose answer is exposed to the credential helper
            url: URL passed to the provider
            check: Raise GitCommandError on a non-zero exit

        Returns:
            The completed process
        """
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        prefix: list[str] = []
        secrets: tuple[str, ...] = ()

        if credentials is not None:
            creds = credentials(url or "")
            env[_USERNAME_ENV] = creds.username
            env[_PASSWORD_ENV] = creds.password
            secrets = (creds.password,)
            # Reset inherited helpers so only ours answers
            prefix = ["-c", "credential.helper=", "-c", f"credential.helper={_CREDENTIAL_HELPER}"]

        log_git_command(args, str(cwd) if cwd is not None else None)

        try:
            result = subprocess.run(
                [self.executable, *prefix, *args],
                cwd=cwd,
                env=env,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise GitCommandError(args, None, str(e)) from e

        if check and result.returncode != 0:
            raise GitCommandError(
                args, result.returncode, mask_sensitive_data(result.stderr, secrets)
            )

        return result
