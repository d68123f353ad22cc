"""
Repository reconciliation.

Brings one local working copy in line with the default branch of its remote
using the smallest operation that gets there: clone, fast-forward, or hard
reset. The remote is always authoritative; local-only commits are discarded
when histories diverge.
"""

import shutil
from pathlib import Path

from gitsync.exceptions import (
    CheckoutError,
    CloneError,
    FetchError,
    FilesystemError,
    GitCommandError,
    RefError,
    RemoteError,
    RepoOpenError,
)
from gitsync.git import CredentialProvider, GitHelper, token_credentials
from gitsync.logging import get_logger
from gitsync.types.repos import Repository, SyncTarget
from gitsync.types.sync import MergeAnalysis, SyncOutcome

logger = get_logger("git")

REMOTE_NAME = "origin"


class Reconciler:
    """
    Reconciles local mirrors under a sync root against their remotes.

    Example:
        ```python
        from pathlib import Path
        from gitsync.reconciler import Reconciler

        reconciler = Reconciler(Path("~/mirror").expanduser(), token="ghp_...")
        outcome = reconciler.sync(repository)
        ```
    """

    def __init__(
        self,
        sync_root: str | Path,
        token: str | None = None,
        credentials: CredentialProvider | None = None,
        git: GitHelper | None = None,
        git_host: str = "https://github.com",
    ) -> None:
        """
        Initialize the reconciler.

        Args:
            sync_root: Directory holding one subdirectory per repository
            token: Access token for git transport (ignored if credentials is given)
            credentials: Provider consulted by git when the remote asks for auth
            git: GitHelper to run commands with
            git_host: Prefix that ``owner/name.git`` is appended to for clone URLs
        """
        self.sync_root = Path(sync_root)
        self.git = git or GitHelper()
        self.git_host = git_host.rstrip("/")
        if credentials is None and token:
            credentials = token_credentials(token)
        self.credentials = credentials

    def target_for(self, repository: Repository) -> SyncTarget:
        """Pair a repository with its path under the sync root."""
        return SyncTarget.for_root(repository, self.sync_root)

    def clone_url(self, repository: Repository) -> str:
        """Build the credential-free clone URL for a repository."""
        return f"{self.git_host}/{repository.full_name}.git"

    def sync(self, repository: Repository, force: bool = False) -> SyncOutcome:
        """
        Bring ``<sync_root>/<name>`` to the remote default branch tip.

        Args:
            repository: Remote descriptor
            force: Delete an existing copy and clone afresh

        Returns:
            What was done

        Raises:
            SyncError: The first failing step; local state is left as the
                last completed step made it
        """
        target = self.target_for(repository)

        if not _exists(target.path):
            self._clone(target)
            logger.info("%s: cloned into %s", repository.full_name, target.path)
            return SyncOutcome.CLONED

        if force:
            self._remove(target)
            self._clone(target)
            logger.info("%s: re-created %s", repository.full_name, target.path)
            return SyncOutcome.RECREATED

        outcome = self._update(target)
        logger.info("%s: %s", repository.full_name, outcome.value.replace("_", " "))
        return outcome

    def _remove(self, target: SyncTarget) -> None:
        path = target.path
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            raise FilesystemError(f"Could not remove {path}", path=path) from e

    def _clone(self, target: SyncTarget) -> None:
        path = target.path
        url = self.clone_url(target.repository)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CloneError(f"Could not create {path.parent}", path=path) from e

        try:
            self.git.clone(url, path, credentials=self.credentials)
        except GitCommandError as e:
            raise CloneError(
                f"Cloning {target.repository.full_name} into {path} failed", path=path
            ) from e

    def _update(self, target: SyncTarget) -> SyncOutcome:
        path = target.path
        name = target.repository.full_name
        branch = target.repository.default_branch
        branch_ref = f"refs/heads/{branch}"

        try:
            toplevel = self.git.toplevel(path)
        except GitCommandError as e:
            raise RepoOpenError(f"{path} is not a usable git repository", path=path) from e
        if toplevel.resolve() != path.resolve():
            raise RepoOpenError(
                f"{path} is not a repository root (enclosing repository is {toplevel})",
                path=path,
            )

        try:
            self.git.remote_url(path, REMOTE_NAME)
        except GitCommandError as e:
            raise RemoteError(f"{path} has no '{REMOTE_NAME}' remote", path=path) from e

        try:
            self.git.fetch(path, REMOTE_NAME, [branch], credentials=self.credentials)
        except GitCommandError as e:
            raise FetchError(f"Fetching {branch} of {name} failed", path=path) from e

        try:
            fetched = self.git.rev_parse(path, "FETCH_HEAD^{commit}")
            if fetched is None:
                raise RefError(f"FETCH_HEAD does not name a commit in {path}", path=path)
            analysis = self.git.merge_analysis(path, fetched)
        except GitCommandError as e:
            raise RefError(f"Analysing {branch} of {name} failed", path=path) from e

        if analysis is MergeAnalysis.UP_TO_DATE:
            return SyncOutcome.UP_TO_DATE

        if analysis is MergeAnalysis.FAST_FORWARD:
            try:
                self.git.update_ref(path, branch_ref, fetched, "gitsync: fast-forward")
                self.git.set_head(path, branch_ref)
            except GitCommandError as e:
                raise RefError(f"Moving {branch_ref} to {fetched} failed", path=path) from e
            try:
                self.git.checkout_head(path)
            except GitCommandError as e:
                raise CheckoutError(f"Checking out {branch} in {path} failed", path=path) from e
            return SyncOutcome.FAST_FORWARDED

        if analysis is MergeAnalysis.DIVERGED:
            try:
                local = self.git.rev_parse(path, "HEAD")
            except GitCommandError as e:
                raise RefError(f"Resolving HEAD of {path} failed", path=path) from e
            logger.warning(
                "%s: local history diverged from %s; discarding local commit %s",
                name,
                branch,
                local,
            )
            try:
                self.git.reset_hard(path, fetched)
            except GitCommandError as e:
                raise CheckoutError(f"Hard reset of {path} to {fetched} failed", path=path) from e
            return SyncOutcome.RESET

        raise RefError(f"Unhandled merge analysis {analysis!r}", path=path)


def _exists(path: Path) -> bool:
    # A dangling symlink still occupies the name
    return path.exists() or path.is_symlink()
