"""
Sync driver.

Lists the repositories a token can see and reconciles each one in turn.
"""

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gitsync.exceptions import SyncAborted, SyncError
from gitsync.logging import get_logger
from gitsync.types.repos import Repository, User
from gitsync.types.sync import SyncOutcome, SyncResult

if TYPE_CHECKING:
    from gitsync.client import GitHubClient
    from gitsync.reconciler import Reconciler

logger = get_logger()

# Called once the identity and listing are known
ListedCallback = Callable[[User, list[Repository]], None]

# Called after each repository with (1-based index, total, result)
ProgressCallback = Callable[[int, int, SyncResult], None]


@dataclass
class SyncReport:
    """Everything a run produced."""

    user: User | None = None
    repositories: list[Repository] = field(default_factory=list)
    results: list[SyncResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def outcomes(self) -> Counter[SyncOutcome]:
        """Tally of successful outcomes."""
        return Counter(r.outcome for r in self.results if r.outcome is not None)


class SyncRunner:
    """
    Runs one sequential sync pass.

    Example:
        ```python
        from gitsync import GitHubClient, Reconciler, SyncRunner

        with GitHubClient(token) as client:
            runner = SyncRunner(client, Reconciler(root, token=token))
            report = runner.run(include_private=True)
        ```
    """

    def __init__(
        self,
        client: "GitHubClient",
        reconciler: "Reconciler",
        continue_on_error: bool = False,
        on_progress: ProgressCallback | None = None,
        on_listed: ListedCallback | None = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            client: Catalog client (real or mock)
            reconciler: Reconciler for the sync root
            continue_on_error: Record a failing repository and move on instead of aborting
            on_progress: Callback invoked after each repository
            on_listed: Callback invoked with the identity and repositories before reconciling
        """
        self.client = client
        self.reconciler = reconciler
        self.continue_on_error = continue_on_error
        self.on_progress = on_progress
        self.on_listed = on_listed

    def run(self, include_private: bool = False, force: bool = False) -> SyncReport:
        """
        Authenticate, list, and reconcile every repository.

        Args:
            include_private: Mirror private repositories too
            force: Re-create existing copies from scratch

        Returns:
            The report for the whole run

        Raises:
            AuthError: If the token is rejected
            ApiError: If listing fails
            SyncAborted: If a repository fails and continue_on_error is off
        """
        report = SyncReport()
        report.user = self.client.users.get_authenticated()
        logger.info("authenticated as %s", report.user.login)

        report.repositories = self.client.repos.list(include_private=include_private)
        logger.info("found %d repositories", len(report.repositories))
        if self.on_listed is not None:
            self.on_listed(report.user, report.repositories)

        self.reconcile_all(report, force=force)
        return report

    def reconcile_all(self, report: SyncReport, force: bool = False) -> SyncReport:
        """Reconcile ``report.repositories`` in order, appending to ``report.results``."""
        total = len(report.repositories)

        for index, repository in enumerate(report.repositories, start=1):
            target = self.reconciler.target_for(repository)
            try:
                outcome = self.reconciler.sync(repository, force=force)
                result = SyncResult(target=target, outcome=outcome)
            except SyncError as e:
                logger.error("%s: %s", repository.full_name, e)
                result = SyncResult(target=target, error=e)

            report.results.append(result)
            if self.on_progress is not None:
                self.on_progress(index, total, result)

            if result.error is not None and not self.continue_on_error:
                raise SyncAborted(
                    f"Stopped after {repository.full_name} failed; "
                    "use --continue-on-error to skip failing repositories",
                    report,
                ) from result.error

        return report
