"""Reconciliation outcome models."""

from dataclasses import dataclass
from enum import Enum

from gitsync.exceptions import GitSyncError
from gitsync.types.repos import SyncTarget


class MergeAnalysis(Enum):
    """Relationship between the local HEAD and the fetched commit."""

    UP_TO_DATE = "up_to_date"
    FAST_FORWARD = "fast_forward"
    DIVERGED = "diverged"


class SyncOutcome(Enum):
    """Terminal state of a successful reconciliation."""

    CLONED = "cloned"
    FAST_FORWARDED = "fast_forwarded"
    RESET = "reset"
    UP_TO_DATE = "up_to_date"
    RECREATED = "recreated"

    @property
    def is_update(self) -> bool:
        """True for the outcomes of updating an existing copy in place."""
        return self in (
            SyncOutcome.FAST_FORWARDED,
            SyncOutcome.RESET,
            SyncOutcome.UP_TO_DATE,
        )


@dataclass
class SyncResult:
    """Result of reconciling one target; ``error`` is set when it failed."""

    target: SyncTarget
    outcome: SyncOutcome | None = None
    error: GitSyncError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
