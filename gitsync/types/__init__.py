"""gitsync type definitions.

This module exports all data model types used by the package.
"""

from gitsync.types.repos import Repository, SyncTarget, User
from gitsync.types.sync import MergeAnalysis, SyncOutcome, SyncResult

__all__ = [
    # Catalog types
    "Repository",
    "User",
    # Reconciliation types
    "SyncTarget",
    "MergeAnalysis",
    "SyncOutcome",
    "SyncResult",
]
