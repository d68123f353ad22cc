#!/usr/bin/env python3
"""
Basic gitsync usage example.

Mirrors every public repository of the token's account into ./mirror,
printing one line per repository.
Run with: GITHUB_TOKEN=... python examples/basic_usage.py
"""

import logging
import os
import sys
from pathlib import Path

from gitsync import (
    GitHubClient,
    GitSyncError,
    Reconciler,
    SyncRunner,
    configure_logging,
    format_error_chain,
)

configure_logging(level=logging.INFO)

token = os.environ.get("GITHUB_TOKEN")
if not token:
    sys.exit("GITHUB_TOKEN is not set")

sync_root = Path("mirror").resolve()
print(f"=== Mirroring into {sync_root} ===\n")


def show(index, total, result):
    status = result.outcome.value if result.ok else "failed"
    print(f"[{index}/{total}] {result.target.repository.full_name}: {status}")


try:
    with GitHubClient(token) as client:
        runner = SyncRunner(
            client,
            Reconciler(sync_root, token=token),
            continue_on_error=True,
            on_progress=show,
        )
        report = runner.run(include_private=False)
except GitSyncError as e:
    for line in format_error_chain(e):
        print(f"   {line}")
    sys.exit(1)

print(f"\nUser: {report.user.login}")
print(f"Succeeded: {report.succeeded}, failed: {report.failed}")
for outcome, count in report.outcomes.items():
    print(f"   {outcome.value}: {count}")
