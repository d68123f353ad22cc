"""
Pytest fixtures for gitsync testing.

Provides a mock catalog client, sample descriptors, and throwaway git
"remotes" on the local filesystem that the reconciler can clone from.
"""

import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generator

import pytest

from gitsync.testing.mock import MockGitHubClient
from gitsync.types.repos import Repository, User

_GIT_ENV = {
    "GIT_AUTHOR_NAME": "gitsync tests",
    "GIT_AUTHOR_EMAIL": "tests@example.invalid",
    "GIT_COMMITTER_NAME": "gitsync tests",
    "GIT_COMMITTER_EMAIL": "tests@example.invalid",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def _git(*args: str, cwd: Path | None = None) -> str:
    env = {**os.environ, **_GIT_ENV}
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


class GitRemote:
    """
    A bare repository standing in for a hosted remote, plus a scratch
    working copy used to push new commits to it.

    The bare repository lives at ``<host>/<full_name>.git`` so a Reconciler
    built with ``git_host=str(host)`` clones it like a hosted repository.
    """

    def __init__(self, host: Path, full_name: str, default_branch: str = "main") -> None:
        self.host = host
        self.full_name = full_name
        self.default_branch = default_branch
        self.bare_path = host / f"{full_name}.git"
        self.work_path = host / "_work" / full_name

        self.bare_path.parent.mkdir(parents=True, exist_ok=True)
        _git("init", "--quiet", "--bare", f"--initial-branch={default_branch}", str(self.bare_path))
        self.work_path.parent.mkdir(parents=True, exist_ok=True)
        _git("clone", "--quiet", str(self.bare_path), str(self.work_path))
        _git("symbolic-ref", "HEAD", f"refs/heads/{default_branch}", cwd=self.work_path)

    def commit(self, files: dict[str, str], message: str = "update") -> str:
        """Write ``files``, commit them, push, and return the new tip."""
        for name, content in files.items():
            path = self.work_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        _git("add", "--all", cwd=self.work_path)
        _git("commit", "--quiet", "-m", message, cwd=self.work_path)
        _git("push", "--quiet", "origin", f"HEAD:{self.default_branch}", cwd=self.work_path)
        return self.tip()

    def delete(self, name: str, message: str = "delete") -> str:
        """Remove a tracked file, commit, push, and return the new tip."""
        _git("rm", "--quiet", name, cwd=self.work_path)
        _git("commit", "--quiet", "-m", message, cwd=self.work_path)
        _git("push", "--quiet", "origin", f"HEAD:{self.default_branch}", cwd=self.work_path)
        return self.tip()

    def rewrite(self, files: dict[str, str], message: str = "rewrite") -> str:
        """Replace the tip with a sibling commit and force-push it."""
        _git("reset", "--quiet", "--hard", "HEAD~1", cwd=self.work_path)
        for name, content in files.items():
            (self.work_path / name).write_text(content)
        _git("add", "--all", cwd=self.work_path)
        _git("commit", "--quiet", "-m", message, cwd=self.work_path)
        _git("push", "--quiet", "--force", "origin", f"HEAD:{self.default_branch}", cwd=self.work_path)
        return self.tip()

    def tip(self) -> str:
        """Object id of the default branch in the bare repository."""
        return _git("rev-parse", f"refs/heads/{self.default_branch}", cwd=self.bare_path)

    def descriptor(self, **kwargs: Any) -> Repository:
        """Build a Repository describing this remote."""
        owner, _, name = self.full_name.partition("/")
        defaults: dict[str, Any] = {
            "default_branch": self.default_branch,
            "clone_url": str(self.bare_path),
        }
        defaults.update(kwargs)
        return create_mock_repository(name=name, owner=owner, **defaults)


def local_git(path: Path, *args: str) -> str:
    """Run git in a local copy with the test identity and return stdout."""
    return _git(*args, cwd=path)


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockGitHubClient, None, None]:
    """
    Provide a MockGitHubClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.repos.configure_list(response=[create_mock_repository()])
            result = my_function(mock_client)
            assert mock_client.was_called("repos.list")
        ```
    """
    client = MockGitHubClient(login="test-user")
    yield client
    client.reset()


@pytest.fixture
def sample_user() -> User:
    """Provide a sample identity."""
    return User(login="test-user", name="Test User", email="test@example.com")


@pytest.fixture
def sample_repository() -> Repository:
    """Provide a sample public repository."""
    return create_mock_repository()


# ============================================================================
# Git Fixtures
# ============================================================================


@pytest.fixture
def git_host(tmp_path: Path) -> Path:
    """Directory acting as the git host; skips when git is unavailable."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    host = tmp_path / "host"
    host.mkdir()
    return host


@pytest.fixture
def git_remote(git_host: Path) -> Callable[..., GitRemote]:
    """
    Factory creating bare remotes under ``git_host``.

    Example:
        ```python
        def test_clone(git_remote, git_host, tmp_path):
            remote = git_remote("owner/foo")
            remote.commit({"README": "hello"})
        ```
    """
    def make(full_name: str = "test-user/test-repo", default_branch: str = "main") -> GitRemote:
        return GitRemote(git_host, full_name, default_branch)

    return make


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_repository(
    name: str = "test-repo",
    owner: str = "test-user",
    **kwargs: Any,
) -> Repository:
    """
    Create a Repository with customizable fields.

    Args:
        name: Repository short name
        owner: Owner login
        **kwargs: Additional fields to override

    Returns:
        Repository object
    """
    full_name = f"{owner}/{name}"
    defaults: dict[str, Any] = {
        "id": abs(hash(full_name)) % 10_000_000,
        "full_name": full_name,
        "clone_url": f"https://github.com/{full_name}.git",
        "ssh_url": f"git@github.com:{full_name}.git",
        "private": False,
        "default_branch": "main",
        "updated_at": "2024-01-15T10:30:00Z",
        "size": 0,
    }
    defaults.update(kwargs)
    return Repository(name=name, **defaults)


def repository_payload(repo: Repository) -> dict[str, Any]:
    """Render a Repository the way ``GET /user/repos`` returns it."""
    return {
        "id": repo.id,
        "name": repo.name,
        "full_name": repo.full_name,
        "clone_url": repo.clone_url,
        "ssh_url": repo.ssh_url,
        "private": repo.private,
        "default_branch": repo.default_branch,
        "updated_at": repo.updated_at,
        "size": repo.size,
    }


__all__ = [
    "mock_client",
    "sample_user",
    "sample_repository",
    "git_host",
    "git_remote",
    "GitRemote",
    "local_git",
    "create_mock_repository",
    "repository_payload",
]
