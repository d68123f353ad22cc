"""Repository and identity data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class User:
    """The identity a token acts as."""

    login: str
    name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class Repository:
    """Remote metadata for one repository, fixed for a sync pass."""

    id: int
    name: str  # used verbatim as the local directory name
    full_name: str  # "owner/name"
    clone_url: str
    ssh_url: str
    private: bool
    default_branch: str
    updated_at: str
    size: int


@dataclass(frozen=True)
class SyncTarget:
    """A repository paired with the local path it is mirrored to."""

    repository: Repository
    path: Path

    @classmethod
    def for_root(cls, repository: Repository, sync_root: Path) -> "SyncTarget":
        return cls(repository=repository, path=Path(sync_root) / repository.name)
