"""gitsync resource clients."""

from gitsync.clients.repos import ReposClient
from gitsync.clients.users import UsersClient

__all__ = [
    "ReposClient",
    "UsersClient",
]
