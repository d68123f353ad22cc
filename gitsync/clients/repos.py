"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from gitsync.exceptions import ApiError
from gitsync.logging import get_logger
from gitsync.types.repos import Repository

if TYPE_CHECKING:
    from gitsync.transport import HTTPTransport

logger = get_logger("http")

PER_PAGE = 100
DEFAULT_MAX_PAGES = 1000


def _parse_repository(data: dict[str, Any]) -> Repository:
    """Parse one entry of a ``/user/repos`` page; every field is required."""
    return Repository(
        id=int(data["id"]),
        name=data["name"],
        full_name=data["full_name"],
        clone_url=data["clone_url"],
        ssh_url=data["ssh_url"],
        private=bool(data["private"]),
        default_branch=data["default_branch"],
        updated_at=data["updated_at"],
        size=int(data["size"]),
    )



class ReposClient:
    """Client for listing the repositories a token can see."""

    def __init__(
        self,
        transport: "HTTPTransport",
        per_page: int = PER_PAGE,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
            per_page: Page size requested from the API
            max_pages: Upper bound on pages fetched by a single listing
        """
        self.transport = transport
        self.per_page = per_page
        self.max_pages = max_pages

    def list_page(self, page: int) -> list[Repository]:
        """
        Fetch one page of repositories, most recently updated first.

        Args:
            page: 1-based page number

        Returns:
            The unfiltered repositories on that page

        Raises:
            ApiError: On a non-success status or a malformed body
        """
        params = {
            "page": page,
            "per_page": self.per_page,
            "sort": "updated",
            "direction": "desc",
        }
        response = self.transport.get("/user/repos", params=params)

        if not response.is_success:
            raise ApiError(
                f"Listing repositories failed on page {page}: HTTP {response.status_code}",
                status=response.status_code,
            )

        try:
            items = response.json()
            if not isinstance(items, list):
                raise TypeError(f"expected a list, got {type(items).__name__}")
            return [_parse_repository(item) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            raise ApiError(
                f"Could not parse repository page {page}", status=response.status_code
            ) from e

    def list(self, include_private: bool = False) -> list[Repository]:
        """
        List every repository visible to the token.

        Pages until a short or empty page. Any failing page aborts the whole
        listing; nothing accumulated so far is returned.

        Args:
            include_private: Keep private repositories in the result

        Returns:
            Repositories in API order, filtered by visibility

        Raises:
            ApiError: If a page fails or ``max_pages`` is reached
        """
        repos: list[Repository] = []

        for page in range(1, self.max_pages + 1):
            batch = self.list_page(page)
            logger.debug("page %d: %d repositories", page, len(batch))

            if not batch:
                break

            repos.extend(r for r in batch if not r.private or include_private)

            if len(batch) < self.per_page:
                break
        else:
            raise ApiError(
                f"Listing did not terminate after {self.max_pages} pages",
                code="PAGE_LIMIT_EXCEEDED",
            )

        return repos
