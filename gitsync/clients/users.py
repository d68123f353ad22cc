"""Users resource client."""

from typing import TYPE_CHECKING, Any

from gitsync.exceptions import ApiError, AuthError
from gitsync.types.repos import User

if TYPE_CHECKING:
    from gitsync.transport import HTTPTransport


def _parse_user(data: dict[str, Any]) -> User:
    return User(
        login=data["login"],
        name=data.get("name"),
        email=data.get("email"),
    )


class UsersClient:
    """Client for identity lookups."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the users client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get_authenticated(self) -> User:
        """
        Get the identity the token acts as.

        Called before listing so a bad token fails fast.

        Returns:
            User with login and, when public, name and email

        Raises:
            AuthError: If the API does not answer with a success status
            ApiError: If the request fails or the body is not a user object
        """
        response = self.transport.get("/user")

        if not response.is_success:
            raise AuthError(
                f"GitHub rejected the token: HTTP {response.status_code}",
                status=response.status_code,
            )

        try:
            return _parse_user(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise ApiError(
                "Could not parse the authenticated user", status=response.status_code
            ) from e
