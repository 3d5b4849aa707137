"""Authentication and identity provider protocols."""

from dataclasses import dataclass
from typing import Optional, Protocol

from domain.entities.identity import Identity


@dataclass
class AuthSession:
    """A signed-in session issued by the identity provider."""

    access_token: str
    user: Identity
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"


@dataclass
class SignUpResult:
    """Outcome of registering new credentials.

    ``session`` is None when the provider requires email confirmation before
    the first sign-in.
    """

    user: Identity
    session: AuthSession | None = None


class IAuthProvider(Protocol):
    """Protocol for verifying access tokens."""

    async def validate_token(self, token: str) -> Optional[Identity]:
        """
        Validate an access token.

        Args:
            token: The bearer token to validate

        Returns:
            Identity if valid, None if invalid
        """
        ...

    def create_token(self, user: Identity) -> str:
        """
        Create an access token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...


class IIdentityProvider(Protocol):
    """Protocol for the hosted service that owns credentials and sessions."""

    async def sign_up(self, email: str, password: str, username: str) -> SignUpResult:
        """Register credentials with the username attached as user metadata."""
        ...

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""
        ...

    async def sign_out(self, access_token: str) -> None:
        """Invalidate the session behind ``access_token``."""
        ...
