"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthError, ErrorCode
from domain.entities.identity import Identity
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, IIdentityProvider
from infrastructure.auth.supabase_identity import SupabaseIdentityProvider

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

_auth_provider: IAuthProvider | None = None
_identity_provider: IIdentityProvider | None = None


def get_auth_provider() -> IAuthProvider:
    """Get or create the token verifier singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


def get_identity_provider() -> IIdentityProvider:
    """Get or create the identity provider singleton."""
    global _identity_provider
    if _identity_provider is None:
        _identity_provider = SupabaseIdentityProvider()
    return _identity_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> Identity:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)
    if not user:
        raise AuthError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> Identity | None:
    """
    Dependency to get the current user if authenticated.

    Returns:
        Identity if authenticated, None otherwise (no exception raised)
    """
    if not credentials:
        return None

    return await auth_provider.validate_token(credentials.credentials)


async def get_access_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
) -> str:
    """Raw bearer token, needed to revoke the session at the provider."""
    if not credentials:
        raise AuthError(message="Authorization header required")
    return credentials.credentials


# Type aliases for convenience in route handlers
CurrentUser = Annotated[Identity, Depends(get_current_user)]
OptionalUser = Annotated[Identity | None, Depends(get_optional_user)]
AccessToken = Annotated[str, Depends(get_access_token)]
