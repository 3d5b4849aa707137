"""JWT verification for Supabase-issued access tokens.

Supabase signs access tokens with ES256 (public keys published as JWKS);
older projects and the test suite use a shared HS256 secret. The username
chosen at sign-up travels in ``user_metadata``:

    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "user_metadata": {"username": "janedoe"},
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import jwt
from jose.backends import ECKey
from jose.exceptions import JOSEError

from core.config import settings
from domain.entities.identity import Identity

logger = logging.getLogger(__name__)

# kid -> JWK, shared by every provider instance in the process
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(refresh: bool = False) -> dict[str, Any]:
    """Return the provider's signing keys, fetching them on first use."""
    global _jwks_cache
    if _jwks_cache is not None and not refresh:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient(timeout=settings.auth_request_timeout_seconds) as client:
            response = await client.get(jwks_url)
            response.raise_for_status()
            keys = response.json().get("keys", [])
    except (httpx.HTTPError, ValueError):
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}

    _jwks_cache = {key["kid"]: key for key in keys if key.get("kid")}
    logger.info("Loaded %d signing keys from %s", len(_jwks_cache), jwks_url)
    return _jwks_cache


def _identity_from_claims(claims: dict[str, Any]) -> Optional[Identity]:
    user_id = claims.get("sub")
    email = claims.get("email")
    if not user_id or not email:
        return None

    metadata = claims.get("user_metadata") or {}
    username = metadata.get("username")
    try:
        return Identity(
            id=UUID(user_id),
            email=email,
            username=username.lower() if username else None,
            role=claims.get("role"),
        )
    except ValueError:
        return None


class JWTAuthProvider:
    """Verifies access tokens and, for tests, mints HS256 ones."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[Identity]:
        """
        Validate an access token and extract the caller's identity.

        Args:
            token: The JWT to validate

        Returns:
            Identity if valid, None if invalid, expired or missing claims
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                claims = await self._decode_es256(token, header.get("kid"))
            else:
                claims = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JOSEError:
            return None

        if claims is None:
            return None
        return _identity_from_claims(claims)

    async def _decode_es256(self, token: str, kid: str | None) -> Optional[dict[str, Any]]:
        if not kid:
            return None

        key_data = (await _get_jwks_keys()).get(kid)
        if key_data is None:
            # Unknown kid usually means the keys were rotated
            key_data = (await _get_jwks_keys(refresh=True)).get(kid)
        if key_data is None:
            logger.warning("No signing key for kid=%s", kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: Identity) -> str:
        """
        Create an HS256 access token shaped like a Supabase one.

        Args:
            user: The identity to encode

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": user.role or "authenticated",
            "exp": expire,
            "user_metadata": {"username": user.username},
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
