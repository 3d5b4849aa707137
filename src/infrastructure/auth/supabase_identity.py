"""Identity provider backed by the Supabase Auth (GoTrue) REST API."""

from typing import Any
from uuid import UUID

import httpx
import structlog

from core.config import settings
from core.exceptions import AuthError, ErrorCode, IdentityProviderError, ValidationError
from domain.entities.identity import Identity
from infrastructure.auth.provider import AuthSession, SignUpResult

logger = structlog.get_logger()


def _error_message(response: httpx.Response, default: str) -> str:
    """Pull a human readable message out of a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return default
    if not isinstance(body, dict):
        return default
    return str(
        body.get("msg")
        or body.get("error_description")
        or body.get("message")
        or body.get("error")
        or default
    )


def _identity_from_user(user: dict[str, Any]) -> Identity:
    metadata = user.get("user_metadata") or {}
    username = metadata.get("username")
    return Identity(
        id=UUID(user["id"]),
        email=user.get("email") or "",
        username=username.lower() if username else None,
        role=user.get("role"),
    )


def _session_from_body(body: dict[str, Any]) -> AuthSession:
    return AuthSession(
        access_token=body["access_token"],
        refresh_token=body.get("refresh_token"),
        expires_in=body.get("expires_in"),
        token_type=body.get("token_type", "bearer"),
        user=_identity_from_user(body["user"]),
    )


class SupabaseIdentityProvider:
    """Signs users up, in and out against a Supabase project.

    Every call is a single bounded HTTP request; failures are surfaced to the
    caller and never retried.
    """

    def __init__(
        self,
        auth_url: str = settings.supabase_auth_url,
        anon_key: str = settings.supabase_anon_key,
        timeout: float = settings.auth_request_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth_url = auth_url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        self._transport = transport

    async def sign_up(self, email: str, password: str, username: str) -> SignUpResult:
        """Register credentials, attaching the username as user metadata."""
        response = await self._post(
            "/signup",
            json={"email": email, "password": password, "data": {"username": username}},
        )
        if response.is_client_error:
            raise ValidationError(
                _error_message(response, "Sign up was rejected"),
                ErrorCode.SIGNUP_REJECTED,
            )
        self._raise_for_server_error(response)

        body = response.json()
        if "access_token" in body:
            session = _session_from_body(body)
            return SignUpResult(user=session.user, session=session)
        # Email confirmation pending: GoTrue answers with the bare user
        return SignUpResult(user=_identity_from_user(body.get("user") or body))

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange email and password for a session."""
        response = await self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.is_client_error:
            raise AuthError(
                _error_message(response, "Invalid login credentials"),
                ErrorCode.INVALID_CREDENTIALS,
            )
        self._raise_for_server_error(response)
        return _session_from_body(response.json())

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        response = await self._post(
            "/logout",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code in (401, 403):
            raise AuthError("Session is no longer valid", ErrorCode.INVALID_TOKEN)
        self._raise_for_server_error(response)

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        if not self._auth_url:
            raise IdentityProviderError("Identity provider is not configured")

        request_headers = {"apikey": self._anon_key}
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(
                base_url=self._auth_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                return await client.post(path, json=json, params=params, headers=request_headers)
        except httpx.HTTPError as e:
            logger.error("identity_provider_unreachable", path=path, error=str(e))
            raise IdentityProviderError() from e

    @staticmethod
    def _raise_for_server_error(response: httpx.Response) -> None:
        if response.is_server_error:
            logger.error(
                "identity_provider_error",
                status_code=response.status_code,
                path=response.request.url.path,
            )
            raise IdentityProviderError()
