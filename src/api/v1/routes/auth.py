"""Account API routes: sign-up, sign-in, sign-out, current session."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import AccessToken, CurrentUser, OptionalUser
from api.v1.dependencies import get_account_service
from api.v1.schemas.auth import (
    CurrentSessionResponse,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
)
from api.v1.schemas.common import ErrorResponse
from core.rate_limit import AUTH_LIMIT, READ_LIMIT, limiter
from domain.services.account_service import AccountService
from infrastructure.auth.provider import AuthSession

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        token_type=session.token_type,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        user_id=session.user.id,
    )


@router.post(
    "/signup",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        201: {"description": "Account and profile created"},
        409: {"model": ErrorResponse, "description": "Username is already taken"},
        422: {"model": ErrorResponse, "description": "Invalid username or rejected credentials"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def sign_up(
    request: Request,
    body: SignUpRequest,
    service: AccountService = Depends(get_account_service),
) -> SignUpResponse:
    """Register credentials and claim a username for the public profile."""
    profile, result = await service.sign_up(
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return SignUpResponse(
        user_id=profile.id,
        username=profile.username,
        email=profile.email,
        session=_session_response(result.session) if result.session else None,
    )


@router.post(
    "/signin",
    response_model=SessionResponse,
    summary="Sign in",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def sign_in(
    request: Request,
    body: SignInRequest,
    service: AccountService = Depends(get_account_service),
) -> SessionResponse:
    """Exchange email and password for an access token."""
    session = await service.sign_in(body.email, body.password)
    return _session_response(session)


@router.post(
    "/signout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def sign_out(
    request: Request,
    user: CurrentUser,
    token: AccessToken,
    service: AccountService = Depends(get_account_service),
) -> None:
    """Invalidate the current session at the identity provider."""
    await service.sign_out(user, token)
    return None


@router.get(
    "/session",
    response_model=CurrentSessionResponse,
    summary="Get the current user",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def current_session(request: Request, user: OptionalUser) -> CurrentSessionResponse:
    """Report whether the request carries a valid session, and whose."""
    if user is None:
        return CurrentSessionResponse(authenticated=False)
    return CurrentSessionResponse(
        authenticated=True,
        user_id=user.id,
        email=user.email,
        username=user.username,
    )
