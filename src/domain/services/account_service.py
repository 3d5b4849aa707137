"""Account service: sign-up, sign-in, sign-out and the owner's profile."""

from collections.abc import Callable

import structlog

from core.exceptions import (
    AppException,
    ProfileNotFoundError,
    StoreError,
    UsernameTakenError,
)
from domain.entities.identity import Identity
from domain.entities.profile import Profile, normalize_username
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import AuthSession, IIdentityProvider, SignUpResult

logger = structlog.get_logger()


class AccountService:
    """Service layer for account lifecycle."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        identity_provider: IIdentityProvider,
    ) -> None:
        self._uow_factory = uow_factory
        self._identity = identity_provider

    async def sign_up(self, username: str, email: str, password: str) -> tuple[Profile, SignUpResult]:
        """Create credentials and the matching profile.

        The username is checked here before the identity provider is called,
        and again by the store's unique index when the profile is inserted.
        If the profile insert fails after the identity was created, the
        identity is left without a profile; that is logged, not repaired.
        """
        normalized = normalize_username(username)

        async with self._uow_factory() as uow:
            if await uow.profiles.get_by_username(normalized):
                raise UsernameTakenError(normalized)

        result = await self._identity.sign_up(email, password, normalized)

        try:
            async with self._uow_factory() as uow:
                profile = await uow.profiles.create(
                    Profile(id=result.user.id, username=normalized, email=email)
                )
                await uow.commit()
        except UsernameTakenError:
            logger.warning("orphaned_identity", user_id=str(result.user.id), reason="username_taken")
            raise
        except AppException as e:
            logger.error(
                "orphaned_identity",
                user_id=str(result.user.id),
                reason=e.error_code.value,
            )
            raise StoreError("Failed to create profile") from e

        logger.info("user_signed_up", user_id=str(profile.id), username=profile.username)
        return profile, result

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""
        session = await self._identity.sign_in(email, password)
        logger.info("user_signed_in", user_id=str(session.user.id))
        return session

    async def sign_out(self, identity: Identity, access_token: str) -> None:
        """Invalidate the caller's session."""
        await self._identity.sign_out(access_token)
        logger.info("user_signed_out", user_id=str(identity.id))

    async def get_profile(self, identity: Identity) -> Profile:
        """Get the caller's own profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(identity.id)
        if not profile:
            raise ProfileNotFoundError(identity.username or str(identity.id))
        return profile
