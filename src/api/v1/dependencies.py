"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable
from zoneinfo import ZoneInfo

from fastapi import Depends

from api.dependencies.auth import get_identity_provider
from core.config import settings
from domain.services.account_service import AccountService
from domain.services.clock import Clock
from domain.services.goal_service import GoalService
from domain.services.profile_service import ProfileService
from infrastructure.auth.provider import IIdentityProvider
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_clock() -> Clock:
    """Clock in the configured goal timezone."""
    return Clock(tz=ZoneInfo(settings.goal_timezone))


def get_account_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork] = Depends(get_uow_factory),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
) -> AccountService:
    """Get Account service instance."""
    return AccountService(uow_factory, identity_provider)


@lru_cache
def get_goal_service() -> GoalService:
    """Get Goal service instance."""
    return GoalService(get_uow_factory(), clock=get_clock())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), clock=get_clock())
