"""Shared fixtures for unit tests."""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.identity import Identity
from domain.services.clock import Clock


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.goals = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def identity(user_id: UUID) -> Identity:
    """The caller, as resolved from their access token."""
    return Identity(id=user_id, email="owner@example.com", username="owner")


@pytest.fixture
def clock() -> Clock:
    """Clock frozen in 2026."""
    return Clock(tz=timezone.utc, now=lambda: datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc))
