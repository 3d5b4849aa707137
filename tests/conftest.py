"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from uuid import UUID, uuid4

# Must be set before the application modules read their settings
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SUPABASE_URL"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.exceptions import AuthError, ErrorCode, ValidationError
from domain.entities.identity import Identity
from domain.services.clock import Clock
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import AuthSession, SignUpResult
from infrastructure.database.models import Base, ProfileModel

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user for consistency
TEST_USER_ID = uuid4()
TEST_USERNAME = "tester"

# Mid-June 2026, UTC
FIXED_NOW = datetime(2026, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeIdentityProvider:
    """In-memory stand-in for the hosted identity provider."""

    def __init__(self, auth_provider: JWTAuthProvider) -> None:
        self._auth_provider = auth_provider
        self.users: dict[str, tuple[str, Identity]] = {}
        self.signed_out: list[str] = []

    async def sign_up(self, email: str, password: str, username: str) -> SignUpResult:
        if email in self.users:
            raise ValidationError("User already registered", ErrorCode.SIGNUP_REJECTED)
        user = Identity(id=uuid4(), email=email, username=username)
        self.users[email] = (password, user)
        return SignUpResult(user=user, session=self._session(user))

    async def sign_in(self, email: str, password: str) -> AuthSession:
        stored = self.users.get(email)
        if stored is None or stored[0] != password:
            raise AuthError("Invalid login credentials", ErrorCode.INVALID_CREDENTIALS)
        return self._session(stored[1])

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)

    def _session(self, user: Identity) -> AuthSession:
        return AuthSession(
            access_token=self._auth_provider.create_token(user),
            refresh_token="refresh-token",
            expires_in=3600,
            user=user,
        )


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with the schema created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def fixed_clock() -> Clock:
    """Clock frozen at FIXED_NOW."""
    return Clock(tz=timezone.utc, now=lambda: FIXED_NOW)


@pytest.fixture
def test_user() -> Identity:
    """Create a test user with fixed ID."""
    return Identity(
        id=TEST_USER_ID,
        email="test@example.com",
        username=TEST_USERNAME,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def identity_provider(auth_provider: JWTAuthProvider) -> FakeIdentityProvider:
    return FakeIdentityProvider(auth_provider)


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: Identity) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the module-level app (no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    identity_provider: FakeIdentityProvider,
    fixed_clock: Clock,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client wired to the in-memory database, the fake identity provider
    and the fixed clock. Sends no credentials by itself.
    """
    from api.dependencies.auth import get_auth_provider, get_identity_provider
    from api.v1.dependencies import (
        get_clock,
        get_goal_service,
        get_profile_service,
        get_uow_factory,
    )
    from domain.services.goal_service import GoalService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    app.dependency_overrides[get_uow_factory] = lambda: test_uow_factory
    app.dependency_overrides[get_goal_service] = lambda: GoalService(
        test_uow_factory, clock=fixed_clock
    )
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        test_uow_factory, clock=fixed_clock
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


async def _insert_profile(
    session_factory: async_sessionmaker[AsyncSession],
    user_id: UUID,
    username: str,
    email: str,
) -> None:
    async with session_factory() as session:
        session.add(ProfileModel(id=user_id, username=username, email=email))
        await session.commit()


@pytest.fixture
async def authenticated_client(
    api_client: AsyncClient,
    session_factory: async_sessionmaker[AsyncSession],
    test_user: Identity,
    auth_headers: dict[str, str],
) -> AsyncClient:
    """
    api_client plus a stored profile for the test user and a bearer token on
    every request.
    """
    await _insert_profile(session_factory, test_user.id, TEST_USERNAME, test_user.email)
    api_client.headers.update(auth_headers)
    return api_client


@pytest.fixture
def insert_profile(session_factory: async_sessionmaker[AsyncSession]):
    """Store an extra profile directly, bypassing sign-up."""

    async def _insert(username: str, email: str = "") -> UUID:
        user_id = uuid4()
        await _insert_profile(session_factory, user_id, username, email or f"{username}@example.com")
        return user_id

    return _insert
