"""Pytest fixtures shared by the API, service and client tests."""

import pytest
from fastapi.testclient import TestClient

from pitchscore.config import Settings
from pitchscore.database import build_engine, build_sessionmaker, create_tables
from pitchscore.main import create_app
from pitchscore.services.security import build_password_hasher

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only"


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Settings pointing at a throw-away SQLite file, with cheap argon2 parameters."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'pitchscore-test.db'}",
        JWT_SECRET=TEST_JWT_SECRET,
        ARGON2_TIME_COST=1,
        ARGON2_MEMORY_COST=1024,
        ARGON2_PARALLELISM=1,
    )


@pytest.fixture
def password_hasher(api_settings):
    return build_password_hasher(api_settings)


@pytest.fixture
def test_client(api_settings):
    """Create a test client; entering it runs the lifespan, which creates the tables."""
    app = create_app(api_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def db_session(api_settings):
    """Create a database session on its own engine for service-level tests."""
    engine = build_engine(api_settings)
    await create_tables(engine)
    session_maker = build_sessionmaker(engine)

    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def registered_user_data():
    """Test user registration data."""
    return {
        "email": "a@x.com",
        "password": "password1",
    }


@pytest.fixture
def register(test_client):
    """Register an account and return the response body ({id, email, token})."""

    def _register(email: str = "a@x.com", password: str = "password1") -> dict:
        response = test_client.post(
            "/api/register", json={"email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def bearer():
    """Build an Authorization header for a token."""

    def _bearer(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _bearer
