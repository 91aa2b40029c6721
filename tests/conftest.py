"""
Pytest configuration and fixtures for the Food Rescue API tests.
"""
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.core.database import Database
from app.main import create_application


# =============================================================================
# Test Settings
# =============================================================================

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        secret_key="test-secret-key",
        bcrypt_rounds=4,
        log_level="WARNING",
        db_host=None,
    )


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def app(test_settings):
    """Create the application with an initialised database."""
    application = create_application(test_settings)

    # ASGITransport does not run the lifespan, so mirror its startup here.
    database = Database(test_settings)
    await database.create_db_and_tables()
    application.state.database = database

    yield application

    application.dependency_overrides.clear()
    await database.dispose()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def session_factory(app):
    """Session factory for asserting on stored rows directly."""
    return app.state.database.session_factory


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def donor_data() -> dict:
    return {
        "firstName": "Dana",
        "lastName": "Baker",
        "email": "dana@springfieldbakery.com",
        "phone": "555-0100",
        "password": "loaves-and-fishes",
        "role": "donor",
    }


@pytest.fixture
def receiver_data() -> dict:
    return {
        "firstName": "Riley",
        "lastName": "Shelter",
        "email": "riley@springfieldshelter.org",
        "phone": "555-0200",
        "password": "warm-meals-4-all",
        "role": "receiver",
    }


@pytest.fixture
def volunteer_data() -> dict:
    return {
        "firstName": "Vic",
        "lastName": "Driver",
        "email": "vic@foodrescue.org",
        "phone": "555-0300",
        "password": "on-the-road",
        "role": "volunteer",
    }


@pytest.fixture
def address_data() -> dict:
    return {
        "street": "12 Market St",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
        "latitude": 39.7817,
        "longitude": -89.6501,
    }


@pytest.fixture
def donation_data(address_data) -> dict:
    return {
        "foodCategory": "bakery",
        "foodType": "bread",
        "quantity": "20 loaves",
        "description": "Day-old sourdough",
        "address": address_data,
        "availableFrom": "2026-10-20T09:00:00",
        "availableTo": "2026-10-20T17:00:00",
    }


@pytest.fixture
def request_data(address_data) -> dict:
    return {
        "foodCategory": "produce",
        "foodType": "vegetables",
        "quantity": 15,
        "description": "Evening meal service",
        "address": address_data,
        "neededBy": "2026-10-21T18:00:00",
    }


# =============================================================================
# Auth Helpers
# =============================================================================

@pytest.fixture
def register(client):
    """Register a user and return the decoded response body."""
    async def _register(user_data: dict) -> dict:
        response = await client.post("/api/register", json=user_data)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest_asyncio.fixture
async def donor(register, donor_data) -> dict:
    return await register(donor_data)


@pytest_asyncio.fixture
async def receiver(register, receiver_data) -> dict:
    return await register(receiver_data)


@pytest.fixture
def bearer():
    """Build the Authorization header for a register/login response body."""
    def _bearer(body: dict) -> dict:
        return {"Authorization": f"Bearer {body['token']}"}

    return _bearer
