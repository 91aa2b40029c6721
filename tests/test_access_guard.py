"""
Tests for the bearer-token access guard and optional role enforcement.
"""
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.auth.models import UserRole
from app.auth.users import build_jwt_strategy, token_from_header
from app.core.database import Database
from app.core.errors import InvalidTokenError
from app.food.models import FoodDonation
from app.main import create_application

pytestmark = pytest.mark.asyncio

PROTECTED_ROUTES = [
    ("GET", "/api/donations"),
    ("POST", "/api/donations"),
    ("GET", "/api/requests"),
    ("POST", "/api/requests"),
    ("POST", "/api/volunteers"),
]


class TestMissingToken:

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    async def test_no_authorization_header(self, client, method, path):
        response = await client.request(method, path, json={})

        assert response.status_code == 401
        assert response.json() == {"message": "Access token required"}

    @pytest.mark.parametrize("header", ["Bearer", "abc.def.ghi"])
    async def test_header_without_second_word(self, client, header):
        response = await client.get("/api/donations", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json() == {"message": "Access token required"}


class TestInvalidToken:

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    async def test_malformed_token(self, client, method, path):
        response = await client.request(
            method, path, json={}, headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Invalid or expired token"}

    @pytest.mark.parametrize("header", ["Basic abc", "Token abc.def.ghi"])
    async def test_token_under_other_scheme(self, client, header):
        response = await client.get("/api/donations", headers={"Authorization": header})

        assert response.status_code == 403
        assert response.json() == {"message": "Invalid or expired token"}

    async def test_valid_token_under_other_scheme_is_still_verified(
        self, client, donor
    ):
        response = await client.get(
            "/api/donations", headers={"Authorization": f"Token {donor['token']}"}
        )

        assert response.status_code == 200

    async def test_expired_token(self, client, donor, test_settings):
        expired = test_settings.model_copy(update={"access_token_expire_minutes": -1})
        user = SimpleNamespace(
            id=donor["user"]["id"], email=donor["user"]["email"], role=UserRole.DONOR
        )
        token = await build_jwt_strategy(expired).write_token(user)

        response = await client.get("/api/donations", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    async def test_token_signed_with_another_key(self, client, donor, test_settings):
        forged = test_settings.model_copy(update={"secret_key": "someone-elses-key"})
        user = SimpleNamespace(
            id=donor["user"]["id"], email=donor["user"]["email"], role=UserRole.DONOR
        )
        token = await build_jwt_strategy(forged).write_token(user)

        response = await client.get("/api/donations", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403


class TestValidToken:

    async def test_request_proceeds_with_token_identity(
        self, client, donor, bearer, donation_data, session_factory
    ):
        response = await client.post("/api/donations", json=donation_data, headers=bearer(donor))

        assert response.status_code == 201
        async with session_factory() as session:
            donation = await session.get(FoodDonation, response.json()["donationId"])
        assert donation.donor_id == donor["user"]["id"]

    async def test_any_role_may_call_any_operation_by_default(
        self, client, receiver, bearer, donation_data
    ):
        response = await client.post("/api/donations", json=donation_data, headers=bearer(receiver))

        assert response.status_code == 201


class TestTokenFromHeader:

    @pytest.mark.parametrize(
        "header,expected",
        [
            (None, None),
            ("", None),
            ("Bearer", None),
            ("Bearer  abc", None),
            ("Bearer abc", "abc"),
            ("Basic abc", "abc"),
            ("Bearer abc extra", "abc"),
        ],
    )
    async def test_second_word_is_the_token(self, header, expected):
        assert token_from_header(header) == expected


class TestClaimsStrategy:

    async def test_round_trip_claims(self, test_settings):
        strategy = build_jwt_strategy(test_settings)
        user = SimpleNamespace(id=7, email="sam@foodrescue.org", role=UserRole.VOLUNTEER)

        claims = strategy.read_claims(await strategy.write_token(user))

        assert (claims.id, claims.email, claims.role) == (7, "sam@foodrescue.org", UserRole.VOLUNTEER)

    async def test_garbage_raises_invalid_token(self, test_settings):
        with pytest.raises(InvalidTokenError):
            build_jwt_strategy(test_settings).read_claims("a.b.c")


@pytest_asyncio.fixture
async def strict_client(test_settings):
    """Client for an application with role enforcement switched on."""
    settings = test_settings.model_copy(update={"enforce_roles": True})
    application = create_application(settings)
    database = Database(settings)
    await database.create_db_and_tables()
    application.state.database = database

    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as ac:
        yield ac

    await database.dispose()


class TestRoleEnforcement:

    async def test_receiver_cannot_donate(self, strict_client, receiver_data, bearer, donation_data):
        receiver = (await strict_client.post("/api/register", json=receiver_data)).json()

        response = await strict_client.post(
            "/api/donations", json=donation_data, headers=bearer(receiver)
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Insufficient role for this operation"}

    async def test_donor_can_donate_and_anyone_can_list(
        self, strict_client, donor_data, receiver_data, bearer, donation_data
    ):
        donor = (await strict_client.post("/api/register", json=donor_data)).json()
        receiver = (await strict_client.post("/api/register", json=receiver_data)).json()

        created = await strict_client.post(
            "/api/donations", json=donation_data, headers=bearer(donor)
        )
        listed = await strict_client.get("/api/donations", headers=bearer(receiver))

        assert created.status_code == 201
        assert listed.status_code == 200
        assert len(listed.json()) == 1
