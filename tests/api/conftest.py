"""Fixtures for HTTP tests: fresh database per test and an ASGI client."""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.database.base import Base
from app.core.database.engine import engine, load_models
from app.main import app


@pytest_asyncio.fixture(autouse=True)
async def database():
    load_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def sign_up(client):
    """Create an account and return its bearer headers."""
    async def _sign_up(name, email, password="secret123"):
        response = await client.post("/users", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text

        response = await client.post("/sessions/password", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _sign_up


@pytest_asyncio.fixture
async def owner(sign_up):
    return await sign_up("Owner", "owner@acme.com")


@pytest_asyncio.fixture
async def organization(client, owner):
    response = await client.post("/organizations/", json={"name": "Acme Inc"}, headers=owner)
    assert response.status_code == 201, response.text
    return "acme-inc"


@pytest.fixture
def join(client, sign_up, owner, organization):
    """Sign up a user and bring them into the organization through an accepted invite."""
    async def _join(name, email, role):
        headers = await sign_up(name, email)

        response = await client.post(
            f"/organizations/{organization}/invites",
            json={"email": email, "role": role},
            headers=owner,
        )
        assert response.status_code == 201, response.text
        invite_id = response.json()["invite_id"]

        response = await client.post(f"/invites/{invite_id}/accept", headers=headers)
        assert response.status_code == 204, response.text
        return headers

    return _join


@pytest.fixture
def user_id(client):
    """Resolve the account id behind a set of bearer headers."""
    async def _user_id(headers):
        response = await client.get("/users/me", headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["id"]

    return _user_id
