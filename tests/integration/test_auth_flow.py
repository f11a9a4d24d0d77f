"""Integration tests for register, login, refresh and profiles."""

from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

LoginHeaders = Callable[[dict[str, str]], Awaitable[dict[str, str]]]
NewUser = Callable[[], dict[str, str]]

pytestmark = pytest.mark.asyncio(loop_scope="session")


async def test_register_login_me(
    client: AsyncClient, login_headers: LoginHeaders, new_user: NewUser
) -> None:
    creds = new_user()
    resp = await client.post("/api/v1/auth/register", json=creds)
    assert resp.status_code == 201
    assert resp.json()["data"]["role"] == "user"

    resp = await client.post("/api/v1/auth/register", json=creds)
    assert resp.status_code == 409
    assert resp.json()["code"] == 1001

    headers = await login_headers(creds)
    me = (await client.get("/api/v1/users/me", headers=headers)).json()["data"]
    assert me["username"] == creds["username"]
    assert me["is_admin"] is False


async def test_wrong_password(
    client: AsyncClient, login_headers: LoginHeaders, new_user: NewUser
) -> None:
    creds = new_user()
    await client.post("/api/v1/auth/register", json=creds)
    resp = await client.post(
        "/api/v1/auth/login", json={"username": creds["username"], "password": "Nope12345"}
    )
    assert resp.status_code == 401
    assert resp.json()["code"] == 1003


async def test_refresh(
    client: AsyncClient, login_headers: LoginHeaders, new_user: NewUser
) -> None:
    creds = new_user()
    await client.post("/api/v1/auth/register", json=creds)
    login = (
        await client.post(
            "/api/v1/auth/login",
            json={"username": creds["username"], "password": creds["password"]},
        )
    ).json()["data"]
    resp = await client.post(
        "/api/v1/auth/refresh", json={"refresh_token": login["refresh_token"]}
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["access_token"]


async def test_profile_round_trip_and_privacy(
    client: AsyncClient, login_headers: LoginHeaders, new_user: NewUser
) -> None:
    alice = new_user()
    bob = new_user()
    alice_headers = await login_headers(alice)
    bob_headers = await login_headers(bob)

    empty = (await client.get("/api/v1/users/me/profile", headers=alice_headers)).json()
    assert empty["data"]["name"] == ""

    saved = await client.put(
        "/api/v1/users/me/profile", json={"name": "Alice"}, headers=alice_headers
    )
    assert saved.json()["data"]["name"] == "Alice"

    alice_id = saved.json()["data"]["user_id"]
    resp = await client.get(f"/api/v1/users/{alice_id}/profile", headers=bob_headers)
    assert resp.status_code == 403
    assert resp.json()["code"] == 1008
