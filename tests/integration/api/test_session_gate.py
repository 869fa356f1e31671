import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/admin/dashboard"),
        ("GET", "/admin/password"),
        ("POST", "/admin/password"),
        ("POST", "/admin/logout"),
        ("GET", "/admin/newsletters"),
        ("POST", "/admin/newsletters"),
    ],
)
async def test_anonymous_user_is_redirected_to_login(client: AsyncClient, method, path):
    response = await client.request(method, path)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"

    form = await client.get("/login")
    assert form.json()["flash_messages"] == [
        {"level": "error", "content": "You must be logged in to access this page."}
    ]


@pytest.mark.asyncio
async def test_tampered_session_cookie_is_anonymous(client: AsyncClient, create_user, login):
    await create_user()
    await login()
    cookie = client.cookies.get("session")
    tampered = cookie[:-2] + ("AA" if not cookie.endswith("AA") else "BB")

    # An explicit Cookie header replaces the client cookie jar
    response = await client.get("/admin/dashboard", headers={"Cookie": f"session={tampered}"})

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_logout_revokes_session(client: AsyncClient, create_user, login):
    await create_user()
    await login()
    session_cookie = client.cookies.get("session")

    response = await client.post("/admin/logout")

    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    form = await client.get("/login")
    assert form.json()["flash_messages"] == [
        {"level": "info", "content": "You have successfully logged out."}
    ]

    # Replaying the old cookie does not work: the session row is revoked
    dashboard = await client.get(
        "/admin/dashboard", headers={"Cookie": f"session={session_cookie}"}
    )
    assert dashboard.status_code == 303
    assert dashboard.headers["location"] == "/login"
