"""
Integration tests for the password reset flow

request-reset -> verify-reset-token -> reset-password
"""
import re

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.notifier import NotificationError
from src.app.services.password_service import compare_passwords
from src.app.use_cases.auth.request_password_reset_use_case import RESET_REQUESTED_MESSAGE
from src.domain.entities import PasswordResetToken
from tests.fixtures.users import create_test_user


def token_from(message) -> str:
    match = re.search(r"reset-password\?token=([0-9a-f]{64})", message.text)
    assert match, message.text
    return match.group(1)


@pytest.mark.asyncio
async def test_full_reset_flow(client: AsyncClient, db_session: AsyncSession, notifier):
    user = await create_test_user(db_session, password_reset_required=True)

    response = await client.post("/auth/request-reset", json={"email": "client1@example.com"})
    assert response.status_code == 200
    assert response.json() == {"message": RESET_REQUESTED_MESSAGE}
    assert len(notifier.sent) == 1
    token = token_from(notifier.sent[0])

    response = await client.get(f"/auth/verify-reset-token/{token}")
    assert response.status_code == 200
    assert response.json() == {"valid": True}

    response = await client.post("/auth/reset-password", json={"token": token, "password": "Fresh-Pass9"})
    assert response.status_code == 200
    assert response.json() == {"message": "Password reset successful"}

    await db_session.refresh(user)
    assert await compare_passwords("Fresh-Pass9", user.password)
    assert user.password_reset_required is False

    # Token is single-use
    result = await db_session.exec(select(PasswordResetToken))
    assert result.all() == []
    response = await client.post("/auth/reset-password", json={"token": token, "password": "Other-Pass9"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"

    login = await client.post("/auth/login", json={"username": "client1", "password": "Fresh-Pass9"})
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_unknown_email_gets_identical_response(client: AsyncClient, db_session: AsyncSession, notifier):
    await create_test_user(db_session)

    known = await client.post("/auth/request-reset", json={"email": "client1@example.com"})
    unknown = await client.post("/auth/request-reset", json={"email": "nobody@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_delivery_failure_is_not_visible_to_caller(client: AsyncClient, db_session: AsyncSession, notifier):
    await create_test_user(db_session)
    notifier.error = NotificationError("all transports down")

    known = await client.post("/auth/request-reset", json={"email": "client1@example.com"})
    unknown = await client.post("/auth/request-reset", json={"email": "nobody@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": RESET_REQUESTED_MESSAGE}
    result = await db_session.exec(select(PasswordResetToken))
    assert len(result.all()) == 1

@pytest.mark.asyncio
async def test_new_request_supersedes_old_link(client: AsyncClient, db_session: AsyncSession, notifier):
    await create_test_user(db_session)

    await client.post("/auth/request-reset", json={"email": "client1@example.com"})
    await client.post("/auth/request-reset", json={"email": "client1@example.com"})
    first, second = (token_from(message) for message in notifier.sent)

    assert (await client.get(f"/auth/verify-reset-token/{first}")).status_code == 400
    assert (await client.get(f"/auth/verify-reset-token/{second}")).status_code == 200


@pytest.mark.asyncio
async def test_invalid_token_rejected(client: AsyncClient):
    response = await client.get("/auth/verify-reset-token/deadbeef")

    assert response.status_code == 400
    assert response.json()["error"] == {"code": "INVALID_TOKEN", "message": "Invalid or expired token"}


@pytest.mark.asyncio
async def test_weak_password_reports_first_rule(client: AsyncClient, db_session: AsyncSession, notifier):
    await create_test_user(db_session)
    await client.post("/auth/request-reset", json={"email": "client1@example.com"})
    token = token_from(notifier.sent[0])

    response = await client.post("/auth/reset-password", json={"token": token, "password": "short"})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "WEAK_PASSWORD",
        "message": "Password must be at least 8 characters long",
    }
    # Token still usable after a rejected attempt
    assert (await client.get(f"/auth/verify-reset-token/{token}")).status_code == 200
