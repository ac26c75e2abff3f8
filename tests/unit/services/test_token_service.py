"""
Unit tests for PasswordResetTokenService

Repository is mocked; behaviour against a real database is covered in
tests/integration/test_token_lifecycle.py.
"""
import hashlib
import re
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.token_service import PasswordResetTokenService, hash_token
from src.domain.base import utcnow
from src.domain.entities import PasswordResetToken


@pytest.fixture
def token_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda token: token)
    repo.get_valid_by_token_hash = AsyncMock(return_value=None)
    repo.delete_by_user_id = AsyncMock(return_value=0)
    repo.delete_by_token_hash = AsyncMock(return_value=0)
    repo.delete_expired = AsyncMock(return_value=0)
    return repo


def test_hash_token_is_sha256_hex():
    assert hash_token("abc") == hashlib.sha256(b"abc").hexdigest()


def test_default_validity_period_is_60_minutes(token_repo):
    assert PasswordResetTokenService(token_repo).get_token_validity_period() == 60
    assert PasswordResetTokenService(token_repo, 15).get_token_validity_period() == 15


@pytest.mark.asyncio
async def test_create_stores_only_hash(token_repo):
    service = PasswordResetTokenService(token_repo)

    token = await service.create_password_reset_token(5)

    assert re.fullmatch(r"[0-9a-f]{64}", token)
    stored = token_repo.create.call_args.args[0]
    assert isinstance(stored, PasswordResetToken)
    assert stored.user_id == 5
    assert stored.token_hash == hashlib.sha256(token.encode()).hexdigest()
    assert stored.token_hash != token


@pytest.mark.asyncio
async def test_create_sets_expiry_from_validity_period(token_repo):
    service = PasswordResetTokenService(token_repo, validity_minutes=30)

    await service.create_password_reset_token(5)

    stored = token_repo.create.call_args.args[0]
    assert stored.expires_at - stored.created_at == timedelta(minutes=30)


@pytest.mark.asyncio
async def test_create_deletes_previous_tokens_first(token_repo):
    calls = []
    token_repo.delete_by_user_id.side_effect = lambda user_id: calls.append(("delete", user_id)) or 1
    token_repo.create.side_effect = lambda token: calls.append(("create", token.user_id)) or token
    service = PasswordResetTokenService(token_repo)

    await service.create_password_reset_token(5)

    assert calls == [("delete", 5), ("create", 5)]


@pytest.mark.asyncio
async def test_create_returns_distinct_tokens(token_repo):
    service = PasswordResetTokenService(token_repo)

    first = await service.create_password_reset_token(5)
    second = await service.create_password_reset_token(5)

    assert first != second


@pytest.mark.asyncio
async def test_verify_returns_user_id_for_valid_token(token_repo):
    token_repo.get_valid_by_token_hash.return_value = PasswordResetToken(
        user_id=7,
        token_hash=hash_token("plain"),
        expires_at=utcnow() + timedelta(minutes=10),
    )
    service = PasswordResetTokenService(token_repo)

    assert await service.verify_password_reset_token("plain") == 7

    token_hash, now = token_repo.get_valid_by_token_hash.call_args.args
    assert token_hash == hash_token("plain")
    assert abs(utcnow() - now) < timedelta(seconds=5)


@pytest.mark.asyncio
async def test_verify_returns_none_when_no_valid_row(token_repo):
    service = PasswordResetTokenService(token_repo)

    assert await service.verify_password_reset_token("unknown") is None


@pytest.mark.asyncio
async def test_invalidate_deletes_by_hash(token_repo):
    token_repo.delete_by_token_hash.side_effect = [1, 0]
    service = PasswordResetTokenService(token_repo)

    assert await service.invalidate_token("plain") == 1
    assert await service.invalidate_token("plain") == 0

    assert token_repo.delete_by_token_hash.await_count == 2
    token_repo.delete_by_token_hash.assert_awaited_with(hash_token("plain"))


@pytest.mark.asyncio
async def test_cleanup_returns_deleted_count(token_repo):
    token_repo.delete_expired.return_value = 3
    service = PasswordResetTokenService(token_repo)

    assert await service.cleanup_expired_tokens() == 3
    token_repo.delete_expired.assert_awaited_once()
