"""
Integration tests for UserRepository against SQLite
"""
import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.user_repository import UserRepository
from tests.fixtures.users import create_test_user


@pytest.mark.asyncio
async def test_lock_by_id_returns_user(db_session: AsyncSession):
    user = await create_test_user(db_session)

    locked = await UserRepository(db_session).lock_by_id(user.id)

    assert locked is not None
    assert locked.id == user.id
    assert await UserRepository(db_session).lock_by_id(user.id + 100) is None
    await db_session.rollback()
