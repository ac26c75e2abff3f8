import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.notifier import RecordingNotifier


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.lock_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_valid_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.delete_by_user_id = AsyncMock(return_value=0)
    uow.password_reset_tokens.delete_by_token_hash = AsyncMock(return_value=0)
    uow.password_reset_tokens.delete_expired = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def notifier():
    return RecordingNotifier()
