"""
Unit tests for SetNewPasswordUseCase
"""
import pytest

from src.app.services.password_service import compare_passwords, hash_password
from src.app.use_cases.auth.set_new_password_use_case import SetNewPasswordUseCase
from src.domain.entities import User


async def make_user(password: str, reset_required: bool) -> User:
    return User(
        id=8,
        username="mgr",
        email="mgr@example.com",
        name="Manager",
        password=await hash_password(password),
        password_reset_required=reset_required,
    )


@pytest.mark.asyncio
async def test_first_login_skips_current_password(mock_uow):
    user = await make_user("Tmp4abcdef", reset_required=True)
    mock_uow.users.get_by_id.return_value = user

    result = await SetNewPasswordUseCase(mock_uow).execute(8, None, "Brand-New1")

    assert result.is_ok()
    assert await compare_passwords("Brand-New1", user.password)
    assert user.password_reset_required is False
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_current_password_required_otherwise(mock_uow):
    mock_uow.users.get_by_id.return_value = await make_user("Old-Pass1", reset_required=False)

    result = await SetNewPasswordUseCase(mock_uow).execute(8, None, "Brand-New1")

    assert result.is_err()
    assert result.error.code == "CURRENT_PASSWORD_REQUIRED"


@pytest.mark.asyncio
async def test_incorrect_current_password(mock_uow):
    mock_uow.users.get_by_id.return_value = await make_user("Old-Pass1", reset_required=False)

    result = await SetNewPasswordUseCase(mock_uow).execute(8, "Not-It-1", "Brand-New1")

    assert result.is_err()
    assert result.error.code == "INVALID_CURRENT_PASSWORD"
    mock_uow.users.update.assert_not_called()


@pytest.mark.asyncio
async def test_change_with_current_password(mock_uow):
    user = await make_user("Old-Pass1", reset_required=False)
    mock_uow.users.get_by_id.return_value = user

    result = await SetNewPasswordUseCase(mock_uow).execute(8, "Old-Pass1", "Brand-New1")

    assert result.is_ok()
    assert await compare_passwords("Brand-New1", user.password)
    assert not await compare_passwords("Old-Pass1", user.password)


@pytest.mark.asyncio
async def test_weak_new_password(mock_uow):
    mock_uow.users.get_by_id.return_value = await make_user("Tmp4abcdef", reset_required=True)

    result = await SetNewPasswordUseCase(mock_uow).execute(8, None, "alllowercase1!")

    assert result.is_err()
    assert result.error.code == "WEAK_PASSWORD"
    assert result.error.message == "Password must include at least one uppercase letter"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_user(mock_uow):
    result = await SetNewPasswordUseCase(mock_uow).execute(404, None, "Brand-New1")

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
