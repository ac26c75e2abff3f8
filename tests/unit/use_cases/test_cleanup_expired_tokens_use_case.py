"""
Unit tests for CleanupExpiredTokensUseCase
"""
import pytest

from src.app.use_cases.admin import CleanupExpiredTokensUseCase


@pytest.mark.asyncio
async def test_cleanup_commits_and_reports_count(mock_uow):
    mock_uow.password_reset_tokens.delete_expired.return_value = 4

    result = await CleanupExpiredTokensUseCase(mock_uow).execute()

    assert result.is_ok()
    assert result.value.deleted == 4
    mock_uow.password_reset_tokens.delete_expired.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()
