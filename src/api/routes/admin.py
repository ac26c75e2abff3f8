"""
Admin API Routes - System Administration Endpoints

These endpoints are for schedulers and internal service integrations.
Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import CleanupExpiredTokensUseCase, CleanupTokensResponse
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/tokens/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupTokensResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_expired_tokens(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Cleanup Expired Tokens

    Deletes every password reset token past its expiry. Intended for
    cron-style triggers in addition to the in-process periodic sweep.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = CleanupExpiredTokensUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
