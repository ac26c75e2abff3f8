"""
Use Case: Cleanup Expired Tokens

Removes password reset tokens past their expiry. Run periodically by the
application lifespan task, or on demand through the admin API.
"""

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.token_service import PasswordResetTokenService
from src.app.services.unit_of_work import UnitOfWork


class CleanupTokensResponse(BaseModel):
    """Response DTO for CleanupExpiredTokensUseCase"""

    deleted: int


class CleanupExpiredTokensUseCase:
    """
    Delete expired password reset tokens of every user.

    Unexpired tokens are never touched, so this is safe to run while
    resets are being requested and confirmed.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[CleanupTokensResponse]:
        async with self.uow:
            tokens = PasswordResetTokenService(self.uow.password_reset_tokens)
            deleted = await tokens.cleanup_expired_tokens()
            await self.uow.commit()

            return Return.ok(CleanupTokensResponse(deleted=deleted))
