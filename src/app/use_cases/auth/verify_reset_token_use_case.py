"""
Verify Reset Token Use Case

Checks a reset link before the reset form is shown.
"""

from libs.result import Error, Result, Return
from src.app.services.token_service import PasswordResetTokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import VerifyResetTokenResponse


class VerifyResetTokenUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[VerifyResetTokenResponse]:
        async with self.uow:
            tokens = PasswordResetTokenService(self.uow.password_reset_tokens)
            user_id = await tokens.verify_password_reset_token(token)

            if user_id is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

            return Return.ok(VerifyResetTokenResponse(valid=True))
