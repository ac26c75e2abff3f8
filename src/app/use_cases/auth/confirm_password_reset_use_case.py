"""
Confirm Password Reset Use Case

Sets a new password from a valid reset token.
"""

from libs.result import Error, Result, Return
from src.app.services.password_service import hash_password, validate_password_strength
from src.app.services.token_service import PasswordResetTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import MessageResponse


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password must pass the strength rules (first failing rule reported)
    - Unknown and expired tokens are both reported as INVALID_TOKEN
    - Password is re-hashed with a fresh salt
    - password_reset_required is cleared
    - Token is deleted in the same transaction as the password change; if it
      is already gone, nothing is committed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Errors:
            - WEAK_PASSWORD: Password does not meet strength rules
            - INVALID_TOKEN: Token not found or expired
            - USER_NOT_FOUND: Token owner no longer exists
        """
        async with self.uow:
            strength = validate_password_strength(new_password)
            if strength.is_err():
                return Return.err(strength.error)

            tokens = PasswordResetTokenService(self.uow.password_reset_tokens)
            user_id = await tokens.verify_password_reset_token(token)
            if user_id is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            # Consume the token first; a concurrent confirm that deleted it wins
            if await tokens.invalidate_token(token) == 0:
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

            user.password = await hash_password(new_password)
            user.password_reset_required = False
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(MessageResponse(message="Password reset successful"))
