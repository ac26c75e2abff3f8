"""
Set New Password Use Case

Password change for a signed-in user. Users flagged with
password_reset_required (temporary password) may skip the current password.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.password_service import (
    compare_passwords,
    hash_password,
    is_password_reset_required,
    validate_password_strength,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import MessageResponse


class SetNewPasswordUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: int, current_password: Optional[str], new_password: str
    ) -> Result[MessageResponse]:
        """
        Errors:
            - USER_NOT_FOUND
            - CURRENT_PASSWORD_REQUIRED: user is not in forced-reset state and gave no current password
            - INVALID_CURRENT_PASSWORD
            - WEAK_PASSWORD
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not is_password_reset_required(user):
                if not current_password:
                    return Return.err(
                        Error("CURRENT_PASSWORD_REQUIRED", "Current password is required")
                    )
                if not await compare_passwords(current_password, user.password):
                    return Return.err(
                        Error("INVALID_CURRENT_PASSWORD", "Current password is incorrect")
                    )

            strength = validate_password_strength(new_password)
            if strength.is_err():
                return Return.err(strength.error)

            user.password = await hash_password(new_password)
            user.password_reset_required = False
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(MessageResponse(message="Password updated successfully"))
