"""
Login Use Case

Checks username and password and issues a JWT access token.
"""

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.password_service import (
    DUMMY_PASSWORD_HASH,
    compare_passwords,
    is_password_reset_required,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from .dtos import LoginResponse


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Constant-time password comparison
    - Unknown username and wrong password produce the same error
    - Token carries password_reset_required so clients can force a change
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, username: str, password: str) -> Result[LoginResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_username(username)

            if user is None:
                # Hash against a dummy value to keep timing the same
                await compare_passwords(password, DUMMY_PASSWORD_HASH)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid username or password")
                )

            if not await compare_passwords(password, user.password):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid username or password")
                )

            reset_required = is_password_reset_required(user)
            access_token = generate_jwt(
                user_id=user.id,
                role=UserRole(user.role).value,
                password_reset_required=reset_required,
            )

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    user_id=user.id,
                    role=UserRole(user.role).value,
                    password_reset_required=reset_required,
                )
            )
