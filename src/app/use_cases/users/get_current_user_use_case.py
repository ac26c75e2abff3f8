"""
Get Current User Use Case

Loads the signed-in user from the JWT user_id claim.
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from .dtos import UserInfo


class GetCurrentUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                UserInfo(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    name=user.name,
                    role=UserRole(user.role).value,
                    password_reset_required=user.password_reset_required,
                    created_at=user.created_at,
                )
            )
