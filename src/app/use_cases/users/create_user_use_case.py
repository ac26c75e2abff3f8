"""
Create User Use Case

Admin-created accounts get a temporary password that is emailed to the user
and must be replaced on first login.
"""

import logging
from urllib.parse import quote

from libs.result import Error, Result, Return
from src.app.services.email_messages import welcome_email
from src.app.services.notifier import INotifier, NotificationError
from src.app.services.password_service import generate_temporary_password, hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from .dtos import CreateUserCommand, CreateUserResponse, UserInfo

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Business Logic:
    1. Reject duplicate username, then duplicate email
    2. Generate temporary password and store only its hash
    3. Create user with password_reset_required=True
    4. Commit, then send the welcome email
    5. A failed welcome email is logged; the account stays created

    The emailed login link pre-fills the username: "{login_url}?username=<encoded>".
    """

    def __init__(self, uow: UnitOfWork, notifier: INotifier, login_url: str):
        self.uow = uow
        self.notifier = notifier
        self.login_url = login_url

    async def execute(self, command: CreateUserCommand) -> Result[CreateUserResponse]:
        async with self.uow:
            if await self.uow.users.get_by_username(command.username):
                return Return.err(
                    Error("USERNAME_ALREADY_EXISTS", "Username already exists")
                )

            if await self.uow.users.get_by_email(command.email):
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already exists"))

            temporary_password = generate_temporary_password()

            user = User(
                username=command.username,
                email=command.email,
                name=command.name,
                role=command.role,
                password=await hash_password(temporary_password),
                password_reset_required=True,
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

            user_info = UserInfo(
                id=user.id,
                username=user.username,
                email=user.email,
                name=user.name,
                role=UserRole(user.role).value,
                password_reset_required=user.password_reset_required,
                created_at=user.created_at,
            )

        message = welcome_email(
            email=user_info.email,
            name=user_info.name,
            username=user_info.username,
            temporary_password=temporary_password,
            login_url=f"{self.login_url}?username={quote(user_info.username)}",
        )
        try:
            await self.notifier.send(message)
            email_sent = True
        except NotificationError as exc:
            logger.error("Welcome email for user %s not delivered: %s", user_info.id, exc)
            email_sent = False

        return Return.ok(CreateUserResponse(user=user_info, welcome_email_sent=email_sent))
