"""
Request Password Reset Use Case

Issues a reset token and emails the reset link.
"""

import logging
from typing import Callable, Optional

from libs.result import Result, Return
from src.app.services.email_messages import password_reset_email
from src.app.services.notifier import EmailMessage, INotifier, NotificationError
from src.app.services.token_service import PasswordResetTokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If your email is in our system, you will receive a password reset link shortly."
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - 32-byte random token, stored as SHA-256 hash only
    - Issuing a token invalidates earlier tokens of the same user
    - The user row is locked while the token is replaced, so concurrent
      requests for one user leave a single valid token
    - No email enumeration: known and unknown emails get the same result,
      and delivery failures are only logged
    - Reset link is "{base_url}/reset-password?token=<token>"

    `schedule` runs the email delivery after the response is sent
    (FastAPI's BackgroundTasks.add_task). Without it delivery is awaited.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotifier,
        base_url: str,
        validity_minutes: int,
        schedule: Optional[Callable[..., None]] = None,
    ):
        self.uow = uow
        self.notifier = notifier
        self.base_url = base_url.rstrip("/")
        self.validity_minutes = validity_minutes
        self.schedule = schedule

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic message, whether or not the email is known
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(MessageResponse(message=RESET_REQUESTED_MESSAGE))

            user_id = user.id
            await self.uow.users.lock_by_id(user_id)

            tokens = PasswordResetTokenService(
                self.uow.password_reset_tokens, self.validity_minutes
            )
            token = await tokens.create_password_reset_token(user_id)
            await self.uow.commit()

            message = password_reset_email(
                email=user.email,
                name=user.name,
                username=user.username,
                reset_link=f"{self.base_url}/reset-password?token={token}",
                expiry_minutes=tokens.get_token_validity_period(),
            )

        if self.schedule is not None:
            self.schedule(self.deliver, message, user_id)
        else:
            await self.deliver(message, user_id)

        return Return.ok(MessageResponse(message=RESET_REQUESTED_MESSAGE))

    async def deliver(self, message: EmailMessage, user_id: int) -> None:
        try:
            await self.notifier.send(message)
        except NotificationError as exc:
            logger.error("Password reset email for user %s not delivered: %s", user_id, exc)
