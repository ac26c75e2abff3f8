"""
Token Service

Issues, verifies and invalidates password reset tokens.

Only the SHA-256 hash of a token is persisted. Tokens are 32 random bytes,
so a fast hash is enough; the slow KDF is reserved for human passwords.
"""

import hashlib
import logging
import secrets
from datetime import timedelta
from typing import Optional

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.base import utcnow
from src.domain.entities import PasswordResetToken

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
DEFAULT_VALIDITY_MINUTES = 60


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class PasswordResetTokenService:
    """
    Reset token lifecycle on top of the token repository.

    The service only flushes through the repository; the caller's unit of work
    commits. Deleting a user's previous tokens and inserting the new one
    therefore land in the same transaction.
    """

    def __init__(
        self,
        tokens: IPasswordResetTokenRepository,
        validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
    ):
        self.tokens = tokens
        self.validity_minutes = validity_minutes

    def get_token_validity_period(self) -> int:
        """Token validity period in minutes"""
        return self.validity_minutes

    async def create_password_reset_token(self, user_id: int) -> str:
        """
        Create a new password reset token for a user.

        Any earlier token of the same user stops working.

        Args:
            user_id: ID of the user requesting a reset

        Returns:
            Plain text token (only its hash is stored)
        """
        await self.tokens.delete_by_user_id(user_id)

        token = secrets.token_hex(TOKEN_BYTES)
        now = utcnow()
        await self.tokens.create(
            PasswordResetToken(
                user_id=user_id,
                token_hash=hash_token(token),
                created_at=now,
                expires_at=now + timedelta(minutes=self.validity_minutes),
            )
        )

        logger.info(
            "Password reset token issued for user %s, valid for %s minutes",
            user_id,
            self.validity_minutes,
        )
        return token

    async def verify_password_reset_token(self, token: str) -> Optional[int]:
        """
        Resolve a plain text token to its user.

        Returns:
            User ID while now < expires_at, None for unknown or expired tokens
        """
        reset_token = await self.tokens.get_valid_by_token_hash(hash_token(token), utcnow())
        if reset_token is None:
            return None
        return reset_token.user_id

    async def invalidate_token(self, token: str) -> int:
        """
        Delete a token; unknown tokens are ignored.

        Returns:
            Rows removed, 0 if another request already consumed the token
        """
        return await self.tokens.delete_by_token_hash(hash_token(token))

    async def cleanup_expired_tokens(self) -> int:
        """Delete every expired token, whoever owns it"""
        deleted = await self.tokens.delete_expired(utcnow())
        logger.info("Removed %s expired password reset tokens", deleted)
        return deleted
