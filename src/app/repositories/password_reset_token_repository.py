from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_valid_by_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        """Get token by hash, only if it expires after `now`"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: int) -> int:
        """Delete every token owned by a user, returns rows removed"""
        pass

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> int:
        """Delete the token with this hash, returns rows removed"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every token that expired before `now`, returns rows removed"""
        pass
