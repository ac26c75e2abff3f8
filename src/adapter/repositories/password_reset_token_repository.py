from datetime import datetime
from typing import Optional

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_valid_by_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        """Get token by hash, only if it expires after `now`"""
        stmt = select(PasswordResetToken).where(
            PasswordResetToken.token_hash == token_hash,
            PasswordResetToken.expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete_by_user_id(self, user_id: int) -> int:
        """Delete every token owned by a user"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_token_hash(self, token_hash: str) -> int:
        """Delete the token with this hash"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete every token that expired before `now`"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
