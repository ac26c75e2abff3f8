"""
PasswordResetToken Entity

Single-use, time-limited password reset tokens.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - secure password reset tokens.

    Business Rules:
    - Token is the SHA-256 hash of a 32-byte random value; the plaintext is never stored
    - At most one token per user (unique user_id): issuing a new one deletes the previous row
    - Valid only while now < expires_at
    - Deleted once the reset completes; expired rows are swept periodically
    """

    __tablename__ = "password_reset_tokens"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", unique=True)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
    )
