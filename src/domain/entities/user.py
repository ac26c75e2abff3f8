"""
User Entity

Represents a portal account (admin, manager or client).
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a person who can sign in to the portal.

    Business Rules:
    - Username and email must be unique across all users
    - Password stored as scrypt "<derivedKeyHex>.<saltHex>", salt regenerated per set
    - password_reset_required forces a password change after a temporary
      password was issued by an admin
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)
    role: UserRole = Field(default=UserRole.client)

    password: str = Field(max_length=161)  # 128 hex key + "." + 32 hex salt
    password_reset_required: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role", "role"),)
