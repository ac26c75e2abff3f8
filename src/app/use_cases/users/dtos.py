"""
User Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from src.domain.entities import UserRole


class CreateUserCommand(BaseModel):
    """Admin request to open an account"""

    username: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.client


class UserInfo(BaseModel):
    """Public user details (never includes the password hash)"""

    id: int
    username: str
    email: str
    name: str
    role: str
    password_reset_required: bool
    created_at: Optional[datetime] = None


class CreateUserResponse(BaseModel):
    """Response for create user use case"""

    user: UserInfo
    welcome_email_sent: bool
