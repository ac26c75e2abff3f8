"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for auth domain.
"""

from pydantic import BaseModel


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str
    password_reset_required: bool


class MessageResponse(BaseModel):
    """Plain status message"""

    message: str


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    valid: bool
