"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .set_new_password_use_case import SetNewPasswordUseCase
from .dtos import LoginResponse, MessageResponse, VerifyResetTokenResponse

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "SetNewPasswordUseCase",
    # DTOs - Responses
    "LoginResponse",
    "MessageResponse",
    "VerifyResetTokenResponse",
]
