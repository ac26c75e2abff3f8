"""
Use Cases

Organized into domain folders:
- auth/: Login and password flows
- users/: Account management
- admin/: Maintenance operations
"""

from .auth import (
    LoginUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    SetNewPasswordUseCase,
)
from .users import (
    CreateUserUseCase,
    GetCurrentUserUseCase,
)
from .admin import (
    CleanupExpiredTokensUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "SetNewPasswordUseCase",
    # Users
    "CreateUserUseCase",
    "GetCurrentUserUseCase",
    # Admin
    "CleanupExpiredTokensUseCase",
]
