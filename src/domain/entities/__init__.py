"""
Domain Entities

Each entity lives in its own file.
"""

from .enums import UserRole
from .user import User
from .password_reset_token import PasswordResetToken

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "PasswordResetToken",
]
