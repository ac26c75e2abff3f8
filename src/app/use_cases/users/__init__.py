"""
User Management Use Cases

All user-related business logic.
"""

from .create_user_use_case import CreateUserUseCase
from .get_current_user_use_case import GetCurrentUserUseCase
from .dtos import CreateUserCommand, CreateUserResponse, UserInfo

__all__ = [
    "CreateUserUseCase",
    "GetCurrentUserUseCase",
    "CreateUserCommand",
    "CreateUserResponse",
    "UserInfo",
]
