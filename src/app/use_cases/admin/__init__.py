"""Admin use cases for system administration operations."""

from .cleanup_expired_tokens_use_case import (
    CleanupExpiredTokensUseCase,
    CleanupTokensResponse,
)

__all__ = [
    "CleanupExpiredTokensUseCase",
    "CleanupTokensResponse",
]
