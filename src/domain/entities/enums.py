"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Portal role of a user account"""

    admin = "admin"
    manager = "manager"
    client = "client"
