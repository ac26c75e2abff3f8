from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(user_id: int, role: str, password_reset_required: bool) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User ID
        role: Portal role (admin, manager, client)
        password_reset_required: Whether the user still has to replace a temporary password

    Returns:
        JWT token string (HS256, JWT_EXPIRE_MINUTES expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": user_id,
        "role": role,
        "password_reset_required": password_reset_required,
        "exp": now + timedelta(minutes=ApplicationConfig.JWT_EXPIRE_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
