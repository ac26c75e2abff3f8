"""
Password Service

Hashing, verification, temporary password generation and strength rules.

Stored format is "<derivedKeyHex>.<saltHex>". The hex salt string itself is fed
to scrypt as the salt bytes, so hashes created by the previous Node service
(crypto.scrypt(password, saltHex, 64)) keep verifying.
"""

import asyncio
import hashlib
import hmac
import secrets
import string
from typing import Optional

from libs.result import Error, Result, Return

SALT_BYTES = 16
KEY_LENGTH = 64

# scrypt cost parameters (N=2^14, r=8, p=1 uses 16 MiB per derivation)
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_MAXMEM = 64 * 1024 * 1024

TEMPORARY_PASSWORD_LENGTH = 10
# No 0/O, 1/l/I
TEMPORARY_PASSWORD_ALPHABET = (
    "ABCDEFGHJKLMNPQRSTUVWXYZ" "abcdefghijkmnopqrstuvwxyz" "23456789"
)

MIN_PASSWORD_LENGTH = 8
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

# Well-formed stored value that matches no password. Comparing against it costs
# one full derivation, the same as a real account.
DUMMY_PASSWORD_HASH = "0" * (KEY_LENGTH * 2) + "." + "0" * (SALT_BYTES * 2)


def _derive_key(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        maxmem=SCRYPT_MAXMEM,
        dklen=KEY_LENGTH,
    )


async def hash_password(password: str) -> str:
    """
    Hash a password for storage.

    Args:
        password: Plain text password

    Returns:
        "<derivedKeyHex>.<saltHex>" with a fresh random salt
    """
    salt = secrets.token_hex(SALT_BYTES)
    derived = await asyncio.to_thread(_derive_key, password, salt)
    return f"{derived.hex()}.{salt}"


async def compare_passwords(supplied: str, stored: Optional[str]) -> bool:
    """
    Compare a supplied password with a stored hash in constant time.

    Malformed stored values compare as False. Errors raised by the key
    derivation itself are not caught.
    """
    if not stored:
        return False

    parts = stored.split(".")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return False

    hashed, salt = parts
    try:
        hashed_bytes = bytes.fromhex(hashed)
    except ValueError:
        return False

    if len(hashed_bytes) != KEY_LENGTH:
        return False

    supplied_bytes = await asyncio.to_thread(_derive_key, supplied, salt)
    return hmac.compare_digest(hashed_bytes, supplied_bytes)


def generate_temporary_password() -> str:
    """Random password for admin-created accounts, easy to type by hand."""
    alphabet_size = len(TEMPORARY_PASSWORD_ALPHABET)
    return "".join(
        TEMPORARY_PASSWORD_ALPHABET[byte % alphabet_size]
        for byte in secrets.token_bytes(TEMPORARY_PASSWORD_LENGTH)
    )


def is_password_reset_required(user) -> bool:
    return bool(getattr(user, "password_reset_required", False))


def validate_password_strength(password: str) -> Result[None]:
    """
    Validate password composition.

    Rules are checked in order and the first failing rule is reported:
    length, uppercase, lowercase, digit, special character.

    Returns:
        Result with None if valid, or Error(WEAK_PASSWORD) with the reason
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return _weak("Password must be at least 8 characters long")

    if not any(c in string.ascii_uppercase for c in password):
        return _weak("Password must include at least one uppercase letter")

    if not any(c in string.ascii_lowercase for c in password):
        return _weak("Password must include at least one lowercase letter")

    if not any(c in string.digits for c in password):
        return _weak("Password must include at least one number")

    if not any(c in SPECIAL_CHARACTERS for c in password):
        return _weak("Password must include at least one special character")

    return Return.ok(None)


def _weak(message: str) -> Result[None]:
    return Return.err(Error("WEAK_PASSWORD", message))
