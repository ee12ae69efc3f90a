"""
Security: password hashing and JWT (best practices for APIs).
Challenge: No plain-text passwords at rest, stateless token validation.
"""

import secrets
from datetime import datetime, timezone, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from replate.config import get_settings

# bcrypt ignores (newer releases reject) anything past 72 bytes
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """One-way salted hash for storage. Never store plain passwords."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def is_password_hash(stored: str) -> bool:
    return stored.startswith(("$2a$", "$2b$", "$2y$"))


def verify_password(plain: str, stored: str, allow_plaintext: bool = False) -> bool:
    """Check a login attempt against the stored credential.

    Rows created before hashing hold the raw password; those only match when
    allow_plaintext is on, and then with a constant-time compare.
    """
    if not stored:
        return False
    if is_password_hash(stored):
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), stored.encode("utf-8"))
        except ValueError:
            return False
    if allow_plaintext:
        return secrets.compare_digest(plain.encode("utf-8"), stored.encode("utf-8"))
    return False


def create_access_token(email: str, name: str, issued_at: datetime | None = None) -> str:
    """Create JWT embedding the caller's email and name. Expires jwt_expire_minutes after issue."""
    settings = get_settings()
    iat = issued_at or datetime.now(timezone.utc)
    expire = iat + timedelta(minutes=settings.jwt_expire_minutes)
    to_encode = {
        "sub": email,
        "email": email,
        "name": name,
        "iat": int(iat.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(
        to_encode, settings.secret_key.get_secret_value(), algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT (signature and expiry). Returns payload or None if invalid."""
    settings = get_settings()
    try:
        return jwt.decode(
            token, settings.secret_key.get_secret_value(), algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None
