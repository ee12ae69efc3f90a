"""
Identity service - signup and login against the user store.
Challenge: Keep the duplicate check atomic and never store raw passwords.
"""

import logging

from replate.config import get_settings
from replate.core.exceptions import InvalidCredentials, ValidationError
from replate.core.security import BCRYPT_MAX_BYTES, create_access_token, hash_password, verify_password
from replate.store.user_store import UserStore, normalize_email

logger = logging.getLogger(__name__)


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


class IdentityService:
    """Handles account use cases: signup, login/token issue."""

    def __init__(self, user_store: UserStore, allow_legacy_plaintext: bool | None = None):
        self.user_store = user_store
        if allow_legacy_plaintext is None:
            allow_legacy_plaintext = get_settings().allow_legacy_plaintext
        self.allow_legacy_plaintext = allow_legacy_plaintext

    async def signup(self, name: str | None, email: str | None, password: str | None) -> dict:
        if _blank(name) or _blank(email) or _blank(password):
            raise ValidationError("name, email and password are required.")
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes.")
        record = {
            "name": name.strip(),
            "email": email,
            "password": hash_password(password),
        }
        await self.user_store.create(record)
        logger.info("New user saved: %s", record["email"])
        return {"message": "Signup successful!"}

    async def login(self, email: str | None, password: str | None) -> str:
        """Return a signed token for matching credentials. Raises InvalidCredentials otherwise."""
        if _blank(email) or not password:
            raise ValidationError("Email and password required.")
        wanted = normalize_email(email)
        for user in await self.user_store.list_all():
            if normalize_email(user.get("email")) != wanted:
                continue
            if verify_password(password, str(user.get("password") or ""), self.allow_legacy_plaintext):
                return create_access_token(str(user["email"]), str(user.get("name") or ""))
        logger.info("Failed login for %s", wanted)
        raise InvalidCredentials()
