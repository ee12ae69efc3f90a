"""
FastAPI dependencies - bearer token gate for mutating routes (SOLID: Dependency Inversion).
Challenge: Reusable auth, consistent error responses, no server-side session state.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from replate.core.exceptions import InvalidToken, NoToken
from replate.core.security import decode_access_token
from replate.schemas.user import Identity

security = HTTPBearer(auto_error=False)


def identity_from_token(token: str) -> Identity:
    """Verify signature and expiry, return the embedded identity. Raises InvalidToken."""
    payload = decode_access_token(token)
    if not payload or not payload.get("email"):
        raise InvalidToken()
    return Identity(email=payload["email"], name=payload.get("name") or "")


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """Resolve the bearer token to the caller. Raises NoToken (401) or InvalidToken (403)."""
    if not credentials or not credentials.credentials:
        raise NoToken()
    return identity_from_token(credentials.credentials)


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
