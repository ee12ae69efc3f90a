"""User request/response schemas - API contract.

Fields are optional at the schema level so that missing input reaches the service
and is reported with the service's own message instead of a generic 422.
"""

from pydantic import BaseModel


class SignupRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class MessageResponse(BaseModel):
    message: str


class LoginResponse(MessageResponse):
    token: str


class Identity(BaseModel):
    """Caller identity decoded from a bearer token."""

    email: str
    name: str = ""
