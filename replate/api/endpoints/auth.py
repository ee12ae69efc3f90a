"""
Account endpoints - signup and login (RESTful API).
Challenge: Clear status codes; the store stays hidden behind the identity service.
"""

from fastapi import APIRouter

from replate.schemas.user import LoginRequest, LoginResponse, MessageResponse, SignupRequest
from replate.services.identity_service import IdentityService
from replate.store.provider import UserStoreDep

router = APIRouter()


@router.post("/signup", response_model=MessageResponse)
async def signup(users: UserStoreDep, data: SignupRequest | None = None):
    """Create an account. 400 on missing fields or an email already registered."""
    data = data or SignupRequest()
    return await IdentityService(users).signup(data.name, data.email, data.password)


@router.post("/login", response_model=LoginResponse)
async def login(users: UserStoreDep, data: LoginRequest | None = None):
    """Authenticate and return a one-hour bearer token."""
    data = data or LoginRequest()
    token = await IdentityService(users).login(data.email, data.password)
    return {"message": "Login successful!", "token": token}
