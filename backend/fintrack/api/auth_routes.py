"""
Auth API Routes

Registration and login. Neither route requires a token.
"""

from fastapi import APIRouter, Depends, status

from fintrack.api.dependencies import get_auth_service
from fintrack.schemas.models import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from fintrack.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register a new user. Returns the new user's id."""
    user = auth_service.register(payload.username, str(payload.email), payload.password)
    return RegisterResponse(id=user.id, username=user.username, email=user.email)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange a username or email plus password for a signed token."""
    issued = auth_service.login(payload.identifier, payload.password)
    return TokenResponse(access_token=issued.token, expires_in=issued.expires_in)
