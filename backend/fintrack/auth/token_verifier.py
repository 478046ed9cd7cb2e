"""
Token Verification Dependency

Verifies the signed token carried in the Authorization header and
extracts the caller's identity for protected routes.
"""

from typing import Optional

from fastapi import Depends, Header

from fintrack.api.dependencies import get_auth_service
from fintrack.core.exceptions import UnauthenticatedError
from fintrack.services.auth_service import AuthenticatedUser, AuthService


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    """Accept either 'Bearer <token>' or the bare token value.

    HTTPBearer is not used here: it reports a bare token as missing,
    and existing clients send the token without a scheme.
    """
    if authorization is None:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


async def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that verifies the request's token and returns the caller.

    Usage:
        @router.get("/protected")
        def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.user_id}

    Raises:
        UnauthenticatedError: no token in the request (401).
        InvalidTokenError: token present but not verifiable (400).
    """
    token = _extract_token(authorization)
    if token is None:
        raise UnauthenticatedError("Access Denied")
    return auth_service.verify_token(token)
