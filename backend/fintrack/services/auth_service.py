from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import bcrypt
import jwt

from fintrack.core.config import Settings
from fintrack.core.exceptions import AuthError, InvalidTokenError, ValidationError
from fintrack.core.logging import LogContext, get_logger
from fintrack.core.utils import utc_now
from fintrack.repositories.factory import Repository
from fintrack.schemas.models import RegisterRequest, UserRecord
from fintrack.services.validation import validate_model

logger = get_logger("fintrack.services.auth")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash or an over-long password
        return False


@dataclass
class AuthenticatedUser:
    """Identity extracted from a verified token."""

    user_id: str
    username: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthenticatedUser":
        return cls(user_id=claims["sub"], username=claims.get("username"))


@dataclass
class IssuedToken:
    token: str
    expires_in: int


class AuthService:
    """Registers users, checks credentials and issues/verifies signed tokens."""

    def __init__(self, repository: Repository, settings: Settings) -> None:
        self.repository = repository
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.token_lifetime = timedelta(minutes=settings.token_expire_minutes)

    def register(self, username: str, email: str, password: str) -> UserRecord:
        """Create a user with a hashed password.

        Raises:
            ValidationError: on malformed fields, or if the username or
                email is already registered.
        """
        request = validate_model(
            RegisterRequest,
            {"username": username, "email": email, "password": password},
        )
        normalized_email = str(request.email).lower()

        with LogContext(logger, "user registration", username=request.username):
            if self.repository.get_user_by_username(request.username) is not None:
                raise ValidationError("Username already registered")
            if self.repository.get_user_by_email(normalized_email) is not None:
                raise ValidationError("Email already registered")

            user = self.repository.create_user(
                username=request.username,
                email=normalized_email,
                password_hash=hash_password(request.password),
            )
        return user

    def _find_user(self, identifier: str) -> UserRecord | None:
        # usernames never contain '@', so the identifier's shape picks the field
        identifier = identifier.strip()
        if "@" in identifier:
            return self.repository.get_user_by_email(identifier.lower())
        return self.repository.get_user_by_username(identifier)

    def login(self, identifier: str, password: str) -> IssuedToken:
        """Check credentials and issue a token.

        Raises:
            AuthError: if the identifier is unknown or the password is wrong.
        """
        user = self._find_user(identifier)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected: invalid credentials")
            raise AuthError("Invalid credentials")

        logger.info(f"Login succeeded for user {user.id}")
        return self.issue_token(user)

    def issue_token(self, user: UserRecord) -> IssuedToken:
        now = utc_now()
        claims = {
            "sub": user.id,
            "username": user.username,
            "iat": now,
            "exp": now + self.token_lifetime,
        }
        token = jwt.encode(claims, self.secret, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_in=int(self.token_lifetime.total_seconds()))

    def verify_token(self, token: str) -> AuthenticatedUser:
        """Decode a token and return the identity it carries.

        Raises:
            InvalidTokenError: on bad signature, malformed token, expiry
                or a missing subject.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Invalid Token", details={"reason": "expired"}) from None
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Invalid Token", details={"reason": str(exc)}) from None

        if not isinstance(claims.get("sub"), str) or not claims["sub"]:
            raise InvalidTokenError("Invalid Token", details={"reason": "missing subject"})
        return AuthenticatedUser.from_claims(claims)
