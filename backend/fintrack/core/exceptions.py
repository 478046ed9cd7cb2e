"""Custom exceptions for the FinTrack application."""

from __future__ import annotations


class FinTrackError(Exception):
    """Base exception for all FinTrack errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FinTrackError):
    """Raised when the environment configuration is unusable."""

    pass


class ValidationError(FinTrackError):
    """Raised when input validation fails."""

    pass


class AuthError(FinTrackError):
    """Raised when login credentials do not match a user."""

    pass


class UnauthenticatedError(FinTrackError):
    """Raised when a protected request carries no token."""

    pass


class InvalidTokenError(FinTrackError):
    """Raised when a token fails signature, format or expiry checks."""

    pass
