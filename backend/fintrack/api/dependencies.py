"""
Service providers for route dependencies.

Services are created lazily and cached for the life of the process.
Tests replace them through app.dependency_overrides.
"""

from typing import Optional

from fintrack.core.config import get_settings
from fintrack.repositories.factory import get_repo
from fintrack.services.auth_service import AuthService
from fintrack.services.transaction_service import TransactionService

_auth_service: Optional[AuthService] = None
_transaction_service: Optional[TransactionService] = None


def get_auth_service() -> AuthService:
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService(get_repo(), get_settings())
    return _auth_service


def get_transaction_service() -> TransactionService:
    global _transaction_service
    if _transaction_service is None:
        _transaction_service = TransactionService(
            get_repo(),
            enforce_ownership=get_settings().enforce_transaction_ownership,
        )
    return _transaction_service
