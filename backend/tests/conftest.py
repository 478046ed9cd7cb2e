"""Pytest fixtures and configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Set environment variables before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["JWT_SECRET"] = "test-secret"

from fintrack.core.config import Settings  # noqa: E402
from fintrack.repositories.local_repo import LocalRepository  # noqa: E402
from fintrack.services.auth_service import AuthService  # noqa: E402
from fintrack.services.transaction_service import TransactionService  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing the local store at a temporary directory."""
    return Settings(jwt_secret="test-secret", data_dir=tmp_path / "data", token_expire_minutes=30)


@pytest.fixture
def repo(settings: Settings) -> LocalRepository:
    """A LocalRepository backed by a temporary directory."""
    return LocalRepository(settings.data_dir)


@pytest.fixture
def auth_service(repo: LocalRepository, settings: Settings) -> AuthService:
    return AuthService(repo, settings)


@pytest.fixture
def transaction_service(repo: LocalRepository) -> TransactionService:
    return TransactionService(repo)


@pytest.fixture
def client(auth_service: AuthService, transaction_service: TransactionService) -> Generator[TestClient, None, None]:
    """Test client wired to services over a temporary local store."""
    from fintrack.api.dependencies import get_auth_service, get_transaction_service
    from fintrack.main import app

    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_transaction_service] = lambda: transaction_service

    # Unhandled errors are answered with 500 instead of propagating into the test
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_auth_service, None)
    app.dependency_overrides.pop(get_transaction_service, None)


@pytest.fixture
def register_and_login(client: TestClient):
    """Register a user through the API and return an auth header for them."""

    def _register_and_login(username: str, email: str, password: str = "pw123") -> dict[str, str]:
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201
        response = client.post("/api/auth/login", json={"identifier": username, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register_and_login
