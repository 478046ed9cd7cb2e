"""
Application configuration.

Settings are read from environment variables. A `.env` file in the project
root is loaded first so local development does not need exported variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from fintrack.core.exceptions import ConfigurationError

# backend/fintrack/core/config.py -> backend -> project root
BACKEND_DIR = Path(__file__).resolve().parents[2]
PROJECT_ROOT = BACKEND_DIR.parent

STORAGE_BACKENDS = ("local", "firestore")
ENVIRONMENTS = ("development", "production")
# the signing secret is a shared key, so only HMAC algorithms apply
JWT_ALGORITHMS = ("HS256", "HS384", "HS512")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEV_JWT_SECRET = "fintrack-dev-secret-change-me"

LOCALHOST_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 60
    storage_backend: str = "local"
    data_dir: Path = BACKEND_DIR / "data"
    cors_origins: list[str] = field(default_factory=lambda: list(LOCALHOST_ORIGINS))
    enforce_transaction_ownership: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5000


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str, minimum: int = 1) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from an environment mapping (defaults to os.environ).

    Raises:
        ConfigurationError: if a value is unknown or malformed, or if
            JWT_SECRET is missing in production.
    """
    if env is None:
        load_dotenv(PROJECT_ROOT / ".env")
        env = os.environ

    environment = env.get("ENVIRONMENT", "development").strip().lower()
    if environment not in ENVIRONMENTS:
        raise ConfigurationError(
            f"ENVIRONMENT must be one of {', '.join(ENVIRONMENTS)}, got {environment!r}"
        )

    jwt_secret = env.get("JWT_SECRET", "").strip()
    if not jwt_secret:
        if environment == "production":
            raise ConfigurationError("JWT_SECRET is required in production")
        jwt_secret = DEV_JWT_SECRET

    storage_backend = env.get("STORAGE_BACKEND", "local").strip().lower()
    if storage_backend not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {storage_backend!r}"
        )

    jwt_algorithm = env.get("JWT_ALGORITHM", "HS256").strip().upper()
    if jwt_algorithm not in JWT_ALGORITHMS:
        raise ConfigurationError(
            f"JWT_ALGORITHM must be one of {', '.join(JWT_ALGORITHMS)}, got {jwt_algorithm!r}"
        )

    log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    raw_origins = env.get("CORS_ORIGINS")
    if raw_origins:
        cors_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    else:
        cors_origins = list(LOCALHOST_ORIGINS)

    data_dir = env.get("DATA_DIR")

    return Settings(
        environment=environment,
        jwt_secret=jwt_secret,
        jwt_algorithm=jwt_algorithm,
        token_expire_minutes=_parse_int(
            "TOKEN_EXPIRE_MINUTES", env.get("TOKEN_EXPIRE_MINUTES", "60")
        ),
        storage_backend=storage_backend,
        data_dir=Path(data_dir) if data_dir else BACKEND_DIR / "data",
        cors_origins=cors_origins,
        enforce_transaction_ownership=_parse_bool(
            "ENFORCE_TRANSACTION_OWNERSHIP", env.get("ENFORCE_TRANSACTION_OWNERSHIP", "false")
        ),
        log_level=log_level,
        host=env.get("HOST", "127.0.0.1"),
        port=_parse_int("PORT", env.get("PORT", "5000")),
    )


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide Settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
