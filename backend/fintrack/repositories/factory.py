"""
Repository selection.

The storage backend is chosen once per process from STORAGE_BACKEND.
"""

from typing import Optional, Union

from fintrack.core.config import Settings, get_settings
from fintrack.core.logging import get_logger
from fintrack.repositories.firestore_repo import FirestoreRepository
from fintrack.repositories.local_repo import LocalRepository

logger = get_logger("fintrack.repositories")

Repository = Union[FirestoreRepository, LocalRepository]


def build_repo(settings: Settings) -> Repository:
    """Create the repository configured by settings."""
    if settings.storage_backend == "firestore":
        logger.info("Using Firestore repository")
        return FirestoreRepository()
    logger.info(f"Using local repository at {settings.data_dir}")
    return LocalRepository(settings.data_dir)


# Singleton instance; created lazily so importing the app never touches Firestore
_repo: Optional[Repository] = None


def get_repo() -> Repository:
    """Get the singleton repository instance."""
    global _repo
    if _repo is None:
        _repo = build_repo(get_settings())
    return _repo
