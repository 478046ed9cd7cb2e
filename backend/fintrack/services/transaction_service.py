from __future__ import annotations

from typing import Any

from fintrack.core.logging import get_logger
from fintrack.repositories.factory import Repository
from fintrack.schemas.models import TransactionRecord
from fintrack.services.validation import validate_transaction

logger = get_logger("fintrack.services.transaction")

DELETE_CONFIRMATION = "Transaction deleted"


class TransactionService:
    """CRUD over a user's transactions.

    Update and delete look records up by id alone. Unless
    enforce_ownership is set, a caller may change or remove a record
    owned by another user; such calls are logged as warnings.
    """

    def __init__(self, repository: Repository, enforce_ownership: bool = False) -> None:
        self.repository = repository
        self.enforce_ownership = enforce_ownership

    def create(self, user_id: str, amount: Any, category: Any, type: Any) -> TransactionRecord:
        """Validate and store a new transaction owned by user_id.

        Raises:
            ValidationError: if any field is invalid; nothing is stored.
        """
        payload = validate_transaction(amount, category, type)
        record = self.repository.create_transaction(
            user_id=user_id,
            amount=payload.amount,
            category=payload.category,
            type=payload.type,
        )
        logger.info(f"Created transaction {record.id} for user {user_id}")
        return record

    def list(self, user_id: str) -> list[TransactionRecord]:
        return self.repository.list_transactions(user_id)

    def _foreign_record(self, user_id: str, transaction_id: str, action: str) -> bool:
        """Return True if the record exists and belongs to someone other than user_id."""
        existing = self.repository.get_transaction(transaction_id)
        if existing is None or existing.user_id == user_id:
            return False
        logger.warning(
            f"User {user_id} requested {action} of transaction {transaction_id} "
            f"owned by {existing.user_id} (enforce_ownership={self.enforce_ownership})"
        )
        return True

    def update(
        self,
        user_id: str,
        transaction_id: str,
        amount: Any,
        category: Any,
        type: Any,
    ) -> TransactionRecord | None:
        """Replace amount, category and type of a transaction.

        Returns None when no such transaction exists (or, with ownership
        enforcement on, when it belongs to another user).

        Raises:
            ValidationError: if any field is invalid.
        """
        payload = validate_transaction(amount, category, type)

        if self._foreign_record(user_id, transaction_id, "update") and self.enforce_ownership:
            return None

        record = self.repository.update_transaction(
            transaction_id,
            amount=payload.amount,
            category=payload.category,
            type=payload.type,
        )
        if record is None:
            logger.info(f"Update of missing transaction {transaction_id} ignored")
        else:
            logger.info(f"Updated transaction {transaction_id}")
        return record

    def delete(self, user_id: str, transaction_id: str) -> str:
        """Delete a transaction by id.

        Always returns the same confirmation, whether or not anything was removed.
        """
        if self._foreign_record(user_id, transaction_id, "delete") and self.enforce_ownership:
            return DELETE_CONFIRMATION

        if self.repository.delete_transaction(transaction_id):
            logger.info(f"Deleted transaction {transaction_id}")
        return DELETE_CONFIRMATION
