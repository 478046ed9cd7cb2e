"""
Firestore Repository

Repository implementation using Firestore for data persistence.

Data Structure:
    users/{user_id}               - Registered users (username, email, password hash)
    transactions/{transaction_id} - Transactions, each carrying its owner's user_id
"""

from typing import Any, Optional

import firebase_admin
from firebase_admin import firestore
from google.cloud.firestore_v1 import FieldFilter

from fintrack.core.utils import is_record_id, new_record_id, utc_now
from fintrack.schemas.models import TransactionRecord, TransactionType, UserRecord


class FirestoreRepository:
    """Repository using Firestore for users and their transactions."""

    def __init__(self) -> None:
        # Initialize Firebase Admin SDK with Application Default Credentials
        if not firebase_admin._apps:
            firebase_admin.initialize_app()

        self.db = firestore.client()

        # Collection references
        self.users_collection = "users"
        self.transactions_collection = "transactions"

    # =========================================================================
    # User Methods
    # =========================================================================

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """
        Create a user document.

        Args:
            username: Unique login name
            email: Unique, already normalised email address
            password_hash: bcrypt hash of the password

        Returns:
            The stored user record
        """
        user = UserRecord(
            id=new_record_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=utc_now(),
        )
        self.db.collection(self.users_collection).document(user.id).set(
            user.model_dump(mode="json")
        )
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        if not is_record_id(user_id):
            return None
        doc = self.db.collection(self.users_collection).document(user_id).get()
        if not doc.exists:
            return None
        return UserRecord.model_validate(doc.to_dict() | {"id": doc.id})

    def _find_user(self, field: str, value: str) -> Optional[UserRecord]:
        query = (
            self.db.collection(self.users_collection)
            .where(filter=FieldFilter(field, "==", value))
            .limit(1)
        )
        docs = list(query.stream())
        if not docs:
            return None
        doc = docs[0]
        return UserRecord.model_validate(doc.to_dict() | {"id": doc.id})

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return self._find_user("username", username)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find_user("email", email)

    # =========================================================================
    # Transaction Methods
    # =========================================================================

    def create_transaction(
        self,
        user_id: str,
        amount: float,
        category: str,
        type: TransactionType,
    ) -> TransactionRecord:
        """
        Create a transaction document owned by user_id.

        Returns:
            The stored transaction record with its assigned id and date
        """
        record = TransactionRecord(
            id=new_record_id(),
            user_id=user_id,
            amount=amount,
            category=category,
            type=type,
            date=utc_now(),
        )
        self.db.collection(self.transactions_collection).document(record.id).set(
            record.model_dump(mode="json")
        )
        return record

    def get_transaction(self, transaction_id: str) -> Optional[TransactionRecord]:
        if not is_record_id(transaction_id):
            return None
        doc = self.db.collection(self.transactions_collection).document(transaction_id).get()
        if not doc.exists:
            return None
        return TransactionRecord.model_validate(doc.to_dict() | {"id": doc.id})

    def list_transactions(self, user_id: str) -> list[TransactionRecord]:
        """
        List all transactions owned by a user, oldest first.

        Sorting happens here rather than in the query so no composite
        index is needed.
        """
        query = self.db.collection(self.transactions_collection).where(
            filter=FieldFilter("user_id", "==", user_id)
        )
        records = [
            TransactionRecord.model_validate(doc.to_dict() | {"id": doc.id})
            for doc in query.stream()
        ]
        records.sort(key=lambda record: record.date)
        return records

    def update_transaction(
        self,
        transaction_id: str,
        amount: float,
        category: str,
        type: TransactionType,
    ) -> Optional[TransactionRecord]:
        """
        Replace amount, category and type of a transaction.

        Returns:
            The updated record, or None if no document has this id
        """
        if not is_record_id(transaction_id):
            return None

        doc_ref = self.db.collection(self.transactions_collection).document(transaction_id)
        doc = doc_ref.get()
        if not doc.exists:
            return None

        changes: dict[str, Any] = {
            "amount": amount,
            "category": category,
            "type": TransactionType(type).value,
        }
        doc_ref.update(changes)
        return TransactionRecord.model_validate(doc.to_dict() | changes | {"id": doc.id})

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Delete a transaction document.

        Returns:
            True if a document was deleted, False if none existed
        """
        if not is_record_id(transaction_id):
            return False

        doc_ref = self.db.collection(self.transactions_collection).document(transaction_id)
        doc = doc_ref.get()
        if not doc.exists:
            return False
        doc_ref.delete()
        return True
