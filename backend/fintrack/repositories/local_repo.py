import json
import threading
from pathlib import Path
from typing import Any, Optional

from fintrack.core.utils import is_record_id, new_record_id, utc_now
from fintrack.schemas.models import TransactionRecord, TransactionType, UserRecord


class LocalRepository:
    """Repository storing one JSON document per record under a data directory."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.data_dir = base_dir or Path(__file__).resolve().parents[2] / "data"
        self.user_dir = self.data_dir / "users"
        self.transaction_dir = self.data_dir / "transactions"
        self.user_dir.mkdir(parents=True, exist_ok=True)
        self.transaction_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    @staticmethod
    def _write(path: Path, payload: dict[str, Any]) -> None:
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)

    @staticmethod
    def _record_path(directory: Path, record_id: str) -> Path | None:
        if not is_record_id(record_id):
            return None
        return directory / f"{record_id}.json"

    @staticmethod
    def _read(path: Path | None) -> dict[str, Any] | None:
        if path is None:
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            # missing, or deleted between a directory scan and this read
            return None

    # =========================================================================
    # Users
    # =========================================================================

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        user = UserRecord(
            id=new_record_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=utc_now(),
        )
        with self._lock:
            self._write(self.user_dir / f"{user.id}.json", user.model_dump(mode="json"))
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        data = self._read(self._record_path(self.user_dir, user_id))
        return UserRecord.model_validate(data) if data else None

    def _find_user(self, field: str, value: str) -> Optional[UserRecord]:
        for path in sorted(self.user_dir.glob("*.json")):
            data = self._read(path)
            if data is not None and data.get(field) == value:
                return UserRecord.model_validate(data)
        return None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return self._find_user("username", username)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find_user("email", email)

    # =========================================================================
    # Transactions
    # =========================================================================

    def create_transaction(
        self,
        user_id: str,
        amount: float,
        category: str,
        type: TransactionType,
    ) -> TransactionRecord:
        record = TransactionRecord(
            id=new_record_id(),
            user_id=user_id,
            amount=amount,
            category=category,
            type=type,
            date=utc_now(),
        )
        with self._lock:
            self._write(
                self.transaction_dir / f"{record.id}.json",
                record.model_dump(mode="json"),
            )
        return record

    def get_transaction(self, transaction_id: str) -> Optional[TransactionRecord]:
        data = self._read(self._record_path(self.transaction_dir, transaction_id))
        return TransactionRecord.model_validate(data) if data else None

    def list_transactions(self, user_id: str) -> list[TransactionRecord]:
        records: list[TransactionRecord] = []
        for path in self.transaction_dir.glob("*.json"):
            data = self._read(path)
            if data is not None and data.get("user_id") == user_id:
                records.append(TransactionRecord.model_validate(data))
        # sort is stable, so ties keep whatever order the directory listing gave
        records.sort(key=lambda record: record.date)
        return records

    def update_transaction(
        self,
        transaction_id: str,
        amount: float,
        category: str,
        type: TransactionType,
    ) -> Optional[TransactionRecord]:
        path = self._record_path(self.transaction_dir, transaction_id)
        with self._lock:
            data = self._read(path)
            if path is None or data is None:
                return None
            record = TransactionRecord.model_validate(data).model_copy(
                update={"amount": amount, "category": category, "type": type}
            )
            self._write(path, record.model_dump(mode="json"))
        return record

    def delete_transaction(self, transaction_id: str) -> bool:
        path = self._record_path(self.transaction_dir, transaction_id)
        with self._lock:
            if path is None or not path.exists():
                return False
            path.unlink()
        return True
