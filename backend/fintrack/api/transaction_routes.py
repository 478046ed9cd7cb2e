"""
Transaction API Routes

CRUD over the authenticated caller's transactions. Every route requires
a valid token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from fintrack.api.dependencies import get_transaction_service
from fintrack.auth.token_verifier import get_current_user
from fintrack.schemas.models import MessageResponse, TransactionPayload, TransactionRecord
from fintrack.services.auth_service import AuthenticatedUser
from fintrack.services.transaction_service import TransactionService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post("", response_model=TransactionRecord, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionPayload,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionRecord:
    return service.create(user.user_id, payload.amount, payload.category, payload.type)


@router.get("", response_model=list[TransactionRecord])
def list_transactions(
    user: AuthenticatedUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> list[TransactionRecord]:
    return service.list(user.user_id)


@router.put("/{transaction_id}", response_model=Optional[TransactionRecord])
def update_transaction(
    transaction_id: str,
    payload: TransactionPayload,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> Optional[TransactionRecord]:
    """
    Replace amount, category and type of a transaction.

    Responds with null when the id does not exist. The record's owner is
    not checked unless ENFORCE_TRANSACTION_OWNERSHIP is on.
    """
    return service.update(
        user.user_id,
        transaction_id,
        payload.amount,
        payload.category,
        payload.type,
    )


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> MessageResponse:
    """Delete a transaction. The confirmation is the same whether or not it existed."""
    return MessageResponse(message=service.delete(user.user_id, transaction_id))
