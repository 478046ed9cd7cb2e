"""
FinTrack Models

Pydantic models for stored records and for request/response bodies.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, EmailStr, Field, constr, field_validator


class TransactionType(str, Enum):
    """Direction of money flow."""

    INCOME = "income"
    EXPENSE = "expense"


# =============================================================================
# Stored Records
# =============================================================================


class UserRecord(BaseModel):
    """A registered user as held by the credential store."""

    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime


class TransactionRecord(BaseModel):
    """A single transaction owned by one user."""

    id: str
    user_id: str
    amount: float
    category: str
    type: TransactionType
    date: datetime


# =============================================================================
# Request Models
# =============================================================================


class TransactionPayload(BaseModel):
    """Body of create and update transaction requests."""

    amount: float = Field(..., allow_inf_nan=False, description="Signed amount")
    category: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="Category such as salary, food, rent"
    )
    type: TransactionType = Field(..., description="Income or expense")

    @field_validator("amount", mode="before")
    @classmethod
    def reject_bool_amount(cls, value: Any) -> Any:
        # bool is an int subclass and would otherwise coerce to 0.0/1.0
        if isinstance(value, bool):
            raise ValueError("amount must be a number")
        return value


class RegisterRequest(BaseModel):
    """Body of a registration request."""

    username: constr(strip_whitespace=True, min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def username_is_not_email_like(cls, value: str) -> str:
        # login resolves identifiers containing '@' as emails
        if "@" in value:
            raise ValueError("username must not contain '@'")
        return value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return value


class LoginRequest(BaseModel):
    """Body of a login request. The identifier is a username or an email."""

    identifier: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("identifier", "username", "email"),
    )
    password: str = Field(..., min_length=1)


# =============================================================================
# Response Models
# =============================================================================


class RegisterResponse(BaseModel):
    id: str
    username: str
    email: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class MessageResponse(BaseModel):
    message: str
