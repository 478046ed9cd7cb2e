from __future__ import annotations

from typing import Any, Sequence, TypeVar

import pydantic
from pydantic import BaseModel

from fintrack.core.exceptions import ValidationError
from fintrack.schemas.models import TransactionPayload

ModelT = TypeVar("ModelT", bound=BaseModel)


def first_error_message(errors: Sequence[dict[str, Any]]) -> str:
    """Render the first pydantic error as '<field>: <message>'.

    Location prefixes added by FastAPI ("body", "query", ...) are dropped.
    """
    if not errors:
        return "Invalid request"
    error = errors[0]
    parts = [part for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    if error.get("type") == "json_invalid":
        # integer parts here are character offsets into the body, not fields
        parts = [part for part in parts if not isinstance(part, int)]
    loc = [str(part) for part in parts]
    message = error.get("msg", "Invalid value")
    if not loc:
        return message
    return f"{'.'.join(loc)}: {message}"


def validate_model(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate data against a pydantic model, raising the app's ValidationError."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            first_error_message(exc.errors()),
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from None


def validate_transaction(amount: Any, category: Any, type: Any) -> TransactionPayload:
    return validate_model(
        TransactionPayload,
        {"amount": amount, "category": category, "type": type},
    )
