"""Amplify: Tagged operation outcomes.

Wraps a service call so callers can branch on ``outcome.status`` instead of
inspecting exception types. Errors outside the amplify taxonomy propagate.
"""

from typing import Any, Awaitable, Generic, Optional, TypeVar

from pydantic import BaseModel

from amplify.core.errors import (
    AmplifyError,
    DeliveryError,
    NotFound,
    PreconditionError,
    StoreError,
    ValidationError,
)

T = TypeVar("T")

OK = "ok"
VALIDATION_ERROR = "validation_error"
NOT_FOUND = "not_found"
PRECONDITION_ERROR = "precondition_error"
STORE_ERROR = "store_error"
DELIVERY_ERROR = "delivery_error"

# Order matters: subclasses before their bases.
_TAGS = (
    (ValidationError, VALIDATION_ERROR),
    (NotFound, NOT_FOUND),
    (PreconditionError, PRECONDITION_ERROR),
    (StoreError, STORE_ERROR),
    (DeliveryError, DELIVERY_ERROR),
)


class Outcome(BaseModel, Generic[T]):
    """Success value or classified failure of a single operation."""

    status: str
    value: Optional[T] = None
    error: Optional[dict] = None

    @property
    def ok(self) -> bool:
        return self.status == OK


def classify(exc: AmplifyError) -> str:
    for exc_type, tag in _TAGS:
        if isinstance(exc, exc_type):
            return tag
    return STORE_ERROR


async def capture(operation: Awaitable[Any]) -> Outcome:
    """Await ``operation`` and fold any AmplifyError into a tagged Outcome."""
    try:
        value = await operation
    except AmplifyError as e:
        return Outcome(status=classify(e), error=e.to_dict())
    return Outcome(status=OK, value=value)
