"""Amplify: Shared API dependencies and outcome → HTTP mapping."""

from typing import Any

from fastapi import HTTPException, Request

from amplify.core import outcome as outcomes
from amplify.core.outcome import Outcome
from amplify.services.email import EmailService
from amplify.services.social import SocialService

STATUS_CODES = {
    outcomes.VALIDATION_ERROR: 422,
    outcomes.NOT_FOUND: 404,
    outcomes.PRECONDITION_ERROR: 409,
    outcomes.STORE_ERROR: 502,
    outcomes.DELIVERY_ERROR: 502,
}


def get_social_service(request: Request) -> SocialService:
    return request.app.state.social


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email


def unwrap(result: Outcome) -> Any:
    """Return the success value or raise the matching HTTPException."""
    if result.ok:
        return result.value
    raise HTTPException(status_code=STATUS_CODES[result.status], detail=result.error)
