"""Amplify: Email API Routes."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from amplify.api.deps import get_email_service, unwrap
from amplify.core.logging import get_logger
from amplify.core.outcome import capture
from amplify.services.email import EmailService

logger = get_logger("api.email")

router = APIRouter(prefix="/email", tags=["Email"])


# ── Templates ──


@router.post("/templates", status_code=201)
async def create_template(
    template: Dict[str, Any] = Body(...),
    service: EmailService = Depends(get_email_service),
):
    """Create a template. ``variables`` lists the placeholders to substitute."""
    return unwrap(await capture(service.create_email_template(template)))


@router.get("/templates/{template_id}")
async def get_template(
    template_id: str, service: EmailService = Depends(get_email_service)
):
    return unwrap(await capture(service.get_email_template(template_id)))


# ── Campaigns ──


@router.post("/campaigns", status_code=201)
async def create_campaign(
    campaign: Dict[str, Any] = Body(...),
    service: EmailService = Depends(get_email_service),
):
    return unwrap(await capture(service.create_email_campaign(campaign)))


@router.get("/campaigns/{campaign_id}")
async def get_campaign(
    campaign_id: str, service: EmailService = Depends(get_email_service)
):
    return unwrap(await capture(service.get_email_campaign(campaign_id)))


@router.post("/campaigns/{campaign_id}/send")
async def send_campaign(
    campaign_id: str, service: EmailService = Depends(get_email_service)
):
    """Send a stored campaign to its audience.

    Individual delivery failures are counted in the response, not raised.
    """
    outcome = unwrap(await capture(service.send_campaign(campaign_id)))
    logger.info(
        f"Campaign send finished: {outcome.failed} failed",
        extra={"campaign_id": campaign_id},
    )
    return outcome


@router.get("/campaigns/{campaign_id}/performance")
async def campaign_performance(
    campaign_id: str, service: EmailService = Depends(get_email_service)
):
    return unwrap(await capture(service.get_campaign_performance(campaign_id)))
