"""Amplify: Campaign Sender.

Turns one campaign definition into one send attempt per matching contact:

  validate → check schedule → load template → resolve contacts
  → fan out (render → send → record event) → mark campaign sent

Preconditions fail before anything is written or sent. Once fan-out starts a
failed recipient only counts as a failure; it never stops the others. The
final status update is not transactional with the sends: if it fails the
caller gets the error even though the emails went out.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Protocol

from amplify.core.errors import (
    AmplifyError,
    DeliveryError,
    MissingScheduleError,
    NotFound,
    TemplateNotFoundError,
)
from amplify.core.logging import get_logger
from amplify.core.templating import render, substitute
from amplify.core.validation import validate
from amplify.models.schemas import (
    CampaignSendOutcome,
    EmailCampaignModel,
    EmailTemplateModel,
)
from amplify.store.gateway import RecordStore

logger = get_logger("services.campaigns")


class Mailer(Protocol):
    async def send(self, sender: str, to: str, subject: str, html: str) -> Dict[str, Any]:
        ...


class CampaignSender:
    """Sends a campaign to its audience with per-recipient failure isolation."""

    def __init__(
        self,
        store: RecordStore,
        mailer: Mailer,
        sender: str,
        concurrency: int = 10,
    ):
        self.store = store
        self.mailer = mailer
        self.sender = sender
        self.concurrency = max(1, concurrency)

    async def _load_template(self, template_id: str) -> EmailTemplateModel:
        try:
            row = await self.store.get_one("email_templates", template_id)
        except NotFound as e:
            raise TemplateNotFoundError(template_id) from e
        return validate(EmailTemplateModel, row)

    async def _deliver(
        self,
        campaign: EmailCampaignModel,
        template: EmailTemplateModel,
        contact: Dict[str, Any],
        slots: asyncio.Semaphore,
    ) -> bool:
        """Send to one contact. Returns False instead of raising on delivery failure."""
        recipient_id = contact.get("id", "")
        async with slots:
            try:
                html = render(template.content, template.variables, contact)
                subject = substitute(template.subject, template.variables, contact)
                await self.mailer.send(self.sender, contact["email"], subject, html)
            except DeliveryError as e:
                logger.error(
                    f"Failed to send campaign email: {e}",
                    extra={"campaign_id": campaign.id, "recipient_id": recipient_id},
                )
                return False
            except Exception as e:
                # Bad contact data or an unexpected provider reply; still one recipient.
                logger.exception(
                    f"Unexpected error sending campaign email: {e!r}",
                    extra={"campaign_id": campaign.id, "recipient_id": recipient_id},
                )
                return False

            try:
                await self.store.insert_one(
                    "campaign_analytics",
                    {
                        "campaign_id": campaign.id,
                        "recipient_id": recipient_id,
                        "sent_at": datetime.now(timezone.utc),
                    },
                )
            except AmplifyError as e:
                # The email is out; only its analytics row is missing.
                logger.error(
                    f"Sent but could not record analytics event: {e}",
                    extra={"campaign_id": campaign.id, "recipient_id": recipient_id},
                )
            return True

    async def send(self, campaign: Mapping[str, Any]) -> CampaignSendOutcome:
        validated = validate(EmailCampaignModel, campaign)
        if not validated.scheduled_at:
            raise MissingScheduleError("campaign")

        template = await self._load_template(validated.template_id)
        contacts = await self.store.select("contacts", validated.target_audience)
        logger.info(
            f"Sending campaign '{validated.name}' to {len(contacts)} contacts",
            extra={"operation": "send_campaign", "campaign_id": validated.id},
        )

        slots = asyncio.Semaphore(self.concurrency)
        results = await asyncio.gather(
            *(self._deliver(validated, template, c, slots) for c in contacts)
        )
        succeeded = sum(1 for ok in results if ok)
        outcome = CampaignSendOutcome(
            campaign_id=validated.id,
            attempted=len(results),
            succeeded=succeeded,
            failed=len(results) - succeeded,
        )

        await self.store.update_one(
            "email_campaigns",
            validated.id,
            {"status": "sent", "sent_at": datetime.now(timezone.utc)},
        )
        logger.info(
            f"Campaign sent: {outcome.succeeded}/{outcome.attempted} delivered",
            extra={"operation": "send_campaign", "campaign_id": validated.id},
        )
        return outcome
