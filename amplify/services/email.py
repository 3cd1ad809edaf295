"""Amplify: Email Template & Campaign Service."""

from typing import Any, Dict, Mapping

from amplify.analyzer.engagement_engine import compute_campaign_analytics
from amplify.core.errors import AmplifyError
from amplify.core.logging import get_logger
from amplify.core.validation import validate
from amplify.models.schemas import (
    CampaignAnalytics,
    CampaignSendOutcome,
    EmailCampaignCreate,
    EmailTemplateCreate,
)
from amplify.services.campaigns import CampaignSender
from amplify.store.gateway import RecordStore

logger = get_logger("services.email")


class EmailService:
    def __init__(self, store: RecordStore, sender: CampaignSender):
        self.store = store
        self.sender = sender

    # ── Templates ──

    async def create_email_template(self, template: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            validated = validate(EmailTemplateCreate, template)
            return await self.store.insert_one("email_templates", validated.model_dump())
        except AmplifyError as e:
            logger.error(
                f"Error creating email template: {e}",
                extra={"operation": "create_email_template"},
            )
            raise

    async def get_email_template(self, template_id: str) -> Dict[str, Any]:
        try:
            return await self.store.get_one("email_templates", template_id)
        except AmplifyError as e:
            logger.error(
                f"Error fetching email template: {e}",
                extra={"operation": "get_email_template", "entity_id": template_id},
            )
            raise

    # ── Campaigns ──

    async def create_email_campaign(self, campaign: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            validated = validate(EmailCampaignCreate, campaign)
            return await self.store.insert_one(
                "email_campaigns", validated.model_dump(exclude_none=True)
            )
        except AmplifyError as e:
            logger.error(
                f"Error creating email campaign: {e}",
                extra={"operation": "create_email_campaign"},
            )
            raise

    async def get_email_campaign(self, campaign_id: str) -> Dict[str, Any]:
        try:
            return await self.store.get_one("email_campaigns", campaign_id)
        except AmplifyError as e:
            logger.error(
                f"Error fetching email campaign: {e}",
                extra={"operation": "get_email_campaign", "campaign_id": campaign_id},
            )
            raise

    async def schedule_campaign(self, campaign: Mapping[str, Any]) -> CampaignSendOutcome:
        """Send ``campaign`` to every contact matching its target audience."""
        try:
            return await self.sender.send(campaign)
        except AmplifyError as e:
            logger.error(
                f"Error scheduling campaign: {e}",
                extra={
                    "operation": "schedule_campaign",
                    "campaign_id": campaign.get("id") if isinstance(campaign, Mapping) else None,
                },
            )
            raise

    async def send_campaign(self, campaign_id: str) -> CampaignSendOutcome:
        """Load a stored campaign definition and send it."""
        campaign = await self.get_email_campaign(campaign_id)
        return await self.schedule_campaign(campaign)

    # ── Analytics ──

    async def get_campaign_performance(self, campaign_id: str) -> CampaignAnalytics:
        try:
            return await compute_campaign_analytics(self.store, campaign_id)
        except AmplifyError as e:
            logger.error(
                f"Error fetching campaign performance: {e}",
                extra={"operation": "get_campaign_performance", "campaign_id": campaign_id},
            )
            raise
