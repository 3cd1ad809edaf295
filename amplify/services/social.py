"""Amplify: Social Post Service.

Create and schedule posts, record interactions, read engagement.
Scheduling only writes ``scheduled_at``; publishing to the platform is done
by a downstream process.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from amplify.analyzer.engagement_engine import compute_social_analytics
from amplify.core.errors import AmplifyError, MissingScheduleError
from amplify.core.logging import get_logger
from amplify.core.validation import validate
from amplify.models.schemas import (
    SocialAnalytics,
    SocialInteractionCreate,
    SocialPostCreate,
)
from amplify.store.gateway import RecordStore

logger = get_logger("services.social")

POSTS = "social_posts"
INTERACTIONS = "social_interactions"


class SocialService:
    def __init__(self, store: RecordStore):
        self.store = store

    async def create_social_post(self, post: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            validated = validate(SocialPostCreate, post)
            return await self.store.insert_one(POSTS, validated.model_dump(exclude_none=True))
        except AmplifyError as e:
            logger.error(
                f"Error creating social post: {e}",
                extra={"operation": "create_social_post"},
            )
            raise

    async def schedule_social_post(self, post: Mapping[str, Any]) -> Dict[str, Any]:
        """Store a post for later publishing.

        ``scheduled_at`` is required; ``status`` defaults to "scheduled".
        """
        try:
            validated = validate(SocialPostCreate, post)
            if not validated.scheduled_at:
                raise MissingScheduleError("social post")

            record = validated.model_dump(exclude_none=True)
            record["status"] = validated.status or "scheduled"
            return await self.store.insert_one(POSTS, record)
        except AmplifyError as e:
            logger.error(
                f"Error scheduling social post: {e}",
                extra={"operation": "schedule_social_post"},
            )
            raise

    async def get_social_post(self, post_id: str) -> Dict[str, Any]:
        try:
            return await self.store.get_one(POSTS, post_id)
        except AmplifyError as e:
            logger.error(
                f"Error fetching social post: {e}",
                extra={"operation": "get_social_post", "entity_id": post_id},
            )
            raise

    async def list_social_posts(
        self,
        status: Optional[str] = None,
        platform: Optional[str] = None,
        limit: int = 50,
    ) -> List[Dict[str, Any]]:
        """Most recent posts first, optionally filtered by status and platform."""
        filters = {}
        if status:
            filters["status"] = status
        if platform:
            filters["platform"] = platform
        try:
            return await self.store.select(
                POSTS, filters, order_by="created_at", descending=True, limit=limit
            )
        except AmplifyError as e:
            logger.error(
                f"Error listing social posts: {e}",
                extra={"operation": "list_social_posts"},
            )
            raise

    async def publish_social_post(self, post_id: str) -> Dict[str, Any]:
        """Mark a post as published."""
        try:
            await self.store.update_one(
                POSTS,
                post_id,
                {"status": "published", "published_at": datetime.now(timezone.utc)},
            )
            return await self.store.get_one(POSTS, post_id)
        except AmplifyError as e:
            logger.error(
                f"Error publishing social post: {e}",
                extra={"operation": "publish_social_post", "entity_id": post_id},
            )
            raise

    async def track_social_interaction(
        self, interaction: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """Record one interaction. Every call inserts a new row."""
        try:
            validated = validate(SocialInteractionCreate, interaction)
            record = validated.model_dump(exclude_none=True)
            if "metadata" in record:
                record["interaction_metadata"] = record.pop("metadata")
            stored = dict(await self.store.insert_one(INTERACTIONS, record))
            stored["metadata"] = stored.pop("interaction_metadata", None)
            return stored
        except AmplifyError as e:
            logger.error(
                f"Error tracking social interaction: {e}",
                extra={"operation": "track_social_interaction"},
            )
            raise

    async def get_social_post_analytics(self, post_id: str) -> SocialAnalytics:
        try:
            return await compute_social_analytics(self.store, post_id)
        except AmplifyError as e:
            logger.error(
                f"Error getting social post analytics: {e}",
                extra={"operation": "get_social_post_analytics", "entity_id": post_id},
            )
            raise
