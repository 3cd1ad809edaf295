"""Amplify: Record Store Tables.

One table per collection in the managed store. Ids are assigned by the
store on insert.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ─────────────────────────────────────────────
# SOCIAL
# ─────────────────────────────────────────────


class SocialPost(SQLModel, table=True):
    __tablename__ = "social_posts"

    id: str = Field(default_factory=_new_id, primary_key=True)
    platform: str = Field(index=True)
    content: str
    media_urls: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    scheduled_at: Optional[str] = Field(default=None, description="ISO timestamp")
    tags: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    location: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    campaign_id: Optional[str] = Field(default=None, index=True)
    status: str = Field(default="draft", index=True, description="draft | scheduled | published")
    published_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_now)


class SocialInteraction(SQLModel, table=True):
    """Never updated after insert."""

    __tablename__ = "social_interactions"

    id: str = Field(default_factory=_new_id, primary_key=True)
    post_id: str = Field(foreign_key="social_posts.id", index=True)
    type: str = Field(index=True, description="like | share | comment")
    platform_user_id: Optional[str] = None
    platform_username: Optional[str] = None
    content: Optional[str] = None
    # ``metadata`` is reserved on SQLModel classes; the column keeps the name.
    interaction_metadata: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column("metadata", JSON)
    )
    created_at: datetime = Field(default_factory=_now)


# ─────────────────────────────────────────────
# EMAIL
# ─────────────────────────────────────────────


class EmailTemplate(SQLModel, table=True):
    __tablename__ = "email_templates"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str
    subject: str
    content: str
    variables: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=_now)


class EmailCampaign(SQLModel, table=True):
    __tablename__ = "email_campaigns"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str
    template_id: str = Field(foreign_key="email_templates.id", index=True)
    status: str = Field(default="draft", index=True)
    scheduled_at: Optional[str] = None
    target_audience: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    sent_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_now)


class Contact(SQLModel, table=True):
    """Campaign recipient. ``target_audience`` filters on these columns."""

    __tablename__ = "contacts"

    id: str = Field(default_factory=_new_id, primary_key=True)
    email: str = Field(index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    segment: Optional[str] = Field(default=None, index=True)
    status: str = Field(default="active", index=True)
    created_at: datetime = Field(default_factory=_now)


class CampaignAnalyticsEvent(SQLModel, table=True):
    """One row per delivered email.

    Open/click/conversion/unsubscribe columns are filled in by downstream
    tracking, never by the sender.
    """

    __tablename__ = "campaign_analytics"

    id: str = Field(default_factory=_new_id, primary_key=True)
    campaign_id: str = Field(index=True)
    recipient_id: str = Field(index=True)
    sent_at: datetime = Field(default_factory=_now)
    opened_at: Optional[datetime] = None
    clicked_at: Optional[datetime] = None
    converted_at: Optional[datetime] = None
    unsubscribed_at: Optional[datetime] = None
    conversion_value: Optional[float] = None


COLLECTIONS: Dict[str, Type[SQLModel]] = {
    "social_posts": SocialPost,
    "social_interactions": SocialInteraction,
    "email_templates": EmailTemplate,
    "email_campaigns": EmailCampaign,
    "contacts": Contact,
    "campaign_analytics": CampaignAnalyticsEvent,
}
