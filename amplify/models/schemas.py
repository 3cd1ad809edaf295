"""Amplify: Input Schemas and Analytics Output Models."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# ─────────────────────────────────────────────
# INPUT SCHEMAS — validated before any write
# ─────────────────────────────────────────────


class SocialPostCreate(BaseModel):
    """A social post as submitted by a caller."""

    platform: str
    content: str
    media_urls: Optional[List[str]] = None
    scheduled_at: Optional[str] = None
    tags: Optional[List[str]] = None
    location: Optional[Dict[str, Any]] = None
    campaign_id: Optional[str] = None
    status: Optional[Literal["draft", "scheduled", "published"]] = None


class SocialInteractionCreate(BaseModel):
    """A like, share or comment recorded against a post. Immutable once stored."""

    post_id: str
    type: Literal["like", "share", "comment"]
    platform_user_id: Optional[str] = None
    platform_username: Optional[str] = None
    content: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class EmailTemplateCreate(BaseModel):
    name: str
    subject: str
    content: str
    variables: List[str]


class EmailTemplateModel(EmailTemplateCreate):
    """A stored template; ``content`` holds ``{{variable}}`` placeholders."""

    id: str


class EmailCampaignCreate(BaseModel):
    name: str
    template_id: str
    status: str = "draft"
    scheduled_at: Optional[str] = None
    target_audience: Dict[str, Any] = Field(default_factory=dict)


class EmailCampaignModel(BaseModel):
    """A campaign definition ready to be sent.

    ``target_audience`` is an equality filter over contact columns.
    """

    id: str
    name: str
    template_id: str
    status: str
    scheduled_at: Optional[str] = None
    target_audience: Dict[str, Any]


# ─────────────────────────────────────────────
# OUTPUT MODELS — derived, never stored
# ─────────────────────────────────────────────


class SocialAnalytics(BaseModel):
    """Engagement counts for a post.

    Ratios are the share of total engagement; None when there is none.
    """

    likes: int = 0
    shares: int = 0
    comments: int = 0
    total_engagement: int = 0
    like_ratio: Optional[float] = None
    share_ratio: Optional[float] = None
    comment_ratio: Optional[float] = None


class CampaignAnalytics(BaseModel):
    """Campaign performance. Rates are None when nothing was sent."""

    total_sent: int = 0
    total_opened: int = 0
    total_clicked: int = 0
    total_converted: int = 0
    total_unsubscribed: int = 0
    total_revenue: float = 0.0
    open_rate: Optional[float] = None
    click_rate: Optional[float] = None
    conversion_rate: Optional[float] = None
    unsubscribe_rate: Optional[float] = None
    revenue_per_recipient: Optional[float] = None


class CampaignSendOutcome(BaseModel):
    """Aggregate result of one campaign send."""

    campaign_id: str
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
