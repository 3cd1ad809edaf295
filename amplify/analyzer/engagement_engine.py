"""Amplify: Engagement Engine.

Derives rate metrics from raw counts returned by one aggregate query:
open, click, conversion and unsubscribe rates for email campaigns, and the
like/share/comment mix for social posts.

A rate over a zero denominator is None, never 0 or NaN, for both campaign
and social analytics.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from amplify.core.errors import StoreError
from amplify.core.logging import get_logger
from amplify.models.schemas import CampaignAnalytics, SocialAnalytics
from amplify.store.aggregates import count_all, count_present, count_where, sum_of
from amplify.store.gateway import RecordStore

logger = get_logger("analyzer.engagement")

SOCIAL_AGGREGATES = {
    "likes": count_where("type", "like"),
    "shares": count_where("type", "share"),
    "comments": count_where("type", "comment"),
    "total_engagement": count_all(),
}

CAMPAIGN_AGGREGATES = {
    "total_sent": count_all(),
    "total_opened": count_present("opened_at"),
    "total_clicked": count_present("clicked_at"),
    "total_converted": count_present("converted_at"),
    "total_unsubscribed": count_present("unsubscribed_at"),
    "total_revenue": sum_of("conversion_value"),
}


class _SocialCounts(BaseModel):
    likes: Optional[int] = None
    shares: Optional[int] = None
    comments: Optional[int] = None
    total_engagement: Optional[int] = None


class _CampaignCounts(BaseModel):
    total_sent: Optional[int] = None
    total_opened: Optional[int] = None
    total_clicked: Optional[int] = None
    total_converted: Optional[int] = None
    total_unsubscribed: Optional[int] = None
    total_revenue: Optional[float] = None


def rate(numerator: float, denominator: float) -> Optional[float]:
    """numerator / denominator rounded to 4 places, or None when denominator is 0."""
    if not denominator:
        return None
    return round(numerator / denominator, 4)


def _parse(model, row: Dict[str, Any], what: str):
    try:
        return model.model_validate(row)
    except ValueError as e:
        logger.error(f"Parsing error in {what}: {e}")
        raise StoreError(f"Malformed {what} row", payload=row) from e


async def compute_social_analytics(store: RecordStore, post_id: str) -> SocialAnalytics:
    """Engagement counts and ratios for one post. All zeros for a post with no interactions."""
    row = await store.aggregate(
        "social_interactions", {"post_id": post_id}, SOCIAL_AGGREGATES
    )
    counts = _parse(_SocialCounts, row, "social analytics")

    likes = counts.likes or 0
    shares = counts.shares or 0
    comments = counts.comments or 0
    total = counts.total_engagement or 0

    return SocialAnalytics(
        likes=likes,
        shares=shares,
        comments=comments,
        total_engagement=total,
        like_ratio=rate(likes, total),
        share_ratio=rate(shares, total),
        comment_ratio=rate(comments, total),
    )


async def compute_campaign_analytics(
    store: RecordStore, campaign_id: str
) -> CampaignAnalytics:
    """Campaign totals and per-recipient rates, all over ``total_sent``."""
    row = await store.aggregate(
        "campaign_analytics", {"campaign_id": campaign_id}, CAMPAIGN_AGGREGATES
    )
    counts = _parse(_CampaignCounts, row, "campaign analytics")

    sent = counts.total_sent or 0
    opened = counts.total_opened or 0
    clicked = counts.total_clicked or 0
    converted = counts.total_converted or 0
    unsubscribed = counts.total_unsubscribed or 0
    revenue = float(counts.total_revenue or 0.0)

    analytics = CampaignAnalytics(
        total_sent=sent,
        total_opened=opened,
        total_clicked=clicked,
        total_converted=converted,
        total_unsubscribed=unsubscribed,
        total_revenue=revenue,
        open_rate=rate(opened, sent),
        click_rate=rate(clicked, sent),
        conversion_rate=rate(converted, sent),
        unsubscribe_rate=rate(unsubscribed, sent),
        revenue_per_recipient=rate(revenue, sent),
    )
    logger.info(
        f"Computed performance for campaign {campaign_id}: {sent} sent",
        extra={"operation": "analytics.campaign", "campaign_id": campaign_id},
    )
    return analytics
