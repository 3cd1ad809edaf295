"""Amplify: Social API Routes."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from amplify.api.deps import get_social_service, unwrap
from amplify.core.logging import get_logger
from amplify.core.outcome import capture
from amplify.services.social import SocialService

logger = get_logger("api.social")

router = APIRouter(prefix="/social", tags=["Social"])


@router.post("/posts", status_code=201)
async def create_post(
    post: Dict[str, Any] = Body(...),
    service: SocialService = Depends(get_social_service),
):
    """Create a post. Status defaults to draft."""
    return unwrap(await capture(service.create_social_post(post)))


@router.post("/posts/schedule", status_code=201)
async def schedule_post(
    post: Dict[str, Any] = Body(...),
    service: SocialService = Depends(get_social_service),
):
    """Create a post with a publish time. ``scheduled_at`` is required."""
    return unwrap(await capture(service.schedule_social_post(post)))


@router.get("/posts")
async def list_posts(
    status: Optional[str] = Query(None, description="draft | scheduled | published"),
    platform: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    service: SocialService = Depends(get_social_service),
):
    posts = unwrap(await capture(service.list_social_posts(status, platform, limit)))
    return {"status": "success", "count": len(posts), "posts": posts}


@router.get("/posts/{post_id}")
async def get_post(
    post_id: str, service: SocialService = Depends(get_social_service)
):
    return unwrap(await capture(service.get_social_post(post_id)))


@router.post("/posts/{post_id}/publish")
async def publish_post(
    post_id: str, service: SocialService = Depends(get_social_service)
):
    return unwrap(await capture(service.publish_social_post(post_id)))


@router.post("/posts/{post_id}/interactions", status_code=201)
async def track_interaction(
    post_id: str,
    interaction: Dict[str, Any] = Body(...),
    service: SocialService = Depends(get_social_service),
):
    """Record a like, share or comment on the post in the path."""
    payload = {**interaction, "post_id": post_id}
    return unwrap(await capture(service.track_social_interaction(payload)))


@router.get("/posts/{post_id}/analytics")
async def post_analytics(
    post_id: str, service: SocialService = Depends(get_social_service)
):
    return unwrap(await capture(service.get_social_post_analytics(post_id)))
