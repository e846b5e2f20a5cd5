# ============================================================================
# FILE: app/api/v1/endpoints/subscription.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_pagination, get_viewer_id, require_current_user
from app.core.validation import Pagination
from app.schemas.common import ApiResponse, Page, envelope
from app.schemas.subscription import SubscriptionState, SubscriptionUser
from app.services.subscription_service import subscription_service
from app.db.models.user import User
from typing import Optional

router = APIRouter()

@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionState])
def toggle_subscription(
    channel_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    is_subscribed = subscription_service.toggle_subscription(db, channel_id, current_user.id)
    message = "Subscribed successfully" if is_subscribed else "Unsubscribed successfully"
    return envelope({"is_subscribed": is_subscribed}, message)

@router.get("/c/{channel_id}", response_model=ApiResponse[Page[SubscriptionUser]])
def get_channel_subscribers(
    channel_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    page = subscription_service.get_channel_subscribers(db, channel_id, viewer_id, pagination)
    return envelope(page.to_dict(), "Subscribers fetched successfully")

@router.get("/u/{subscriber_id}", response_model=ApiResponse[Page[SubscriptionUser]])
def get_subscribed_channels(
    subscriber_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    page = subscription_service.get_subscribed_channels(db, subscriber_id, viewer_id, pagination)
    return envelope(page.to_dict(), "Subscribed channels fetched successfully")
