# ============================================================================
# FILE: app/api/v1/endpoints/dashboard.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_channel_videos_pagination, require_current_user
from app.core.validation import Pagination
from app.schemas.common import ApiResponse, Page, envelope
from app.schemas.dashboard import ChannelStats
from app.schemas.video import ChannelVideo
from app.services.dashboard_service import dashboard_service
from app.db.models.user import User

router = APIRouter()

@router.get("/stats", response_model=ApiResponse[ChannelStats])
def get_channel_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Totals across the current user's channel"""
    stats = dashboard_service.get_channel_stats(db, current_user.id)
    return envelope(stats, "Channel stats fetched successfully")

@router.get("/videos", response_model=ApiResponse[Page[ChannelVideo]])
def get_channel_videos(
    pagination: Pagination = Depends(get_channel_videos_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """All of the current user's videos, unpublished included"""
    page = dashboard_service.get_channel_videos(db, current_user.id, pagination)
    return envelope(page.to_dict(), "Channel videos fetched successfully")
