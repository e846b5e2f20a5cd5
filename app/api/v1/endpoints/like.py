# ============================================================================
# FILE: app/api/v1/endpoints/like.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_pagination, require_current_user
from app.core.validation import Pagination
from app.schemas.common import ApiResponse, Page, envelope
from app.schemas.like import LikeState
from app.schemas.video import LikedVideo
from app.services.like_service import like_service
from app.db.models.user import User

router = APIRouter()

def _like_message(is_liked: bool, target: str) -> str:
    return f"{target} liked successfully" if is_liked else f"{target} unliked successfully"

@router.post("/toggle/v/{video_id}", response_model=ApiResponse[LikeState])
def toggle_video_like(
    video_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    is_liked = like_service.toggle_video_like(db, video_id, current_user.id)
    return envelope({"is_liked": is_liked}, _like_message(is_liked, "Video"))

@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[LikeState])
def toggle_comment_like(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    is_liked = like_service.toggle_comment_like(db, comment_id, current_user.id)
    return envelope({"is_liked": is_liked}, _like_message(is_liked, "Comment"))

@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[LikeState])
def toggle_tweet_like(
    tweet_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    is_liked = like_service.toggle_tweet_like(db, tweet_id, current_user.id)
    return envelope({"is_liked": is_liked}, _like_message(is_liked, "Tweet"))

@router.get("/videos", response_model=ApiResponse[Page[LikedVideo]])
def get_liked_videos(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """Videos the current user liked, most recent like first"""
    page = like_service.get_liked_videos(db, current_user.id, pagination)
    return envelope(page.to_dict(), "Liked videos fetched successfully")
