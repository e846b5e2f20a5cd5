# ============================================================================
# FILE: app/api/v1/endpoints/comment.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_pagination, get_viewer_id, require_current_user
from app.core.validation import Pagination
from app.schemas.comment import CommentContent, CommentItem, CommentOut
from app.schemas.common import ApiResponse, DeletedResource, Page, envelope
from app.services.comment_service import comment_service
from app.db.models.user import User
from typing import Optional

router = APIRouter()

@router.get("/{video_id}", response_model=ApiResponse[Page[CommentItem]])
def get_video_comments(
    video_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    """Comments on a video, newest first, with like counts"""
    page = comment_service.get_video_comments(db, video_id, viewer_id, pagination)
    return envelope(page.to_dict(), "Comments fetched successfully")

@router.post("/{video_id}", response_model=ApiResponse[CommentOut], status_code=status.HTTP_201_CREATED)
def add_comment(
    video_id: str,
    body: CommentContent,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    comment = comment_service.add_comment(db, video_id, current_user.id, body.content)
    return envelope(comment, "Comment added successfully", status.HTTP_201_CREATED)

@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentOut])
def update_comment(
    comment_id: str,
    body: CommentContent,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    comment = comment_service.update_comment(db, comment_id, current_user.id, body.content)
    return envelope(comment, "Comment updated successfully")

@router.delete("/c/{comment_id}", response_model=ApiResponse[DeletedResource])
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    comment_service.delete_comment(db, comment_id, current_user.id)
    return envelope({"id": comment_id.lower()}, "Comment deleted successfully")
