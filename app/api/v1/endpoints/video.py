# ============================================================================
# FILE: app/api/v1/endpoints/video.py
# ============================================================================
from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_pagination, get_viewer_id, require_current_user
from app.core.validation import Pagination, validate_payload
from app.schemas.common import ApiResponse, DeletedResource, Page, envelope
from app.schemas.video import VideoCreate, VideoDetail, VideoListItem, VideoOut
from app.services.video_service import video_service
from app.db.models.user import User
from typing import Optional

router = APIRouter()

@router.get("", response_model=ApiResponse[Page[VideoListItem]])
def list_videos(
    query: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_type: Optional[str] = Query(None, alias="sortType"),
    user_id: Optional[str] = Query(None, alias="userId"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    """
    Search and browse videos
    Unpublished videos show up only for their owner
    """
    page = video_service.list_videos(
        db,
        viewer_id,
        pagination,
        query=query,
        sort_by=sort_by,
        sort_type=sort_type,
        user_id=user_id,
    )
    return envelope(page.to_dict(), "Videos fetched successfully")

@router.post("", response_model=ApiResponse[VideoOut], status_code=status.HTTP_201_CREATED)
def publish_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Upload a new video
    Multipart form: title, description, videoFile, thumbnail
    """
    video_data = validate_payload(VideoCreate, title=title, description=description)
    video = video_service.publish_video(db, current_user.id, video_data, video_file, thumbnail)
    return envelope(video, "Video uploaded successfully", status.HTTP_201_CREATED)

@router.get("/{video_id}", response_model=ApiResponse[VideoDetail])
def get_video(
    video_id: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    """
    Get one video with owner, like and comment details
    Counts the view and records watch history after responding
    """
    video = video_service.get_video(db, video_id, viewer_id)
    background_tasks.add_task(video_service.record_view, video["id"], viewer_id)
    return envelope(video, "Video fetched successfully")

@router.patch("/{video_id}", response_model=ApiResponse[VideoOut])
def update_video(
    video_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    video = video_service.update_video(
        db, video_id, current_user.id, title=title, description=description, thumbnail=thumbnail
    )
    return envelope(video, "Video updated successfully")

@router.delete("/{video_id}", response_model=ApiResponse[DeletedResource])
def delete_video(
    video_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    video_service.delete_video(db, video_id, current_user.id)
    return envelope({"id": video_id.lower()}, "Video deleted successfully")

@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[VideoOut])
def toggle_publish_status(
    video_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    video = video_service.toggle_publish_status(db, video_id, current_user.id)
    status_text = "published" if video.is_published else "unpublished"
    return envelope(video, f"Video {status_text} successfully")
