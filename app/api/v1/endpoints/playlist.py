# ============================================================================
# FILE: app/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_pagination, get_viewer_id, require_current_user
from app.core.validation import Pagination
from app.schemas.common import ApiResponse, DeletedResource, Page, envelope
from app.schemas.playlist import (
    PlaylistCreate,
    PlaylistDetail,
    PlaylistOut,
    PlaylistSummary,
    PlaylistUpdate
)
from app.services.playlist_service import playlist_service
from app.db.models.user import User
from typing import Optional
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=ApiResponse[PlaylistOut], status_code=status.HTTP_201_CREATED)
def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    playlist = playlist_service.create_playlist(db, current_user.id, playlist_data)
    return envelope(playlist, "Playlist created successfully", status.HTTP_201_CREATED)

@router.get("/user/{user_id}", response_model=ApiResponse[Page[PlaylistSummary]])
def get_user_playlists(
    user_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    """
    Get all playlists of a user
    Video counts and durations only include videos the viewer may see
    """
    page = playlist_service.get_user_playlists(db, user_id, viewer_id, pagination)
    return envelope(page.to_dict(), "User playlists fetched successfully")

@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
def get_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    """Get a specific playlist with its videos in the order they were added"""
    playlist = playlist_service.get_playlist(db, playlist_id, viewer_id)
    return envelope(playlist, "Playlist fetched successfully")

@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistOut])
def update_playlist(
    playlist_id: str,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Update playlist details (name, description)
    Requires authentication and ownership
    """
    playlist = playlist_service.update_playlist(db, playlist_id, current_user.id, update_data)
    return envelope(playlist, "Playlist updated successfully")

@router.delete("/{playlist_id}", response_model=ApiResponse[DeletedResource])
def delete_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist
    Requires authentication and ownership
    """
    playlist_service.delete_playlist(db, playlist_id, current_user.id)
    return envelope({"id": playlist_id.lower()}, "Playlist deleted successfully")

@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistOut])
def add_video_to_playlist(
    video_id: str,
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    playlist = playlist_service.add_video_to_playlist(db, playlist_id, video_id, current_user.id)
    return envelope(playlist, "Video added to playlist successfully")

@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistOut])
def remove_video_from_playlist(
    video_id: str,
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    playlist = playlist_service.remove_video_from_playlist(db, playlist_id, video_id, current_user.id)
    return envelope(playlist, "Video removed from playlist successfully")
