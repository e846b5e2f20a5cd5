# ============================================================================
# FILE: app/schemas/playlist.py
# ============================================================================
from pydantic import model_validator
from typing import Optional, List
from datetime import datetime
from app.schemas.common import CamelModel, NonEmptyStr, TrimmedStr, UserSummary

class PlaylistCreate(CamelModel):
    """Schema for creating a playlist"""
    name: NonEmptyStr
    description: NonEmptyStr

class PlaylistUpdate(CamelModel):
    """Schema for updating a playlist; an empty description clears it"""
    name: Optional[NonEmptyStr] = None
    description: Optional[TrimmedStr] = None

    @model_validator(mode="after")
    def require_one_field(self):
        if self.name is None and self.description is None:
            raise ValueError("Please provide at least one field to update")
        return self

class PlaylistOut(CamelModel):
    """Stored playlist as returned by mutations"""
    id: str
    name: str
    description: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

class PlaylistVideoSummary(CamelModel):
    """Video row inside a playlist listing"""
    id: str
    title: str
    description: str
    thumbnail: str
    duration: float
    views: int
    created_at: datetime

class PlaylistVideoItem(CamelModel):
    """Video row inside a playlist detail, with its own owner"""
    id: str
    title: str
    thumbnail: str
    duration: float
    views: int
    created_at: datetime
    owner: UserSummary

class PlaylistSummary(CamelModel):
    id: str
    name: str
    description: str
    video_count: int
    total_duration: float
    created_at: datetime
    updated_at: datetime
    videos: List[PlaylistVideoSummary] = []

class PlaylistDetail(CamelModel):
    id: str
    name: str
    description: str
    video_count: int
    total_duration: float
    created_at: datetime
    updated_at: datetime
    owner: UserSummary
    videos: List[PlaylistVideoItem] = []
