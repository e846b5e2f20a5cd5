# ============================================================================
# FILE: app/schemas/video.py
# ============================================================================
from pydantic import BaseModel
from datetime import datetime
from app.schemas.common import CamelModel, NonEmptyStr, UserSummary

class VideoCreate(BaseModel):
    """Form fields accompanying a video upload"""
    title: NonEmptyStr
    description: NonEmptyStr

class VideoOut(CamelModel):
    """Stored video as returned by create/update/toggle"""
    id: str
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner_id: str
    created_at: datetime
    updated_at: datetime

class VideoListItem(CamelModel):
    id: str
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    owner: UserSummary

class VideoOwner(UserSummary):
    subscribers_count: int
    is_subscribed: bool

class VideoDetail(CamelModel):
    id: str
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime
    owner: VideoOwner
    likes_count: int
    is_liked: bool
    comments_count: int

class LikedVideo(VideoListItem):
    liked_at: datetime

class WatchHistoryItem(VideoListItem):
    watched_at: datetime

class ChannelVideo(CamelModel):
    """Dashboard row: the owner's own video with engagement counts"""
    id: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    likes_count: int
    comments_count: int
