# ============================================================================
# FILE: app/schemas/comment.py
# ============================================================================
from datetime import datetime
from app.schemas.common import CamelModel, NonEmptyStr, UserSummary

class CommentContent(CamelModel):
    """Body for creating or editing a comment"""
    content: NonEmptyStr

class CommentOut(CamelModel):
    id: str
    content: str
    video_id: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

class CommentItem(CamelModel):
    id: str
    content: str
    video_id: str
    created_at: datetime
    updated_at: datetime
    owner: UserSummary
    likes_count: int
    is_liked: bool
