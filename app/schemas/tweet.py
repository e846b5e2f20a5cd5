# ============================================================================
# FILE: app/schemas/tweet.py
# ============================================================================
from datetime import datetime
from app.schemas.common import CamelModel, NonEmptyStr, UserSummary

class TweetContent(CamelModel):
    content: NonEmptyStr

class TweetOut(CamelModel):
    id: str
    content: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

class TweetItem(CamelModel):
    id: str
    content: str
    created_at: datetime
    updated_at: datetime
    owner: UserSummary
    likes_count: int
    is_liked: bool
