# ============================================================================
# FILE: app/schemas/dashboard.py
# ============================================================================
from app.schemas.common import CamelModel

class ChannelStats(CamelModel):
    total_videos: int
    total_views: int
    total_subscribers: int
    total_likes: int
    total_comments: int
