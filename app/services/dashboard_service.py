# ============================================================================
# FILE: app/services/dashboard_service.py
# ============================================================================
from typing import Dict
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound
from app.core.validation import Pagination
from app.db.read_model import PageResult
from app.services import read_models

class DashboardService:
    """Channel statistics for the signed-in owner"""

    def get_channel_stats(self, db: Session, channel_id: str) -> Dict:
        stats = read_models.channel_stats(channel_id).first(db)
        if not stats:
            raise NotFound("Channel not found")
        stats.pop("id", None)
        return stats

    def get_channel_videos(self, db: Session, channel_id: str, pagination: Pagination) -> PageResult:
        return read_models.channel_videos(channel_id).paginate(db, pagination.page, pagination.limit)

# Create singleton instance
dashboard_service = DashboardService()
