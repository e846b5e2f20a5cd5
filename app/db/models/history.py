# ============================================================================
# FILE: app/db/models/history.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base, utcnow

class WatchHistory(Base):
    """Append-only log of videos a user opened; repeats are kept"""
    __tablename__ = "watch_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    video_id = Column(String(24), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    watched_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user = relationship("User", back_populates="history")
