# ============================================================================
# FILE: app/db/models/tweet.py
# ============================================================================
from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from app.db.base import Base, generate_object_id, utcnow

class Tweet(Base):
    """Short text post on a user's channel"""
    __tablename__ = "tweets"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    content = Column(Text, nullable=False)
    owner_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
