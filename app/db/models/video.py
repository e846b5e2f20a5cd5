# ============================================================================
# FILE: app/db/models/video.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Float, Boolean
from sqlalchemy.orm import relationship
from app.db.base import Base, generate_object_id, utcnow

class Video(Base):
    """Uploaded video; owner is fixed at creation"""
    __tablename__ = "videos"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    video_file = Column(String, nullable=False)
    thumbnail = Column(String, nullable=False)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    duration = Column(Float, nullable=False, default=0)  # seconds
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)
    owner_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    owner = relationship("User", back_populates="videos")
