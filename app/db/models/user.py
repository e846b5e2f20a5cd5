# ============================================================================
# FILE: app/db/models/user.py
# ============================================================================
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from app.db.base import Base, generate_object_id, utcnow

class User(Base):
    """Registered user; every user is also a channel"""
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    avatar = Column(String, nullable=False)
    cover_image = Column(String, nullable=True)
    refresh_token = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    videos = relationship("Video", back_populates="owner")
    playlists = relationship("Playlist", back_populates="owner")
    history = relationship("WatchHistory", back_populates="user", order_by="WatchHistory.id")
