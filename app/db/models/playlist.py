# ============================================================================
# FILE: app/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base, generate_object_id, utcnow

class Playlist(Base):
    """Playlist model for user-created playlists"""
    __tablename__ = "playlists"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    owner_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    owner = relationship("User", back_populates="playlists")
    entries = relationship("PlaylistVideo", back_populates="playlist", order_by="PlaylistVideo.id")

class PlaylistVideo(Base):
    """Ordered playlist membership; a video appears at most once per playlist"""
    __tablename__ = "playlist_videos"
    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_videos_playlist_video"),
    )

    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(String(24), ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    video_id = Column(String(24), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    added_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    playlist = relationship("Playlist", back_populates="entries")
