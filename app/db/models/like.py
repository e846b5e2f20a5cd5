# ============================================================================
# FILE: app/db/models/like.py
# ============================================================================
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from app.core.exceptions import InvalidArgument
from app.db.base import Base, generate_object_id, utcnow

TARGET_FIELDS = ("comment_id", "video_id", "tweet_id")

class Like(Base):
    """A user's like on exactly one comment, video or tweet"""
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("video_id", "liked_by_id", name="uq_likes_video_user"),
        UniqueConstraint("comment_id", "liked_by_id", name="uq_likes_comment_user"),
        UniqueConstraint("tweet_id", "liked_by_id", name="uq_likes_tweet_user"),
        CheckConstraint(
            "(CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_likes_single_target",
        ),
    )

    id = Column(String(24), primary_key=True, default=generate_object_id)
    comment_id = Column(String(24), ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True)
    video_id = Column(String(24), ForeignKey("videos.id", ondelete="CASCADE"), nullable=True, index=True)
    tweet_id = Column(String(24), ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True, index=True)
    liked_by_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        targets = [field for field in TARGET_FIELDS if getattr(self, field)]
        if len(targets) != 1:
            raise InvalidArgument("Exactly one of 'comment', 'video', or 'tweet' must be provided.")
        if not self.liked_by_id:
            raise InvalidArgument("A like must record who liked it")
