# ============================================================================
# FILE: app/db/models/subscription.py
# ============================================================================
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from app.db.base import Base, generate_object_id, utcnow

class Subscription(Base):
    """Directed follow edge: subscriber follows channel"""
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
    )

    id = Column(String(24), primary_key=True, default=generate_object_id)
    subscriber_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    channel_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
