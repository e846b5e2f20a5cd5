# ============================================================================
# FILE: app/schemas/subscription.py
# ============================================================================
from datetime import datetime
from app.schemas.common import CamelModel, UserSummary

class SubscriptionState(CamelModel):
    is_subscribed: bool

class SubscriptionUser(UserSummary):
    """A subscriber or subscribed channel, seen from the viewer's side"""
    subscribed_at: datetime
    subscribers_count: int
    is_subscribed: bool
