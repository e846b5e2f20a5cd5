# ============================================================================
# FILE: app/services/subscription_service.py
# ============================================================================
from typing import Optional
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import InvalidArgument, NotFound, PersistenceError
from app.core.validation import Pagination, validate_object_id
from app.db.models import Subscription, User
from app.db.read_model import PageResult
from app.services import read_models
import logging

logger = logging.getLogger(__name__)

class SubscriptionService:
    """Service layer for channel subscriptions"""

    def _require_user(self, db: Session, user_id: str, message: str):
        if not db.get(User, user_id):
            raise NotFound(message)

    def toggle_subscription(self, db: Session, channel_id: str, subscriber_id: str) -> bool:
        """Subscribe to a channel, or unsubscribe if already subscribed"""
        channel_id = validate_object_id(channel_id, "channel id")
        if channel_id == subscriber_id:
            raise InvalidArgument("You cannot subscribe to your own channel")
        self._require_user(db, channel_id, "Channel not found")

        try:
            result = db.execute(
                delete(Subscription)
                .where(Subscription.channel_id == channel_id, Subscription.subscriber_id == subscriber_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount:
                db.commit()
                logger.info(f"Unsubscribed: {subscriber_id} from {channel_id}")
                return False

            db.add(Subscription(channel_id=channel_id, subscriber_id=subscriber_id))
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Subscription already recorded: {subscriber_id} to {channel_id}")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error toggling subscription to {channel_id}: {e}")
            raise PersistenceError()

        logger.info(f"Subscribed: {subscriber_id} to {channel_id}")
        return True

    def get_channel_subscribers(
        self, db: Session, channel_id: str, viewer_id: Optional[str], pagination: Pagination
    ) -> PageResult:
        channel_id = validate_object_id(channel_id, "channel id")
        self._require_user(db, channel_id, "Channel not found")
        model = read_models.channel_subscribers(channel_id, viewer_id)
        return model.paginate(db, pagination.page, pagination.limit)

    def get_subscribed_channels(
        self, db: Session, subscriber_id: str, viewer_id: Optional[str], pagination: Pagination
    ) -> PageResult:
        subscriber_id = validate_object_id(subscriber_id, "subscriber id")
        self._require_user(db, subscriber_id, "User not found")
        model = read_models.subscribed_channels(subscriber_id, viewer_id)
        return model.paginate(db, pagination.page, pagination.limit)

# Create singleton instance
subscription_service = SubscriptionService()
