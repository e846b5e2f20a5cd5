# ============================================================================
# FILE: app/services/tweet_service.py
# ============================================================================
from typing import Optional
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, NotFoundOrForbidden, PersistenceError
from app.core.validation import Pagination, validate_object_id
from app.db.models import Like, Tweet, User
from app.db.read_model import PageResult
from app.services import read_models
import logging

logger = logging.getLogger(__name__)

class TweetService:
    """Service layer for tweet operations"""

    def create_tweet(self, db: Session, owner_id: str, content: str) -> Tweet:
        try:
            tweet = Tweet(content=content, owner_id=owner_id)
            db.add(tweet)
            db.commit()
            db.refresh(tweet)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating tweet: {e}")
            raise PersistenceError("Something went wrong while creating the tweet")
        logger.info(f"Tweet created: {tweet.id} by {owner_id}")
        return tweet

    def get_user_tweets(
        self, db: Session, user_id: str, viewer_id: Optional[str], pagination: Pagination
    ) -> PageResult:
        user_id = validate_object_id(user_id, "user id")
        if not db.get(User, user_id):
            raise NotFound("User not found")
        return read_models.tweet_feed(user_id, viewer_id).paginate(db, pagination.page, pagination.limit)

    def update_tweet(self, db: Session, tweet_id: str, owner_id: str, content: str) -> Tweet:
        tweet_id = validate_object_id(tweet_id, "tweet id")
        try:
            result = db.execute(
                update(Tweet)
                .where(Tweet.id == tweet_id, Tweet.owner_id == owner_id)
                .values(content=content)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Tweet not found or you are not authorized to update it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating tweet {tweet_id}: {e}")
            raise PersistenceError()
        return db.get(Tweet, tweet_id, populate_existing=True)

    def delete_tweet(self, db: Session, tweet_id: str, owner_id: str):
        tweet_id = validate_object_id(tweet_id, "tweet id")
        try:
            result = db.execute(
                delete(Tweet)
                .where(Tweet.id == tweet_id, Tweet.owner_id == owner_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Tweet not found or you are not authorized to delete it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting tweet {tweet_id}: {e}")
            raise PersistenceError()
        logger.info(f"Tweet deleted: {tweet_id}")

        try:
            db.execute(delete(Like).where(Like.tweet_id == tweet_id).execution_options(synchronize_session=False))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Tweet {tweet_id} deleted but its likes were not: {e}")

# Create singleton instance
tweet_service = TweetService()
