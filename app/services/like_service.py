# ============================================================================
# FILE: app/services/like_service.py
# ============================================================================
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, PersistenceError
from app.core.validation import Pagination, validate_object_id
from app.db.models import Comment, Like, Tweet, Video
from app.db.read_model import PageResult
from app.services import read_models
import logging

logger = logging.getLogger(__name__)

class LikeService:
    """Service layer for like toggles"""

    def _toggle(self, db: Session, viewer_id: str, field: str, target_id: str) -> bool:
        """
        Remove the viewer's like on the target, or add one if there was none

        Returns the new state. A concurrent request that inserted the same
        like first leaves the like in place, so the state is reported as on.
        """
        column = getattr(Like, field)
        try:
            result = db.execute(
                delete(Like)
                .where(column == target_id, Like.liked_by_id == viewer_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount:
                db.commit()
                logger.info(f"Like removed: {field}={target_id} by {viewer_id}")
                return False

            db.add(Like(liked_by_id=viewer_id, **{field: target_id}))
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Like already recorded: {field}={target_id} by {viewer_id}")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error toggling like on {field}={target_id}: {e}")
            raise PersistenceError()

        logger.info(f"Like added: {field}={target_id} by {viewer_id}")
        return True

    def toggle_video_like(self, db: Session, video_id: str, viewer_id: str) -> bool:
        video_id = validate_object_id(video_id, "video id")
        video = db.query(Video.id).filter(
            Video.id == video_id, read_models.visible_videos(viewer_id)
        ).first()
        if not video:
            raise NotFound("Video not found")
        return self._toggle(db, viewer_id, "video_id", video_id)

    def toggle_comment_like(self, db: Session, comment_id: str, viewer_id: str) -> bool:
        comment_id = validate_object_id(comment_id, "comment id")
        comment = db.query(Comment.id).join(Video, Video.id == Comment.video_id).filter(
            Comment.id == comment_id, read_models.visible_videos(viewer_id)
        ).first()
        if not comment:
            raise NotFound("Comment not found")
        return self._toggle(db, viewer_id, "comment_id", comment_id)

    def toggle_tweet_like(self, db: Session, tweet_id: str, viewer_id: str) -> bool:
        tweet_id = validate_object_id(tweet_id, "tweet id")
        if not db.get(Tweet, tweet_id):
            raise NotFound("Tweet not found")
        return self._toggle(db, viewer_id, "tweet_id", tweet_id)

    def get_liked_videos(self, db: Session, viewer_id: str, pagination: Pagination) -> PageResult:
        return read_models.liked_videos(viewer_id).paginate(db, pagination.page, pagination.limit)

# Create singleton instance
like_service = LikeService()
