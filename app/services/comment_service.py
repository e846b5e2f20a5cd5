# ============================================================================
# FILE: app/services/comment_service.py
# ============================================================================
from typing import Optional
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, NotFoundOrForbidden, PersistenceError
from app.core.validation import Pagination, validate_object_id
from app.db.models import Comment, Like, Video
from app.db.read_model import PageResult
from app.services import read_models
import logging

logger = logging.getLogger(__name__)

class CommentService:
    """Service layer for comment operations"""

    def _require_visible_video(self, db: Session, video_id: str, viewer_id: Optional[str]):
        video = db.query(Video.id).filter(
            Video.id == video_id, read_models.visible_videos(viewer_id)
        ).first()
        if not video:
            raise NotFound("Video not found")

    def get_video_comments(
        self, db: Session, video_id: str, viewer_id: Optional[str], pagination: Pagination
    ) -> PageResult:
        video_id = validate_object_id(video_id, "video id")
        self._require_visible_video(db, video_id, viewer_id)
        return read_models.comment_feed(video_id, viewer_id).paginate(db, pagination.page, pagination.limit)

    def add_comment(self, db: Session, video_id: str, owner_id: str, content: str) -> Comment:
        video_id = validate_object_id(video_id, "video id")
        self._require_visible_video(db, video_id, owner_id)
        try:
            comment = Comment(content=content, video_id=video_id, owner_id=owner_id)
            db.add(comment)
            db.commit()
            db.refresh(comment)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error adding comment to {video_id}: {e}")
            raise PersistenceError("Something went wrong while adding the comment")
        logger.info(f"Comment added: {comment.id} on video {video_id}")
        return comment

    def update_comment(self, db: Session, comment_id: str, owner_id: str, content: str) -> Comment:
        comment_id = validate_object_id(comment_id, "comment id")
        try:
            result = db.execute(
                update(Comment)
                .where(Comment.id == comment_id, Comment.owner_id == owner_id)
                .values(content=content)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Comment not found or you are not authorized to update it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating comment {comment_id}: {e}")
            raise PersistenceError()
        return db.get(Comment, comment_id, populate_existing=True)

    def delete_comment(self, db: Session, comment_id: str, owner_id: str):
        comment_id = validate_object_id(comment_id, "comment id")
        try:
            result = db.execute(
                delete(Comment)
                .where(Comment.id == comment_id, Comment.owner_id == owner_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Comment not found or you are not authorized to delete it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting comment {comment_id}: {e}")
            raise PersistenceError()
        logger.info(f"Comment deleted: {comment_id}")

        try:
            db.execute(
                delete(Like).where(Like.comment_id == comment_id).execution_options(synchronize_session=False)
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Comment {comment_id} deleted but its likes were not: {e}")

# Create singleton instance
comment_service = CommentService()
