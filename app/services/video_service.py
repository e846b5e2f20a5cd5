# ============================================================================
# FILE: app/services/video_service.py
# ============================================================================
from typing import Dict, Optional
from fastapi import UploadFile
from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import InvalidArgument, NotFound, NotFoundOrForbidden, PersistenceError
from app.core.media_storage import media_storage
from app.core.validation import Pagination, optional_text, parse_sort, validate_object_id
from app.db.models import Comment, Like, PlaylistVideo, Video, WatchHistory
from app.db.read_model import PageResult
from app.db.session import SessionLocal
from app.schemas.video import VideoCreate
from app.services import read_models
import logging

logger = logging.getLogger(__name__)

class VideoService:
    """Service layer for video operations"""

    def list_videos(
        self,
        db: Session,
        viewer_id: Optional[str],
        pagination: Pagination,
        query: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> PageResult:
        """Search, filter and sort the videos the viewer may see"""
        owner_id = validate_object_id(user_id, "user id") if optional_text(user_id) else None
        sort_column, descending = parse_sort(sort_by, sort_type, read_models.VIDEO_SORT_FIELDS)
        model = read_models.video_feed(
            viewer_id,
            query=optional_text(query),
            owner_id=owner_id,
            sort_column=sort_column,
            descending=descending,
        )
        return model.paginate(db, pagination.page, pagination.limit)

    def publish_video(
        self,
        db: Session,
        owner_id: str,
        video_data: VideoCreate,
        video_file: Optional[UploadFile],
        thumbnail: Optional[UploadFile],
    ) -> Video:
        """Upload the media and store a new video"""
        media_storage.ensure_present(video_file, "Video file")
        media_storage.ensure_present(thumbnail, "Thumbnail")

        video_media = media_storage.upload(video_file, "videos", "Video file")
        thumbnail_media = media_storage.upload(thumbnail, "thumbnails", "Thumbnail")

        try:
            video = Video(
                owner_id=owner_id,
                title=video_data.title,
                description=video_data.description,
                video_file=video_media.url,
                thumbnail=thumbnail_media.url,
                duration=video_media.duration or 0,
            )
            db.add(video)
            db.commit()
            db.refresh(video)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error publishing video: {e}")
            raise PersistenceError("Something went wrong while uploading the video")

        logger.info(f"Video published: {video.id} by {owner_id}")
        return video

    def get_video(self, db: Session, video_id: str, viewer_id: Optional[str]) -> Dict:
        video_id = validate_object_id(video_id, "video id")
        video = read_models.video_detail(video_id, viewer_id).first(db)
        if not video:
            raise NotFound("Video not found")
        return video

    def record_view(self, video_id: str, viewer_id: Optional[str]):
        """
        Count one view and append it to the viewer's history

        Runs after the response is sent, so it opens its own session and
        only logs failures.
        """
        db = SessionLocal()
        try:
            db.execute(
                update(Video)
                .where(Video.id == video_id)
                .values(views=Video.views + 1, updated_at=Video.updated_at)
                .execution_options(synchronize_session=False)
            )
            if viewer_id:
                db.add(WatchHistory(user_id=viewer_id, video_id=video_id))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Could not record view of {video_id}: {e}")
        finally:
            db.close()

    def update_video(
        self,
        db: Session,
        video_id: str,
        owner_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail: Optional[UploadFile] = None,
    ) -> Video:
        """Update title, description and/or thumbnail of an owned video"""
        video_id = validate_object_id(video_id, "video id")
        values = {}
        if optional_text(title):
            values["title"] = optional_text(title)
        if optional_text(description):
            values["description"] = optional_text(description)
        has_thumbnail = thumbnail is not None and bool(thumbnail.filename)
        if not values and not has_thumbnail:
            raise InvalidArgument("Please provide at least one field to update")

        owned = db.query(Video.id).filter(Video.id == video_id, Video.owner_id == owner_id).first()
        if not owned:
            raise NotFoundOrForbidden("Video not found or you are not authorized to update it")
        if has_thumbnail:
            values["thumbnail"] = media_storage.upload(thumbnail, "thumbnails", "Thumbnail").url

        try:
            result = db.execute(
                update(Video)
                .where(Video.id == video_id, Video.owner_id == owner_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Video not found or you are not authorized to update it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating video {video_id}: {e}")
            raise PersistenceError()

        logger.info(f"Video updated: {video_id}")
        return db.get(Video, video_id, populate_existing=True)

    def delete_video(self, db: Session, video_id: str, owner_id: str):
        """Delete an owned video, then everything that hangs off it"""
        video_id = validate_object_id(video_id, "video id")
        try:
            result = db.execute(
                delete(Video)
                .where(Video.id == video_id, Video.owner_id == owner_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Video not found or you are not authorized to delete it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting video {video_id}: {e}")
            raise PersistenceError()
        logger.info(f"Video deleted: {video_id}")

        self._delete_dependents(db, video_id)

    def _delete_dependents(self, db: Session, video_id: str):
        comment_ids = select(Comment.id).where(Comment.video_id == video_id)
        statements = (
            delete(Like).where(or_(Like.video_id == video_id, Like.comment_id.in_(comment_ids))),
            delete(Comment).where(Comment.video_id == video_id),
            delete(PlaylistVideo).where(PlaylistVideo.video_id == video_id),
            delete(WatchHistory).where(WatchHistory.video_id == video_id),
        )
        try:
            for statement in statements:
                db.execute(statement.execution_options(synchronize_session=False))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Video {video_id} deleted but its dependents were not: {e}")

    def toggle_publish_status(self, db: Session, video_id: str, owner_id: str) -> Video:
        video_id = validate_object_id(video_id, "video id")
        try:
            result = db.execute(
                update(Video)
                .where(Video.id == video_id, Video.owner_id == owner_id)
                .values(is_published=~Video.is_published)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Video not found or you are not authorized to modify it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error toggling publish status of {video_id}: {e}")
            raise PersistenceError()

        video = db.get(Video, video_id, populate_existing=True)
        logger.info(f"Video {video_id} is_published={video.is_published}")
        return video

# Create singleton instance
video_service = VideoService()
