# ============================================================================
# FILE: app/services/playlist_service.py
# ============================================================================
from typing import Dict, Optional
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import Conflict, Forbidden, NotFound, NotFoundOrForbidden, PersistenceError
from app.core.validation import Pagination, validate_object_id
from app.db.models.playlist import Playlist, PlaylistVideo
from app.db.models.user import User
from app.db.models.video import Video
from app.db.read_model import PageResult
from app.schemas.playlist import PlaylistCreate, PlaylistUpdate
from app.services import read_models
import logging

logger = logging.getLogger(__name__)

class PlaylistService:
    """Service layer for playlist operations"""

    def create_playlist(self, db: Session, owner_id: str, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist for a user"""
        try:
            playlist = Playlist(
                owner_id=owner_id,
                name=playlist_data.name,
                description=playlist_data.description
            )
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise PersistenceError("Something went wrong while creating the playlist")
        logger.info(f"Playlist created: {playlist.id} for user {owner_id}")
        return playlist

    def get_user_playlists(
        self, db: Session, user_id: str, viewer_id: Optional[str], pagination: Pagination
    ) -> PageResult:
        """Get a user's playlists with counts over the videos the viewer may see"""
        user_id = validate_object_id(user_id, "user id")
        if not db.get(User, user_id):
            raise NotFound("User not found")
        return read_models.playlist_summaries(user_id, viewer_id).paginate(db, pagination.page, pagination.limit)

    def get_playlist(self, db: Session, playlist_id: str, viewer_id: Optional[str]) -> Dict:
        """Get a specific playlist with its visible videos"""
        playlist_id = validate_object_id(playlist_id, "playlist id")
        playlist = read_models.playlist_detail(playlist_id, viewer_id).first(db)
        if not playlist:
            raise NotFound("Playlist not found")
        return playlist

    def update_playlist(
        self, db: Session, playlist_id: str, owner_id: str, update_data: PlaylistUpdate
    ) -> Playlist:
        """Update playlist details"""
        playlist_id = validate_object_id(playlist_id, "playlist id")
        values = update_data.model_dump(exclude_none=True)

        try:
            result = db.execute(
                update(Playlist)
                .where(Playlist.id == playlist_id, Playlist.owner_id == owner_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Playlist not found or you are not authorized to update it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating playlist: {e}")
            raise PersistenceError()

        logger.info(f"Playlist updated: {playlist_id}")
        return db.get(Playlist, playlist_id, populate_existing=True)

    def delete_playlist(self, db: Session, playlist_id: str, owner_id: str):
        """Delete a playlist, then its membership rows"""
        playlist_id = validate_object_id(playlist_id, "playlist id")
        try:
            result = db.execute(
                delete(Playlist)
                .where(Playlist.id == playlist_id, Playlist.owner_id == owner_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden("Playlist not found or you are not authorized to delete it")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise PersistenceError()
        logger.info(f"Playlist deleted: {playlist_id}")

        try:
            db.execute(
                delete(PlaylistVideo)
                .where(PlaylistVideo.playlist_id == playlist_id)
                .execution_options(synchronize_session=False)
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Playlist {playlist_id} deleted but its entries were not: {e}")

    def add_video_to_playlist(self, db: Session, playlist_id: str, video_id: str, actor_id: str) -> Playlist:
        """Add a video to a playlist owned by the actor"""
        playlist_id = validate_object_id(playlist_id, "playlist id")
        video_id = validate_object_id(video_id, "video id")

        video = db.get(Video, video_id)
        if not video:
            raise NotFound("Video not found")
        playlist = db.get(Playlist, playlist_id)
        if not playlist:
            raise NotFound("Playlist not found")
        if playlist.owner_id != actor_id:
            raise Forbidden("You are not authorized to modify this playlist")
        if not video.is_published and video.owner_id != actor_id:
            raise Forbidden("Cannot add unpublished videos from other users")

        # Check if video already exists in playlist
        existing = db.query(PlaylistVideo.id).filter(
            PlaylistVideo.playlist_id == playlist_id,
            PlaylistVideo.video_id == video_id
        ).first()
        if existing:
            raise Conflict("Video already exists in this playlist")

        try:
            db.add(PlaylistVideo(playlist_id=playlist_id, video_id=video_id))
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict("Video already exists in this playlist")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error adding video to playlist: {e}")
            raise PersistenceError()

        logger.info(f"Video added to playlist {playlist_id}: {video_id}")
        db.refresh(playlist)
        return playlist

    def remove_video_from_playlist(self, db: Session, playlist_id: str, video_id: str, actor_id: str) -> Playlist:
        """Remove a video from a playlist owned by the actor"""
        playlist_id = validate_object_id(playlist_id, "playlist id")
        video_id = validate_object_id(video_id, "video id")

        owned = select(Playlist.id).where(Playlist.id == playlist_id, Playlist.owner_id == actor_id)
        try:
            result = db.execute(
                delete(PlaylistVideo)
                .where(
                    PlaylistVideo.playlist_id.in_(owned),
                    PlaylistVideo.video_id == video_id
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundOrForbidden(
                    "Playlist not found, you're not authorized, or video doesn't exist in playlist"
                )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error removing video from playlist: {e}")
            raise PersistenceError()

        logger.info(f"Video removed from playlist {playlist_id}: {video_id}")
        return db.get(Playlist, playlist_id, populate_existing=True)

# Create singleton instance
playlist_service = PlaylistService()
