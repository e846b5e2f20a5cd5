# ============================================================================
# FILE: app/services/user_service.py
# ============================================================================
from typing import Dict, Optional, Tuple
from fastapi import UploadFile
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import Conflict, InvalidArgument, NotFound, PersistenceError, Unauthorized
from app.core.media_storage import media_storage
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    get_password_hash,
    verify_password,
)
from app.core.validation import Pagination, optional_text, require_text
from app.db.models.user import User
from app.db.read_model import PageResult
from app.schemas.user import AccountUpdate, UserCreate
from app.services import read_models
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""

    def create_user(
        self,
        db: Session,
        user_data: UserCreate,
        avatar: UploadFile,
        cover_image: Optional[UploadFile] = None,
    ) -> User:
        """Create a new user account with uploaded avatar and optional cover"""
        existing = db.query(User).filter(
            or_(User.username == user_data.username, User.email == user_data.email)
        ).first()
        if existing:
            raise Conflict("User with given email or username already exists")

        avatar_media = media_storage.upload(avatar, "avatars", "Avatar image")
        cover_media = media_storage.upload_optional(cover_image, "covers")

        user = User(
            username=user_data.username,
            email=user_data.email,
            full_name=user_data.full_name,
            hashed_password=get_password_hash(user_data.password),
            avatar=avatar_media.url,
            cover_image=cover_media.url if cover_media else None,
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError:
            db.rollback()
            raise Conflict("User with given email or username already exists")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise PersistenceError("Unable to create user. Please try again later.")

        logger.info(f"User created: {user.username}")
        return user

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username.strip().lower()).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email.strip().lower()).first()

    def authenticate_user(
        self, db: Session, username: Optional[str], email: Optional[str], password: str
    ) -> User:
        """Find the account by username or email and check its password"""
        username = optional_text(username)
        email = optional_text(email)
        if not username and not email:
            raise InvalidArgument("Username or email is required")

        user = self.get_user_by_username(db, username) if username else self.get_user_by_email(db, email)
        if not user:
            raise NotFound("User does not exist")
        if not verify_password(password, user.hashed_password):
            raise Unauthorized("Invalid user credentials")
        return user

    def issue_tokens(self, db: Session, user: User) -> Tuple[str, str]:
        """Create an access/refresh pair and remember the refresh token"""
        claims = {"sub": user.id, "username": user.username, "email": user.email}
        access_token = create_access_token(claims)
        refresh_token = create_refresh_token({"sub": user.id})

        try:
            user.refresh_token = refresh_token
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error storing refresh token for {user.id}: {e}")
            raise PersistenceError("Something went wrong while generating tokens")
        return access_token, refresh_token

    def logout(self, db: Session, user: User):
        try:
            user.refresh_token = None
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error clearing refresh token for {user.id}: {e}")
            raise PersistenceError()
        logger.info(f"User logged out: {user.username}")

    def refresh_tokens(self, db: Session, incoming_token: Optional[str]) -> Tuple[str, str]:
        """Rotate both tokens; a refresh token is accepted only once"""
        if not incoming_token:
            raise Unauthorized("Refresh token is required")

        payload = decode_refresh_token(incoming_token)
        user = db.get(User, payload["sub"])
        if not user:
            raise Unauthorized("Invalid refresh token")
        if incoming_token != user.refresh_token:
            raise Unauthorized("Refresh token is expired or used")
        return self.issue_tokens(db, user)

    def change_password(self, db: Session, user: User, old_password: str, new_password: str):
        if not verify_password(old_password, user.hashed_password):
            raise InvalidArgument("Invalid old password")
        try:
            user.hashed_password = get_password_hash(new_password)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error changing password for {user.id}: {e}")
            raise PersistenceError()
        logger.info(f"Password changed for {user.username}")

    def update_account(self, db: Session, user: User, update_data: AccountUpdate) -> User:
        """Update full name and/or email"""
        if update_data.email is not None and update_data.email != user.email:
            taken = db.query(User.id).filter(User.email == update_data.email, User.id != user.id).first()
            if taken:
                raise Conflict("Email is already in use")
            user.email = update_data.email
        if update_data.full_name is not None:
            user.full_name = update_data.full_name

        try:
            db.commit()
            db.refresh(user)
        except IntegrityError:
            db.rollback()
            raise Conflict("Email is already in use")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating account {user.id}: {e}")
            raise PersistenceError()
        return user

    def update_image(self, db: Session, user: User, upload: UploadFile, field: str) -> User:
        """Replace the avatar or cover image with a fresh upload"""
        folder, label = {"avatar": ("avatars", "Avatar image"), "cover_image": ("covers", "Cover image")}[field]
        media = media_storage.upload(upload, folder, label)
        try:
            setattr(user, field, media.url)
            db.commit()
            db.refresh(user)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating {field} for {user.id}: {e}")
            raise PersistenceError()
        logger.info(f"Updated {field} for {user.username}")
        return user

    def get_channel_profile(self, db: Session, username: str, viewer_id: Optional[str]) -> Dict:
        username = require_text(username, "Username")
        profile = read_models.channel_profile(username, viewer_id).first(db)
        if not profile:
            raise NotFound("Channel does not exist")
        return profile

    def get_watch_history(self, db: Session, viewer_id: str, pagination: Pagination) -> PageResult:
        return read_models.watch_history(viewer_id).paginate(db, pagination.page, pagination.limit)

# Create singleton instance
user_service = UserService()
