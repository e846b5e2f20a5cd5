# ============================================================================
# FILE: app/api/v1/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Body, Depends, File, Form, Request, Response, UploadFile, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    get_pagination,
    get_viewer_id,
    require_current_user,
)
from app.config import settings
from app.core.media_storage import media_storage
from app.core.validation import Pagination, validate_payload
from app.schemas.common import ApiResponse, Page, envelope
from app.schemas.user import (
    AccountUpdate,
    ChannelProfile,
    LoginData,
    PasswordChange,
    RefreshTokenRequest,
    TokenPair,
    UserCreate,
    UserLogin,
    UserResponse,
)
from app.schemas.video import WatchHistoryItem
from app.services.user_service import user_service
from app.db.models.user import User
from typing import Optional
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def _set_auth_cookies(response: Response, access_token: str, refresh_token: str):
    options = {"httponly": True, "secure": settings.COOKIE_SECURE, "samesite": "lax"}
    response.set_cookie(ACCESS_TOKEN_COOKIE, access_token, max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60, **options)
    response.set_cookie(REFRESH_TOKEN_COOKIE, refresh_token, max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 86400, **options)

@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def register(
    username: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    full_name: Optional[str] = Form(None, alias="fullName"),
    password: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    db: Session = Depends(get_db)
):
    """
    Register a new user account
    Multipart form: text fields plus an avatar and an optional cover image
    """
    user_data = validate_payload(
        UserCreate, username=username, email=email, full_name=full_name, password=password
    )
    media_storage.ensure_present(avatar, "Avatar image")
    user = user_service.create_user(db, user_data, avatar, cover_image)
    return envelope(user, "User registered successfully", status.HTTP_201_CREATED)

@router.post("/login", response_model=ApiResponse[LoginData])
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Login with username or email and password
    Returns both tokens in the body and as httpOnly cookies
    """
    user = user_service.authenticate_user(db, credentials.username, credentials.email, credentials.password)
    access_token, refresh_token = user_service.issue_tokens(db, user)
    _set_auth_cookies(response, access_token, refresh_token)
    logger.info(f"User logged in: {user.username}")
    data = {"user": user, "access_token": access_token, "refresh_token": refresh_token}
    return envelope(data, "User logged in successfully")

@router.post("/logout", response_model=ApiResponse[dict])
def logout(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user_service.logout(db, current_user)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
    return envelope({}, "User logged out")

@router.post("/refresh-token", response_model=ApiResponse[TokenPair])
def refresh_token(
    request: Request,
    response: Response,
    payload: Optional[RefreshTokenRequest] = Body(None),
    db: Session = Depends(get_db)
):
    """Rotate tokens using the refreshToken body field, falling back to the refresh cookie"""
    incoming = (payload.refresh_token if payload else None) or request.cookies.get(REFRESH_TOKEN_COOKIE)
    access_token, new_refresh_token = user_service.refresh_tokens(db, incoming)
    _set_auth_cookies(response, access_token, new_refresh_token)
    data = {"access_token": access_token, "refresh_token": new_refresh_token}
    return envelope(data, "Access token refreshed")

@router.post("/change-password", response_model=ApiResponse[dict])
def change_password(
    passwords: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user_service.change_password(db, current_user, passwords.old_password, passwords.new_password)
    return envelope({}, "Password changed successfully")

@router.get("/current-user", response_model=ApiResponse[UserResponse])
def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return envelope(current_user, "Current user fetched successfully")

@router.patch("/update-account", response_model=ApiResponse[UserResponse])
def update_account(
    update_data: AccountUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user = user_service.update_account(db, current_user, update_data)
    return envelope(user, "Account details updated successfully")

@router.patch("/avatar", response_model=ApiResponse[UserResponse])
def update_avatar(
    avatar: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user = user_service.update_image(db, current_user, avatar, "avatar")
    return envelope(user, "Avatar image updated successfully")

@router.patch("/cover-image", response_model=ApiResponse[UserResponse])
def update_cover_image(
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user = user_service.update_image(db, current_user, cover_image, "cover_image")
    return envelope(user, "Cover image updated successfully")

@router.get("/c/{username}", response_model=ApiResponse[ChannelProfile])
def get_channel_profile(
    username: str,
    db: Session = Depends(get_db),
    viewer_id: Optional[str] = Depends(get_viewer_id)
):
    profile = user_service.get_channel_profile(db, username, viewer_id)
    return envelope(profile, "User channel fetched successfully")

@router.get("/history", response_model=ApiResponse[Page[WatchHistoryItem]])
def get_watch_history(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get user's watch history, newest first
    Requires authentication
    """
    page = user_service.get_watch_history(db, current_user.id, pagination)
    return envelope(page.to_dict(), "Watch history fetched successfully")
