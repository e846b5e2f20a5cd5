# ============================================================================
# FILE: app/api/dependencies.py
# ============================================================================
from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.config import settings
from app.db.session import get_db
from app.core.exceptions import Unauthorized
from app.core.security import decode_access_token
from app.core.validation import Pagination, parse_pagination
from app.db.models.user import User
from typing import Optional

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/users/login", auto_error=False)

def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Get current authenticated user from the bearer token or access cookie
    Returns None if no token or invalid token (allows anonymous access)
    """
    token = token or request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        return None

    try:
        payload = decode_access_token(token)
    except Unauthorized:
        return None

    return db.get(User, payload["sub"])

def get_viewer_id(current_user: Optional[User] = Depends(get_current_user)) -> Optional[str]:
    return current_user.id if current_user else None

def require_current_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise Unauthorized("Unauthorized request")
    return current_user

def get_pagination(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> Pagination:
    # Raw strings so malformed values get the same error envelope as other bad input
    return parse_pagination(page, limit)

def get_channel_videos_pagination(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> Pagination:
    return parse_pagination(page, limit, default_limit=settings.CHANNEL_VIDEOS_PAGE_LIMIT)
