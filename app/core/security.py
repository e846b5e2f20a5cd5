# ============================================================================
# FILE: app/core/security.py
# Password hashing and JWT helpers
# ============================================================================
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.config import settings
from app.core.exceptions import Unauthorized
import uuid

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _encode(data: Dict, secret: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, secret, algorithm=settings.ALGORITHM)


def create_access_token(data: Dict, expires_delta: Optional[timedelta] = None) -> str:
    """Short-lived token identifying the viewer on every request"""
    expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode({**data, "type": ACCESS_TOKEN_TYPE}, settings.ACCESS_TOKEN_SECRET, expires_delta)


def create_refresh_token(data: Dict, expires_delta: Optional[timedelta] = None) -> str:
    """Long-lived token; the jti makes every issued token distinct so rotation can be detected"""
    expires_delta = expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    payload = {**data, "type": REFRESH_TOKEN_TYPE, "jti": uuid.uuid4().hex}
    return _encode(payload, settings.REFRESH_TOKEN_SECRET, expires_delta)


def _decode(token: str, secret: str, expected_type: str) -> Dict:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthorized("Invalid or expired token")
    if payload.get("type") != expected_type or not payload.get("sub"):
        raise Unauthorized("Invalid token")
    return payload


def decode_access_token(token: str) -> Dict:
    return _decode(token, settings.ACCESS_TOKEN_SECRET, ACCESS_TOKEN_TYPE)


def decode_refresh_token(token: str) -> Dict:
    return _decode(token, settings.REFRESH_TOKEN_SECRET, REFRESH_TOKEN_TYPE)
