# ============================================================================
# FILE: app/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, field_validator, model_validator
from typing import Optional
from datetime import datetime
from app.schemas.common import CamelModel, NonEmptyStr, UserSummary

class UserCreate(BaseModel):
    """Schema for user registration (multipart form fields)"""
    username: NonEmptyStr
    email: EmailStr
    full_name: NonEmptyStr
    password: NonEmptyStr

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        return value.lower()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

class UserLogin(CamelModel):
    """Schema for user login; either username or email identifies the account"""
    username: Optional[str] = None
    email: Optional[str] = None
    password: NonEmptyStr

    @model_validator(mode="after")
    def require_identifier(self):
        if not (self.username or "").strip() and not (self.email or "").strip():
            raise ValueError("Username or email is required")
        return self

class UserResponse(CamelModel):
    """Schema for user response; never carries password or refresh token"""
    id: str
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class LoginData(CamelModel):
    user: UserResponse
    access_token: str
    refresh_token: str

class TokenPair(CamelModel):
    """Schema for JWT token response"""
    access_token: str
    refresh_token: str

class RefreshTokenRequest(CamelModel):
    refresh_token: Optional[str] = None

class PasswordChange(CamelModel):
    old_password: NonEmptyStr
    new_password: NonEmptyStr

class AccountUpdate(CamelModel):
    full_name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value is not None else value

    @model_validator(mode="after")
    def require_one_field(self):
        if self.full_name is None and self.email is None:
            raise ValueError("Please provide at least one field to update")
        return self

class ChannelProfile(UserSummary):
    email: str
    cover_image: Optional[str] = None
    subscribers_count: int
    channels_subscribed_to_count: int
    videos_count: int
    is_subscribed: bool
    created_at: datetime
