# ============================================================================
# FILE: app/config.py
# ============================================================================
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    APP_NAME: str = "VidTube"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./vidtube.db"  # Change to PostgreSQL in production

    # Security
    ACCESS_TOKEN_SECRET: str = "change-this-access-secret-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_SECRET: str = "change-this-refresh-secret-in-production"
    REFRESH_TOKEN_EXPIRE_DAYS: int = 10
    ALGORITHM: str = "HS256"
    COOKIE_SECURE: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Media storage ("local" or "cloudinary")
    MEDIA_BACKEND: str = "local"
    MEDIA_ROOT: str = "./media"
    MEDIA_URL: str = "/media"
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "vidtube"
    MEDIA_UPLOAD_TIMEOUT: float = 120.0

    # Pagination
    DEFAULT_PAGE_LIMIT: int = 10
    CHANNEL_VIDEOS_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

settings = Settings()
