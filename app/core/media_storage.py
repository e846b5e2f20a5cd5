# ============================================================================
# FILE: app/core/media_storage.py
# Upload adapter for media blobs (avatars, covers, thumbnails, video files)
# ============================================================================
from dataclasses import dataclass
from typing import Dict, Optional
from fastapi import UploadFile
from app.config import settings
from app.core.exceptions import InvalidArgument, MediaUploadError
import hashlib
import httpx
import logging
import os
import secrets
import shutil
import time

logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/auto/upload"


@dataclass
class StoredMedia:
    """Where an uploaded file ended up"""
    url: str
    public_id: str
    duration: Optional[float] = None


def _has_content(upload: Optional[UploadFile]) -> bool:
    if upload is None or not upload.filename:
        return False
    if upload.size is not None:
        return upload.size > 0
    return True


class LocalBackend:
    """Stores files under MEDIA_ROOT and serves them from MEDIA_URL"""

    def __init__(self, root: str, base_url: str):
        self.root = root
        self.base_url = base_url.rstrip("/")

    def upload(self, upload: UploadFile, folder: str) -> StoredMedia:
        _, ext = os.path.splitext(upload.filename or "")
        name = f"{secrets.token_hex(12)}{ext.lower()}"
        target_dir = os.path.join(self.root, folder)
        try:
            os.makedirs(target_dir, exist_ok=True)
            with open(os.path.join(target_dir, name), "wb") as f:
                upload.file.seek(0)
                shutil.copyfileobj(upload.file, f)
        except OSError as e:
            logger.error(f"Local media write failed for {folder}/{name}: {e}")
            raise MediaUploadError()
        public_id = f"{folder}/{name}"
        return StoredMedia(url=f"{self.base_url}/{public_id}", public_id=public_id)


class CloudinaryBackend:
    """Signed uploads to the Cloudinary REST API"""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_folder: str = "",
        timeout: float = 120.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.upload_url = CLOUDINARY_UPLOAD_URL.format(cloud_name=cloud_name)
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_folder = base_folder
        self.timeout = timeout
        self.transport = transport

    def sign(self, params: Dict[str, str]) -> str:
        payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{payload}{self.api_secret}".encode("utf-8")).hexdigest()

    def upload(self, upload: UploadFile, folder: str) -> StoredMedia:
        params = {
            "folder": "/".join(part for part in (self.base_folder, folder) if part),
            "timestamp": str(int(time.time())),
        }
        data = {**params, "api_key": self.api_key, "signature": self.sign(params)}
        upload.file.seek(0)
        files = {"file": (upload.filename, upload.file, upload.content_type or "application/octet-stream")}

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.upload_url, data=data, files=files)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise MediaUploadError()
        except ValueError as e:
            logger.error(f"Cloudinary returned an unreadable response: {e}")
            raise MediaUploadError()

        url = body.get("secure_url") or body.get("url")
        if not url:
            logger.error("Cloudinary response did not include a URL")
            raise MediaUploadError()

        duration = body.get("duration")
        logger.info(f"Uploaded {upload.filename} to Cloudinary as {body.get('public_id')}")
        return StoredMedia(
            url=url,
            public_id=body.get("public_id", ""),
            duration=float(duration) if duration is not None else None,
        )


class MediaStorage:
    """Front for whichever backend the settings select"""

    def __init__(self, backend=None):
        self.backend = backend or self._backend_from_settings()

    @staticmethod
    def _backend_from_settings():
        if settings.MEDIA_BACKEND == "cloudinary":
            if not (settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_API_KEY and settings.CLOUDINARY_API_SECRET):
                raise RuntimeError("Cloudinary media backend selected but credentials are not configured")
            logger.info("Media storage: Cloudinary")
            return CloudinaryBackend(
                cloud_name=settings.CLOUDINARY_CLOUD_NAME,
                api_key=settings.CLOUDINARY_API_KEY,
                api_secret=settings.CLOUDINARY_API_SECRET,
                base_folder=settings.CLOUDINARY_FOLDER,
                timeout=settings.MEDIA_UPLOAD_TIMEOUT,
            )
        logger.info(f"Media storage: local directory {settings.MEDIA_ROOT}")
        return LocalBackend(settings.MEDIA_ROOT, settings.MEDIA_URL)

    def ensure_present(self, upload: Optional[UploadFile], label: str = "File"):
        if not _has_content(upload):
            raise InvalidArgument(f"{label} is required")

    def upload(self, upload: Optional[UploadFile], folder: str, label: str = "File") -> StoredMedia:
        self.ensure_present(upload, label)
        return self.backend.upload(upload, folder)

    def upload_optional(self, upload: Optional[UploadFile], folder: str) -> Optional[StoredMedia]:
        if not _has_content(upload):
            return None
        return self.backend.upload(upload, folder)


# Singleton instance
media_storage = MediaStorage()
