# ============================================================================
# FILE: app/core/logging.py
# ============================================================================
import logging
from app.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging():
    """Configure root logging once for the whole application"""
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # SQL echo is only useful while debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DEBUG else logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
