# ============================================================================
# FILE: app/db/base.py
# ============================================================================
from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base
import secrets
import time

Base = declarative_base()


def generate_object_id() -> str:
    """24 hex chars: 4-byte creation timestamp followed by 8 random bytes"""
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
