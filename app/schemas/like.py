# ============================================================================
# FILE: app/schemas/like.py
# ============================================================================
from app.schemas.common import CamelModel

class LikeState(CamelModel):
    is_liked: bool
