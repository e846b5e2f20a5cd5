# ============================================================================
# FILE: app/api/v1/endpoints/healthcheck.py
# ============================================================================
from fastapi import APIRouter
from app.schemas.common import ApiResponse, envelope

router = APIRouter()

@router.get("", response_model=ApiResponse[dict])
def healthcheck():
    return envelope({"status": "OK"}, "Health check passed")
