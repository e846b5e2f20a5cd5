# ============================================================================
# FILE: app/main.py
# ============================================================================
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.api.v1.router import api_router
from app.core.exceptions import register_exception_handlers
from app.core.logging import setup_logging
from app.config import settings
from app.db.base import Base
from app.db.session import engine
from app.db import models  # noqa: F401  registers every table on Base.metadata
from app.schemas.common import ErrorResponse
import logging
import os

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.APP_NAME} API")
    Base.metadata.create_all(bind=engine)
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME} API")

# Create FastAPI app instance
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Video sharing backend with channels, comments, likes, playlists and tweets",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API v1 router
app.include_router(
    api_router,
    prefix="/api/v1",
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 500)},
)

# Serve uploaded files when they are stored on local disk
if settings.MEDIA_BACKEND == "local":
    os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
    app.mount(settings.MEDIA_URL, StaticFiles(directory=settings.MEDIA_ROOT), name="media")

@app.get("/health")
def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}
