"""Coachboard dashboard API."""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add repository root to path to import coachboard
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from app.api import auth, dashboard
from app.auth import session_store
from app.config import settings

from coachboard import __version__

log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Drop every live dashboard so pending loads are discarded
    count = session_store.close_all()
    logger.info("Closed %d dashboard sessions", count)


app = FastAPI(
    title=settings.app_name, debug=settings.debug, version=__version__, lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Cookie", "Authorization"],
    expose_headers=["Set-Cookie"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])


@app.get("/")
async def root():
    return {"name": settings.app_name, "version": __version__, "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "sessions": session_store.session_count()}
