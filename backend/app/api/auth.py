"""Authentication API endpoints."""

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

from fastapi import APIRouter, Depends, HTTPException, Request, Response

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from app.api.dashboard import notice_models
from app.auth import session_store
from app.config import settings
from app.models import CoachResponse, NoticeModel, SessionRequest

from coachboard.dashboard.auth_state import CoachIdentity
from coachboard.dashboard.controller import DashboardController

router = APIRouter()


@router.post("/session", response_model=CoachResponse)
async def sign_in(body: SessionRequest, response: Response):
    """Start a dashboard session and load the coach's roster and schedule."""
    if body.role.lower() not in settings.allowed_roles:
        logger.warning("Rejected dashboard session for role %r", body.role)
        raise HTTPException(status_code=403, detail="This dashboard is for coaches only")

    identity = CoachIdentity(
        id=body.coach_id, name=body.name, email=body.email, role=body.role
    )
    session_id = await session_store.create_session(identity, body.access_token)
    session_store.set_session_cookie(response, session_id)
    return CoachResponse(**vars(identity))


@router.get("/me", response_model=CoachResponse)
async def me(
    controller: DashboardController = Depends(
        session_store.get_controller_from_request
    ),
):
    """Return the signed-in coach."""
    return CoachResponse(**vars(controller.auth.user))


@router.delete("/session", response_model=list[NoticeModel])
async def sign_out(request: Request, response: Response):
    """Sign out: drop the session and everything marked in it."""
    session_id = session_store.get_session_id(request)
    controller = session_store.get_controller(session_id)
    controller.sign_out()
    session_store.delete_session(session_id)
    session_store.clear_session_cookie(response)
    logger.info("Signed out dashboard session")
    return notice_models(controller)
