"""Cookie-backed dashboard sessions."""

import logging
import secrets
import sys
import time
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

from fastapi import HTTPException, Request, Response
from itsdangerous import BadSignature, URLSafeTimedSerializer

# Add repository root to path for the coachboard package
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from app.config import settings

from coachboard.dashboard.auth_state import AuthState, CoachIdentity
from coachboard.dashboard.controller import DashboardController
from coachboard.utils.coach_api import CoachApiClient


# One controller per signed-in browser session; kept in memory only
_sessions: Dict[str, DashboardController] = {}
# Session id -> creation time (epoch seconds)
_created: Dict[str, float] = {}

serializer = URLSafeTimedSerializer(settings.secret_key)


def _build_api() -> CoachApiClient:
    return CoachApiClient(settings.coach_api_url, settings.coach_api_timeout)


def _forget(session_id: str) -> Optional[DashboardController]:
    _created.pop(session_id, None)
    return _sessions.pop(session_id, None)


def _build_controller(session_id: str) -> DashboardController:
    return DashboardController(
        _build_api(),
        sign_out=lambda: _forget(session_id),
        error_summary_chars=settings.error_summary_chars,
    )


async def create_session(identity: CoachIdentity, credential: str) -> str:
    """Create a session for a coach, load its dashboard and return the session ID."""
    _cleanup_expired_sessions()
    session_id = secrets.token_urlsafe(32)
    controller = _build_controller(session_id)
    _sessions[session_id] = controller
    _created[session_id] = time.time()
    await controller.sign_in(AuthState(user=identity, credential=credential))
    logger.info("Started dashboard session for coach %s", identity.id)
    return session_id


def get_controller(session_id: Optional[str]) -> Optional[DashboardController]:
    if not session_id:
        return None
    return _sessions.get(session_id)


def delete_session(session_id: str) -> None:
    controller = _forget(session_id)
    if controller is not None:
        controller.close()


def session_count() -> int:
    _cleanup_expired_sessions()
    return len(_sessions)


def _cleanup_expired_sessions() -> None:
    """Close and drop sessions older than the cookie lifetime."""
    expired_sessions = []
    current_time = time.time()

    for session_id in list(_sessions):
        created_at = _created.get(session_id)
        # Without a creation time the age is unknown, treat as expired
        if created_at is None or current_time - created_at > settings.session_max_age:
            expired_sessions.append(session_id)

    for session_id in expired_sessions:
        delete_session(session_id)

    if expired_sessions:
        logger.info("Cleaned up %d expired session(s)", len(expired_sessions))


def close_all() -> int:
    """Close and forget every session. Returns how many there were."""
    count = len(_sessions)
    for session_id in list(_sessions):
        delete_session(session_id)
    return count


def _session_id_from_request(request: Request) -> str:
    session_cookie = request.cookies.get(settings.session_cookie)
    if not session_cookie:
        raise HTTPException(status_code=401, detail="No dashboard session")

    try:
        return serializer.loads(session_cookie, max_age=settings.session_max_age)
    except BadSignature as e:
        logger.warning("Rejected session cookie: %s", e)
        raise HTTPException(status_code=401, detail="Dashboard session is invalid or expired") from e


def get_session_id(request: Request) -> str:
    """Session ID from the request cookie, validated against live sessions."""
    session_id = _session_id_from_request(request)
    _cleanup_expired_sessions()
    if session_id not in _sessions:
        raise HTTPException(status_code=401, detail="Dashboard session has ended")
    return session_id


def get_controller_from_request(request: Request) -> DashboardController:
    """Extract the dashboard controller bound to the request's session."""
    return _sessions[get_session_id(request)]


def set_session_cookie(response: Response, session_id: str) -> None:
    """Attach the signed session id. Strict same-site only when served over HTTPS."""
    response.set_cookie(
        key=settings.session_cookie,
        value=serializer.dumps(session_id),
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict" if settings.cookie_secure else "lax",
        max_age=settings.session_max_age,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.session_cookie, path="/")
