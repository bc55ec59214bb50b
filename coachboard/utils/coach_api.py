"""HTTP client for the coach roster, schedule and attendance services."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

from coachboard.utils.errors import (
    AuthError,
    AuthErrorCode,
    TransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_API_URL = os.environ.get("COACHBOARD_API_URL", "http://localhost:5000/api")
DEFAULT_TIMEOUT = float(os.environ.get("COACHBOARD_API_TIMEOUT", "30"))


def _error_detail(response: requests.Response) -> str:
    """Best-effort human readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if body.get(key):
                return str(body[key])
    return str(body)


def raise_for_response(response: requests.Response) -> None:
    """Translate an error status into the matching typed error.

    401 means the credential is invalid, 403 that it is not allowed, 400 and
    422 that the service rejected the data. Everything else is a transport
    failure.
    """
    status = response.status_code
    if status < 400:
        return

    detail = _error_detail(response)
    if status == 401:
        raise AuthError(detail, AuthErrorCode.INVALID_CREDENTIAL)
    if status == 403:
        raise AuthError(detail, AuthErrorCode.FORBIDDEN)
    if status in (400, 422):
        raise ValidationError(detail)
    raise TransportError(f"HTTP {status}: {detail}", status_code=status)


class CoachApiClient:
    """Thin wrapper over the coach REST API.

    Calls are blocking; the dashboard controller runs them in worker threads.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        credential: str,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }
        try:
            response = self.session.request(
                method, url, headers=headers, json=json_body, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        raise_for_response(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {path} returned invalid JSON", status_code=response.status_code
            ) from exc

    def fetch_roster(self, credential: str) -> List[Dict[str, Any]]:
        """Players assigned to the coach that owns ``credential``."""
        return self._request("GET", "/coach/players", credential) or []

    def fetch_schedule(self, coach_id: Any, credential: str) -> List[Dict[str, Any]]:
        """Raw weekly session records for a coach."""
        return self._request("GET", f"/sessions/coach/{coach_id}", credential) or []

    def record_attendance(self, payload, credential: str) -> Any:
        """Store one attendance record; ``payload`` is a ``SubmissionPayload``."""
        return self._request("POST", "/attendance", credential, json_body=payload.to_json())
