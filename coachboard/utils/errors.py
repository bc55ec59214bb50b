"""Error types shared by the dashboard core and its service client."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class CoachboardError(Exception):
    """Base class for all coachboard errors."""


class AuthenticationMissing(CoachboardError):
    """Raised when an operation needs a signed-in coach and a credential but has neither."""

    def __init__(
        self,
        message: str = "Authentication missing. Please try signing out and back in.",
    ) -> None:
        super().__init__(message)


class AuthErrorCode(str, Enum):
    """Why a service rejected the credential."""

    INVALID_CREDENTIAL = "invalid_credential"
    FORBIDDEN = "forbidden"


class AuthError(CoachboardError):
    """Raised when a service rejects the credential."""

    def __init__(self, message: str, code: AuthErrorCode) -> None:
        super().__init__(message)
        self.code = code


class TransportError(CoachboardError):
    """Raised for network failures and unexpected service responses."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(CoachboardError):
    """Raised for malformed input data."""


class SubmissionInProgress(CoachboardError):
    """Raised when an attendance batch is submitted while another one is running."""
