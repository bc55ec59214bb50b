"""Authentication state handed to the dashboard by the sign-in layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CoachIdentity:
    id: Any
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class AuthState:
    """Snapshot of who is signed in.

    ``is_loading`` is set while the sign-in layer is still resolving the
    user; nothing may be fetched until it clears.
    """

    user: Optional[CoachIdentity] = None
    credential: Optional[str] = None
    is_loading: bool = False

    @property
    def coach_id(self) -> Any:
        return self.user.id if self.user else None

    @property
    def can_fetch(self) -> bool:
        return not self.is_loading and self.user is not None and bool(self.credential)


SIGNED_OUT = AuthState()
