"""Shared dashboard state for CLI commands."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Optional, TypeVar

from dotenv import load_dotenv
from rich.console import Console

from coachboard.dashboard.auth_state import AuthState, CoachIdentity
from coachboard.dashboard.controller import DashboardController
from coachboard.roster.player import Player
from coachboard.utils.coach_api import CoachApiClient
from coachboard.utils.render import print_notices

logger = logging.getLogger(__name__)

T = TypeVar("T")


def auth_from_env() -> AuthState:
    """Build the signed-in coach from COACHBOARD_* environment variables."""
    load_dotenv()
    coach_id = os.environ.get("COACHBOARD_COACH_ID") or None
    user = None
    if coach_id:
        user = CoachIdentity(
            id=coach_id,
            name=os.environ.get("COACHBOARD_COACH_NAME") or None,
            email=os.environ.get("COACHBOARD_COACH_EMAIL") or None,
            role="coach",
        )
    return AuthState(
        user=user, credential=os.environ.get("COACHBOARD_ACCESS_TOKEN") or None
    )


class DashboardContext:
    """Owns the controller and the event loop the CLI drives it with."""

    def __init__(
        self, console: Console, controller: Optional[DashboardController] = None
    ) -> None:
        self.console = console
        self.loop = asyncio.new_event_loop()
        self.controller = controller or DashboardController(CoachApiClient())

    def run(self, awaitable: Awaitable[T]) -> T:
        return self.loop.run_until_complete(awaitable)

    def sign_in(self, auth: Optional[AuthState] = None) -> None:
        auth = auth or auth_from_env()
        if not auth.can_fetch:
            self.console.print(
                "Not signed in. Set COACHBOARD_COACH_ID and COACHBOARD_ACCESS_TOKEN.",
                style="yellow",
            )
        with self.console.status("Loading dashboard..."):
            self.run(self.controller.sign_in(auth))
        self.flush_notices()

    def refresh(self) -> None:
        with self.console.status("Refreshing roster and schedule..."):
            self.run(self.controller.refresh())
        self.flush_notices()

    def flush_notices(self) -> None:
        print_notices(self.controller.drain_notices(), self.console)

    def find_player(self, key: str) -> Optional[Player]:
        """Look a player up by id, or by 1-based roster position written as ``#N``."""
        roster = self.controller.roster
        if key.startswith("#"):
            try:
                index = int(key[1:])
            except ValueError:
                return None
            return roster[index - 1] if 1 <= index <= len(roster) else None
        for player in roster:
            if str(player.id) == key:
                return player
        return None

    def close(self) -> None:
        self.controller.close()
        self.loop.close()

    @property
    def coach(self) -> Any:
        return self.controller.auth.user
