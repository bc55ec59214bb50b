"""Roster player model and display helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from coachboard.utils.errors import ValidationError

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"
ACTIVE_STATUS = "Active"


@dataclass(frozen=True)
class Player:
    """A player assigned to the signed-in coach.

    ``attendance`` is kept exactly as the roster service sent it (number,
    numeric string or None); use ``aggregator.resolve_attendance`` to read it
    as a number.
    """

    id: Any
    name: Optional[str] = None
    age: Optional[int] = None
    position: Optional[str] = None
    attendance: Any = None
    status: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Player":
        return cls(
            id=record.get("id"),
            name=record.get("name"),
            age=record.get("age"),
            position=record.get("position"),
            attendance=record.get("attendance"),
            status=record.get("status"),
        )

    @property
    def display_name(self) -> str:
        return str(self.name) if self.name else "Unnamed Player"

    @property
    def initial(self) -> str:
        return str(self.name)[0] if self.name else "?"

    @property
    def age_label(self) -> str:
        return PLACEHOLDER if self.age is None else str(self.age)

    @property
    def position_label(self) -> str:
        return PLACEHOLDER if self.position is None else str(self.position)

    @property
    def attendance_label(self) -> str:
        """Attendance as sent by the service, e.g. ``"85%"``; ``"—"`` when missing."""
        if isinstance(self.attendance, (int, float)) and not isinstance(
            self.attendance, bool
        ):
            return f"{self.attendance}%"
        if self.attendance:
            return f"{self.attendance}%"
        return PLACEHOLDER

    @property
    def status_label(self) -> str:
        return self.status or "Unknown"

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS


Roster = Tuple[Player, ...]


def build_roster(records: Any) -> Roster:
    """Build a roster from the service response; a missing body is an empty roster.

    Raises:
        ValidationError: If the body is something other than a list of players.
    """
    if records is None:
        return ()
    if not isinstance(records, (list, tuple)):
        raise ValidationError(
            f"Roster response is not a list: {type(records).__name__}"
        )
    players = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.warning("Ignoring non-object roster entry: %r", record)
            continue
        players.append(Player.from_record(record))
    return tuple(players)
