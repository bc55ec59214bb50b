"""In-memory per-player attendance overrides for one viewing session."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Hashable, Union


class AttendanceState(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


DEFAULT_STATE = AttendanceState.PRESENT


class AttendanceOverrideStore:
    """Maps player id to an explicit attendance decision.

    Players without an entry are present. Nothing here is persisted; the
    dashboard controller owns one store per viewing session.
    """

    def __init__(self) -> None:
        self._overrides: Dict[Hashable, AttendanceState] = {}

    def get(self, player_id: Hashable) -> AttendanceState:
        return self._overrides.get(player_id, DEFAULT_STATE)

    def is_present(self, player_id: Hashable) -> bool:
        return self.get(player_id) is AttendanceState.PRESENT

    def set(self, player_id: Hashable, state: Union[AttendanceState, str]) -> None:
        """Record the decision for a player, replacing any earlier one.

        Raises:
            ValueError: If ``state`` is not ``present`` or ``absent``.
        """
        self._overrides[player_id] = AttendanceState(state)

    def clear(self) -> None:
        self._overrides.clear()

    def overrides(self) -> Dict[Hashable, AttendanceState]:
        """Snapshot of the explicit entries."""
        return dict(self._overrides)

    def __len__(self) -> int:
        return len(self._overrides)

    def __contains__(self, player_id: Any) -> bool:
        return player_id in self._overrides
