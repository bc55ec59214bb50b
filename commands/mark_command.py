"""Mark command for the Coachboard CLI."""

from __future__ import annotations

from typing import Dict, List

from commands import CommandError, DashboardCommand
from coachboard.attendance.override_store import AttendanceState


class MarkCommand(DashboardCommand):
    """Mark a player present or absent for the selected date."""

    @property
    def name(self) -> str:
        return "/mark"

    @property
    def description(self) -> str:
        return "Mark a player present or absent (everyone is present until marked)."

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        return [
            {
                "name": "<player>",
                "required": True,
                "description": "Player id, or #N for the N-th player in /roster",
            },
            {
                "name": "present|absent",
                "required": True,
                "description": "Attendance for the selected date",
            },
        ]

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return

        args = command.split()[1:]
        if len(args) != 2:
            raise self.usage_error()
        key, value = args

        player = self.context.find_player(key)
        if player is None:
            raise CommandError(f"No player {key} on the roster")
        try:
            state = AttendanceState(value.lower())
        except ValueError as exc:
            raise self.usage_error() from exc

        self.context.controller.set_attendance(player.id, state)
        self.console.print(
            f"{player.display_name} marked {state.value}.",
            style="green" if state is AttendanceState.PRESENT else "red",
        )
