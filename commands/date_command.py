"""Date command for the Coachboard CLI."""

from __future__ import annotations

from datetime import date
from typing import Dict, List

from commands import CommandError, DashboardCommand


class DateCommand(DashboardCommand):
    """Show or change the date attendance is recorded for."""

    @property
    def name(self) -> str:
        return "/date"

    @property
    def description(self) -> str:
        return "Show or set the date attendance is recorded for."

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        return [
            {
                "name": "YYYY-MM-DD",
                "required": False,
                "description": "Date to record attendance for; 'today' resets it",
                "default": "today",
            }
        ]

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return

        args = command.split()[1:]
        if len(args) > 1:
            raise self.usage_error()

        controller = self.context.controller
        if args:
            controller.select_date(self._parse(args[0]))
        self.console.print(
            f"Recording attendance for {controller.selected_date.isoformat()}.",
            style="green" if args else None,
        )

    @staticmethod
    def _parse(value: str) -> date:
        if value == "today":
            return date.today()
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise CommandError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc
