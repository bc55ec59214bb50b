"""Refresh command for the Coachboard CLI."""

from __future__ import annotations

from commands import DashboardCommand


class RefreshCommand(DashboardCommand):
    """Reload the roster and schedule."""

    @property
    def name(self) -> str:
        return "/refresh"

    @property
    def description(self) -> str:
        return "Reload assigned players and the training schedule."

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return

        self.context.refresh()
        summary = self.context.controller.view().summary
        self.console.print(
            f"{summary.assigned_players} players, "
            f"{summary.todays_sessions} sessions today.",
            style="green",
        )
