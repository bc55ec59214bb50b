"""Roster command for the Coachboard CLI."""

from __future__ import annotations

from typing import Sequence

from commands import DashboardCommand
from coachboard.dashboard.view import LoadError
from coachboard.utils.render import render_roster_table, render_summary


class RosterCommand(DashboardCommand):
    """Show the assigned players with today's attendance marks."""

    @property
    def name(self) -> str:
        return "/roster"

    @property
    def aliases(self) -> Sequence[str]:
        return ("/players",)

    @property
    def description(self) -> str:
        return "Show assigned players, their attendance and the present/absent marks."

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        if command.split()[1:]:
            raise self.usage_error()

        view = self.context.controller.view()
        self.console.print(render_summary(view.summary))
        if view.summary.players_loading:
            self.console.print("Loading players...", style="dim")
            return

        if not view.players:
            coach = (view.coach.email or view.coach.id) if view.coach else "—"
            self.console.print(
                f"No players assigned to coach {coach} or failed to fetch.",
                style="yellow",
            )
            if view.roster_error is LoadError.AUTH:
                self.console.print("Try /signout and sign back in.", style="yellow")
            return

        self.console.print(render_roster_table(view.players))
        self.console.print(
            f"[dim]Marking attendance for {view.selected_date}. "
            "Use /mark to change, /submit to send.[/dim]"
        )
