"""Schedule command for the Coachboard CLI."""

from __future__ import annotations

from typing import Dict, List

from commands import CommandError, DashboardCommand
from coachboard.utils.render import render_today_table, render_weekly_table

OPTIONS = ("--today", "--week")


class ScheduleCommand(DashboardCommand):
    """Show today's sessions and the weekly training schedule."""

    @property
    def name(self) -> str:
        return "/schedule"

    @property
    def description(self) -> str:
        return "Show today's training sessions and the weekly schedule."

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        return [
            {"name": "--today", "required": False, "description": "Only show today's sessions"},
            {"name": "--week", "required": False, "description": "Only show the weekly schedule"},
        ]

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return

        args = command.split()[1:]
        unknown = [arg for arg in args if arg not in OPTIONS]
        if unknown:
            raise CommandError(f"Unknown option: {unknown[0]}")
        # No option, or both, shows everything
        show_today = "--today" in args or "--week" not in args
        show_week = "--week" in args or "--today" not in args

        view = self.context.controller.view()
        if view.summary.schedule_loading:
            self.console.print("Loading schedule...", style="dim")
            return

        if show_today:
            if view.today:
                self.console.print(render_today_table(view.today))
            else:
                self.console.print("No sessions scheduled for today.", style="dim")
        if show_week:
            if view.weekly:
                self.console.print(render_weekly_table(view.weekly))
            else:
                self.console.print("No weekly schedule available.", style="dim")
