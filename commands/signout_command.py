"""Sign-out command for the Coachboard CLI."""

from __future__ import annotations

from typing import Sequence

from commands import DashboardCommand


class SignOutCommand(DashboardCommand):
    """Forget the credential and clear the dashboard."""

    @property
    def name(self) -> str:
        return "/signout"

    @property
    def aliases(self) -> Sequence[str]:
        return ("/logout",)

    @property
    def description(self) -> str:
        return "Sign out and clear roster, schedule and attendance marks."

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return

        self.context.controller.sign_out()
        self.context.flush_notices()
