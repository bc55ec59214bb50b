"""Submit command for the Coachboard CLI."""

from __future__ import annotations

from commands import DashboardCommand


class SubmitCommand(DashboardCommand):
    """Send attendance for every assigned player."""

    @property
    def name(self) -> str:
        return "/submit"

    @property
    def description(self) -> str:
        return "Submit attendance for all assigned players on the selected date."

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        if command.split()[1:]:
            raise self.usage_error()

        controller = self.context.controller
        if not controller.roster:
            self.console.print("No players to submit attendance for.", style="yellow")
            return

        with self.console.status(
            f"Submitting attendance for {len(controller.roster)} players..."
        ):
            result = self.context.run(controller.submit_attendance())
        self.context.flush_notices()

        if result is not None and not result.ok:
            failed = ", ".join(str(pid) for pid in result.failed_player_ids)
            self.console.print(
                f"[dim]Recorded: {result.success_count}, failed: {failed}. "
                "Run /submit again to resend.[/dim]"
            )
