"""Exit command for the Coachboard CLI."""

from __future__ import annotations

from typing import Sequence

from commands import Command


class ExitCommand(Command):
    @property
    def name(self) -> str:
        return "/exit"

    @property
    def aliases(self) -> Sequence[str]:
        return ("/quit",)

    @property
    def description(self) -> str:
        return "Leave the shell. Unsubmitted attendance marks are lost."

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
        # Leaving the loop is handled by the shell
