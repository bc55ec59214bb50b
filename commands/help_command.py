"""Help command for the Coachboard CLI."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console

from commands import Command
from coachboard.utils.cli_common import CommandRegistry, render_capabilities


class HelpCommand(Command):
    def __init__(self, console: Console, registry: CommandRegistry) -> None:
        super().__init__(console)
        self.registry = registry

    @property
    def name(self) -> str:
        return "/help"

    @property
    def aliases(self) -> Sequence[str]:
        return ("/?",)

    @property
    def description(self) -> str:
        return "List the available commands."

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        render_capabilities(self.registry.commands(), self.console)
