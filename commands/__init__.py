"""Command modules for the Coachboard CLI."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from rich.console import Console


class Command(ABC):
    """Base class for CLI commands."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @property
    @abstractmethod
    def name(self) -> str:
        """Primary command name (e.g., '/roster')."""

    @property
    def aliases(self) -> Sequence[str]:
        """Additional names for this command (e.g., ('/players',) for '/roster')."""
        return ()

    @property
    @abstractmethod
    def description(self) -> str:
        """One line on what this command does."""

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        """Argument definitions shown by help.

        Each argument is a dict with keys:
        - name: The argument name (e.g., '<player>', '--today')
        - required: Whether the argument must be given
        - description: What the argument means
        - default: (optional) Value used when the argument is left out

        Commands without arguments return an empty list.
        """
        return []

    def should_show_help(self, command: str) -> bool:
        """Check if help flag (-h or --help) is present in command string."""
        parts = command.split()
        return "-h" in parts or "--help" in parts

    def show_help(self) -> None:
        """Display usage, aliases and arguments for this command."""
        from coachboard.utils.cli_common import render_command_help

        render_command_help(
            self.name, self.description, self.arguments, self.console, self.aliases
        )

    @abstractmethod
    def execute(self, command: str) -> None:
        """Execute the command with the full command string."""


class DashboardCommand(Command):
    """A command that reads or changes the coach's dashboard."""

    def __init__(self, console: Console, context) -> None:
        super().__init__(console)
        self.context = context

    def usage_error(self) -> CommandError:
        from coachboard.utils.cli_common import command_usage

        return CommandError(f"Usage: {command_usage(self.name, self.arguments)}")


class CommandError(Exception):
    """Bad command input; shown to the coach as a warning."""
