"""Interactive Coachboard shell."""

from __future__ import annotations

import logging
import os

from rich.console import Console

from commands import CommandError
from commands.dashboard_context import DashboardContext
from commands.date_command import DateCommand
from commands.exit_command import ExitCommand
from commands.help_command import HelpCommand
from commands.mark_command import MarkCommand
from commands.refresh_command import RefreshCommand
from commands.roster_command import RosterCommand
from commands.schedule_command import ScheduleCommand
from commands.signout_command import SignOutCommand
from commands.submit_command import SubmitCommand
from coachboard.utils.cli_common import CommandRegistry, read_line
from coachboard.utils.errors import CoachboardError

logger = logging.getLogger(__name__)


def build_registry(console: Console, context: DashboardContext) -> CommandRegistry:
    registry = CommandRegistry(
        command(console, context)
        for command in (
            RosterCommand,
            ScheduleCommand,
            MarkCommand,
            DateCommand,
            SubmitCommand,
            RefreshCommand,
            SignOutCommand,
        )
    )
    registry.register(ExitCommand(console))
    registry.register(HelpCommand(console, registry))
    return registry


def dispatch(registry: CommandRegistry, line: str, console: Console) -> bool:
    """Run one input line. Returns False when the shell should stop."""
    command = registry.resolve(line)
    if command is None:
        console.print(f"Unknown command {line.split()[0]}. Type /help.", style="yellow")
        return True
    if isinstance(command, ExitCommand) and not command.should_show_help(line):
        return False
    try:
        command.execute(line)
    except CommandError as err:
        console.print(str(err), style="yellow")
    except CoachboardError as err:
        logger.exception("Command %s failed", command.name)
        console.print(f"[red]✗[/red] {err}")
    return True


def main() -> None:
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    console = Console()
    context = DashboardContext(console)
    registry = build_registry(console, context)

    try:
        context.sign_in()
        if context.coach is not None:
            console.print(f"Welcome back, [bold]{context.coach.name or 'Coach'}[/bold]")
        dispatch(registry, "/help", console)

        while True:
            try:
                line = read_line(registry.words())
            except (EOFError, KeyboardInterrupt):
                break
            if not line:
                continue
            if not dispatch(registry, line, console):
                break
    finally:
        context.close()


if __name__ == "__main__":
    main()
