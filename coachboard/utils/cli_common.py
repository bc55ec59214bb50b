"""Prompt, dispatch and help rendering for the coachboard shell."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from prompt_toolkit import prompt as pt_prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from commands import Command

HISTORY_FILE = Path(
    os.environ.get("COACHBOARD_HISTORY", Path.home() / ".coachboard" / "history")
)


class CommandRegistry:
    """Commands keyed by name and alias, kept in registration order."""

    def __init__(self, commands: Iterable["Command"] = ()) -> None:
        self._commands: List["Command"] = []
        self._lookup: Dict[str, "Command"] = {}
        for command in commands:
            self.register(command)

    def register(self, command: "Command") -> None:
        keys = (command.name, *command.aliases)
        taken = [key for key in keys if key in self._lookup]
        if taken:
            raise ValueError(f"Command name already registered: {', '.join(taken)}")
        for key in keys:
            self._lookup[key] = command
        self._commands.append(command)

    def resolve(self, line: str) -> Optional["Command"]:
        words = line.split()
        return self._lookup.get(words[0]) if words else None

    def commands(self) -> Tuple["Command", ...]:
        return tuple(self._commands)

    def words(self) -> Tuple[str, ...]:
        """Every name and alias, for completion."""
        return tuple(sorted(self._lookup))


def read_line(words: Iterable[str], prompt_text: str = "coach> ") -> str:
    """Read one command line.

    Uses prompt_toolkit with completion and persistent history on a
    terminal, plain ``input`` otherwise (pipes, tests).
    """
    if not sys.stdin.isatty():
        return input(prompt_text).strip()

    HISTORY_FILE.parent.mkdir(parents=True, exist_ok=True)
    return pt_prompt(
        prompt_text,
        completer=WordCompleter(list(words), sentence=True),
        complete_while_typing=True,
        history=FileHistory(str(HISTORY_FILE)),
    ).strip()


def command_usage(command_name: str, arguments: Sequence[Mapping[str, str | bool]]) -> str:
    """One-line usage, optional arguments in brackets (e.g. '/date [YYYY-MM-DD]')."""
    parts = [command_name]
    for arg in arguments:
        name = str(arg.get("name", ""))
        parts.append(name if arg.get("required") else f"[{name}]")
    return " ".join(parts)


def render_capabilities(commands: Iterable["Command"], console: Console) -> None:
    table = Table(title="Coachboard Commands")
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Aliases", style="dim")
    table.add_column("What it does")

    for command in commands:
        table.add_row(
            escape(command_usage(command.name, command.arguments)),
            ", ".join(command.aliases) or "-",
            command.description,
        )

    console.print(table)
    console.print("[dim]Add -h to any command for details.[/dim]")


def render_command_help(
    command_name: str,
    description: str,
    arguments: Sequence[Mapping[str, str | bool]],
    console_instance: Console,
    aliases: Sequence[str] = (),
) -> None:
    """Render help information for a command.

    Args:
        command_name: The command name (e.g., '/mark')
        description: Command description
        arguments: List of argument definitions with 'name', 'required', 'description', 'default'
        console_instance: Rich Console instance to print to
        aliases: Other names the command answers to
    """
    usage = escape(command_usage(command_name, arguments))
    console_instance.print(f"[bold cyan]{usage}[/bold cyan] - {description}")
    if aliases:
        console_instance.print(f"[dim]Aliases: {', '.join(aliases)}[/dim]")

    if not arguments:
        console_instance.print("This command takes no arguments.")
        return

    table = Table(title=f"{command_name} Arguments", show_header=True)
    table.add_column("Argument", justify="left", style="cyan")
    table.add_column("Required", justify="center", style="yellow")
    table.add_column("Default", justify="left", style="green")
    table.add_column("Description", justify="left")

    for arg in arguments:
        name = escape(str(arg.get("name", "")))
        required = "Yes" if arg.get("required") else "No"
        default = str(arg.get("default", "")) if arg.get("default") else "-"
        desc = str(arg.get("description", ""))
        table.add_row(name, required, default, desc)

    console_instance.print(table)
