"""Rendering helpers using Rich."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.table import Table

from coachboard.dashboard.notices import Notice, NoticeVariant
from coachboard.dashboard.view import DashboardSummary, PlayerRow
from coachboard.schedule.schedule_projector import TodaySlot, WeekDayGroup

console = Console()

LOADING = "..."


def _attendance_color(value: float) -> str:
    """Green for strong attendance, yellow for middling, red for poor."""
    if value >= 80:
        return "green"
    if value >= 50:
        return "yellow"
    return "red"


def render_summary(summary: DashboardSummary) -> Table:
    table = Table(title="Coach Dashboard", show_header=True)
    table.add_column("Assigned Players", justify="center")
    table.add_column("Today's Sessions", justify="center")
    table.add_column("Completed Today", justify="center")
    table.add_column("Avg Attendance", justify="center")

    players = LOADING if summary.players_loading else str(summary.assigned_players)
    sessions = LOADING if summary.schedule_loading else str(summary.todays_sessions)
    completed = LOADING if summary.schedule_loading else str(summary.completed_today)
    average = f"{summary.average_attendance}%"
    table.add_row(
        players,
        sessions,
        completed,
        f"[{_attendance_color(summary.average_attendance)}]{average}[/]",
    )
    return table


def render_roster_table(rows: Sequence[PlayerRow]) -> Table:
    table = Table(title="Assigned Players")
    table.add_column("#", justify="right")
    table.add_column("ID", justify="left")
    table.add_column("Player", justify="left")
    table.add_column("Age", justify="right")
    table.add_column("Position", justify="left")
    table.add_column("Attendance", justify="right")
    table.add_column("Status", justify="left")
    table.add_column("Today", justify="left")

    for index, row in enumerate(rows, start=1):
        attendance = row.attendance_label
        if attendance != "—":
            attendance = f"[{_attendance_color(row.attendance)}]{attendance}[/]"
        status = f"[bold]{row.status}[/bold]" if row.is_active else f"[dim]{row.status}[/dim]"
        presence = "[green]Present[/green]" if row.is_present else "[red]Absent[/red]"
        table.add_row(
            str(index),
            str(row.player_id) if row.player_id is not None else "—",
            f"({row.initial}) {row.display_name}",
            row.age,
            row.position,
            attendance,
            status,
            presence,
        )
    return table


def render_today_table(slots: Sequence[TodaySlot]) -> Table:
    table = Table(title="Today's Schedule")
    table.add_column("Time", justify="left")
    table.add_column("Group", justify="left")
    table.add_column("Location", justify="left")
    table.add_column("Status", justify="left")

    for slot in slots:
        status = f"[green]{slot.status}[/green]" if slot.is_completed else slot.status
        table.add_row(slot.time_range, slot.group, slot.location, status)
    return table


def render_weekly_table(days: Sequence[WeekDayGroup]) -> Table:
    table = Table(title="Weekly Schedule", show_lines=True)
    table.add_column("Day", justify="left", style="cyan")
    table.add_column("Sessions", justify="left")

    for day in days:
        table.add_row(day.day, "\n".join(day.sessions))
    return table


def print_notices(notices: Sequence[Notice], console_instance: Console = console) -> None:
    for notice in notices:
        if notice.variant is NoticeVariant.DESTRUCTIVE:
            console_instance.print(f"[red]✗[/red] [bold]{notice.title}[/bold]: {notice.description}")
        else:
            console_instance.print(f"[green]✓[/green] [bold]{notice.title}[/bold]: {notice.description}")
