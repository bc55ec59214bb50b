"""Tests for the CLI commands driving the dashboard."""

from __future__ import annotations

from datetime import date

import pytest
from rich.console import Console

from commands import Command, CommandError
from commands.dashboard_context import DashboardContext, auth_from_env
from commands.date_command import DateCommand
from commands.mark_command import MarkCommand
from commands.roster_command import RosterCommand
from commands.submit_command import SubmitCommand
from commands.shell import build_registry, dispatch
from coachboard.attendance.override_store import AttendanceState
from coachboard.dashboard.controller import DashboardController


@pytest.fixture
def console():
    return Console(record=True, width=140, force_terminal=False)


@pytest.fixture
def context(console, make_api, sample_roster, sample_sessions, signed_in):
    api = make_api(roster=sample_roster, sessions=sample_sessions)
    ctx = DashboardContext(
        console, DashboardController(api, clock=lambda: date(2024, 3, 15))
    )
    ctx.sign_in(signed_in)
    yield ctx
    ctx.close()


@pytest.mark.unit
def test_find_player_by_id_and_position(context):
    assert context.find_player("102").name == "Luca Bianchi"
    assert context.find_player("#1").id == 101
    assert context.find_player("#4") is None
    assert context.find_player("#x") is None
    assert context.find_player("999") is None


@pytest.mark.unit
def test_mark_absent(console, context):
    MarkCommand(console, context).execute("/mark #2 absent")

    assert context.controller.overrides.get(102) is AttendanceState.ABSENT
    assert "Luca Bianchi marked absent." in console.export_text()


@pytest.mark.unit
@pytest.mark.parametrize("command", ["/mark", "/mark 101", "/mark 101 late", "/mark 555 present"])
def test_mark_rejects_bad_input(console, context, command):
    with pytest.raises(CommandError):
        MarkCommand(console, context).execute(command)

    assert len(context.controller.overrides) == 0


@pytest.mark.unit
def test_date_command(console, context):
    command = DateCommand(console, context)

    command.execute("/date 2024-02-29")
    assert context.controller.selected_date == date(2024, 2, 29)

    with pytest.raises(CommandError, match="Invalid date"):
        command.execute("/date 29/02/2024")
    assert context.controller.selected_date == date(2024, 2, 29)


@pytest.mark.unit
def test_roster_command_lists_players(console, context):
    RosterCommand(console, context).execute("/roster")

    output = console.export_text()
    assert "Amara Okafor" in output
    assert "Sam Lee" in output
    assert "Marking attendance for 2024-03-15" in output


@pytest.mark.unit
def test_submit_command_reports_notice(console, context):
    SubmitCommand(console, context).execute("/submit")

    output = console.export_text()
    assert "Attendance Submitted" in output
    assert len(context.controller.api.recorded) == 3


@pytest.mark.unit
def test_auth_from_env(monkeypatch):
    monkeypatch.setenv("COACHBOARD_COACH_ID", "C9")
    monkeypatch.setenv("COACHBOARD_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("COACHBOARD_COACH_EMAIL", "c9@example.com")
    monkeypatch.delenv("COACHBOARD_COACH_NAME", raising=False)

    auth = auth_from_env()

    assert auth.coach_id == "C9"
    assert auth.credential == "tok"
    assert auth.user.email == "c9@example.com"
    assert auth.can_fetch


@pytest.mark.unit
def test_registry_resolves_names_and_aliases(console, context):
    registry = build_registry(console, context)

    assert isinstance(registry.resolve("/players"), RosterCommand)
    assert isinstance(registry.resolve("/mark 101 absent"), MarkCommand)
    assert registry.resolve("/nope") is None
    assert registry.resolve("") is None
    assert "/quit" in registry.words()


@pytest.mark.unit
def test_registry_rejects_duplicate_names(console, context):
    registry = build_registry(console, context)

    with pytest.raises(ValueError, match="/players"):
        registry.register(RosterCommand(console, context))


@pytest.mark.unit
def test_dispatch_reports_command_errors(console, context):
    registry = build_registry(console, context)

    dispatch(registry, "/date yesterday-ish", console)
    dispatch(registry, "/bogus", console)

    output = console.export_text()
    assert "Invalid date 'yesterday-ish'" in output
    assert "Unknown command /bogus" in output


@pytest.mark.unit
def test_exit_command_stops_the_shell(console, context):
    registry = build_registry(console, context)

    assert dispatch(registry, "/quit", console) is False
    assert dispatch(registry, "/exit", console) is False
    assert dispatch(registry, "/exit --help", console) is True
    assert dispatch(registry, "/roster", console) is True


@pytest.mark.unit
def test_help_flag_shows_usage_without_running(console, context):
    registry = build_registry(console, context)

    dispatch(registry, "/mark --help", console)
    dispatch(registry, "/exit -h", console)

    output = console.export_text()
    assert "/mark <player> present|absent" in output
    assert "Leave the shell" in output
    assert len(context.controller.overrides) == 0


@pytest.mark.unit
def test_commands_share_the_command_contract(console, context):
    registry = build_registry(console, context)

    for command in registry.commands():
        assert isinstance(command, Command)
        assert command.name.startswith("/")
        assert command.description
        for arg in command.arguments:
            assert {"name", "required", "description"} <= set(arg)


@pytest.mark.unit
def test_usage_error_lists_arguments(console, context):
    with pytest.raises(CommandError, match=r"Usage: /date \[YYYY-MM-DD\]"):
        DateCommand(console, context).execute("/date 2024-01-01 2024-01-02")


@pytest.mark.unit
def test_help_command_lists_descriptions(console, context):
    registry = build_registry(console, context)

    dispatch(registry, "/help", console)

    output = console.export_text()
    assert "Coachboard Commands" in output
    assert "Mark a player present or absent" in output
    assert "/players" in output
