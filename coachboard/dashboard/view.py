"""Read-only view models the presentation layer renders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from coachboard.attendance.override_store import AttendanceState
from coachboard.attendance.submitter import BatchResult
from coachboard.dashboard.auth_state import CoachIdentity
from coachboard.schedule.schedule_projector import TodaySlot, WeekDayGroup


class LoadError(str, Enum):
    """Why a resource is empty after a failed load."""

    AUTH = "auth"
    TRANSPORT = "transport"
    INVALID = "invalid"


@dataclass(frozen=True)
class DashboardSummary:
    assigned_players: int
    todays_sessions: int
    completed_today: int
    average_attendance: int
    players_loading: bool
    schedule_loading: bool


@dataclass(frozen=True)
class PlayerRow:
    player_id: Any
    display_name: str
    initial: str
    age: str
    position: str
    attendance_label: str
    attendance: float
    status: str
    is_active: bool
    state: AttendanceState

    @property
    def is_present(self) -> bool:
        return self.state is AttendanceState.PRESENT


@dataclass(frozen=True)
class SubmissionView:
    ok: bool
    attendance_date: str
    total: int
    success_count: int
    failure_count: int
    failed_player_ids: Tuple[Any, ...]
    error_summary: str

    @classmethod
    def from_result(cls, result: BatchResult, error_chars: int) -> "SubmissionView":
        return cls(
            ok=result.ok,
            attendance_date=result.attendance_date,
            total=result.total,
            success_count=result.success_count,
            failure_count=result.failure_count,
            failed_player_ids=tuple(result.failed_player_ids),
            error_summary=result.error_summary(error_chars),
        )


@dataclass(frozen=True)
class DashboardView:
    coach: Optional[CoachIdentity]
    summary: DashboardSummary
    players: Tuple[PlayerRow, ...]
    today: Tuple[TodaySlot, ...]
    weekly: Tuple[WeekDayGroup, ...]
    roster_error: Optional[LoadError]
    schedule_error: Optional[LoadError]
    selected_date: str
    is_submitting: bool
    can_submit: bool
    last_submission: Optional[SubmissionView] = None
