"""Pydantic models for API requests and responses."""

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel

from coachboard.attendance.override_store import AttendanceState


class SessionRequest(BaseModel):
    """Sign-in request: the coach identity and the coach API credential."""

    coach_id: str
    access_token: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str = "coach"


class CoachResponse(BaseModel):
    """Signed-in coach."""

    id: Any
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class NoticeModel(BaseModel):
    """User-facing notice (toast)."""

    title: str
    description: str
    variant: str


class SummaryModel(BaseModel):
    """Dashboard headline numbers."""

    assigned_players: int
    todays_sessions: int
    completed_today: int
    average_attendance: int
    players_loading: bool
    schedule_loading: bool


class PlayerRowModel(BaseModel):
    """Roster entry with today's attendance mark."""

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


class TodaySlotModel(BaseModel):
    """One of today's sessions."""

    time: str
    group: str
    location: str
    status: str


class WeekDayModel(BaseModel):
    """Sessions on one weekday."""

    day: str
    sessions: List[str]


class SubmissionModel(BaseModel):
    """Outcome of an attendance batch."""

    ok: bool
    attendance_date: str
    total: int
    success_count: int
    failure_count: int
    failed_player_ids: List[Any] = []
    error_summary: str = ""


class DashboardResponse(BaseModel):
    """Everything the dashboard page renders."""

    coach: Optional[CoachResponse] = None
    summary: SummaryModel
    players: List[PlayerRowModel]
    today: List[TodaySlotModel]
    weekly: List[WeekDayModel]
    roster_error: Optional[str] = None
    schedule_error: Optional[str] = None
    selected_date: str
    is_submitting: bool
    can_submit: bool
    last_submission: Optional[SubmissionModel] = None
    notices: List[NoticeModel] = []


class AttendanceMarkRequest(BaseModel):
    """Mark one player present or absent."""

    state: AttendanceState


class SelectDateRequest(BaseModel):
    """Change the date attendance is recorded for."""

    date: date


class SubmitResponse(BaseModel):
    """Response for the attendance submit endpoint."""

    submitted: bool
    result: Optional[SubmissionModel] = None
    notices: List[NoticeModel] = []
