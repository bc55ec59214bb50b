"""Dashboard API endpoints."""

import logging
import sys
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

from fastapi import APIRouter, Depends, HTTPException

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from app.auth import session_store
from app.models import (
    AttendanceMarkRequest,
    CoachResponse,
    DashboardResponse,
    NoticeModel,
    PlayerRowModel,
    SelectDateRequest,
    SubmissionModel,
    SubmitResponse,
    SummaryModel,
    TodaySlotModel,
    WeekDayModel,
)

from coachboard.dashboard.controller import DashboardController
from coachboard.dashboard.view import SubmissionView
from coachboard.utils.errors import AuthenticationMissing

router = APIRouter()

current_controller = Depends(session_store.get_controller_from_request)


def notice_models(controller: DashboardController) -> List[NoticeModel]:
    """Drain the controller's pending notices into response models."""
    return [NoticeModel(**notice.as_dict()) for notice in controller.drain_notices()]


def _submission_model(submission: SubmissionView) -> SubmissionModel:
    return SubmissionModel(
        ok=submission.ok,
        attendance_date=submission.attendance_date,
        total=submission.total,
        success_count=submission.success_count,
        failure_count=submission.failure_count,
        failed_player_ids=list(submission.failed_player_ids),
        error_summary=submission.error_summary,
    )


def _dashboard_response(controller: DashboardController) -> DashboardResponse:
    view = controller.view()
    s = view.summary
    return DashboardResponse(
        coach=CoachResponse(**vars(view.coach)) if view.coach else None,
        summary=SummaryModel(
            assigned_players=s.assigned_players,
            todays_sessions=s.todays_sessions,
            completed_today=s.completed_today,
            average_attendance=s.average_attendance,
            players_loading=s.players_loading,
            schedule_loading=s.schedule_loading,
        ),
        players=[PlayerRowModel(**vars(row)) for row in view.players],
        today=[
            TodaySlotModel(
                time=slot.time_range,
                group=slot.group,
                location=slot.location,
                status=slot.status,
            )
            for slot in view.today
        ],
        weekly=[WeekDayModel(day=d.day, sessions=list(d.sessions)) for d in view.weekly],
        roster_error=view.roster_error.value if view.roster_error else None,
        schedule_error=view.schedule_error.value if view.schedule_error else None,
        selected_date=view.selected_date,
        is_submitting=view.is_submitting,
        can_submit=view.can_submit,
        last_submission=(
            _submission_model(view.last_submission) if view.last_submission else None
        ),
        notices=notice_models(controller),
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(controller: DashboardController = current_controller):
    """Get the full dashboard: summary, roster, schedule and attendance state."""
    return _dashboard_response(controller)


@router.post("/refresh", response_model=DashboardResponse)
async def refresh_dashboard(controller: DashboardController = current_controller):
    """Reload roster and schedule from the coach API."""
    await controller.refresh()
    return _dashboard_response(controller)


@router.put("/attendance/{player_id}", response_model=DashboardResponse)
async def mark_attendance(
    player_id: str,
    body: AttendanceMarkRequest,
    controller: DashboardController = current_controller,
):
    """Mark a roster player present or absent for the selected date."""
    player = next((p for p in controller.roster if str(p.id) == player_id), None)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not on roster")
    controller.set_attendance(player.id, body.state)
    return _dashboard_response(controller)


@router.put("/date", response_model=DashboardResponse)
async def select_date(
    body: SelectDateRequest, controller: DashboardController = current_controller
):
    """Change the date attendance is recorded for."""
    controller.select_date(body.date)
    return _dashboard_response(controller)


@router.post("/attendance/submit", response_model=SubmitResponse)
async def submit_attendance(controller: DashboardController = current_controller):
    """Submit attendance for every roster player on the selected date.

    A request made while a batch is still running is ignored and reported as
    ``submitted: false``. A session without a coach id or credential gets 401.
    """
    if not controller.auth.coach_id or not controller.auth.credential:
        logger.warning("Attendance submission without a coach credential")
        raise HTTPException(status_code=401, detail=str(AuthenticationMissing()))

    result = await controller.submit_attendance()
    if result is None:
        logger.info("Attendance submission not sent")
    view = controller.view()
    return SubmitResponse(
        submitted=result is not None,
        result=(
            _submission_model(view.last_submission)
            if result is not None and view.last_submission
            else None
        ),
        notices=notice_models(controller),
    )
