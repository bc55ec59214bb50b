"""Dashboard controller: loads roster and schedule, owns attendance state."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Callable, Hashable, List, Optional, Set, Tuple, Union

from coachboard.attendance.aggregator import average_attendance, resolve_attendance
from coachboard.attendance.override_store import AttendanceOverrideStore, AttendanceState
from coachboard.attendance.submitter import (
    ERROR_SUMMARY_CHARS,
    AttendanceSubmitter,
    BatchResult,
    format_attendance_date,
)
from coachboard.dashboard.auth_state import SIGNED_OUT, AuthState
from coachboard.dashboard.notices import (
    Notice,
    auth_error_notice,
    auth_missing_notice,
    signed_out_notice,
    submission_failed_notice,
    submission_success_notice,
)
from coachboard.dashboard.view import (
    DashboardSummary,
    DashboardView,
    LoadError,
    PlayerRow,
    SubmissionView,
)
from coachboard.roster.player import Roster, build_roster
from coachboard.schedule.schedule_projector import (
    ProjectedSchedule,
    Session,
    load_sessions,
    project_sessions,
)
from coachboard.utils.errors import (
    AuthenticationMissing,
    AuthError,
    CoachboardError,
    SubmissionInProgress,
    TransportError,
)

logger = logging.getLogger(__name__)


def _classify(exc: CoachboardError) -> LoadError:
    if isinstance(exc, AuthError):
        return LoadError.AUTH
    if isinstance(exc, TransportError):
        return LoadError.TRANSPORT
    return LoadError.INVALID


class DashboardController:
    """Owns the state behind one coach's dashboard for one viewing session.

    Roster and schedule are (re)loaded whenever the signed-in coach or the
    credential changes. Each load takes a generation number and only applies
    its result if no newer load of the same resource has started since and
    the controller is still open, so a slow stale response can never replace
    a newer one.

    ``api`` must provide ``fetch_roster``, ``fetch_schedule`` and
    ``record_attendance`` (see ``CoachApiClient``). Its calls block and are
    run in worker threads.
    """

    def __init__(
        self,
        api: Any,
        *,
        sign_out: Optional[Callable[[], None]] = None,
        clock: Callable[[], date] = date.today,
        error_summary_chars: int = ERROR_SUMMARY_CHARS,
    ) -> None:
        self.api = api
        self.overrides = AttendanceOverrideStore()
        self.submitter = AttendanceSubmitter(api)
        self.error_summary_chars = error_summary_chars
        self._sign_out = sign_out
        self._clock = clock

        self._auth: AuthState = SIGNED_OUT
        self.selected_date: date = clock()

        self.roster: Roster = ()
        self.roster_loading = False
        self.roster_error: Optional[LoadError] = None

        self._sessions: Tuple[Session, ...] = ()
        self._skipped_sessions = 0
        self.schedule_loading = False
        self.schedule_error: Optional[LoadError] = None

        self.last_submission: Optional[BatchResult] = None

        self._roster_generation = 0
        self._schedule_generation = 0
        self._closed = False
        self._tasks: Set[asyncio.Task] = set()
        self._notices: List[Notice] = []

    # ------------------------------------------------------------------
    # Auth & loading

    @property
    def auth(self) -> AuthState:
        return self._auth

    @property
    def closed(self) -> bool:
        return self._closed

    def update_auth(self, auth: AuthState) -> List[asyncio.Task]:
        """Apply a new auth snapshot and start loads for what it affects.

        Both resources depend on the loading flag, the user and the
        credential, so each is fetched once auth settles. Must be called from
        a running event loop.

        Returns:
            The load tasks started (possibly none).
        """
        previous = self._auth
        self._auth = auth

        if (previous.is_loading, previous.user, previous.credential) == (
            auth.is_loading,
            auth.user,
            auth.credential,
        ):
            return []
        return [self._spawn(self.load_roster()), self._spawn(self.load_schedule())]

    async def sign_in(self, auth: AuthState) -> None:
        """Apply ``auth`` and wait for the loads it triggers."""
        tasks = self.update_auth(auth)
        if tasks:
            await asyncio.gather(*tasks)

    async def refresh(self) -> None:
        """Reload roster and schedule for the current auth state."""
        await asyncio.gather(self.load_roster(), self.load_schedule())

    async def wait_idle(self) -> None:
        """Wait for every load started by ``update_auth``."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def load_roster(self) -> None:
        self._roster_generation += 1
        generation = self._roster_generation
        auth = self._auth

        if not auth.can_fetch:
            if auth.user is not None and not auth.credential and not auth.is_loading:
                logger.warning("Cannot fetch players: credential is missing.")
            self._apply_roster((), None)
            return

        self.roster_loading = True
        try:
            records = await asyncio.to_thread(self.api.fetch_roster, auth.credential)
            roster, error = build_roster(records), None
        except CoachboardError as exc:
            logger.error("Dashboard failed to load players: %s", exc)
            roster, error = (), _classify(exc)

        if generation != self._roster_generation or self._closed:
            logger.debug("Discarding superseded roster load %d", generation)
            return
        if error is LoadError.AUTH:
            self._notify(auth_error_notice())
        self._apply_roster(roster, error)

    def _apply_roster(self, roster: Roster, error: Optional[LoadError]) -> None:
        self.roster = roster
        self.roster_error = error
        self.roster_loading = False

    async def load_schedule(self) -> None:
        self._schedule_generation += 1
        generation = self._schedule_generation
        auth = self._auth

        if auth.coach_id is None or not auth.credential or auth.is_loading:
            self._apply_schedule((), 0, None)
            return

        self.schedule_loading = True
        try:
            records = await asyncio.to_thread(
                self.api.fetch_schedule, auth.coach_id, auth.credential
            )
            (sessions, skipped), error = load_sessions(records), None
        except CoachboardError as exc:
            logger.error("Dashboard failed to load schedule: %s", exc)
            (sessions, skipped), error = ((), 0), _classify(exc)

        if generation != self._schedule_generation or self._closed:
            logger.debug("Discarding superseded schedule load %d", generation)
            return
        if error is LoadError.AUTH:
            self._notify(auth_error_notice())
        self._apply_schedule(sessions, skipped, error)

    def _apply_schedule(
        self, sessions: Tuple[Session, ...], skipped: int, error: Optional[LoadError]
    ) -> None:
        self._sessions = sessions
        self._skipped_sessions = skipped
        self.schedule_error = error
        self.schedule_loading = False

    @property
    def schedule(self) -> ProjectedSchedule:
        """Loaded sessions projected for the clock's current date.

        Recomputed on every read so "today" follows the date while the
        dashboard stays open.
        """
        return project_sessions(self._sessions, self._clock(), self._skipped_sessions)

    # ------------------------------------------------------------------
    # Attendance

    def set_attendance(self, player_id: Hashable, state: Union[AttendanceState, str]) -> None:
        self.overrides.set(player_id, state)

    def select_date(self, selected: date) -> None:
        self.selected_date = selected

    @property
    def is_submitting(self) -> bool:
        return self.submitter.in_flight

    @property
    def can_submit(self) -> bool:
        return not self.is_submitting and bool(self.roster)

    async def submit_attendance(self) -> Optional[BatchResult]:
        """Submit attendance for the whole roster on the selected date.

        Returns None when nothing was sent: a batch is already running, the
        roster is empty, or the coach is not authenticated (a notice is
        raised in that last case).
        """
        if self.is_submitting:
            logger.info("Ignoring attendance submission while another is running")
            return None
        if not self.roster:
            logger.info("Ignoring attendance submission for an empty roster")
            return None

        try:
            result = await self.submitter.submit(
                self.roster,
                self.overrides,
                self.selected_date,
                self._auth.coach_id,
                self._auth.credential,
            )
        except SubmissionInProgress:
            logger.info("Ignoring attendance submission while another is running")
            return None
        except AuthenticationMissing as exc:
            self._notify(auth_missing_notice(str(exc)))
            return None

        self.last_submission = result
        if result.ok:
            self._notify(submission_success_notice(result.total, result.attendance_date))
        else:
            self._notify(
                submission_failed_notice(
                    result.failure_count,
                    result.total,
                    result.error_summary(self.error_summary_chars),
                )
            )
        return result

    # ------------------------------------------------------------------
    # Lifecycle

    def close(self) -> None:
        """Tear down: in-flight loads are cancelled and their results dropped."""
        self._closed = True
        self._roster_generation += 1
        self._schedule_generation += 1
        for task in list(self._tasks):
            task.cancel()

    def sign_out(self) -> None:
        if self._sign_out is not None:
            self._sign_out()
        self.close()
        self._auth = SIGNED_OUT
        self._apply_roster((), None)
        self._apply_schedule((), 0, None)
        self.overrides.clear()
        self._notify(signed_out_notice())

    # ------------------------------------------------------------------
    # Notices & view

    def _notify(self, notice: Notice) -> None:
        self._notices.append(notice)

    def drain_notices(self) -> List[Notice]:
        notices, self._notices = self._notices, []
        return notices

    def player_rows(self) -> List[PlayerRow]:
        return [
            PlayerRow(
                player_id=player.id,
                display_name=player.display_name,
                initial=player.initial,
                age=player.age_label,
                position=player.position_label,
                attendance_label=player.attendance_label,
                attendance=resolve_attendance(player.attendance),
                status=player.status_label,
                is_active=player.is_active,
                state=self.overrides.get(player.id),
            )
            for player in self.roster
        ]

    def view(self) -> DashboardView:
        schedule = self.schedule
        summary = DashboardSummary(
            assigned_players=len(self.roster),
            todays_sessions=len(schedule.today),
            completed_today=schedule.completed_today,
            average_attendance=average_attendance(self.roster),
            players_loading=self.roster_loading,
            schedule_loading=self.schedule_loading,
        )
        last = (
            SubmissionView.from_result(self.last_submission, self.error_summary_chars)
            if self.last_submission is not None
            else None
        )
        return DashboardView(
            coach=self._auth.user,
            summary=summary,
            players=tuple(self.player_rows()),
            today=schedule.today,
            weekly=schedule.weekly,
            roster_error=self.roster_error,
            schedule_error=self.schedule_error,
            selected_date=format_attendance_date(self.selected_date),
            is_submitting=self.is_submitting,
            can_submit=self.can_submit,
            last_submission=last,
        )
