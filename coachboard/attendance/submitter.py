"""Concurrent batch submission of attendance records."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from coachboard.attendance.override_store import AttendanceOverrideStore
from coachboard.roster.player import Player
from coachboard.utils.errors import AuthenticationMissing, SubmissionInProgress

logger = logging.getLogger(__name__)

ERROR_SUMMARY_CHARS = 80


class RecordingService(Protocol):
    def record_attendance(self, payload: "SubmissionPayload", credential: str) -> Any:
        ...


@dataclass(frozen=True)
class SubmissionPayload:
    player_id: Any
    attendance_date: str
    is_present: bool
    coach_id: Any

    def to_json(self) -> Dict[str, Any]:
        """Wire representation expected by the recording service."""
        return {
            "playerId": self.player_id,
            "attendanceDate": self.attendance_date,
            "isPresent": self.is_present,
            "coachId": self.coach_id,
        }


@dataclass(frozen=True)
class SubmissionItemResult:
    payload: SubmissionPayload
    ack: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BatchResult:
    """Outcome of one attendance batch.

    The batch is ``ok`` only if every record was stored. Individual item
    results are kept so callers can tell which records did take effect when
    some of them failed; nothing is rolled back.
    """

    attendance_date: str
    items: Tuple[SubmissionItemResult, ...]

    @property
    def ok(self) -> bool:
        return all(item.ok for item in self.items)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def success_count(self) -> int:
        return sum(1 for item in self.items if item.ok)

    @property
    def failure_count(self) -> int:
        return self.total - self.success_count

    @property
    def failed_player_ids(self) -> List[Any]:
        return [item.payload.player_id for item in self.items if not item.ok]

    def error_summary(self, limit: int = ERROR_SUMMARY_CHARS) -> str:
        """First failure message cut to ``limit`` characters, followed by ``...``."""
        for item in self.items:
            if item.error is not None:
                return f"{str(item.error)[:limit]}..."
        return ""


def format_attendance_date(selected: date) -> str:
    """Format the selected calendar day as ``YYYY-MM-DD``.

    Datetimes contribute their own calendar date; they are never shifted to
    UTC first.
    """
    if isinstance(selected, datetime):
        selected = selected.date()
    return selected.isoformat()


def build_payloads(
    roster: Sequence[Player],
    overrides: AttendanceOverrideStore,
    selected_date: date,
    coach_id: Any,
) -> List[SubmissionPayload]:
    """One payload per roster player, in roster order."""
    attendance_date = format_attendance_date(selected_date)
    return [
        SubmissionPayload(
            player_id=player.id,
            attendance_date=attendance_date,
            is_present=overrides.is_present(player.id),
            coach_id=coach_id,
        )
        for player in roster
    ]


class AttendanceSubmitter:
    """Sends one attendance record per player, all at once, and collects the outcome."""

    def __init__(self, service: RecordingService) -> None:
        self.service = service
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def submit(
        self,
        roster: Sequence[Player],
        overrides: AttendanceOverrideStore,
        selected_date: date,
        coach_id: Any,
        credential: Optional[str],
    ) -> BatchResult:
        """Submit attendance for every roster player on ``selected_date``.

        Every record is sent at the same time, each on its own worker thread,
        and the call returns once all of them have settled. There are no
        retries.

        Raises:
            AuthenticationMissing: If ``coach_id`` or ``credential`` is missing.
                No records are sent.
            SubmissionInProgress: If a previous batch has not settled yet.
        """
        if self._in_flight:
            raise SubmissionInProgress("An attendance submission is already running")
        if not coach_id or not credential:
            raise AuthenticationMissing()

        payloads = build_payloads(roster, overrides, selected_date, coach_id)
        # One worker per record so every call is in flight at once
        executor = ThreadPoolExecutor(
            max_workers=max(1, len(payloads)), thread_name_prefix="attendance"
        )
        self._in_flight = True
        try:
            loop = asyncio.get_running_loop()
            outcomes = await asyncio.gather(
                *(
                    loop.run_in_executor(
                        executor, self.service.record_attendance, payload, credential
                    )
                    for payload in payloads
                ),
                return_exceptions=True,
            )
        finally:
            executor.shutdown(wait=False)
            self._in_flight = False

        items = []
        for payload, outcome in zip(payloads, outcomes):
            if isinstance(outcome, Exception):
                items.append(SubmissionItemResult(payload=payload, error=outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                items.append(SubmissionItemResult(payload=payload, ack=outcome))

        result = BatchResult(
            attendance_date=format_attendance_date(selected_date), items=tuple(items)
        )
        if result.ok:
            logger.info(
                "Recorded attendance for %d players on %s",
                result.total,
                result.attendance_date,
            )
        else:
            logger.error(
                "Attendance batch for %s failed for %d of %d players: %s",
                result.attendance_date,
                result.failure_count,
                result.total,
                result.error_summary(),
            )
        return result
