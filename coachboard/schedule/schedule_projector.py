"""Project raw training session records into today's slots and a weekly grouping."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from coachboard.utils.errors import ValidationError

logger = logging.getLogger(__name__)

WEEK_ORDER: Tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DEFAULT_LOCATION = "N/A"
DEFAULT_STATUS = "Scheduled"
COMPLETED_STATUS = "Completed"

_TIME_PREFIX = re.compile(r"^\d{2}:\d{2}")


@dataclass(frozen=True)
class Session:
    """A recurring training session as delivered by the schedule service."""

    day_of_week: str
    start_time: str
    end_time: str
    group_category: str = ""
    location: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "Session":
        """Build a session from a raw service record.

        Raises:
            ValidationError: If the record is not a mapping or its times are
                missing or not of the form ``HH:MM[...]``.
        """
        if not isinstance(record, Mapping):
            raise ValidationError(f"Session record is not a mapping: {record!r}")

        return cls(
            day_of_week=str(record.get("day_of_week") or ""),
            start_time=_hh_mm(record.get("start_time"), "start_time"),
            end_time=_hh_mm(record.get("end_time"), "end_time"),
            group_category=str(record.get("group_category") or ""),
            location=record.get("location"),
            status=record.get("status"),
        )

    @property
    def time_range(self) -> str:
        return f"{self.start_time} - {self.end_time}"


@dataclass(frozen=True)
class TodaySlot:
    """One of today's sessions, ready for display."""

    time_range: str
    group: str
    location: str
    status: str

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED_STATUS


@dataclass(frozen=True)
class WeekDayGroup:
    """All sessions that fall on one weekday."""

    day: str
    sessions: Tuple[str, ...]


@dataclass(frozen=True)
class ProjectedSchedule:
    """Result of projecting a batch of session records."""

    today: Tuple[TodaySlot, ...] = ()
    weekly: Tuple[WeekDayGroup, ...] = ()
    skipped: int = 0

    @property
    def completed_today(self) -> int:
        return sum(1 for slot in self.today if slot.is_completed)


EMPTY_SCHEDULE = ProjectedSchedule()


def _hh_mm(value: Any, field_name: str) -> str:
    """Truncate a time-of-day value to ``HH:MM``."""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, str) and _TIME_PREFIX.match(value):
        return value[:5]
    raise ValidationError(f"Session {field_name} is missing or malformed: {value!r}")


def weekday_name(day: date) -> str:
    """Return the English weekday name used to label sessions.

    Independent of the process locale so that it always matches the labels
    the schedule service emits.
    """
    # date.weekday() is Monday=0; WEEK_ORDER starts on Sunday
    return WEEK_ORDER[(day.weekday() + 1) % 7]


def _to_today_slot(session: Session) -> TodaySlot:
    return TodaySlot(
        time_range=session.time_range,
        group=session.group_category,
        location=session.location or DEFAULT_LOCATION,
        status=session.status or DEFAULT_STATUS,
    )


def parse_sessions(records: Sequence[Any]) -> Tuple[List[Session], int]:
    """Parse raw records, skipping malformed ones.

    Returns:
        Tuple of (parsed sessions in input order, number of skipped records)
    """
    sessions: List[Session] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            sessions.append(Session.from_record(record))
        except ValidationError as exc:
            skipped += 1
            logger.warning("Skipping session record %d: %s", index, exc)
    return sessions, skipped


def load_sessions(records: Any) -> Tuple[Tuple[Session, ...], int]:
    """Parse a schedule service response.

    Anything other than a list or tuple is treated as no sessions.

    Returns:
        Tuple of (sessions in input order, number of skipped records)
    """
    if not isinstance(records, (list, tuple)):
        return (), 0
    sessions, skipped = parse_sessions(records)
    return tuple(sessions), skipped


def project(records: Any, reference_date: date) -> ProjectedSchedule:
    """Project session records into today's slots and the weekly grouping.

    Args:
        records: Raw session records from the schedule service. Anything other
            than a list or tuple yields an empty schedule.
        reference_date: The date whose weekday is "today".

    Returns:
        ProjectedSchedule with today's slots (input order), weekly groups in
        canonical week order (only days that have sessions), and the number
        of malformed records that were skipped.
    """
    sessions, skipped = load_sessions(records)
    return project_sessions(sessions, reference_date, skipped)


def project_sessions(
    sessions: Sequence[Session], reference_date: date, skipped: int = 0
) -> ProjectedSchedule:
    """Project already parsed sessions for ``reference_date``."""
    today_name = weekday_name(reference_date)
    today = tuple(_to_today_slot(s) for s in sessions if s.day_of_week == today_name)

    by_day: Dict[str, List[str]] = {}
    for session in sessions:
        by_day.setdefault(session.day_of_week, []).append(
            f"{session.time_range} ({session.group_category})"
        )

    weekly = tuple(
        WeekDayGroup(day=day, sessions=tuple(by_day[day]))
        for day in WEEK_ORDER
        if by_day.get(day)
    )

    return ProjectedSchedule(today=today, weekly=weekly, skipped=skipped)
