"""Pytest configuration and fixtures for coachboard tests."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

import pytest

from coachboard.dashboard.auth_state import AuthState, CoachIdentity


class FakeCoachApi:
    """In-memory stand-in for CoachApiClient.

    ``fail_players`` maps player ids to the exception ``record_attendance``
    raises for them. Every call is recorded; calls may arrive from worker
    threads.
    """

    def __init__(
        self,
        roster: Optional[List[Dict[str, Any]]] = None,
        sessions: Optional[Any] = None,
        roster_error: Optional[Exception] = None,
        schedule_error: Optional[Exception] = None,
        fail_players: Optional[Dict[Any, Exception]] = None,
    ) -> None:
        self.roster = roster if roster is not None else []
        self.sessions = sessions if sessions is not None else []
        self.roster_error = roster_error
        self.schedule_error = schedule_error
        self.fail_players = fail_players or {}
        self.roster_calls: List[str] = []
        self.schedule_calls: List[tuple] = []
        self.recorded: List[tuple] = []
        self._lock = threading.Lock()

    def fetch_roster(self, credential: str):
        self.roster_calls.append(credential)
        if self.roster_error:
            raise self.roster_error
        return self.roster

    def fetch_schedule(self, coach_id, credential: str):
        self.schedule_calls.append((coach_id, credential))
        if self.schedule_error:
            raise self.schedule_error
        return self.sessions

    def record_attendance(self, payload, credential: str):
        with self._lock:
            self.recorded.append((payload, credential))
        error = self.fail_players.get(payload.player_id)
        if error:
            raise error
        return {"ok": True, "playerId": payload.player_id}


@pytest.fixture
def sample_sessions() -> List[Dict[str, Any]]:
    """One or more sessions on every day of the week, deliberately out of order."""
    return [
        {
            "day_of_week": "Saturday",
            "start_time": "09:00:00",
            "end_time": "10:30:00",
            "group_category": "U12",
            "location": "Field 1",
            "status": "Scheduled",
        },
        {
            "day_of_week": "Tuesday",
            "start_time": "14:30:00",
            "end_time": "16:00:00",
            "group_category": "U14",
            "location": "Main Pitch",
            "status": "Completed",
        },
        {
            "day_of_week": "Monday",
            "start_time": "17:00:00",
            "end_time": "18:00:00",
            "group_category": "U10",
            "location": None,
        },
        {
            "day_of_week": "Sunday",
            "start_time": "08:00:00",
            "end_time": "09:00:00",
            "group_category": "Seniors",
        },
        {
            "day_of_week": "Friday",
            "start_time": "16:15:00",
            "end_time": "17:45:00",
            "group_category": "U16",
            "location": "",
            "status": "Completed",
        },
        {
            "day_of_week": "Wednesday",
            "start_time": "18:00:00",
            "end_time": "19:30:00",
            "group_category": "U18",
            "location": "Indoor Hall",
        },
        {
            "day_of_week": "Thursday",
            "start_time": "15:00:00",
            "end_time": "16:00:00",
            "group_category": "U12",
        },
        {
            "day_of_week": "Tuesday",
            "start_time": "10:00:00",
            "end_time": "11:00:00",
            "group_category": "Goalkeepers",
        },
        {
            "day_of_week": "Friday",
            "start_time": "18:00:00",
            "end_time": "19:00:00",
            "group_category": "U18",
            "location": "Main Pitch",
        },
    ]


@pytest.fixture
def sample_roster() -> List[Dict[str, Any]]:
    """Roster records as the roster service returns them."""
    return [
        {
            "id": 101,
            "name": "Amara Okafor",
            "age": 14,
            "position": "Midfielder",
            "attendance": 80,
            "status": "Active",
        },
        {
            "id": 102,
            "name": "Luca Bianchi",
            "age": 13,
            "position": "Defender",
            "attendance": "90",
            "status": "Active",
        },
        {
            "id": 103,
            "name": "Sam Lee",
            "age": 15,
            "position": "Forward",
            "attendance": 100.0,
            "status": "Injured",
        },
    ]


@pytest.fixture
def coach() -> CoachIdentity:
    return CoachIdentity(id="C1", name="Jordan", email="jordan@example.com", role="coach")


@pytest.fixture
def signed_in(coach) -> AuthState:
    return AuthState(user=coach, credential="token-1")


@pytest.fixture
def make_api():
    """Factory for FakeCoachApi instances."""
    return FakeCoachApi
