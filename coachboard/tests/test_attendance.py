"""Tests for attendance overrides and roster aggregation."""

from __future__ import annotations

import pytest

from coachboard.attendance.aggregator import (
    average_attendance,
    resolve_attendance,
    round_half_up,
)
from coachboard.attendance.override_store import AttendanceOverrideStore, AttendanceState
from coachboard.roster.player import Player, build_roster
from coachboard.utils.errors import ValidationError


def _roster(*values):
    return tuple(Player(id=i, attendance=v) for i, v in enumerate(values, start=1))


class TestOverrideStore:
    """Default-present overrides."""

    @pytest.mark.unit
    def test_default_is_present(self):
        store = AttendanceOverrideStore()

        assert store.get(7) is AttendanceState.PRESENT
        assert store.is_present(7)
        assert len(store) == 0

    @pytest.mark.unit
    def test_set_absent_then_present(self):
        store = AttendanceOverrideStore()

        store.set(7, "absent")
        assert store.get(7) is AttendanceState.ABSENT
        assert not store.is_present(7)

        store.set(7, AttendanceState.PRESENT)
        assert store.get(7) is AttendanceState.PRESENT
        assert store.get(7) == AttendanceOverrideStore().get(7)

    @pytest.mark.unit
    def test_set_is_idempotent(self):
        store = AttendanceOverrideStore()

        store.set(7, "absent")
        store.set(7, "absent")

        assert store.overrides() == {7: AttendanceState.ABSENT}

    @pytest.mark.unit
    def test_set_rejects_unknown_state(self):
        store = AttendanceOverrideStore()

        with pytest.raises(ValueError):
            store.set(7, "late")
        assert 7 not in store

    @pytest.mark.unit
    def test_clear(self):
        store = AttendanceOverrideStore()
        store.set(1, "absent")
        store.set(2, "absent")

        store.clear()

        assert len(store) == 0
        assert store.is_present(1)

    @pytest.mark.unit
    def test_overrides_is_a_snapshot(self):
        store = AttendanceOverrideStore()
        store.set(1, "absent")

        snapshot = store.overrides()
        snapshot[1] = AttendanceState.PRESENT

        assert store.get(1) is AttendanceState.ABSENT


class TestResolveAttendance:
    """Reading attendance values of mixed types."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            (80, 80.0),
            (92.5, 92.5),
            ("90", 90.0),
            ("85.5%", 85.5),
            (" 70 ", 70.0),
            ("N/A", 0.0),
            ("", 0.0),
            (None, 0.0),
            (True, 0.0),
            (float("nan"), 0.0),
            ("inf", 0.0),
            ([80], 0.0),
        ],
    )
    def test_resolve(self, value, expected):
        assert resolve_attendance(value) == expected


class TestAverageAttendance:
    """Roster-wide average."""

    @pytest.mark.unit
    def test_average_of_numbers(self):
        assert average_attendance(_roster(80, 90, 100)) == 90

    @pytest.mark.unit
    def test_empty_roster_is_zero(self):
        assert average_attendance(()) == 0

    @pytest.mark.unit
    def test_unparseable_is_zero(self):
        assert average_attendance(_roster("N/A")) == 0

    @pytest.mark.unit
    def test_missing_values_still_count(self):
        """Players without attendance drag the average down rather than being skipped."""
        assert average_attendance(_roster(80, None)) == 40
        assert average_attendance(_roster(90, "N/A", 90)) == 60

    @pytest.mark.unit
    def test_mixed_numeric_strings(self):
        assert average_attendance(_roster(80, "90", 100.0)) == 90

    @pytest.mark.unit
    def test_half_rounds_up(self):
        """50.5 rounds to 51, not to the even 50."""
        assert average_attendance(_roster(50, 51)) == 51
        assert average_attendance(_roster(89, 90)) == 90
        assert average_attendance(_roster(0, 1)) == 1

    @pytest.mark.unit
    def test_rounds_down_below_half(self):
        assert average_attendance(_roster(33, 33, 34)) == 33

    @pytest.mark.unit
    def test_round_half_up(self):
        assert round_half_up(50.5) == 51
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2

    @pytest.mark.unit
    def test_round_half_up_goes_towards_positive_infinity(self):
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1
        assert round_half_up(-1.6) == -2
        assert round_half_up(0.0) == 0


class TestRosterModel:
    """Player display fallbacks."""

    @pytest.mark.unit
    def test_build_roster_from_records(self, sample_roster):
        roster = build_roster(sample_roster)

        assert [p.id for p in roster] == [101, 102, 103]
        assert roster[1].attendance == "90"

    @pytest.mark.unit
    def test_build_roster_missing_body(self):
        assert build_roster(None) == ()
        assert build_roster([]) == ()

    @pytest.mark.unit
    def test_build_roster_skips_non_objects(self):
        assert [p.id for p in build_roster([{"id": 1}, "junk", None])] == [1]

    @pytest.mark.unit
    @pytest.mark.parametrize("body", [42, True, "players", {"id": 1}])
    def test_build_roster_rejects_non_list_body(self, body):
        with pytest.raises(ValidationError, match="not a list"):
            build_roster(body)

    @pytest.mark.unit
    def test_non_string_name_is_displayed(self):
        player = Player(id=1, name=7)

        assert player.display_name == "7"
        assert player.initial == "7"

    @pytest.mark.unit
    def test_display_fallbacks(self):
        player = Player(id=5)

        assert player.display_name == "Unnamed Player"
        assert player.initial == "?"
        assert player.age_label == "—"
        assert player.position_label == "—"
        assert player.attendance_label == "—"
        assert player.status_label == "Unknown"
        assert not player.is_active

    @pytest.mark.unit
    def test_display_values(self):
        player = Player(
            id=5, name="Amara", age=14, position="GK", attendance="85", status="Active"
        )

        assert player.initial == "A"
        assert player.age_label == "14"
        assert player.attendance_label == "85%"
        assert player.is_active

    @pytest.mark.unit
    def test_zero_attendance_label(self):
        assert Player(id=1, attendance=0).attendance_label == "0%"
