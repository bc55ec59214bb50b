"""Tests for the dashboard HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.auth import session_store
from app.config import settings
from app.main import app

SIGN_IN = {
    "coach_id": "C1",
    "access_token": "token-1",
    "name": "Jordan",
    "email": "jordan@example.com",
    "role": "coach",
}


@pytest.fixture
def api(make_api, sample_roster, sample_sessions):
    return make_api(roster=sample_roster, sessions=sample_sessions)


@pytest.fixture
def client(monkeypatch, api):
    monkeypatch.setattr(session_store, "_build_api", lambda: api)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signed_in_client(client):
    response = client.post("/api/auth/session", json=SIGN_IN)
    assert response.status_code == 200
    return client


def _only_controller():
    (controller,) = session_store._sessions.values()
    return controller


@pytest.mark.unit
def test_sign_in_rejects_other_roles(client):
    response = client.post("/api/auth/session", json={**SIGN_IN, "role": "player"})

    assert response.status_code == 403
    assert response.json()["detail"] == "This dashboard is for coaches only"
    assert session_store.session_count() == 0


@pytest.mark.unit
def test_sign_in_loads_dashboard(signed_in_client, api):
    body = signed_in_client.get("/api/dashboard").json()

    assert body["coach"]["id"] == "C1"
    assert [row["player_id"] for row in body["players"]] == [101, 102, 103]
    assert body["weekly"][0]["day"] == "Sunday"
    assert api.roster_calls == ["token-1"]
    assert api.schedule_calls == [("C1", "token-1")]


@pytest.mark.unit
def test_dashboard_requires_a_session_cookie(client):
    response = client.get("/api/dashboard")

    assert response.status_code == 401
    assert response.json()["detail"] == "No dashboard session"


@pytest.mark.unit
def test_tampered_session_cookie_is_rejected(client):
    client.cookies.set(settings.session_cookie, "not-a-signed-session")

    response = client.get("/api/dashboard")

    assert response.status_code == 401
    assert response.json()["detail"] == "Dashboard session is invalid or expired"


@pytest.mark.unit
def test_mark_attendance(signed_in_client):
    response = signed_in_client.put(
        "/api/dashboard/attendance/102", json={"state": "absent"}
    )

    assert response.status_code == 200
    states = {row["player_id"]: row["state"] for row in response.json()["players"]}
    assert states == {101: "present", 102: "absent", 103: "present"}


@pytest.mark.unit
def test_mark_unknown_player_is_not_found(signed_in_client):
    response = signed_in_client.put(
        "/api/dashboard/attendance/999", json={"state": "absent"}
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Player 999 not on roster"


@pytest.mark.unit
def test_submit_records_every_player(signed_in_client, api):
    response = signed_in_client.post("/api/dashboard/attendance/submit")

    body = response.json()
    assert response.status_code == 200
    assert body["submitted"] is True
    assert body["result"]["total"] == 3
    assert body["notices"][0]["title"] == "Attendance Submitted"
    assert len(api.recorded) == 3


@pytest.mark.unit
def test_submit_while_running_is_not_submitted(signed_in_client, api):
    _only_controller().submitter._in_flight = True

    body = signed_in_client.post("/api/dashboard/attendance/submit").json()

    assert body["submitted"] is False
    assert body["result"] is None
    assert api.recorded == []


@pytest.mark.unit
def test_submit_without_credential_is_unauthorized(client, api):
    client.post("/api/auth/session", json={**SIGN_IN, "access_token": ""})

    response = client.post("/api/dashboard/attendance/submit")

    assert response.status_code == 401
    assert "Authentication missing" in response.json()["detail"]
    assert api.recorded == []


@pytest.mark.unit
def test_sign_out_returns_notice_and_ends_session(signed_in_client):
    response = signed_in_client.delete("/api/auth/session")

    assert response.status_code == 200
    assert [notice["title"] for notice in response.json()] == ["Signed Out"]
    assert session_store.session_count() == 0
    assert signed_in_client.get("/api/dashboard").status_code == 401


@pytest.mark.unit
def test_expired_sessions_are_closed(signed_in_client):
    controller = _only_controller()
    (session_id,) = session_store._created
    session_store._created[session_id] -= settings.session_max_age + 1

    response = signed_in_client.get("/api/dashboard")

    assert response.status_code == 401
    assert response.json()["detail"] == "Dashboard session has ended"
    assert controller.closed
    assert signed_in_client.get("/health").json()["sessions"] == 0
