"""
Tests for the HTTP surface (form edits, chat, confirm) with a virtual clock.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from bookingsync.application.use_cases.booking_session import BookingSession
from bookingsync.application.use_cases.interpret_utterance import KeywordIntentEngine
from bookingsync.infrastructure.scheduling.manual_scheduler import ManualScheduler
from bookingsync.infrastructure.store.memory_store import MemorySessionStore
from bookingsync.infrastructure.webhook.mock_submitter import MockSubmitter
from bookingsync.main import app
from bookingsync.wiring.dependencies import get_session_store


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def client(scheduler):
    engine = KeywordIntentEngine()
    submitter = MockSubmitter()

    def factory(session_id: str) -> BookingSession:
        return BookingSession(
            session_id=session_id,
            engine=engine,
            submitter=submitter,
            scheduler=scheduler,
            reply_delay=1.5,
            resolve_delay=4.0,
            dismiss_delay=4.0,
        )

    store = MemorySessionStore(session_factory=factory)
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _new_session(client: TestClient) -> str:
    resp = client.post("/api/v1/sessions")
    assert resp.status_code == 201
    return resp.json()["session_id"]


FULL_FORM = {
    "purpose": "Business Inquiry",
    "date": "2030-07-01",
    "startTime": "14:00",
    "endTime": "15:00",
    "timeZone": "GMT",
    "email": "ops@example.com",
}


def test_health_and_options(client):
    assert client.get("/health").json() == {"status": "ok"}

    data = client.get("/api/v1/options").json()
    assert len(data["purposes"]) == 5
    assert data["timezones"] == ["UTC", "GMT", "EST", "PST", "IST", "CET", "JST"]
    assert len(data["time_slots"]) == 24
    assert data["time_slots"][0] == "00:00"
    assert data["time_slots"][-1] == "23:00"


def test_new_session_snapshot(client):
    resp = client.post("/api/v1/sessions")
    data = resp.json()

    assert data["booking"]["timeZone"] == "UTC"
    assert data["booking"]["purpose"] is None
    assert data["agent_typing"] is False
    assert data["submission_state"] == "idle"
    assert [m["sender"] for m in data["messages"]] == ["agent"]


def test_unknown_session_is_404(client):
    assert client.get("/api/v1/sessions/nope").status_code == 404
    assert client.post("/api/v1/sessions/nope/confirm").status_code == 404


def test_form_edit_uses_wire_names(client):
    session_id = _new_session(client)

    resp = client.patch(f"/api/v1/sessions/{session_id}/booking", json={"timeZone": "CET", "startTime": "07:00"})

    assert resp.status_code == 200
    assert resp.json()["timeZone"] == "CET"
    assert resp.json()["startTime"] == "07:00"
    assert resp.json()["endTime"] is None


def test_form_edit_rejects_values_outside_domain(client):
    session_id = _new_session(client)

    resp = client.patch(f"/api/v1/sessions/{session_id}/booking", json={"purpose": "Lunch"})

    assert resp.status_code == 422
    assert resp.json()["detail"]["field"] == "purpose"


def test_chat_message_updates_form_after_delay(client, scheduler):
    session_id = _new_session(client)

    resp = client.post(f"/api/v1/sessions/{session_id}/messages", json={"text": "Can I get tech support?"})
    assert resp.status_code == 202
    assert resp.json()["agent_typing"] is True
    assert resp.json()["message"]["sender"] == "user"

    scheduler.advance(1.5)

    data = client.get(f"/api/v1/sessions/{session_id}").json()
    assert data["booking"]["purpose"] == "Technical Support"
    assert data["agent_typing"] is False
    assert data["messages"][-1]["sender"] == "agent"


def test_blank_chat_message_is_rejected(client):
    session_id = _new_session(client)

    resp = client.post(f"/api/v1/sessions/{session_id}/messages", json={"text": "  "})

    assert resp.status_code == 400


def test_confirm_incomplete_booking_lists_missing_fields(client):
    session_id = _new_session(client)

    resp = client.post(f"/api/v1/sessions/{session_id}/confirm")

    assert resp.status_code == 422
    assert resp.json()["detail"]["missing_fields"] == ["purpose", "date", "start_time", "end_time", "email"]


def test_confirm_cycle(client, scheduler):
    session_id = _new_session(client)
    client.patch(f"/api/v1/sessions/{session_id}/booking", json=FULL_FORM)

    resp = client.post(f"/api/v1/sessions/{session_id}/confirm")
    assert resp.status_code == 202
    assert resp.json()["submission_state"] == "submitting"

    assert client.post(f"/api/v1/sessions/{session_id}/confirm").status_code == 409

    scheduler.advance(4.0)
    assert client.get(f"/api/v1/sessions/{session_id}").json()["submission_state"] == "resolved"

    scheduler.advance(4.0)
    assert client.get(f"/api/v1/sessions/{session_id}").json()["submission_state"] == "idle"


def test_delete_session(client):
    session_id = _new_session(client)

    assert client.delete(f"/api/v1/sessions/{session_id}").status_code == 204
    assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404
    assert client.delete(f"/api/v1/sessions/{session_id}").status_code == 404
