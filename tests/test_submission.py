"""
Tests for the timer-driven submission cycle.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

import pytest

from bookingsync.application.exceptions import SubmissionInProgressError, SubmissionTransportError
from bookingsync.application.ports.submission import SubmissionPort
from bookingsync.application.use_cases.booking_session import BookingSession
from bookingsync.application.use_cases.interpret_utterance import KeywordIntentEngine
from bookingsync.application.use_cases.submission import SubmissionController
from bookingsync.domain.entities.booking_record import BookingRecord
from bookingsync.domain.entities.submission_state import SubmissionState
from bookingsync.infrastructure.scheduling.manual_scheduler import ManualScheduler
from bookingsync.infrastructure.webhook.mock_submitter import MockSubmitter


COMPLETE = BookingRecord(
    purpose="Consultation",
    date=date(2030, 3, 4),
    start_time="10:00",
    end_time="11:00",
    timezone="EST",
    email="grace@example.com",
)


class FailingSubmitter(SubmissionPort):
    def __init__(self) -> None:
        self.calls = 0

    async def submit(self, record: BookingRecord) -> None:
        self.calls += 1
        raise SubmissionTransportError("Webhook responded with HTTP 502")


class HangingSubmitter(SubmissionPort):
    def __init__(self) -> None:
        self.started = 0
        self.release = asyncio.Event()

    async def submit(self, record: BookingRecord) -> None:
        self.started += 1
        await self.release.wait()


def test_confirm_cycle_with_successful_post():
    """idle -> submitting at once, resolved after the delay, idle after the second delay."""

    async def scenario() -> None:
        scheduler = ManualScheduler()
        submitter = MockSubmitter()
        controller = SubmissionController(submitter=submitter, scheduler=scheduler)

        assert controller.state is SubmissionState.idle
        assert controller.confirm(COMPLETE) is SubmissionState.submitting
        assert controller.submissions == 1

        await asyncio.sleep(0)
        assert submitter.sent == [
            {
                "purpose": "Consultation",
                "date": "2030-03-04",
                "startTime": "10:00",
                "endTime": "11:00",
                "timeZone": "EST",
                "email": "grace@example.com",
            }
        ]

        scheduler.advance(3.0)
        assert controller.state is SubmissionState.submitting
        scheduler.advance(1.0)
        assert controller.state is SubmissionState.resolved
        scheduler.advance(3.0)
        assert controller.state is SubmissionState.resolved
        scheduler.advance(1.0)
        assert controller.state is SubmissionState.idle
        assert len(submitter.sent) == 1

    asyncio.run(scenario())


def test_failed_post_is_logged_and_still_resolves(caplog):
    """A transport error never blocks the resolved indicator."""

    async def scenario() -> None:
        scheduler = ManualScheduler()
        submitter = FailingSubmitter()
        controller = SubmissionController(submitter=submitter, scheduler=scheduler, session_id="s-err")

        controller.confirm(COMPLETE)
        await asyncio.sleep(0)

        assert submitter.calls == 1
        assert controller.last_error == "Webhook responded with HTTP 502"
        assert controller.state is SubmissionState.submitting

        scheduler.advance(4.0)
        assert controller.state is SubmissionState.resolved
        scheduler.advance(4.0)
        assert controller.state is SubmissionState.idle

    with caplog.at_level(logging.ERROR):
        asyncio.run(scenario())

    assert any(r.getMessage() == "Booking submission failed" for r in caplog.records)


def test_pending_post_does_not_gate_resolved():
    """The indicator follows the timers even when the request never completes."""

    async def scenario() -> None:
        scheduler = ManualScheduler()
        submitter = HangingSubmitter()
        controller = SubmissionController(submitter=submitter, scheduler=scheduler)

        controller.confirm(COMPLETE)
        await asyncio.sleep(0)
        assert submitter.started == 1

        scheduler.advance(4.0)
        assert controller.state is SubmissionState.resolved
        scheduler.advance(4.0)
        assert controller.state is SubmissionState.idle
        assert not scheduler.spawned[0].done()

        submitter.release.set()
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert scheduler.spawned[0].done()
        assert controller.last_error is None

    asyncio.run(scenario())


def test_second_confirm_during_active_cycle_is_rejected():
    async def scenario() -> None:
        scheduler = ManualScheduler()
        submitter = MockSubmitter()
        controller = SubmissionController(submitter=submitter, scheduler=scheduler)

        controller.confirm(COMPLETE)
        with pytest.raises(SubmissionInProgressError):
            controller.confirm(COMPLETE)

        scheduler.advance(4.0)
        with pytest.raises(SubmissionInProgressError):
            controller.confirm(COMPLETE)

        scheduler.advance(4.0)
        assert controller.confirm(COMPLETE) is SubmissionState.submitting
        await asyncio.sleep(0)
        assert controller.submissions == 2
        assert len(submitter.sent) == 2

    asyncio.run(scenario())


def test_cancel_returns_to_idle_and_drops_timer():
    async def scenario() -> None:
        scheduler = ManualScheduler()
        controller = SubmissionController(submitter=MockSubmitter(), scheduler=scheduler)

        controller.confirm(COMPLETE)
        controller.cancel()

        assert controller.state is SubmissionState.idle
        assert scheduler.pending == 0
        scheduler.advance(10.0)
        assert controller.state is SubmissionState.idle

    asyncio.run(scenario())


def test_session_confirm_sends_current_record_snapshot():
    """The session posts what the form holds at confirm time; later edits do not leak in."""

    async def scenario() -> None:
        scheduler = ManualScheduler()
        submitter = MockSubmitter()
        session = BookingSession(
            session_id="s-ok",
            engine=KeywordIntentEngine(),
            submitter=submitter,
            scheduler=scheduler,
        )
        session.edit_fields(
            purpose="Follow-up Meeting",
            date="2030-03-04",
            start_time="13:00",
            end_time="14:00",
            email="grace@example.com",
        )

        assert session.confirm() is SubmissionState.submitting
        session.edit_fields(purpose="Consultation")
        await asyncio.sleep(0)

        assert submitter.sent[0]["purpose"] == "Follow-up Meeting"
        assert submitter.sent[0]["timeZone"] == "UTC"
        assert session.snapshot().submission_state is SubmissionState.submitting

    asyncio.run(scenario())
