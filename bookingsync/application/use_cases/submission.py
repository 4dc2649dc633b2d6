from __future__ import annotations

import logging

from bookingsync.application.exceptions import SubmissionInProgressError
from bookingsync.application.ports.scheduler import ScheduledTask, SchedulerPort
from bookingsync.application.ports.submission import SubmissionPort
from bookingsync.domain.entities.booking_record import BookingRecord
from bookingsync.domain.entities.submission_state import SubmissionState


class SubmissionController:
    """
    Drives the idle -> submitting -> resolved -> idle cycle for a confirmed booking.

    The resolved indicator is timer driven: it shows up after `resolve_delay`
    whether the outbound request succeeded, failed or is still running, and
    clears after `dismiss_delay`. Outbound failures are only logged.
    """

    def __init__(
        self,
        submitter: SubmissionPort,
        scheduler: SchedulerPort,
        resolve_delay: float = 4.0,
        dismiss_delay: float = 4.0,
        session_id: str | None = None,
    ) -> None:
        self._submitter = submitter
        self._scheduler = scheduler
        self._resolve_delay = resolve_delay
        self._dismiss_delay = dismiss_delay
        self._session_id = session_id
        self._state = SubmissionState.idle
        self._timer: ScheduledTask | None = None
        self._submissions = 0
        self._last_error: str | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def submissions(self) -> int:
        return self._submissions

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def confirm(self, record: BookingRecord) -> SubmissionState:
        if self._state is not SubmissionState.idle:
            raise SubmissionInProgressError(f"Submission already {self._state.value}")

        self._transition(SubmissionState.submitting)
        self._submissions += 1
        self._scheduler.spawn(self._dispatch(record))
        self._timer = self._scheduler.call_later(self._resolve_delay, self._resolve)
        return self._state

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._state is not SubmissionState.idle:
            self._transition(SubmissionState.idle)

    async def _dispatch(self, record: BookingRecord) -> None:
        try:
            await self._submitter.submit(record)
        except Exception as e:
            self._last_error = str(e) or type(e).__name__
            self._logger.error(
                "Booking submission failed",
                extra={"session_id": self._session_id, "error": self._last_error},
            )
            return
        self._logger.info("Booking submission delivered", extra={"session_id": self._session_id})

    def _resolve(self) -> None:
        self._transition(SubmissionState.resolved)
        self._timer = self._scheduler.call_later(self._dismiss_delay, self._reset)

    def _reset(self) -> None:
        self._timer = None
        self._transition(SubmissionState.idle)

    def _transition(self, new_state: SubmissionState) -> None:
        self._logger.info(
            "Submission state changed",
            extra={"session_id": self._session_id, "state": new_state.value, "previous": self._state.value},
        )
        self._state = new_state
