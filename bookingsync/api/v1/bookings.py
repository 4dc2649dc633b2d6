from fastapi import APIRouter, Depends, HTTPException, Response

from bookingsync.api.v1.schemas import (
    BookingEditSchema, BookingSchema, ConfirmResponseSchema, MessageSchema,
    OptionsSchema, SendMessageRequestSchema, SendMessageResponseSchema, SessionSchema,
)
from bookingsync.application.exceptions import BookingValidationError, InvalidFieldError, SubmissionInProgressError
from bookingsync.application.ports.session_store import SessionStorePort
from bookingsync.application.use_cases.booking_session import BookingSession
from bookingsync.domain.entities.booking_options import PURPOSES, TIME_SLOTS, TIMEZONES
from bookingsync.wiring.dependencies import get_session_store

router = APIRouter()

# Handlers are async on purpose: session timers are scheduled on the running event loop.


def _get_session(session_id: str, store: SessionStorePort) -> BookingSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.get("/options", response_model=OptionsSchema)
async def options() -> OptionsSchema:
    return OptionsSchema(purposes=list(PURPOSES), timezones=list(TIMEZONES), time_slots=list(TIME_SLOTS))


@router.post("/sessions", response_model=SessionSchema, status_code=201)
async def create_session(store: SessionStorePort = Depends(get_session_store)):
    session = store.create()
    return SessionSchema.from_snapshot(session.snapshot())


@router.get("/sessions/{session_id}", response_model=SessionSchema)
async def get_session(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    return SessionSchema.from_snapshot(_get_session(session_id, store).snapshot())


@router.patch("/sessions/{session_id}/booking", response_model=BookingSchema)
async def edit_booking(
    session_id: str,
    req: BookingEditSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    try:
        record = session.edit_fields(**req.model_dump(exclude_unset=True))
    except InvalidFieldError as e:
        raise HTTPException(status_code=422, detail={"field": e.field, "reason": e.reason})
    return BookingSchema.from_record(record)


@router.post("/sessions/{session_id}/messages", response_model=SendMessageResponseSchema, status_code=202)
async def send_message(
    session_id: str,
    req: SendMessageRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _get_session(session_id, store)
    message = session.send_message(req.text)
    if message is None:
        raise HTTPException(status_code=400, detail="Message text is empty")
    return SendMessageResponseSchema(
        message=MessageSchema.from_message(message),
        agent_typing=session.chat.agent_typing,
    )


@router.post("/sessions/{session_id}/confirm", response_model=ConfirmResponseSchema, status_code=202)
async def confirm_booking(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _get_session(session_id, store)
    try:
        state = session.confirm()
    except BookingValidationError as e:
        raise HTTPException(status_code=422, detail={"missing_fields": e.missing_fields})
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ConfirmResponseSchema(submission_state=state)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStorePort = Depends(get_session_store)) -> Response:
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)
