#!/usr/bin/env python3
"""
Interactive local harness for a booking session (no HTTP).

Usage:
  python3 scripts/chat_local.py

What it does:
- Builds one BookingSession through the project wiring
- Sends plain text lines to the chat agent; replies show up after the thinking delay
- Slash commands edit the form directly and confirm the booking
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bookingsync.application.exceptions import (  # noqa: E402
    BookingValidationError,
    InvalidFieldError,
    SubmissionInProgressError,
)
from bookingsync.application.use_cases.booking_session import BookingSession  # noqa: E402
from bookingsync.wiring.dependencies import build_session  # noqa: E402

FIELD_ALIASES = {
    "purpose": "purpose",
    "date": "date",
    "start": "start_time",
    "end": "end_time",
    "tz": "timezone",
    "timezone": "timezone",
    "email": "email",
}


def _print_header(session: BookingSession) -> None:
    print("\nLocal Booking Harness")
    print("-" * 60)
    print(f"session_id: {session.session_id}")
    print("Type a message for the agent and press Enter.")
    print("Commands: /set field=value, /form, /confirm, /quit, /help")
    print("-" * 60)


def _print_form(session: BookingSession) -> None:
    record = session.record
    print("\n--- Form ---")
    print(f"purpose:   {record.purpose or '-'}")
    print(f"date:      {record.date.isoformat() if record.date else '-'}")
    print(f"start:     {record.start_time or '-'}")
    print(f"end:       {record.end_time or '-'}")
    print(f"timezone:  {record.timezone}")
    print(f"email:     {record.email or '-'}")
    print(f"submission: {session.submission.state.value}")


async def _follow_transcript(session: BookingSession) -> None:
    seen = len(session.transcript)
    for message in session.transcript.all():
        print(f"({message.sender.value}) {message.text}")
    last_state = session.submission.state
    while True:
        await asyncio.sleep(0.1)
        messages = session.transcript.all()
        for message in messages[seen:]:
            if message.sender.value == "agent":
                print(f"\n(agent) {message.text}")
        seen = len(messages)
        if session.submission.state is not last_state:
            last_state = session.submission.state
            if last_state.value == "resolved":
                print("\nAppointment Request Sent Successfully!")
            print(f"(submission: {last_state.value})")


def _handle_set(session: BookingSession, arg: str) -> None:
    name, sep, value = arg.partition("=")
    field = FIELD_ALIASES.get(name.strip().lower())
    if not sep or field is None:
        print("Usage: /set purpose|date|start|end|tz|email=value")
        return
    try:
        session.edit_fields(**{field: value})
    except InvalidFieldError as e:
        print(f"Rejected: {e}")
        return
    _print_form(session)


async def main() -> None:
    session = build_session("local_session")
    _print_header(session)
    follower = asyncio.create_task(_follow_transcript(session))

    try:
        while True:
            try:
                user_text = (await asyncio.to_thread(input, "> ")).strip()
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                return

            if not user_text:
                continue

            cmd, _, arg = user_text.partition(" ")
            cmd = cmd.lower()
            if cmd in ("/quit", "/exit"):
                print("Bye!")
                return
            if cmd == "/help":
                print("Commands:")
                print("  /set field=value -> edit the form (purpose, date, start, end, tz, email)")
                print("  /form -> show the current form")
                print("  /confirm -> submit the booking")
                print("  /quit -> exit")
                continue
            if cmd == "/form":
                _print_form(session)
                continue
            if cmd == "/set":
                _handle_set(session, arg)
                continue
            if cmd == "/confirm":
                try:
                    state = session.confirm()
                except BookingValidationError as e:
                    print(f"Please fill in: {', '.join(e.missing_fields)}")
                except SubmissionInProgressError as e:
                    print(str(e))
                else:
                    print(f"(submission: {state.value}) Processing...")
                continue

            session.send_message(user_text)
    finally:
        follower.cancel()
        session.close()


if __name__ == "__main__":
    asyncio.run(main())
