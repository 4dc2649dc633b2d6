from functools import lru_cache
import logging

from bookingsync.core.config import settings
from bookingsync.application.ports.intent_engine import IntentEnginePort
from bookingsync.application.ports.scheduler import SchedulerPort
from bookingsync.application.ports.session_store import SessionStorePort
from bookingsync.application.ports.submission import SubmissionPort
from bookingsync.application.use_cases.booking_session import BookingSession
from bookingsync.application.use_cases.interpret_utterance import KeywordIntentEngine
from bookingsync.infrastructure.scheduling.asyncio_scheduler import AsyncioScheduler
from bookingsync.infrastructure.store.memory_store import MemorySessionStore
from bookingsync.infrastructure.webhook.mock_submitter import MockSubmitter
from bookingsync.infrastructure.webhook.webhook_client import WebhookClient
from bookingsync.infrastructure.webhook.webhook_submitter import WebhookSubmitter


_session_store: MemorySessionStore | None = None


@lru_cache
def get_intent_engine() -> IntentEnginePort:
    return KeywordIntentEngine()


@lru_cache
def get_scheduler() -> SchedulerPort:
    return AsyncioScheduler()


@lru_cache
def get_submitter() -> SubmissionPort:
    logger = logging.getLogger(__name__)
    logger.info("ENV=%s WEBHOOK_ENABLED=%s", settings.ENV, settings.WEBHOOK_ENABLED)

    if not settings.WEBHOOK_ENABLED or not settings.WEBHOOK_URL:
        logger.info("Using MockSubmitter (webhook disabled)")
        return MockSubmitter()

    logger.info("Using WebhookSubmitter", extra={"url": settings.WEBHOOK_URL})
    client = WebhookClient(url=settings.WEBHOOK_URL, timeout=settings.WEBHOOK_TIMEOUT_SECONDS)
    return WebhookSubmitter(client=client)


def build_session(session_id: str) -> BookingSession:
    return BookingSession(
        session_id=session_id,
        engine=get_intent_engine(),
        submitter=get_submitter(),
        scheduler=get_scheduler(),
        reply_delay=settings.AGENT_REPLY_DELAY_SECONDS,
        resolve_delay=settings.SUBMISSION_RESOLVE_SECONDS,
        dismiss_delay=settings.SUBMISSION_DISMISS_SECONDS,
    )


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore(session_factory=build_session)
    return _session_store
