from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from bookingsync.application.ports.intent_engine import IntentEnginePort
from bookingsync.application.utils.booking_rules import normalize_utterance, validate_update
from bookingsync.domain.entities.interpretation import Interpretation
from bookingsync.domain.entities.partial_update import PartialBookingUpdate

FALLBACK_REPLY = (
    "I can definitely help with that! You can fill out the form on the left, "
    "or just tell me the details here."
)


@dataclass(frozen=True)
class IntentRule:
    intent: str
    triggers: tuple[str, ...]
    reply: str
    update: PartialBookingUpdate | None = None

    def matches(self, normalized: str) -> bool:
        return any(trigger in normalized for trigger in self.triggers)


# Order matters: the first matching rule wins.
DEFAULT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        intent="purpose_consultation",
        triggers=("consultation",),
        reply="Great! I've updated the 'Purpose' field to Consultation for you. What date were you thinking?",
        update=PartialBookingUpdate.of(purpose="Consultation"),
    ),
    IntentRule(
        intent="purpose_technical_support",
        triggers=("support",),
        reply="Noted. I've set the purpose to Technical Support. Would you like to pick a time?",
        update=PartialBookingUpdate.of(purpose="Technical Support"),
    ),
    IntentRule(
        intent="purpose_business_inquiry",
        triggers=("business",),
        reply="Sure! I've set the purpose to Business Inquiry. Which date works best for you?",
        update=PartialBookingUpdate.of(purpose="Business Inquiry"),
    ),
    IntentRule(
        intent="purpose_general_check_in",
        triggers=("check-in", "check in"),
        reply="Got it. I've set the purpose to General Check-in. When would you like to meet?",
        update=PartialBookingUpdate.of(purpose="General Check-in"),
    ),
    IntentRule(
        intent="purpose_follow_up",
        triggers=("follow-up", "follow up"),
        reply="Of course. I've set the purpose to Follow-up Meeting. What time suits you?",
        update=PartialBookingUpdate.of(purpose="Follow-up Meeting"),
    ),
)


class KeywordIntentEngine(IntentEnginePort):
    """Ordered substring rule table standing in for an intent recognizer."""

    def __init__(self, rules: Sequence[IntentRule] = DEFAULT_RULES, fallback_reply: str = FALLBACK_REPLY) -> None:
        if not fallback_reply:
            raise ValueError("fallback_reply must not be empty")
        for rule in rules:
            if rule.update is not None:
                validate_update(rule.update)
        self._rules = tuple(rules)
        self._fallback_reply = fallback_reply
        self._logger = logging.getLogger(__name__)

    @property
    def rules(self) -> tuple[IntentRule, ...]:
        return self._rules

    def interpret(self, utterance: str) -> Interpretation:
        normalized = normalize_utterance(utterance)
        for rule in self._rules:
            if rule.matches(normalized):
                self._logger.debug("Intent matched", extra={"intent": rule.intent})
                return Interpretation(reply=rule.reply, update=rule.update, intent=rule.intent)
        return Interpretation(reply=self._fallback_reply)
