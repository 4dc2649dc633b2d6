from __future__ import annotations

from enum import Enum


class SubmissionState(str, Enum):
    idle = "idle"
    submitting = "submitting"
    resolved = "resolved"
