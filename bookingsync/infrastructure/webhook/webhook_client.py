from __future__ import annotations

import logging
from typing import Any

import httpx

from bookingsync.application.exceptions import SubmissionTransportError


class WebhookClient:
    def __init__(self, url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(__name__)

    async def post_json(self, payload: dict[str, Any]) -> int:
        headers = {"Content-Type": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(self._url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Webhook request failed", extra={"error": str(e) or type(e).__name__})
            raise SubmissionTransportError(f"Webhook unreachable: {e}") from e

        if resp.status_code >= 400:
            self._logger.error(
                "Webhook returned an error status",
                extra={"status": resp.status_code, "error": resp.text[:200]},
            )
            raise SubmissionTransportError(f"Webhook responded with HTTP {resp.status_code}")

        self._logger.info("Webhook response", extra={"status": resp.status_code})
        return resp.status_code
