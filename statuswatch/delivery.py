"""Slack incoming webhook client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .exceptions import ConfigurationError
from .models import SlackMessage

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of posting a message to Slack.

    ``status_code`` is None when no response was received (timeout or
    connection error); ``body_text`` then holds the error description.
    """

    sent: bool
    status_code: Optional[int] = None
    body_text: str = ""


class SlackClient:
    """Posts messages to a Slack incoming webhook. Never retries."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    async def send(self, message: SlackMessage, sink_url: Optional[str]) -> DeliveryResult:
        if not sink_url:
            raise ConfigurationError("Slack webhook not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(sink_url, json=message.to_payload())
        except httpx.TimeoutException as e:
            logger.error(f"Timed out posting to Slack after {self.timeout}s: {e!r}")
            return DeliveryResult(sent=False, body_text=f"Request timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            logger.error(f"Error posting to Slack: {e!r}")
            return DeliveryResult(sent=False, body_text=str(e) or type(e).__name__)

        if response.is_success:
            return DeliveryResult(sent=True, status_code=response.status_code, body_text=response.text)

        logger.error(f"Slack responded with {response.status_code}: {response.text}")
        return DeliveryResult(sent=False, status_code=response.status_code, body_text=response.text)
