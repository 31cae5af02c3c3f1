"""Discord webhook delivery."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any

import httpx

from hookrelay.exceptions import ConfigurationError, DiscordDeliveryError
from hookrelay.models.embed import Embed
from hookrelay.settings import RelayConfig

logger = logging.getLogger(__name__)


def decode_response(response: httpx.Response) -> dict[str, Any]:
    """Decode a Discord reply; an empty 204 body becomes an empty dict."""
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {"text": response.text}
    return data if isinstance(data, dict) else {"data": data}


class DiscordTransport(ABC):
    """Posts embeds to a Discord webhook."""

    @abstractmethod
    async def send(self, webhook_url: str, embed: Embed) -> dict[str, Any]:
        """Send one embed and return Discord's decoded response."""


class LiveDiscordTransport(DiscordTransport):
    """Transport used in production: every failure propagates."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    async def send(self, webhook_url: str, embed: Embed) -> dict[str, Any]:
        """Post ``{"embeds": [embed]}`` to the webhook.

        Raises:
            ConfigurationError: If no webhook URL is configured
            DiscordDeliveryError: On network errors or a non-2xx reply
        """
        if not webhook_url:
            raise ConfigurationError(
                "Discord webhook URL not configured",
                message="The server administrator needs to set DISCORD_WEBHOOK_URL first.",
            )

        payload = embed.to_payload()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"[DISCORD] Webhook rejected message: {e.response.status_code} {e.response.text}")
            raise DiscordDeliveryError(
                f"Discord responded with {e.response.status_code}",
                response_data=decode_response(e.response),
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"[DISCORD] Failed to reach webhook: {e}")
            raise DiscordDeliveryError(f"Could not reach Discord: {e}") from e

        logger.info(f"[DISCORD] Delivered embed '{embed.title}'")
        return decode_response(response)


class SandboxDiscordTransport(LiveDiscordTransport):
    """Test mode transport.

    Records the most recent envelopes and, when delivery fails, answers with a synthetic
    success so test suites do not need a live Discord endpoint.
    """

    def __init__(self, timeout: float = 30.0, max_recorded: int = 100) -> None:
        super().__init__(timeout=timeout)
        self.sent: deque[dict[str, Any]] = deque(maxlen=max_recorded)

    async def send(self, webhook_url: str, embed: Embed) -> dict[str, Any]:
        payload = embed.to_payload()
        self.sent.append(payload)
        logger.info(f"[DISCORD] Test mode, sending to {webhook_url or '<unset>'}")

        try:
            return await super().send(webhook_url, embed)
        except (ConfigurationError, DiscordDeliveryError) as e:
            logger.warning(f"[DISCORD] Test mode, substituting mocked response: {e.detail}")
            return {"success": True, "echo": payload, "mocked": True, "error": e.detail}


def build_transport(config: RelayConfig) -> DiscordTransport:
    """Pick the transport for the configured mode."""
    if config.test_mode:
        return SandboxDiscordTransport()
    return LiveDiscordTransport()
