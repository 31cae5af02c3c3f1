"""Helpers shared by the webhook handlers."""

import hashlib
import hmac
import json
import logging
from typing import Any

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from hookrelay.exceptions import InvalidRequestError
from hookrelay.integrations.discord import DiscordTransport
from hookrelay.models.embed import Embed
from hookrelay.settings import RelayConfig

logger = logging.getLogger(__name__)


def verify_signature(payload: bytes, signature: str, secret: str) -> bool:
    """Verify webhook signature using HMAC SHA256."""
    if not signature.startswith("sha256="):
        return False
    expected = hmac.new(
        secret.encode("utf-8"),
        payload,
        hashlib.sha256,
    ).hexdigest()
    return hmac.compare_digest(f"sha256={expected}", signature)


def parse_json_object(body: bytes) -> dict[str, Any]:
    """Decode a request body that must be a JSON object."""
    try:
        payload = json.loads(body)
    except ValueError:
        raise InvalidRequestError("Invalid JSON payload")
    if not isinstance(payload, dict):
        raise InvalidRequestError("Invalid JSON payload")
    return payload


async def relay_embed(config: RelayConfig, transport: DiscordTransport, embed: Embed) -> dict[str, Any]:
    """Send an embed to the configured Discord webhook."""
    return await transport.send(config.discord_webhook_url, embed)


def processed_response(config: RelayConfig, message: str, discord_response: dict[str, Any]) -> Response:
    """Success reply; test mode exposes Discord's answer for verification."""
    if config.test_mode:
        return JSONResponse({"message": message, "discord_response": discord_response})
    return PlainTextResponse(message)
