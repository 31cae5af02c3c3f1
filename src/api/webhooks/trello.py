"""Trello webhook handler for hookrelay."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

from api.webhooks.base import parse_json_object, processed_response, relay_embed
from hookrelay.exceptions import InvalidRequestError
from hookrelay.formatters.trello import format_trello_message
from hookrelay.integrations.discord import DiscordTransport
from hookrelay.settings import RelayConfig

logger = logging.getLogger(__name__)


def _lenient_payload(body: bytes) -> dict[str, Any]:
    """Test mode parsing: anything that is not a JSON object becomes empty."""
    try:
        payload = json.loads(body) if body else {}
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def create_trello_webhook_router(config: RelayConfig, transport: DiscordTransport) -> APIRouter:
    """Create the Trello webhook router bound to a configuration and a transport."""
    router = APIRouter(prefix="/webhooks", tags=["webhooks"])

    @router.api_route("/trello", methods=["GET", "HEAD"])
    async def trello_webhook_validation(request: Request) -> Response:
        """Answer Trello's liveness checks (HEAD on registration, GET from browsers)."""
        logger.info(f"[TRELLO] Responding to {request.method} webhook validation")
        if request.method == "HEAD":
            return Response(status_code=200)
        return PlainTextResponse("Webhook validation successful")

    @router.post("/trello")
    async def trello_webhook(request: Request) -> Response:
        """Relay a Trello action to Discord."""
        body = await request.body()

        if config.test_mode:
            payload = _lenient_payload(body)
        else:
            payload = parse_json_object(body)
            if not isinstance(payload.get("action"), dict):
                raise InvalidRequestError("Invalid Trello payload")

        embed = format_trello_message(payload)
        if embed is None:
            action_type = payload.get("action", {}).get("type")
            logger.info(f"[TRELLO] Filtered {action_type} event, notification not sent")
            return PlainTextResponse("Trello event filtered (notification not sent)")

        logger.info(f"[TRELLO] Relaying event: {embed.title}")
        discord_response = await relay_embed(config, transport, embed)
        return processed_response(config, "Trello event processed successfully", discord_response)

    return router
