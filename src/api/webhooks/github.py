"""GitHub webhook handler for hookrelay."""

import logging

from fastapi import APIRouter, Header, Request
from fastapi.responses import PlainTextResponse, Response

from api.webhooks.base import parse_json_object, processed_response, relay_embed, verify_signature
from hookrelay.exceptions import InvalidRequestError, MethodNotAllowedError, SignatureError
from hookrelay.formatters.github import format_github_message
from hookrelay.integrations.discord import DiscordTransport
from hookrelay.models.github import GitHubEvent
from hookrelay.settings import RelayConfig

logger = logging.getLogger(__name__)


def create_github_webhook_router(config: RelayConfig, transport: DiscordTransport) -> APIRouter:
    """Create the GitHub webhook router bound to a configuration and a transport."""
    router = APIRouter(prefix="/webhooks", tags=["webhooks"])

    @router.api_route("/github", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def github_webhook(
        request: Request,
        x_github_event: str | None = Header(None),
        x_hub_signature_256: str | None = Header(None),
    ) -> Response:
        """Relay a GitHub event to Discord."""
        if request.method != "POST":
            raise MethodNotAllowedError("Method not allowed")

        if not x_github_event:
            raise InvalidRequestError("No event type specified")

        # Signature covers the exact bytes GitHub sent
        body = await request.body()

        if config.test_mode:
            logger.debug("[GITHUB] Test mode, signature verification skipped")
        elif config.github_secret:
            if not verify_signature(body, x_hub_signature_256 or "", config.github_secret):
                raise SignatureError("Invalid signature")
        else:
            logger.warning("[GITHUB] No webhook secret configured, skipping signature verification")

        event = GitHubEvent.parse(x_github_event)
        if event is None:
            logger.info(f"[GITHUB] Received unsupported event: {x_github_event}")
            return PlainTextResponse("Event type not processed", status_code=202)

        payload = parse_json_object(body)
        embed = format_github_message(payload, event)
        logger.info(f"[GITHUB] Relaying {event} event: {embed.title}")

        discord_response = await relay_embed(config, transport, embed)
        return processed_response(config, "Webhook processed successfully", discord_response)

    return router
