"""Trello board registration routes."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse, Response
from starlette.templating import Jinja2Templates

from hookrelay.exceptions import ConfigurationError, InvalidRequestError, UpstreamError
from hookrelay.formatters.common import utc_timestamp
from hookrelay.integrations.trello import TrelloClient, build_authorize_url
from hookrelay.settings import RelayConfig

logger = logging.getLogger(__name__)

REGISTER_PATH = "/api/trello/register"
TRELLO_WEBHOOK_PATH = "/webhooks/trello"

TEMPLATES_DIR = (Path(__file__).parent.parent / "templates").resolve()
TEMPLATES = Jinja2Templates(directory=str(TEMPLATES_DIR))


def public_base_url(config: RelayConfig, request: Request) -> str:
    """Externally visible base URL of this service."""
    return (config.public_base_url or str(request.base_url)).rstrip("/")


def registration_url(base_url: str, **params: str) -> str:
    """Absolute URL of the registration endpoint with the given query parameters."""
    url = f"{base_url}{REGISTER_PATH}"
    return f"{url}?{urlencode(params)}" if params else url


def is_authorization_return(request: Request, authorized: str | None) -> bool:
    """Whether the request is Trello sending the user back from its authorize page."""
    if authorized:
        return True
    return "/1/authorize" in request.headers.get("referer", "")


def create_trello_registration_router(config: RelayConfig) -> APIRouter:
    """Create the board registration router bound to a configuration."""
    router = APIRouter(prefix="/api/trello", tags=["Trello"])

    @router.get("/register")
    async def register_board(
        request: Request,
        board_id: str | None = Query(None, alias="boardId"),
        token: str | None = Query(None),
        authorized: str | None = Query(None),
    ) -> Response:
        """Connect a Trello board to Discord notifications.

        Three hops, all state in the query string:

        1. ``?boardId=`` redirects to Trello's authorize page.
        2. Trello returns with the token in the URL fragment; a small page moves it
           into the query string.
        3. ``?boardId=&token=`` verifies the board and registers the webhook.
        """
        if not board_id:
            raise InvalidRequestError(
                "Missing required parameter: boardId",
                usage="Add ?boardId=YOUR_BOARD_ID to the URL",
            )

        if not config.trello_api_key:
            raise ConfigurationError(
                "Trello API key not configured",
                message="The server administrator needs to set up a Trello API key first.",
            )

        base_url = public_base_url(config, request)

        if not token:
            if is_authorization_return(request, authorized):
                logger.info(f"[REGISTER] Extracting token from fragment for board {board_id}")
                return TEMPLATES.TemplateResponse(
                    request,
                    "trello/token_relay.html",
                    {"board_id": board_id, "register_url": registration_url(base_url)},
                )

            auth_url = build_authorize_url(
                api_key=config.trello_api_key,
                return_url=registration_url(base_url, boardId=board_id, authorized="1"),
                app_name=config.trello_app_name,
                auth_url=config.trello_auth_url,
            )
            logger.info(f"[REGISTER] Redirecting to Trello authorization for board {board_id}")
            return RedirectResponse(auth_url, status_code=302)

        client = TrelloClient(config.trello_api_key, token, api_url=config.trello_api_url)
        try:
            board = await client.get_board(board_id)
            webhook = await client.create_webhook(
                callback_url=f"{base_url}{TRELLO_WEBHOOK_PATH}",
                id_model=board.id,
                description=f"Discord notification webhook (created: {utc_timestamp()})",
            )
        except UpstreamError as e:
            logger.error(f"[REGISTER] Registration failed for board {board_id}: {e.detail}")
            return TEMPLATES.TemplateResponse(
                request,
                "trello/error.html",
                {
                    "board_id": board_id,
                    "message": e.detail,
                    "response_data": e.response_data if e.response_data is not None else {},
                    "retry_url": registration_url(base_url, boardId=board_id),
                },
                status_code=500,
            )

        logger.info(f"[REGISTER] Board {board_id} connected, webhook {webhook.id}")
        return TEMPLATES.TemplateResponse(
            request,
            "trello/success.html",
            {"board_id": board_id, "webhook": webhook.raw()},
        )

    return router
