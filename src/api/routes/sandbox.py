"""Stand-ins for Discord and Trello, mounted only in test mode.

Lets the whole relay, including the registration flow, run end to end without
reaching either service.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any

from fastapi import APIRouter, Body, Query
from fastapi.responses import RedirectResponse

from hookrelay.formatters.common import utc_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sandbox", tags=["Sandbox"])


@router.post("/discord/{webhook_id}/{token}")
async def discord_webhook(webhook_id: str, token: str, payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Echo the posted message back, as a Discord stand-in."""
    logger.info(f"[SANDBOX] Discord webhook {webhook_id} received {len(payload.get('embeds', []))} embed(s)")
    return {"success": True, "echo": payload}


@router.get("/trello/1/authorize")
async def trello_authorize(return_url: str = Query(...)) -> RedirectResponse:
    """Skip the consent screen and send the user straight back with a token."""
    token = f"sandbox_token_{secrets.token_hex(8)}"
    separator = "&" if "?" in return_url else "?"
    return RedirectResponse(f"{return_url}{separator}token={token}", status_code=302)


@router.get("/trello/boards/{board_id}")
async def trello_board(board_id: str) -> dict[str, Any]:
    """Every board exists in the sandbox."""
    return {"id": board_id, "name": f"Sandbox board {board_id}"}


@router.post("/trello/webhooks")
async def trello_create_webhook(registration: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Accept any webhook registration."""
    logger.info(f"[SANDBOX] Trello webhook registered for {registration.get('idModel')}")
    return {
        "id": f"webhook_{secrets.token_hex(8)}",
        **registration,
        "active": True,
        "dateCreated": utc_timestamp(),
    }
