"""Trello REST API client used for board registration."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from hookrelay.exceptions import BoardVerificationError, TrelloAPIError
from hookrelay.models.trello import TrelloBoard, TrelloWebhook
from hookrelay.settings import TRELLO_API_URL, TRELLO_AUTH_URL

logger = logging.getLogger(__name__)


def build_authorize_url(
    api_key: str,
    return_url: str,
    app_name: str,
    auth_url: str = TRELLO_AUTH_URL,
) -> str:
    """Build the Trello authorize page URL for a read/write, non-expiring token."""
    params = {
        "expiration": "never",
        "scope": "read,write",
        "response_type": "token",
        "name": app_name,
        "key": api_key,
        "return_url": return_url,
    }
    return f"{auth_url.rstrip('/')}/1/authorize?{urlencode(params)}"


def _error_details(response: httpx.Response) -> tuple[str, Any]:
    """Extract a readable message and the raw body from a Trello error reply."""
    try:
        data = response.json()
    except ValueError:
        body = response.text.strip()
        return body or response.reason_phrase, body
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"]), data
    return response.reason_phrase, data


class TrelloClient:
    """Trello REST client authenticated with an API key and a user token."""

    def __init__(self, api_key: str, token: str, api_url: str = TRELLO_API_URL) -> None:
        """Initialize Trello client.

        Args:
            api_key: Trello application API key
            token: User token obtained from the authorize page
            api_url: Trello REST base URL (overridable for sandboxes)
        """
        self.api_key = api_key
        self.token = token
        self.api_url = api_url.rstrip("/")

    @property
    def _auth_params(self) -> dict[str, str]:
        return {"key": self.api_key, "token": self.token}

    async def get_board(self, board_id: str) -> TrelloBoard:
        """Fetch a board to confirm it exists and is accessible.

        Args:
            board_id: Board id or short link, as found in the board URL

        Returns:
            The board, with its full id

        Raises:
            BoardVerificationError: If the board cannot be fetched
        """
        async with httpx.AsyncClient(timeout=30.0) as client:
            try:
                response = await client.get(
                    f"{self.api_url}/boards/{board_id}",
                    params={**self._auth_params, "fields": "name,id"},
                )
            except httpx.HTTPError as e:
                raise BoardVerificationError(_verification_message(str(e))) from e

        if response.is_error:
            message, data = _error_details(response)
            logger.error(f"[TRELLO] Board {board_id} verification failed: {message}")
            raise BoardVerificationError(_verification_message(message), response_data=data)

        try:
            board = TrelloBoard.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise BoardVerificationError(_verification_message("Couldn't retrieve the full board ID")) from e

        logger.info(f"[TRELLO] Verified board '{board.name}' ({board.id})")
        return board

    async def create_webhook(self, callback_url: str, id_model: str, description: str) -> TrelloWebhook:
        """Register a webhook that posts model actions to ``callback_url``.

        Raises:
            TrelloAPIError: If Trello rejects the registration
        """
        body = {"callbackURL": callback_url, "idModel": id_model, "description": description}

        async with httpx.AsyncClient(timeout=30.0) as client:
            try:
                response = await client.post(f"{self.api_url}/webhooks", params=self._auth_params, json=body)
            except httpx.HTTPError as e:
                raise TrelloAPIError(f"Could not reach Trello: {e}") from e

        if response.is_error:
            message, data = _error_details(response)
            logger.error(f"[TRELLO] Webhook registration for {id_model} failed: {message}")
            raise TrelloAPIError(f"Webhook registration failed: {message}", response_data=data)

        try:
            webhook = TrelloWebhook.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise TrelloAPIError("Webhook registration returned an unexpected response") from e

        logger.info(f"[TRELLO] Registered webhook {webhook.id} for board {id_model}")
        return webhook


def _verification_message(reason: str) -> str:
    return (
        f"Board verification failed: {reason}. "
        "Make sure the board ID is correct and you have access to it."
    )
