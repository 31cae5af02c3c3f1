"""Exceptions for hookrelay.

Each exception carries the HTTP status the API layer answers with.
"""

from __future__ import annotations

from typing import Any


class RelayError(Exception):
    """Base exception for relay errors."""

    status_code: int = 500

    def __init__(self, detail: str, **extra: Any) -> None:
        super().__init__(detail)
        self.detail = detail
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        """JSON body for the error response."""
        return {"error": self.detail, **self.extra}


class InvalidRequestError(RelayError):
    """Raised when a required header, parameter or payload member is missing."""

    status_code = 400


class SignatureError(RelayError):
    """Raised when a webhook signature does not match."""

    status_code = 403


class MethodNotAllowedError(RelayError):
    """Raised when an endpoint is called with the wrong HTTP method."""

    status_code = 405


class ConfigurationError(RelayError):
    """Raised when a required secret or key is not configured."""

    status_code = 500


class UpstreamError(RelayError):
    """Raised when a call to Discord or Trello fails."""

    status_code = 500

    def __init__(self, detail: str, response_data: Any = None, **extra: Any) -> None:
        super().__init__(detail, **extra)
        self.response_data = response_data


class DiscordDeliveryError(UpstreamError):
    """Raised when Discord rejects or never receives a message."""

    pass


class TrelloAPIError(UpstreamError):
    """Raised when the Trello REST API returns an error."""

    pass


class BoardVerificationError(TrelloAPIError):
    """Raised when a board id does not resolve to an accessible board."""

    pass
