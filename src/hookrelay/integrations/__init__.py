"""Outbound integrations: Discord delivery and the Trello REST API."""

from hookrelay.integrations.discord import (
    DiscordTransport,
    LiveDiscordTransport,
    SandboxDiscordTransport,
    build_transport,
)
from hookrelay.integrations.trello import TrelloClient, build_authorize_url

__all__ = [
    "DiscordTransport",
    "LiveDiscordTransport",
    "SandboxDiscordTransport",
    "TrelloClient",
    "build_authorize_url",
    "build_transport",
]
