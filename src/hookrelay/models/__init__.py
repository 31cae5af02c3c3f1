"""Pydantic models for cards and upstream payloads."""

from hookrelay.models.embed import Embed, EmbedAuthor, EmbedField, EmbedFooter
from hookrelay.models.github import GitHubEvent
from hookrelay.models.trello import FILTERED_ACTION_TYPES, TrelloActionType, TrelloBoard, TrelloWebhook

__all__ = [
    "Embed",
    "EmbedAuthor",
    "EmbedField",
    "EmbedFooter",
    "FILTERED_ACTION_TYPES",
    "GitHubEvent",
    "TrelloActionType",
    "TrelloBoard",
    "TrelloWebhook",
]
