"""Webhook handlers for hookrelay."""

from api.webhooks.github import create_github_webhook_router
from api.webhooks.trello import create_trello_webhook_router

__all__ = ["create_github_webhook_router", "create_trello_webhook_router"]
