"""Payload to Discord embed formatters."""

from hookrelay.formatters.github import format_github_message
from hookrelay.formatters.trello import format_trello_message

__all__ = ["format_github_message", "format_trello_message"]
