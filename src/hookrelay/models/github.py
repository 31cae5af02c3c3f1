"""GitHub webhook event tags."""

from __future__ import annotations

from enum import StrEnum


class GitHubEvent(StrEnum):
    """GitHub events relayed to Discord (value of the X-GitHub-Event header)."""

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    ISSUES = "issues"
    ISSUE_COMMENT = "issue_comment"

    @classmethod
    def parse(cls, value: str) -> GitHubEvent | None:
        """Return the matching event, or None for events we do not relay."""
        try:
            return cls(value)
        except ValueError:
            return None
