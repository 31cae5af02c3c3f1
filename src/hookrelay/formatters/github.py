"""GitHub event formatter."""

from __future__ import annotations

from typing import Any, Callable

from hookrelay.formatters.common import section, text, truncate, utc_timestamp
from hookrelay.models.embed import Embed, EmbedAuthor, EmbedFooter
from hookrelay.models.github import GitHubEvent

GITHUB_GREEN = 0x2EA44F
ISSUE_ORANGE = 0xE99455
GITHUB_ICON_URL = "https://github.githubassets.com/assets/GitHub-Mark-ea2971cee799.png"

MAX_LISTED_COMMITS = 5


def _base_embed(payload: dict[str, Any]) -> Embed:
    sender = section(payload, "sender")
    return Embed(
        color=GITHUB_GREEN,
        timestamp=utc_timestamp(),
        footer=EmbedFooter(text="GitHub", icon_url=GITHUB_ICON_URL),
        author=EmbedAuthor(
            name=text(sender, "login", "Unknown"),
            url=text(sender, "html_url"),
            icon_url=text(sender, "avatar_url"),
        ),
    )


def _repo_name(payload: dict[str, Any]) -> str:
    return text(section(payload, "repository"), "name", "unknown")


def _format_push(embed: Embed, payload: dict[str, Any]) -> None:
    branch = text(payload, "ref").removeprefix("refs/heads/")
    embed.title = f"[{_repo_name(payload)}] Push to {branch}"
    embed.url = text(payload, "compare")

    commits = payload.get("commits")
    if not isinstance(commits, list) or not commits:
        return

    embed.description = f"{len(commits)} commit(s) pushed"
    for commit in commits[:MAX_LISTED_COMMITS]:
        commit = commit if isinstance(commit, dict) else {}
        summary = text(commit, "message").split("\n")[0]
        author = text(section(commit, "author"), "name", "Unknown")
        embed.add_field(
            name=text(commit, "id")[:7],
            value=f"[{summary}]({text(commit, 'url')}) - {author}",
        )

    if len(commits) > MAX_LISTED_COMMITS:
        embed.add_field(name="...", value=f"{len(commits) - MAX_LISTED_COMMITS} more commits not shown")


def _format_pull_request(embed: Embed, payload: dict[str, Any]) -> None:
    pr = section(payload, "pull_request")
    html_url = text(pr, "html_url")

    embed.title = f"[{_repo_name(payload)}] Pull Request {text(payload, 'action')}"
    embed.url = html_url
    embed.description = f"[#{text(pr, 'number')}: {text(pr, 'title')}]({html_url})"

    embed.add_field(name="State", value=text(pr, "state", "unknown"), inline=True)
    embed.add_field(name="Merged", value="Yes" if pr.get("merged") else "No", inline=True)

    body = text(pr, "body")
    if body:
        embed.add_field(name="Description", value=truncate(body))


def _format_issues(embed: Embed, payload: dict[str, Any]) -> None:
    issue = section(payload, "issue")
    html_url = text(issue, "html_url")

    embed.title = f"[{_repo_name(payload)}] Issue {text(payload, 'action')}"
    embed.url = html_url
    embed.description = f"[#{text(issue, 'number')}: {text(issue, 'title')}]({html_url})"
    embed.color = ISSUE_ORANGE

    body = text(issue, "body")
    if body:
        embed.add_field(name="Description", value=truncate(body))


def _format_issue_comment(embed: Embed, payload: dict[str, Any]) -> None:
    issue = section(payload, "issue")
    comment = section(payload, "comment")
    number = text(issue, "number")
    commenter = text(section(comment, "user"), "login", "Unknown")

    embed.title = f"[{_repo_name(payload)}] Comment on issue #{number}"
    embed.url = text(comment, "html_url")
    embed.description = (
        f"{commenter} commented on [#{number}: {text(issue, 'title')}]({text(issue, 'html_url')})"
    )

    body = text(comment, "body")
    if body:
        embed.add_field(name="Comment", value=truncate(body))


FORMATTERS: dict[GitHubEvent, Callable[[Embed, dict[str, Any]], None]] = {
    GitHubEvent.PUSH: _format_push,
    GitHubEvent.PULL_REQUEST: _format_pull_request,
    GitHubEvent.ISSUES: _format_issues,
    GitHubEvent.ISSUE_COMMENT: _format_issue_comment,
}


def format_github_message(payload: dict[str, Any], event_type: str) -> Embed:
    """Create a Discord embed for a GitHub webhook payload.

    Never raises for a dict payload: missing members fall back to placeholders, and
    event types without a formatter produce a generic "event received" card.

    Args:
        payload: Decoded GitHub webhook body
        event_type: Value of the X-GitHub-Event header

    Returns:
        The embed to relay
    """
    payload = payload if isinstance(payload, dict) else {}
    embed = _base_embed(payload)

    formatter = FORMATTERS.get(GitHubEvent.parse(event_type))
    if formatter:
        formatter(embed, payload)
    else:
        embed.title = f"[{_repo_name(payload)}] {event_type} event received"
        embed.description = "Unsupported event type"

    return embed
