"""Trello action formatter."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from hookrelay.formatters.common import section, text, truncate, utc_timestamp
from hookrelay.models.embed import Embed, EmbedFooter
from hookrelay.models.trello import FILTERED_ACTION_TYPES, TrelloActionType

TRELLO_BLUE = 0x0079BF
TRELLO_ICON_URL = (
    "https://d2k1ftgv7pobq7.cloudfront.net/meta/u/res/images/trello-header-logos/"
    "76ceb1faa939ede03abacb6efacdde16/trello-logo-blue.svg"
)


def _base_embed(model_url: str) -> Embed:
    return Embed(
        url=model_url,
        color=TRELLO_BLUE,
        timestamp=utc_timestamp(),
        footer=EmbedFooter(text="Trello", icon_url=TRELLO_ICON_URL),
    )


def format_due_date(value: Any) -> str:
    """Render a Trello due date for humans, "None" when unset."""
    if not value:
        return "None"
    try:
        due = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return due.strftime("%Y-%m-%d %H:%M %Z").strip()


class _ActionContext:
    """The pieces of an action every card description needs."""

    def __init__(self, payload: dict[str, Any], action: dict[str, Any]) -> None:
        self.data = section(action, "data")
        self.member = text(section(action, "memberCreator"), "fullName", "Unknown")
        self.model_url = text(section(payload, "model"), "url")
        self.card_name = text(section(self.data, "card"), "name", "Unknown card")

    @property
    def card_link(self) -> str:
        return f"[{self.card_name}]({self.model_url})"


def _format_create_card(embed: Embed, ctx: _ActionContext) -> None:
    embed.title = "Card Created"
    embed.description = f"{ctx.member} created card {ctx.card_link}"

    list_name = text(section(ctx.data, "list"), "name")
    if list_name:
        embed.add_field(name="List", value=list_name, inline=True)


def _format_update_card(embed: Embed, ctx: _ActionContext) -> None:
    list_before = section(ctx.data, "listBefore")
    list_after = section(ctx.data, "listAfter")
    old = section(ctx.data, "old")

    # A list move wins over a due date change reported in the same action
    if list_before and list_after:
        embed.title = "Card Moved"
        embed.description = f"{ctx.member} moved card {ctx.card_link}"
        embed.add_field(name="From", value=text(list_before, "name", "Unknown"), inline=True)
        embed.add_field(name="To", value=text(list_after, "name", "Unknown"), inline=True)
    elif "due" in old:
        embed.title = "Due Date Changed"
        embed.description = f"{ctx.member} updated due date for card {ctx.card_link}"
        embed.add_field(name="From", value=format_due_date(old.get("due")), inline=True)
        embed.add_field(name="To", value=format_due_date(section(ctx.data, "card").get("due")), inline=True)
    else:
        embed.title = "Card Updated"
        embed.description = f"{ctx.member} updated card {ctx.card_link}"


def _format_comment_card(embed: Embed, ctx: _ActionContext) -> None:
    embed.title = "Comment Added"
    embed.description = f"{ctx.member} commented on card {ctx.card_link}"

    comment = text(ctx.data, "text")
    if comment:
        embed.add_field(name="Comment", value=truncate(comment))


def _format_add_member(embed: Embed, ctx: _ActionContext) -> None:
    added = text(section(ctx.data, "member"), "name", "Unknown")
    embed.title = "Member Added to Card"
    embed.description = f"{ctx.member} added {added} to card {ctx.card_link}"


def _format_remove_member(embed: Embed, ctx: _ActionContext) -> None:
    removed = text(section(ctx.data, "member"), "name", "Unknown")
    embed.title = "Member Removed from Card"
    embed.description = f"{ctx.member} removed {removed} from card {ctx.card_link}"


def _format_add_label(embed: Embed, ctx: _ActionContext) -> None:
    embed.title = "Label Added"
    embed.description = f"{ctx.member} added label to card {ctx.card_link}"

    label = section(ctx.data, "label")
    label_text = text(label, "name") or text(label, "color")
    if label_text:
        embed.add_field(name="Label", value=label_text, inline=True)


FORMATTERS: dict[str, Callable[[Embed, _ActionContext], None]] = {
    TrelloActionType.CREATE_CARD: _format_create_card,
    TrelloActionType.UPDATE_CARD: _format_update_card,
    TrelloActionType.COMMENT_CARD: _format_comment_card,
    TrelloActionType.ADD_MEMBER_TO_CARD: _format_add_member,
    TrelloActionType.REMOVE_MEMBER_FROM_CARD: _format_remove_member,
    TrelloActionType.ADD_LABEL_TO_CARD: _format_add_label,
}


def format_trello_message(payload: dict[str, Any]) -> Embed | None:
    """Create a Discord embed for a Trello webhook payload.

    Args:
        payload: Decoded Trello webhook body

    Returns:
        The embed to relay, or None when the action type is filtered out and
        should be acknowledged without notifying Discord
    """
    payload = payload if isinstance(payload, dict) else {}
    model_url = text(section(payload, "model"), "url")

    action = section(payload, "action")
    action_type = text(action, "type")
    if not action_type:
        embed = _base_embed(model_url)
        embed.title = "Trello Activity"
        embed.description = "Unrecognized Trello event"
        return embed

    if action_type in FILTERED_ACTION_TYPES:
        return None

    embed = _base_embed(model_url)
    ctx = _ActionContext(payload, action)

    formatter = FORMATTERS.get(action_type)
    if formatter:
        formatter(embed, ctx)
    else:
        embed.title = "Trello Activity"
        embed.description = f"{ctx.member} performed action: {action_type}"

    return embed
