"""Discord embed models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class EmbedField(BaseModel):
    """A name/value row in an embed."""

    name: str
    value: str
    inline: bool | None = None


class EmbedFooter(BaseModel):
    """Embed footer."""

    text: str
    icon_url: str | None = None


class EmbedAuthor(BaseModel):
    """Embed author block."""

    name: str
    url: str | None = None
    icon_url: str | None = None


class Embed(BaseModel):
    """Discord embed, the notification card relayed for every event."""

    title: str = ""
    description: str = ""
    url: str = ""
    color: int
    timestamp: str
    footer: EmbedFooter
    author: EmbedAuthor | None = None
    fields: list[EmbedField] = Field(default_factory=list)

    def add_field(self, name: str, value: str, inline: bool | None = None) -> None:
        self.fields.append(EmbedField(name=name, value=value, inline=inline))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for Discord, leaving out unset optional members."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_payload(self) -> dict[str, Any]:
        """Wrap the embed in the envelope Discord's webhook endpoint expects."""
        return {"embeds": [self.to_dict()]}
