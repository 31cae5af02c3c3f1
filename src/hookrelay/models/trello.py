"""Trello action tags and REST API models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TrelloActionType(StrEnum):
    """Trello action types (``action.type`` in webhook payloads)."""

    CREATE_CARD = "createCard"
    UPDATE_CARD = "updateCard"
    COMMENT_CARD = "commentCard"
    ADD_MEMBER_TO_CARD = "addMemberToCard"
    REMOVE_MEMBER_FROM_CARD = "removeMemberFromCard"
    ADD_LABEL_TO_CARD = "addLabelToCard"
    CREATE_CHECK_ITEM = "createCheckItem"
    UPDATE_CHECK_ITEM = "updateCheckItem"
    ADD_ATTACHMENT_TO_CARD = "addAttachmentToCard"
    ADD_CHECKLIST_TO_CARD = "addChecklistToCard"
    UPDATE_CHECK_ITEM_STATE_ON_CARD = "updateCheckItemStateOnCard"


# Acknowledged but never relayed
FILTERED_ACTION_TYPES = frozenset({
    TrelloActionType.CREATE_CHECK_ITEM,
    TrelloActionType.UPDATE_CHECK_ITEM,
    TrelloActionType.ADD_ATTACHMENT_TO_CARD,
    TrelloActionType.ADD_CHECKLIST_TO_CARD,
    TrelloActionType.UPDATE_CHECK_ITEM_STATE_ON_CARD,
})


class TrelloBoard(BaseModel):
    """Trello board, as returned by ``GET /boards/{id}?fields=name,id``."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str = ""


class TrelloWebhook(BaseModel):
    """Trello webhook registration."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    callback_url: str = Field(alias="callbackURL")
    id_model: str = Field(alias="idModel")
    description: str = ""
    active: bool | None = None

    def raw(self) -> dict[str, Any]:
        """Dump using Trello's field names, keeping any extra members."""
        return self.model_dump(by_alias=True, exclude_none=True)
