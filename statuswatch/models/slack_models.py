"""Pydantic models for outgoing Slack incoming-webhook messages."""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class SlackText(BaseModel):
    """Slack text object."""
    type: Literal["plain_text", "mrkdwn"] = "plain_text"
    text: str
    emoji: Optional[bool] = None


class SlackHeaderBlock(BaseModel):
    """Large bold header line."""
    type: Literal["header"] = "header"
    text: SlackText


class SlackSectionBlock(BaseModel):
    """Section laid out as a two-column grid of fields."""
    type: Literal["section"] = "section"
    fields: List[SlackText]


class SlackButton(BaseModel):
    """Link button element."""
    type: Literal["button"] = "button"
    text: SlackText
    url: str
    style: Optional[Literal["primary", "danger"]] = None


class SlackActionsBlock(BaseModel):
    """Block holding interactive elements."""
    type: Literal["actions"] = "actions"
    elements: List[SlackButton]


SlackBlock = Union[SlackHeaderBlock, SlackSectionBlock, SlackActionsBlock]


class SlackMessage(BaseModel):
    """Message posted to a Slack incoming webhook.

    ``text`` is the fallback shown in notifications and by clients that do
    not render blocks.
    """
    text: str
    blocks: List[SlackBlock] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body Slack expects."""
        return self.model_dump(exclude_none=True)


# Helper functions for building messages

def create_header_block(text: str) -> SlackHeaderBlock:
    """Create a header block with emoji rendering enabled."""
    return SlackHeaderBlock(text=SlackText(type="plain_text", text=text, emoji=True))


def create_field(label: str, value: str) -> SlackText:
    """Create a ``*label:*`` / value markdown field."""
    return SlackText(type="mrkdwn", text=f"*{label}:*\n{value}")


def create_link_button(text: str, url: str) -> SlackActionsBlock:
    """Create an actions block with a single primary link button."""
    return SlackActionsBlock(
        elements=[
            SlackButton(
                text=SlackText(type="plain_text", text=text, emoji=True),
                url=url,
                style="primary",
            )
        ]
    )
