"""Build the Slack message for a matched status transition."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional

import yaml

from .matcher import MatchResult
from .models import (
    JiraWebhook,
    SlackMessage,
    create_field,
    create_header_block,
    create_link_button,
)
from .models.slack_models import SlackSectionBlock

PLACEHOLDER = "-"


@dataclass
class MessageTemplate:
    """Display texts of the notification.

    ``status_labels`` maps Jira status names to the label shown in the
    message, e.g. ``{"In Review": "W trakcie weryfikacji"}``. Statuses
    without an entry are shown as-is.
    """

    header: str = "✅ Issue Ready for Work"
    fallback_text: str = "✅ Issue ready for work: {key}"
    key_label: str = "Key"
    status_label: str = "Status"
    summary_label: str = "Summary"
    reporter_label: str = "Reporter"
    button_text: str = "View in Jira"
    status_labels: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        try:
            self.fallback_text.format(key="")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"fallback_text may only use the {{key}} placeholder: {self.fallback_text!r}"
            ) from e

    @classmethod
    def load(cls, path: str | Path) -> "MessageTemplate":
        """Load a template from a YAML file; unknown keys are rejected."""

        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Message template {path} must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown message template keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def display_status(self, status: Optional[str]) -> str:
        if status is None:
            return PLACEHOLDER
        return self.status_labels.get(status, status)


def _or_placeholder(value: Optional[str]) -> str:
    return value if value else PLACEHOLDER


def format_notification(
    webhook: JiraWebhook,
    result: MatchResult,
    template: Optional[MessageTemplate] = None,
    base_url: Optional[str] = None,
) -> SlackMessage:
    """Map a matched webhook to a Slack message.

    Missing display fields are replaced by a placeholder. The button links
    to the issue's browse page, derived from the issue's API self link or,
    failing that, from ``base_url``; without either the button is left out.
    """
    template = template or MessageTemplate()
    key = _or_placeholder(webhook.issue_key)

    transition = (
        f"{template.display_status(result.from_status)} → "
        f"{template.display_status(result.to_status)}"
    )

    blocks: list = [
        create_header_block(template.header),
        SlackSectionBlock(
            fields=[
                create_field(template.key_label, key),
                create_field(template.status_label, transition),
                create_field(template.summary_label, _or_placeholder(webhook.summary)),
                create_field(template.reporter_label, _or_placeholder(webhook.reporter_name)),
            ]
        ),
    ]

    url = webhook.browse_url()
    if url is None and base_url and webhook.issue_key:
        url = f"{base_url.rstrip('/')}/browse/{webhook.issue_key}"
    if url:
        blocks.append(create_link_button(template.button_text, url))

    return SlackMessage(text=template.fallback_text.format(key=key), blocks=blocks)
