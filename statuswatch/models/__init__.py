"""Shared models for webhook processing."""

from .jira_models import (
    API_PATH_SEPARATOR,
    ISSUE_UPDATED_EVENT,
    STATUS_FIELD,
    JiraWebhook,
    JiraIssue,
    JiraIssueFields,
    JiraUser,
    JiraProject,
    JiraStatus,
    JiraChangelog,
    JiraChangelogItem,
    event_identity,
)

from .slack_models import (
    SlackMessage,
    SlackText,
    SlackHeaderBlock,
    SlackSectionBlock,
    SlackActionsBlock,
    SlackButton,
    create_header_block,
    create_field,
    create_link_button,
)

__all__ = [
    # Jira webhook models
    "API_PATH_SEPARATOR",
    "ISSUE_UPDATED_EVENT",
    "STATUS_FIELD",
    "JiraWebhook",
    "JiraIssue",
    "JiraIssueFields",
    "JiraUser",
    "JiraProject",
    "JiraStatus",
    "JiraChangelog",
    "JiraChangelogItem",
    "event_identity",
    # Slack message models
    "SlackMessage",
    "SlackText",
    "SlackHeaderBlock",
    "SlackSectionBlock",
    "SlackActionsBlock",
    "SlackButton",
    "create_header_block",
    "create_field",
    "create_link_button",
]
