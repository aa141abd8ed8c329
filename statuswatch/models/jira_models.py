"""Pydantic models for Jira webhook payloads.

Every field is optional: Jira omits fields depending on the event type and
project configuration, and a missing field must lead to a "not matching"
decision rather than a validation failure. Wrongly typed fields (for example
``issue`` being a string) still fail validation.
"""

from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

ISSUE_UPDATED_EVENT = "jira:issue_updated"
STATUS_FIELD = "status"
API_PATH_SEPARATOR = "/rest/api"


class JiraUser(BaseModel):
    """Jira user information."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    self_link: Optional[str] = Field(None, alias="self")
    accountId: Optional[str] = None
    displayName: Optional[str] = None


class JiraStatus(BaseModel):
    """Jira issue status information."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[str, int]] = None
    name: Optional[str] = None


class JiraProject(BaseModel):
    """Jira project information."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[str, int]] = None
    key: Optional[str] = None
    name: Optional[str] = None


class JiraIssueFields(BaseModel):
    """The subset of issue fields the notification uses."""
    model_config = ConfigDict(extra="ignore")

    summary: Optional[str] = None
    status: Optional[JiraStatus] = None
    project: Optional[JiraProject] = None
    reporter: Optional[JiraUser] = None
    assignee: Optional[JiraUser] = None


class JiraIssue(BaseModel):
    """Jira issue information."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[Union[str, int]] = None
    self_link: Optional[str] = Field(None, alias="self")
    key: Optional[str] = None
    fields: Optional[JiraIssueFields] = None


class JiraChangelogItem(BaseModel):
    """Individual changelog item."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    field: Optional[str] = None
    fieldtype: Optional[str] = None
    fieldId: Optional[str] = None
    from_: Optional[Any] = Field(None, alias="from")
    fromString: Optional[str] = None
    to: Optional[Any] = None
    toString: Optional[str] = None


class JiraChangelog(BaseModel):
    """Jira changelog information."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[str, int]] = None
    items: Optional[List[JiraChangelogItem]] = None


class JiraWebhook(BaseModel):
    """Jira webhook event as delivered to the endpoint."""
    model_config = ConfigDict(extra="ignore")

    timestamp: Optional[Union[int, float, str]] = None
    webhookEvent: Optional[str] = None
    issue_event_type_name: Optional[str] = None
    issue: Optional[JiraIssue] = None
    user: Optional[JiraUser] = None
    changelog: Optional[JiraChangelog] = None

    @property
    def issue_key(self) -> Optional[str]:
        return self.issue.key if self.issue else None

    @property
    def project_key(self) -> Optional[str]:
        if self.issue and self.issue.fields and self.issue.fields.project:
            return self.issue.fields.project.key
        return None

    @property
    def summary(self) -> Optional[str]:
        if self.issue and self.issue.fields:
            return self.issue.fields.summary
        return None

    @property
    def reporter_name(self) -> Optional[str]:
        if self.issue and self.issue.fields and self.issue.fields.reporter:
            return self.issue.fields.reporter.displayName
        return None

    def status_transition(self) -> Optional[Tuple[Optional[str], Optional[str]]]:
        """Return ``(fromString, toString)`` of the first status change, if any."""
        if not self.changelog:
            return None
        for item in self.changelog.items or []:
            if item.field == STATUS_FIELD:
                return item.fromString, item.toString
        return None

    def browse_url(self) -> Optional[str]:
        """Build the issue's browse link from its REST API self link."""
        if not self.issue or not self.issue.self_link or not self.issue.key:
            return None
        base = self.issue.self_link.split(API_PATH_SEPARATOR)[0]
        return f"{base}/browse/{self.issue.key}"


def event_identity(webhook: JiraWebhook) -> str:
    """Composite key identifying one logical webhook delivery.

    Built from issue key, changelog id and event timestamp. Missing parts
    render as ``None`` so that partial payloads still get a stable key.
    """
    changelog_id = webhook.changelog.id if webhook.changelog else None
    return f"{webhook.issue_key}_{changelog_id}_{webhook.timestamp}"
