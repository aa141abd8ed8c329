"""Decide whether a Jira webhook is the status transition we alert on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import ISSUE_UPDATED_EVENT, JiraWebhook


@dataclass(frozen=True)
class MatchRule:
    """Project scope and status transition that trigger a notification.

    Status names are compared exactly, case included. An empty
    ``project_key`` matches any project.
    """

    from_status: str
    to_status: str
    project_key: Optional[str] = None

    @property
    def expected_transition(self) -> str:
        return f"{self.from_status} → {self.to_status}"


class MatchOutcome(str, Enum):
    NOT_RELEVANT_KIND = "not_relevant_kind"
    WRONG_PROJECT = "wrong_project"
    NO_STATUS_CHANGE = "no_status_change"
    NO_RULE_MATCH = "no_rule_match"
    MATCHED = "matched"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one webhook against a rule.

    ``from_status`` and ``to_status`` are set for ``NO_RULE_MATCH`` and
    ``MATCHED``.
    """

    outcome: MatchOutcome
    from_status: Optional[str] = None
    to_status: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.outcome is MatchOutcome.MATCHED

    @property
    def transition(self) -> str:
        return f"{self.from_status} → {self.to_status}"


def match_event(webhook: JiraWebhook, rule: MatchRule) -> MatchResult:
    """Match a webhook against a rule. The first failing check wins."""
    if webhook.webhookEvent != ISSUE_UPDATED_EVENT:
        return MatchResult(MatchOutcome.NOT_RELEVANT_KIND)

    if rule.project_key and webhook.project_key != rule.project_key:
        return MatchResult(MatchOutcome.WRONG_PROJECT)

    transition = webhook.status_transition()
    if transition is None:
        return MatchResult(MatchOutcome.NO_STATUS_CHANGE)

    from_status, to_status = transition
    if from_status == rule.from_status and to_status == rule.to_status:
        return MatchResult(MatchOutcome.MATCHED, from_status, to_status)

    return MatchResult(MatchOutcome.NO_RULE_MATCH, from_status, to_status)
