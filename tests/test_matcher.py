"""Tests for status transition matching."""

import pytest

from statuswatch.matcher import MatchOutcome, MatchRule, match_event
from statuswatch.models import JiraWebhook

RULE = MatchRule(from_status="In Review", to_status="To Do", project_key="UT")


def test_matching_transition(sample_payload):
    result = match_event(JiraWebhook.model_validate(sample_payload), RULE)
    assert result.outcome is MatchOutcome.MATCHED
    assert result.matched
    assert (result.from_status, result.to_status) == ("In Review", "To Do")
    assert result.transition == "In Review → To Do"


def test_other_event_kind(sample_payload):
    sample_payload["webhookEvent"] = "jira:issue_created"
    result = match_event(JiraWebhook.model_validate(sample_payload), RULE)
    assert result.outcome is MatchOutcome.NOT_RELEVANT_KIND


def test_wrong_project(sample_payload):
    sample_payload["issue"]["fields"]["project"]["key"] = "OPS"
    result = match_event(JiraWebhook.model_validate(sample_payload), RULE)
    assert result.outcome is MatchOutcome.WRONG_PROJECT


def test_rule_without_project_scope_matches_any_project(sample_payload):
    sample_payload["issue"]["fields"]["project"]["key"] = "OPS"
    rule = MatchRule(from_status="In Review", to_status="To Do")
    assert match_event(JiraWebhook.model_validate(sample_payload), rule).matched


def test_no_status_change(sample_payload):
    sample_payload["changelog"]["items"] = [
        item for item in sample_payload["changelog"]["items"] if item["field"] != "status"
    ]
    result = match_event(JiraWebhook.model_validate(sample_payload), RULE)
    assert result.outcome is MatchOutcome.NO_STATUS_CHANGE


def test_transition_mismatch_carries_actual_values(sample_payload):
    status_item = sample_payload["changelog"]["items"][1]
    status_item["fromString"] = "To Do"
    status_item["toString"] = "In Progress"
    result = match_event(JiraWebhook.model_validate(sample_payload), RULE)
    assert result.outcome is MatchOutcome.NO_RULE_MATCH
    assert (result.from_status, result.to_status) == ("To Do", "In Progress")


def test_comparison_is_case_sensitive(sample_payload):
    status_item = sample_payload["changelog"]["items"][1]
    status_item["fromString"] = "IN REVIEW"
    status_item["toString"] = "TO DO"
    result = match_event(JiraWebhook.model_validate(sample_payload), RULE)
    assert result.outcome is MatchOutcome.NO_RULE_MATCH


def test_localized_rule(sample_payload):
    status_item = sample_payload["changelog"]["items"][1]
    status_item["fromString"] = "W TRAKCIE WERYFIKACJI"
    status_item["toString"] = "DO ZROBIENIA"
    rule = MatchRule(from_status="W TRAKCIE WERYFIKACJI", to_status="DO ZROBIENIA", project_key="UT")
    assert match_event(JiraWebhook.model_validate(sample_payload), rule).matched


def test_first_status_item_wins(sample_payload):
    sample_payload["changelog"]["items"].append(
        {"field": "status", "fromString": "To Do", "toString": "Done"}
    )
    assert match_event(JiraWebhook.model_validate(sample_payload), RULE).matched


@pytest.mark.parametrize(
    "payload, outcome",
    [
        ({}, MatchOutcome.NOT_RELEVANT_KIND),
        ({"webhookEvent": "jira:issue_updated"}, MatchOutcome.WRONG_PROJECT),
        ({"webhookEvent": "jira:issue_updated", "issue": {}}, MatchOutcome.WRONG_PROJECT),
        ({"webhookEvent": "jira:issue_updated", "issue": {"fields": {}}}, MatchOutcome.WRONG_PROJECT),
        (
            {"webhookEvent": "jira:issue_updated", "issue": {"fields": {"project": {"key": "UT"}}}},
            MatchOutcome.NO_STATUS_CHANGE,
        ),
        (
            {
                "webhookEvent": "jira:issue_updated",
                "issue": {"fields": {"project": {"key": "UT"}}},
                "changelog": {"id": "1", "items": None},
            },
            MatchOutcome.NO_STATUS_CHANGE,
        ),
        (
            {
                "webhookEvent": "jira:issue_updated",
                "issue": {"fields": {"project": {"key": "UT"}}},
                "changelog": {"items": [{"field": "status"}]},
            },
            MatchOutcome.NO_RULE_MATCH,
        ),
    ],
)
def test_partial_payloads_never_raise(payload, outcome):
    result = match_event(JiraWebhook.model_validate(payload), RULE)
    assert result.outcome is outcome
