"""Request handling for the Jira status webhook.

A request moves through these steps and stops at the first one that
produces an answer:

1. Webhook secret configured, else ``ConfigurationError`` (500)
2. Signature valid, else ``AuthenticationError`` (401)
3. Body decodes to a Jira webhook, else ``MalformedPayloadError`` (500)
4. Not a redelivery of a recently handled event, else "Duplicate webhook" (200)
5. Matches the configured rule, else an explanatory 200 answer
6. Event recorded as handled, Slack webhook configured, else ``ConfigurationError`` (500)
7. Slack accepts the message, else ``UpstreamDeliveryError`` (500)
8. "Notification sent to Slack" (200)
"""

import json
import logging
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from ..common import (
    get_signature_header,
    log_error,
    log_server_message,
    log_webhook_request,
    verify_hmac_signature,
)
from ..dedup import DedupCache
from ..delivery import SlackClient
from ..exceptions import (
    AuthenticationError,
    ConfigurationError,
    MalformedPayloadError,
    UpstreamDeliveryError,
    WebhookError,
)
from ..formatter import format_notification
from ..matcher import MatchOutcome, MatchResult, match_event
from ..models import JiraWebhook, event_identity
from .config import NotifierConfig

logger = logging.getLogger(__name__)


class WebhookHandler:
    """Runs one webhook request through verification, dedup, matching and delivery."""

    def __init__(
        self,
        config: NotifierConfig,
        dedup_cache: DedupCache,
        slack_client: SlackClient,
    ) -> None:
        self.config = config
        self.dedup_cache = dedup_cache
        self.slack_client = slack_client

    async def handle(self, body: bytes, headers: Mapping[str, str]) -> Dict[str, Any]:
        """Handle a webhook request.

        Returns the JSON body of a 200 answer. Every other outcome is raised
        as a ``WebhookError`` carrying its status code.
        """
        try:
            return await self._process(body, headers)
        except WebhookError:
            raise
        except Exception as e:
            log_error(f"Error processing webhook: {e}", body.decode("utf-8", errors="ignore"))
            raise WebhookError("Internal server error", str(e)) from e

    async def _process(self, body: bytes, headers: Mapping[str, str]) -> Dict[str, Any]:
        if not self.config.webhook_secret:
            log_server_message("Webhook secret not configured")
            raise ConfigurationError("Webhook secret not configured")

        signature_header = get_signature_header(headers)
        if not verify_hmac_signature(body, signature_header, self.config.webhook_secret):
            if signature_header:
                log_server_message(f"Invalid HMAC signature (received {signature_header[:15]}...)")
            else:
                log_server_message("Missing signature header")
            raise AuthenticationError("Invalid signature")

        webhook = self._parse(body)
        webhook_id = event_identity(webhook)

        if self.dedup_cache.seen(webhook_id):
            log_server_message(f"Duplicate webhook ignored: {webhook_id}")
            return {"message": "Duplicate webhook", "webhook_id": webhook_id}

        rule = self.config.match_rule
        result = match_event(webhook, rule)
        if not result.matched:
            return self._no_op_response(result)

        # Nothing may be awaited between the seen() check and this record
        self.dedup_cache.record(webhook_id)
        log_server_message(f"Matched {webhook.issue_key}: {result.transition}")

        try:
            return await self._deliver(webhook, result)
        except Exception:
            if self.config.release_dedup_on_failure:
                self.dedup_cache.discard(webhook_id)
                log_server_message(f"Released {webhook_id} for redelivery after failed notification")
            raise

    def _parse(self, body: bytes) -> JiraWebhook:
        try:
            payload = json.loads(body)
            # Escaped lone surrogates decode but cannot be written back as UTF-8
            json.dumps(payload, ensure_ascii=False).encode("utf-8")
            webhook = JiraWebhook.model_validate(payload)
        except ValidationError as e:
            log_error(f"Validation error: {e}", body.decode("utf-8", errors="ignore"))
            raise MalformedPayloadError(
                "Invalid webhook payload",
                f"{e.error_count()} validation error(s) in Jira webhook payload",
            )
        except UnicodeEncodeError as e:
            log_error(f"Unencodable text in request body: {e}", body.decode("utf-8", errors="ignore"))
            raise MalformedPayloadError("Invalid webhook payload", "Request body contains invalid Unicode text")
        except ValueError as e:
            # JSONDecodeError, or a body that is not valid UTF-8
            log_error(f"Invalid JSON in request body: {e}", body.decode("utf-8", errors="ignore"))
            raise MalformedPayloadError("Invalid webhook payload", "Request body is not valid JSON")

        if self.config.log_payloads:
            log_webhook_request(payload, webhook.issue_key)
        return webhook

    def _no_op_response(self, result: MatchResult) -> Dict[str, Any]:
        rule = self.config.match_rule
        if result.outcome is MatchOutcome.NOT_RELEVANT_KIND:
            return {"message": "Not an issue update"}
        if result.outcome is MatchOutcome.WRONG_PROJECT:
            return {"message": f"Not {rule.project_key} project"}
        if result.outcome is MatchOutcome.NO_STATUS_CHANGE:
            return {"message": "No status change"}
        return {
            "message": "Status change not matching criteria",
            "from": result.from_status,
            "to": result.to_status,
            "expected": rule.expected_transition,
        }

    async def _deliver(self, webhook: JiraWebhook, result: MatchResult) -> Dict[str, Any]:
        if not self.config.slack_webhook_url:
            log_server_message("Slack webhook not configured")
            raise ConfigurationError("Slack webhook not configured")

        message = format_notification(
            webhook,
            result,
            self.config.message_template,
            self.config.jira_base_url,
        )
        delivery = await self.slack_client.send(message, self.config.slack_webhook_url)

        if not delivery.sent:
            log_error(
                f"Failed to send to Slack for {webhook.issue_key}: status {delivery.status_code}",
                delivery.body_text,
            )
            raise UpstreamDeliveryError(
                "Failed to send to Slack",
                upstream_status=delivery.status_code,
                details=delivery.body_text,
            )

        log_server_message(f"Notification sent to Slack for {webhook.issue_key}")
        return {
            "message": "Notification sent to Slack",
            "issue": webhook.issue_key,
            "transition": result.transition,
        }
