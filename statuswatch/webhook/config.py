"""Configuration for the Jira status webhook."""

import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

from ..dedup import DEFAULT_RETENTION_SECONDS, DEFAULT_SWEEP_INTERVAL_SECONDS
from ..delivery import DEFAULT_TIMEOUT_SECONDS
from ..formatter import MessageTemplate
from ..matcher import MatchRule

# Load environment variables from .env file
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclass
class NotifierConfig:
    """Configuration for the Jira webhook to Slack notifier."""

    # Secrets and sink
    webhook_secret: str = ""
    slack_webhook_url: str = ""

    # Match rule
    project_key: str = "UT"
    from_status: str = "In Review"
    to_status: str = "To Do"

    # Link fallback when a payload has no issue self link
    jira_base_url: Optional[str] = None

    # Server settings
    webhook_endpoint: str = "/api/jira-webhook"
    host: str = "0.0.0.0"
    port: int = 8080

    # Logging
    log_dir: Optional[str] = None
    log_payloads: bool = False

    # Delivery and dedup
    slack_timeout: float = DEFAULT_TIMEOUT_SECONDS
    dedup_retention_seconds: float = DEFAULT_RETENTION_SECONDS
    dedup_sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS
    release_dedup_on_failure: bool = False

    message_template: MessageTemplate = field(default_factory=MessageTemplate)

    @property
    def match_rule(self) -> MatchRule:
        return MatchRule(
            from_status=self.from_status,
            to_status=self.to_status,
            project_key=self.project_key or None,
        )

    @property
    def slack_configured(self) -> bool:
        return bool(self.slack_webhook_url)

    @property
    def secret_configured(self) -> bool:
        return bool(self.webhook_secret)

    @classmethod
    def from_env(cls) -> "NotifierConfig":
        """Create configuration from environment variables."""
        template_path = os.getenv("STATUSWATCH_MESSAGE_CONFIG")
        template = MessageTemplate.load(template_path) if template_path else MessageTemplate()

        try:
            port = int(os.getenv("STATUSWATCH_PORT", "8080"))
        except ValueError:
            raise ValueError(f"STATUSWATCH_PORT must be an integer, got {os.getenv('STATUSWATCH_PORT')!r}")

        return cls(
            webhook_secret=os.getenv("JIRA_WEBHOOK_SECRET", ""),
            slack_webhook_url=os.getenv("SLACK_WEBHOOK_URL", ""),
            project_key=os.getenv("JIRA_PROJECT_KEY", "UT"),
            from_status=os.getenv("JIRA_FROM_STATUS", "In Review"),
            to_status=os.getenv("JIRA_TO_STATUS", "To Do"),
            jira_base_url=os.getenv("JIRA_BASE_URL") or None,
            webhook_endpoint=os.getenv("JIRA_WEBHOOK_ENDPOINT", "/api/jira-webhook"),
            host=os.getenv("STATUSWATCH_HOST", "0.0.0.0"),
            port=port,
            log_dir=os.getenv("STATUSWATCH_LOG_DIR", "logs"),
            log_payloads=_env_bool("STATUSWATCH_LOG_PAYLOADS", False),
            slack_timeout=_env_float("SLACK_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            dedup_retention_seconds=_env_float("DEDUP_RETENTION_SECONDS", DEFAULT_RETENTION_SECONDS),
            dedup_sweep_interval_seconds=_env_float(
                "DEDUP_SWEEP_INTERVAL_SECONDS", DEFAULT_SWEEP_INTERVAL_SECONDS
            ),
            release_dedup_on_failure=_env_bool("DEDUP_RELEASE_ON_FAILURE", False),
            message_template=template,
        )
