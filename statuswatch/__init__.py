"""Statuswatch - Jira status transition alerts for Slack.

This package provides a small webhook pipeline:

- statuswatch.webhook: Webhook reception, request handling and CLI
- statuswatch.models: Jira webhook and Slack message models
- statuswatch.common: Signature validation and logging utilities
- statuswatch.dedup: Time-bounded de-duplication of redelivered webhooks
- statuswatch.matcher: Status transition matching
- statuswatch.formatter: Slack message construction
- statuswatch.delivery: Slack incoming webhook client
"""

__version__ = "1.0.0"

from . import common
from . import models
from . import webhook

__all__ = [
    "common",
    "models",
    "webhook",
]
