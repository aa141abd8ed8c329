"""Jira webhook reception module.

This module handles:
- Receiving Jira webhooks
- Validating webhook signatures
- Suppressing redelivered webhooks
- Notifying Slack about matching status transitions
"""

from .config import NotifierConfig
from .handler import WebhookHandler
from .server import create_app

__all__ = [
    "NotifierConfig",
    "WebhookHandler",
    "create_app",
]
