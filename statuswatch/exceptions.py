"""Custom exceptions for webhook processing"""

from typing import Any, Dict, Optional


class WebhookError(Exception):
    """Base exception for webhook processing.

    Each subclass maps to the HTTP status the webhook endpoint answers with.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            content["details"] = self.details
        return content


class ConfigurationError(WebhookError):
    """Raised when the webhook secret or Slack webhook URL is missing"""
    status_code = 500


class AuthenticationError(WebhookError):
    """Raised when the webhook signature is missing or invalid"""
    status_code = 401


class MalformedPayloadError(WebhookError):
    """Raised when the request body is not a usable Jira webhook"""
    status_code = 500


class UpstreamDeliveryError(WebhookError):
    """Raised when Slack rejects or fails to receive a notification"""
    status_code = 500

    def __init__(self, message: str, upstream_status: Optional[int], details: str = ""):
        super().__init__(message, details)
        self.upstream_status = upstream_status

    def to_content(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "status": self.upstream_status,
            "details": self.details,
        }
