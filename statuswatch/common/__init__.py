"""Common utilities and shared functionality."""

from .hmac_utils import (
    SIGNATURE_HEADERS,
    compute_hmac_sha256,
    get_signature_header,
    verify_hmac_signature,
)

from .logging_utils import (
    setup_logging,
    log_server_message,
    log_webhook_request,
    log_error,
)

__all__ = [
    # HMAC utilities
    "SIGNATURE_HEADERS",
    "compute_hmac_sha256",
    "get_signature_header",
    "verify_hmac_signature",
    # Logging utilities
    "setup_logging",
    "log_server_message",
    "log_webhook_request",
    "log_error",
]
