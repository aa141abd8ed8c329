"""HMAC utilities for webhook signature validation."""

import hmac
import hashlib
import logging
from typing import Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="

# Jira Cloud sends X-Hub-Signature; the identifier header is the fallback
# some webhook setups are configured to carry the signature in.
SIGNATURE_HEADERS: Tuple[str, ...] = (
    "X-Hub-Signature",
    "X-Atlassian-Webhook-Identifier",
)


def compute_hmac_sha256(data: bytes, secret: str) -> str:
    """Compute HMAC-SHA256 signature for given data and secret."""
    return hmac.new(
        secret.encode('utf-8'),
        data,
        hashlib.sha256
    ).hexdigest()


def get_signature_header(headers: Mapping[str, str]) -> Optional[str]:
    """Return the first signature header present in the request headers."""
    for name in SIGNATURE_HEADERS:
        value = headers.get(name) or headers.get(name.lower())
        if value:
            return value
    return None


def _parse_signature(signature_header: str) -> Optional[bytes]:
    """Extract the hex digest from a signature header value.

    Accepts ``sha256=<hex>`` or a bare hex digest. Any other ``algo=``
    prefix, or a value that is not ASCII, cannot be parsed.
    """
    value = signature_header.strip()
    if value.startswith(SIGNATURE_PREFIX):
        value = value[len(SIGNATURE_PREFIX):]
    elif "=" in value:
        return None

    try:
        return value.encode("ascii")
    except UnicodeEncodeError:
        return None


def verify_hmac_signature(data: bytes, signature_header: Optional[str], secret: str) -> bool:
    """Verify HMAC-SHA256 signature from webhook request."""
    if not secret or not signature_header:
        return False

    received_signature = _parse_signature(signature_header)
    if received_signature is None:
        logger.error("Invalid signature header format")
        return False

    expected_signature = compute_hmac_sha256(data, secret).encode("ascii")

    # Constant-time comparison; differing lengths simply compare unequal
    return hmac.compare_digest(received_signature, expected_signature)
