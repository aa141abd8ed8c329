"""Logging utilities for consistent logging across modules."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Directory for per-request and per-error log files, set by setup_logging
_log_path: Optional[Path] = None


def setup_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> None:
    """Setup logging configuration."""
    global _log_path

    _log_path = Path(log_dir) if log_dir else None

    handlers: list = [logging.StreamHandler()]
    if _log_path is not None:
        _log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(_log_path / "statuswatch.log"))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def log_server_message(message: str) -> None:
    """Log server-related messages."""
    logger.info(f"[SERVER] {message}")


def log_webhook_request(webhook_data: Dict[str, Any], issue_key: Optional[str] = None) -> Optional[Path]:
    """Write a webhook payload to a timestamped file and return its path."""
    if _log_path is None:
        return None

    try:
        timestamp = datetime.now().strftime("%Y%m%dT%H%M%S%f")
        suffix = f"-{issue_key}" if issue_key else ""
        webhook_file = _log_path / f"webhook-{timestamp}{suffix}.log"

        with open(webhook_file, "w", encoding="utf-8") as f:
            f.write(f"Webhook received at: {datetime.now().isoformat()}\n")
            f.write(f"Webhook payload:\n{json.dumps(webhook_data, indent=2, ensure_ascii=False)}\n")

        logger.info(f"Webhook logged to: {webhook_file}")
        return webhook_file

    except OSError as e:
        logger.error(f"Failed to log webhook request: {e}")
        return None


def log_error(error_message: str, error_data: str = "") -> None:
    """Log error messages with optional error data."""
    logger.error(error_message)
    if _log_path is None:
        return

    try:
        timestamp = datetime.now().strftime("%Y%m%dT%H%M%S%f")
        error_file = _log_path / f"error-{timestamp}.log"

        with open(error_file, "w", encoding="utf-8") as f:
            f.write(f"Error occurred at: {datetime.now().isoformat()}\n")
            f.write(f"Error message: {error_message}\n")
            if error_data:
                f.write(f"Error data:\n{error_data}\n")

        logger.error(f"Error logged to: {error_file}")

    except OSError as e:
        logger.error(f"Failed to log error: {e}")
