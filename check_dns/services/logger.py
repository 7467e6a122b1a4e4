"""Structured JSON logging to stderr.

Stdout is reserved for the plugin's single status line.
"""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Check run ID for correlation across log entries of one invocation
CHECK_RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds check_run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        )
        log_record["check_run_id"] = CHECK_RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False, stream=None) -> logging.Logger:
    """Configure structured JSON logging for the plugin.

    Args:
        verbose: Log every resolver line (DEBUG) instead of warnings only.
        stream: Output stream (defaults to sys.stderr).

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(stream or sys.stderr)
    json_handler.setFormatter(CustomJsonFormatter("%(message)s"))
    logger.addHandler(json_handler)

    return logger


def log_check_result(
    host_name: str,
    dns_server: str | None,
    state: str,
    address: str | None,
    message: str,
    duration_ms: int,
) -> None:
    """Log the structured result of one check.

    Args:
        host_name: Name that was resolved.
        dns_server: Server queried (None for system default).
        state: Final service state name.
        address: Resolved address, if any.
        message: Status line written to stdout.
        duration_ms: Wall-clock time of the check in milliseconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "DNS check completed",
        extra={
            "host_name": host_name,
            "dns_server": dns_server,
            "state": state,
            "address": address,
            "status_line": message,
            "duration_ms": duration_ms,
        },
    )
