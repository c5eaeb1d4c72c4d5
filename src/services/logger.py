"""Structured JSON logging.

Logs go to stderr; stdout carries only test results.
"""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter


# Run ID for correlation across log entries of one invocation
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

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

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Args:
        debug: Log at DEBUG instead of WARNING.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter(
        "%(message)s",
        timestamp=True,
    )
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    return logger


def log_test_submitted(test_id: str, target: str, query_type: str, dns_server: str) -> None:
    """Log a successful test submission.

    Args:
        test_id: ID assigned by the platform.
        target: Domain being resolved.
        query_type: DNS record type.
        dns_server: DNS server used by the nodes.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Test submitted",
        extra={
            "test_id": test_id,
            "target": target,
            "query_type": query_type,
            "dns_server": dns_server,
        },
    )


def log_poll_completed(
    test_id: str, poll_number: int, total_items: int, new_items: int, finished: bool
) -> None:
    """Log one fetch of the test snapshot.

    Args:
        test_id: Test being polled.
        poll_number: 1-based poll counter.
        total_items: Items in the snapshot.
        new_items: Items that became ready in this poll.
        finished: Whether the platform reported completion.
    """
    logger = logging.getLogger(__name__)
    logger.debug(
        "Poll completed",
        extra={
            "test_id": test_id,
            "poll_number": poll_number,
            "total_items": total_items,
            "new_items": new_items,
            "finished": finished,
        },
    )


def log_run_summary(
    test_id: str, polls: int, rendered: int, total_items: int, duration_sec: float
) -> None:
    """Log run completion summary.

    Args:
        test_id: Test that completed.
        polls: Number of fetches performed.
        rendered: Number of items emitted.
        total_items: Items in the final snapshot.
        duration_sec: Total run time in seconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Run completed",
        extra={
            "test_id": test_id,
            "polls": polls,
            "rendered": rendered,
            "total_items": total_items,
            "duration_sec": duration_sec,
        },
    )
