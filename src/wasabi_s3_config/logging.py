"""Structured logging for configuration requests."""

import json
import logging
import sys
from typing import Any

from .utils.context import context_fields


def setup_structured_logging(level: int | str = logging.INFO) -> None:
    """Configure structured JSON logging."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def log_request_event(
    logger: logging.Logger,
    operation: str,
    bucket_name: str,
    object_name: str | None,
    event: str,
    message: str,
    level: int = logging.DEBUG,
    **kwargs: Any,
) -> None:
    """Log a structured request event."""
    if not logger.isEnabledFor(level):
        return
    log_data = context_fields(
        {
            "operation": operation,
            "bucket": bucket_name,
            "object": object_name,
            "event": event,
            "message": message,
        }
    )
    log_data.update(kwargs)
    logger.log(level, json.dumps(log_data, default=str))
