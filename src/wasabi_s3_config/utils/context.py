"""Per-operation correlation IDs for request logs and spans."""

from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "s3config_correlation_id", default=None
)


def current_correlation_id() -> str | None:
    """Correlation ID bound to the running operation, if any."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(corr_id: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for one client operation.

    An explicit ``corr_id`` wins. Otherwise an ID already bound by the caller
    is reused, so several operations issued under one caller scope share it.
    A fresh ID is generated when neither exists.

    Yields:
        The bound correlation ID
    """
    corr_id = corr_id or _correlation_id.get() or uuid.uuid4().hex
    token = _correlation_id.set(corr_id)
    try:
        yield corr_id
    finally:
        _correlation_id.reset(token)


def context_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Prefix ``fields`` with the bound correlation ID for a log record."""
    record: dict[str, Any] = {}
    corr_id = _correlation_id.get()
    if corr_id:
        record["correlation_id"] = corr_id
    record.update(fields)
    return record
