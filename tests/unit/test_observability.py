"""Tests for correlation IDs, request logging and tracing."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from wasabi_s3_config import tracing
from wasabi_s3_config.logging import log_request_event
from wasabi_s3_config.utils.context import (
    context_fields,
    correlation_scope,
    current_correlation_id,
)

logger = logging.getLogger("wasabi_s3_config.tests")


class TestCorrelationScope:
    """Test cases for correlation scopes."""

    def test_default_is_none(self):
        """Test that no correlation ID is bound outside a scope."""
        assert current_correlation_id() is None
        assert context_fields({"bucket": "b"}) == {"bucket": "b"}

    def test_explicit_id(self):
        """Test that an explicit ID is bound for the block only."""
        with correlation_scope("abc-123") as corr_id:
            assert corr_id == "abc-123"
            assert context_fields({"bucket": "b"}) == {"correlation_id": "abc-123", "bucket": "b"}
        assert current_correlation_id() is None

    def test_generated_id(self):
        """Test that a fresh ID is generated when none is bound."""
        with correlation_scope() as first:
            assert len(first) == 32
        with correlation_scope() as second:
            assert second != first

    def test_nested_scope_reuses_outer_id(self):
        """Test that inner scopes join the caller's ID."""
        with correlation_scope("outer") as outer:
            with correlation_scope() as inner:
                assert inner == outer == "outer"
            assert current_correlation_id() == "outer"


class TestLogRequestEvent:
    """Test cases for log_request_event function."""

    def test_structured_record(self, caplog):
        """Test that events are logged as JSON with context."""
        caplog.set_level(logging.DEBUG, logger=logger.name)

        with correlation_scope("abc-123"):
            log_request_event(
                logger, "PutObjectRetention", "my-bucket", "o", event="dispatch", message="PUT /my-bucket/o?retention", content_length=99
            )

        data = json.loads(caplog.records[-1].getMessage())
        assert data == {
            "correlation_id": "abc-123",
            "operation": "PutObjectRetention",
            "bucket": "my-bucket",
            "object": "o",
            "event": "dispatch",
            "message": "PUT /my-bucket/o?retention",
            "content_length": 99,
        }

    def test_disabled_level(self, caplog):
        """Test that nothing is logged below the configured level."""
        caplog.set_level(logging.INFO, logger=logger.name)

        log_request_event(logger, "GetBucketEncryption", "my-bucket", None, event="response", message="HTTP 200")

        assert caplog.records == []


class TestTraceSpan:
    """Test cases for trace_span."""

    def test_no_tracer(self):
        """Test that spans are no-ops until tracing is initialized."""
        with patch.object(tracing, "_tracer", None):
            with tracing.trace_span("s3config.test") as span:
                assert span is None

    def test_disabled_by_env(self, monkeypatch):
        """Test that tracing can be switched off."""
        monkeypatch.setenv("OTEL_TRACES_ENABLED", "false")
        with patch.object(tracing, "_tracer", None):
            tracing.initialize_tracing()
            assert tracing.get_tracer() is None

    def test_span_attributes_and_errors(self):
        """Test that None attributes are dropped and errors recorded."""
        exporter = InMemorySpanExporter()
        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))

        with patch.object(tracing, "_tracer", provider.get_tracer("test")):
            with pytest.raises(RuntimeError):
                with tracing.trace_span("s3config.op", {"s3.bucket": "my-bucket", "s3.key": None}) as span:
                    assert span is not None
                    raise RuntimeError("boom")

        (finished,) = exporter.get_finished_spans()
        assert finished.name == "s3config.op"
        assert dict(finished.attributes) == {"s3.bucket": "my-bucket"}
        assert finished.status.status_code is StatusCode.ERROR
