"""Client for object retention and bucket default encryption."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Iterator

from ... import metrics
from ...constants import (
    OP_DELETE_BUCKET_ENCRYPTION,
    OP_GET_BUCKET_ENCRYPTION,
    OP_GET_OBJECT_RETENTION,
    OP_PUT_BUCKET_ENCRYPTION,
    OP_PUT_OBJECT_RETENTION,
)
from ...exceptions import DecodeError, OperationCancelled, ServiceError, ValidationError
from ...logging import log_request_event
from ...tracing import add_span_attribute, trace_span
from ...utils.checksums import HashlibDigester
from ...utils.context import correlation_scope
from ...utils.names import S3NameValidator
from ..s3.base import ConfigResourceProvider, Digester, NameValidator, Transport
from ..s3.models import (
    EncryptionConfiguration,
    EncryptionLookup,
    PutObjectRetentionOptions,
    RequestDescriptor,
    RetentionConfiguration,
    TransportResponse,
    new_retention_configuration,
)
from ..s3.requests import RequestBuilder
from ..s3.responses import ResponseInterpreter

logger = logging.getLogger(__name__)


def _result_label(error: BaseException) -> str:
    if isinstance(error, ValidationError):
        return "invalid"
    if isinstance(error, DecodeError):
        return "decode_error"
    if isinstance(error, ServiceError):
        return "service_error"
    if isinstance(error, OperationCancelled):
        return "cancelled"
    return "error"


class ConfigClient(ConfigResourceProvider):
    """Retention and default encryption operations against an S3 store.

    The client holds no mutable state and may be shared between threads.
    Every call validates names, builds a request, hands it to the transport
    and interprets the outcome. Nothing is retried. Each call runs in its own
    correlation scope, reusing the caller's correlation ID when one is bound.
    """

    def __init__(
        self,
        transport: Transport,
        validator: NameValidator | None = None,
        digester: Digester | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            transport: Executes request descriptors
            validator: Bucket/object name validator (default: S3 naming rules)
            digester: Body digests (default: hashlib MD5 and SHA-256)
        """
        self.transport = transport
        self.validator = validator or S3NameValidator()
        self.builder = RequestBuilder(digester or HashlibDigester())
        self.interpreter = ResponseInterpreter()

    @contextmanager
    def _observe(self, operation: str, bucket_name: str, object_name: str | None = None) -> Iterator[None]:
        start_time = time.time()
        with correlation_scope() as corr_id, trace_span(
            f"s3config.{operation}",
            attributes={"s3.bucket": bucket_name, "s3.key": object_name, "correlation_id": corr_id},
        ):
            try:
                yield
            except Exception as e:
                metrics.operations_total.labels(operation=operation, result=_result_label(e)).inc()
                if isinstance(e, ServiceError):
                    metrics.service_errors_total.labels(operation=operation, code=e.code).inc()
                raise
            else:
                metrics.operations_total.labels(operation=operation, result="success").inc()
            finally:
                metrics.operation_duration_seconds.labels(operation=operation).observe(
                    time.time() - start_time
                )

    def _execute(
        self,
        operation: str,
        descriptor: RequestDescriptor,
        cancel_event: threading.Event | None,
    ) -> TransportResponse:
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelled(operation)

        log_request_event(
            logger,
            operation,
            descriptor.bucket_name,
            descriptor.object_name,
            event="dispatch",
            message=f"{descriptor.method} {descriptor.url_path}",
            content_length=descriptor.content_length,
        )
        response = self.transport.execute(descriptor, cancel_event)
        add_span_attribute("http.response.status_code", response.status_code)

        # a response that arrives after cancellation is discarded
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelled(operation)

        log_request_event(
            logger,
            operation,
            descriptor.bucket_name,
            descriptor.object_name,
            event="response",
            message=f"HTTP {response.status_code}",
            status_code=response.status_code,
        )
        return response

    def set_object_retention(
        self,
        bucket_name: str,
        object_name: str,
        opts: PutObjectRetentionOptions,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Set the retention lock of an object version.

        Args:
            bucket_name: Bucket name
            object_name: Object name
            opts: Mode, retain-until date, optional version id and governance bypass
            cancel_event: Set to abandon the call

        Raises:
            ValidationError: If a name, the mode or the bypass request is invalid
            ServiceError: If the store answers with anything but 200 or 204
        """
        with self._observe(OP_PUT_OBJECT_RETENTION, bucket_name, object_name):
            self.validator.check_bucket_name(bucket_name)
            self.validator.check_object_name(object_name)
            config = new_retention_configuration(opts.mode, opts.retain_until_date)
            descriptor = self.builder.build_set_retention(
                bucket_name,
                object_name,
                config,
                version_id=opts.version_id,
                governance_bypass=opts.governance_bypass,
            )
            response = self._execute(OP_PUT_OBJECT_RETENTION, descriptor, cancel_event)
            self.interpreter.set_retention(response, bucket_name, object_name)

    def clear_object_retention(
        self,
        bucket_name: str,
        object_name: str,
        version_id: str | None = None,
        governance_bypass: bool = True,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Remove a GOVERNANCE retention lock by setting an empty configuration.

        The store only honours this for GOVERNANCE locks with the bypass
        header; COMPLIANCE locks are reported back as a ServiceError.
        """
        self.set_object_retention(
            bucket_name,
            object_name,
            PutObjectRetentionOptions(version_id=version_id, governance_bypass=governance_bypass),
            cancel_event=cancel_event,
        )

    def get_object_retention(
        self,
        bucket_name: str,
        object_name: str,
        version_id: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> RetentionConfiguration:
        """Get the retention lock of an object version.

        Args:
            bucket_name: Bucket name
            object_name: Object name
            version_id: Version to query; current version when empty
            cancel_event: Set to abandon the call

        Returns:
            Decoded retention configuration

        Raises:
            ServiceError: Including NoSuchObjectLockConfiguration when the
                object has no retention
            DecodeError: If the response document is malformed
        """
        with self._observe(OP_GET_OBJECT_RETENTION, bucket_name, object_name):
            self.validator.check_bucket_name(bucket_name)
            self.validator.check_object_name(object_name)
            descriptor = self.builder.build_get_retention(bucket_name, object_name, version_id)
            response = self._execute(OP_GET_OBJECT_RETENTION, descriptor, cancel_event)
            return self.interpreter.get_retention(response, bucket_name, object_name)

    def set_bucket_encryption(
        self,
        bucket_name: str,
        config: EncryptionConfiguration,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Set the default encryption configuration of a bucket.

        Raises:
            InvalidArgument: If config is None; no request is sent
            ServiceError: If the store answers with anything but 200
        """
        with self._observe(OP_PUT_BUCKET_ENCRYPTION, bucket_name):
            self.validator.check_bucket_name(bucket_name)
            descriptor = self.builder.build_set_encryption(bucket_name, config)
            response = self._execute(OP_PUT_BUCKET_ENCRYPTION, descriptor, cancel_event)
            self.interpreter.set_encryption(response, bucket_name)

    def get_bucket_encryption(
        self,
        bucket_name: str,
        cancel_event: threading.Event | None = None,
    ) -> EncryptionConfiguration:
        """Get the default encryption configuration of a bucket.

        Raises:
            ServiceError: Including ServerSideEncryptionConfigurationNotFoundError
                when the bucket has no default encryption
        """
        with self._observe(OP_GET_BUCKET_ENCRYPTION, bucket_name):
            self.validator.check_bucket_name(bucket_name)
            descriptor = self.builder.build_get_encryption(bucket_name)
            response = self._execute(OP_GET_BUCKET_ENCRYPTION, descriptor, cancel_event)
            return self.interpreter.get_encryption(response, bucket_name)

    def lookup_bucket_encryption(
        self,
        bucket_name: str,
        cancel_event: threading.Event | None = None,
    ) -> EncryptionLookup:
        """Get the default encryption configuration, reporting absence as a result.

        Returns:
            EncryptionLookup that is either present or absent

        Raises:
            ServiceError: For failures other than "not configured"
        """
        with self._observe(OP_GET_BUCKET_ENCRYPTION, bucket_name):
            self.validator.check_bucket_name(bucket_name)
            descriptor = self.builder.build_get_encryption(bucket_name)
            response = self._execute(OP_GET_BUCKET_ENCRYPTION, descriptor, cancel_event)
            return self.interpreter.lookup_encryption(response, bucket_name)

    def remove_bucket_encryption(
        self,
        bucket_name: str,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Remove the default encryption configuration of a bucket."""
        with self._observe(OP_DELETE_BUCKET_ENCRYPTION, bucket_name):
            self.validator.check_bucket_name(bucket_name)
            descriptor = self.builder.build_remove_encryption(bucket_name)
            response = self._execute(OP_DELETE_BUCKET_ENCRYPTION, descriptor, cancel_event)
            self.interpreter.remove_encryption(response, bucket_name)
