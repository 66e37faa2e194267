"""Collaborator and provider interfaces."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from .models import (
    EncryptionConfiguration,
    EncryptionLookup,
    PutObjectRetentionOptions,
    RequestDescriptor,
    RetentionConfiguration,
    TransportResponse,
)


class NameValidator(Protocol):
    """Bucket and object name validation."""

    def check_bucket_name(self, name: str) -> None:
        """Raise InvalidBucketName if the bucket name is invalid."""
        ...

    def check_object_name(self, name: str) -> None:
        """Raise InvalidObjectName if the object name is invalid."""
        ...


class Digester(Protocol):
    """Content digests computed over the exact request body."""

    def md5_base64(self, data: bytes) -> str:
        """Base64-encoded MD5 digest (Content-MD5)."""
        ...

    def sha256_hex(self, data: bytes) -> str:
        """Hex-encoded SHA-256 digest (x-amz-content-sha256)."""
        ...


class Transport(Protocol):
    """Executes a request descriptor against the object store."""

    def execute(
        self,
        descriptor: RequestDescriptor,
        cancel_event: threading.Event | None = None,
    ) -> TransportResponse:
        """Send the request and return the raw outcome.

        Args:
            descriptor: Request to send
            cancel_event: Set by the caller to abandon the request

        Raises:
            OperationCancelled: If cancel_event is set while in flight
            TransportError: On connection or protocol failures
        """
        ...


@runtime_checkable
class ConfigResourceProvider(Protocol):
    """Protocol defining retention and default encryption operations."""

    def set_object_retention(
        self,
        bucket_name: str,
        object_name: str,
        opts: PutObjectRetentionOptions,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Set the retention lock of an object version."""
        ...

    def get_object_retention(
        self,
        bucket_name: str,
        object_name: str,
        version_id: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> RetentionConfiguration:
        """Get the retention lock of an object version."""
        ...

    def clear_object_retention(
        self,
        bucket_name: str,
        object_name: str,
        version_id: str | None = None,
        governance_bypass: bool = True,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Remove a GOVERNANCE retention lock."""
        ...

    def set_bucket_encryption(
        self,
        bucket_name: str,
        config: EncryptionConfiguration,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Set bucket default encryption."""
        ...

    def get_bucket_encryption(
        self,
        bucket_name: str,
        cancel_event: threading.Event | None = None,
    ) -> EncryptionConfiguration:
        """Get bucket default encryption."""
        ...

    def lookup_bucket_encryption(
        self,
        bucket_name: str,
        cancel_event: threading.Event | None = None,
    ) -> EncryptionLookup:
        """Get bucket default encryption, reporting absence as a result."""
        ...

    def remove_bucket_encryption(
        self,
        bucket_name: str,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Remove bucket default encryption."""
        ...
