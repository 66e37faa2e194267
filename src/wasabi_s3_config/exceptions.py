"""Error taxonomy for configuration resource operations."""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

# Transport failures are raised by botocore and passed through untouched.
TransportError = BotoCoreError


class ValidationError(ValueError):
    """Raised before any network interaction when input is invalid."""


class InvalidBucketName(ValidationError):
    """Bucket name does not satisfy the naming rules."""


class InvalidObjectName(ValidationError):
    """Object name does not satisfy the naming rules."""


class InvalidRetentionMode(ValidationError):
    """Retention mode is neither GOVERNANCE nor COMPLIANCE."""


class InvalidArgument(ValidationError):
    """A required argument is missing or malformed."""


class DecodeError(ValueError):
    """A wire document could not be decoded."""


class OperationCancelled(Exception):
    """The caller cancelled an operation while it was in flight."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} was cancelled")
        self.operation = operation


class ServiceError(ClientError):
    """Non-success response from the object store.

    The error response follows botocore's shape, so callers can inspect
    ``error.response["Error"]["Code"]`` exactly as they would for any
    boto3 call.
    """

    def __init__(
        self,
        operation_name: str,
        status_code: int,
        code: str,
        message: str = "",
        bucket_name: str = "",
        object_name: str = "",
        request_id: str = "",
        host_id: str = "",
        resource: str = "",
    ) -> None:
        error_response: dict[str, Any] = {
            "Error": {
                "Code": code,
                "Message": message,
                "BucketName": bucket_name,
                "Key": object_name,
                "Resource": resource,
            },
            "ResponseMetadata": {
                "HTTPStatusCode": status_code,
                "RequestId": request_id,
                "HostId": host_id,
            },
        }
        super().__init__(error_response, operation_name)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.bucket_name = bucket_name
        self.object_name = object_name
        self.request_id = request_id
        self.host_id = host_id
        self.resource = resource

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            self.__class__,
            (
                self.operation_name,
                self.status_code,
                self.code,
                self.message,
                self.bucket_name,
                self.object_name,
                self.request_id,
                self.host_id,
                self.resource,
            ),
        )
