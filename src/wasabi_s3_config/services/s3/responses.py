"""Maps transport outcomes to configurations or typed errors."""

from __future__ import annotations

from http import HTTPStatus
from xml.etree import ElementTree as ET

from ...constants import (
    ERROR_NO_ENCRYPTION,
    HEADER_HOST_ID,
    HEADER_REQUEST_ID,
    OP_DELETE_BUCKET_ENCRYPTION,
    OP_GET_BUCKET_ENCRYPTION,
    OP_GET_OBJECT_RETENTION,
    OP_PUT_BUCKET_ENCRYPTION,
    OP_PUT_OBJECT_RETENTION,
    STATUS_GET,
    STATUS_REMOVE_ENCRYPTION,
    STATUS_SET_ENCRYPTION,
    STATUS_SET_RETENTION,
)
from ...exceptions import ServiceError
from .codec import decode_encryption, decode_retention
from .models import (
    EncryptionConfiguration,
    EncryptionLookup,
    RetentionConfiguration,
    TransportResponse,
)


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return str(status_code)


def _default_error(status_code: int, object_name: str) -> tuple[str, str]:
    """Error code and message for a response without a usable error document."""
    if status_code == 404:
        if object_name:
            return "NoSuchKey", "The specified key does not exist."
        return "NoSuchBucket", "The specified bucket does not exist."
    if status_code == 403:
        return "AccessDenied", "Access Denied."
    if status_code == 409:
        return "Conflict", "Bucket not empty."
    if status_code == 412:
        return "PreconditionFailed", "Pre-condition failed."
    if status_code == 501:
        return "NotImplemented", "A header you provided implies functionality that is not implemented."
    phrase = _status_phrase(status_code)
    return phrase, phrase


def _error_fields(body: bytes) -> dict[str, str]:
    if not body:
        return {}
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        return {}
    fields = {}
    for child in root:
        name = child.tag.rsplit("}", 1)[-1]
        if child.text and child.text.strip():
            fields[name] = child.text.strip()
    return fields


def parse_error_response(
    response: TransportResponse,
    operation_name: str,
    bucket_name: str,
    object_name: str = "",
) -> ServiceError:
    """Build a ServiceError from a non-success response.

    The S3 ``<Error>`` document is used when present. Otherwise the error
    code is derived from the status code.
    """
    fields = _error_fields(response.body)
    code = fields.get("Code")
    message = fields.get("Message")
    if not code:
        code, default_message = _default_error(response.status_code, object_name)
        message = message or default_message

    return ServiceError(
        operation_name,
        status_code=response.status_code,
        code=code,
        message=message or "",
        bucket_name=fields.get("BucketName", bucket_name),
        object_name=fields.get("Key", object_name),
        request_id=fields.get("RequestId") or response.header(HEADER_REQUEST_ID),
        host_id=fields.get("HostId") or response.header(HEADER_HOST_ID),
        resource=fields.get("Resource", ""),
    )


class ResponseInterpreter:
    """Stateless classifier of transport outcomes.

    It never retries or sleeps. Errors are raised to the caller unchanged.
    """

    @staticmethod
    def _check(
        response: TransportResponse,
        accepted: frozenset[int],
        operation_name: str,
        bucket_name: str,
        object_name: str = "",
    ) -> None:
        if response.status_code not in accepted:
            raise parse_error_response(response, operation_name, bucket_name, object_name)

    def set_retention(self, response: TransportResponse, bucket_name: str, object_name: str) -> None:
        self._check(response, STATUS_SET_RETENTION, OP_PUT_OBJECT_RETENTION, bucket_name, object_name)

    def get_retention(
        self,
        response: TransportResponse,
        bucket_name: str,
        object_name: str,
    ) -> RetentionConfiguration:
        """Decode a GET ``?retention`` response.

        Raises:
            ServiceError: On any status other than 200, including
                NoSuchObjectLockConfiguration
            DecodeError: If the body is not a valid retention document
        """
        self._check(response, STATUS_GET, OP_GET_OBJECT_RETENTION, bucket_name, object_name)
        return decode_retention(response.body)

    def set_encryption(self, response: TransportResponse, bucket_name: str) -> None:
        self._check(response, STATUS_SET_ENCRYPTION, OP_PUT_BUCKET_ENCRYPTION, bucket_name)

    def remove_encryption(self, response: TransportResponse, bucket_name: str) -> None:
        self._check(response, STATUS_REMOVE_ENCRYPTION, OP_DELETE_BUCKET_ENCRYPTION, bucket_name)

    def get_encryption(self, response: TransportResponse, bucket_name: str) -> EncryptionConfiguration:
        """Decode a GET ``?encryption`` response.

        A bucket without default encryption surfaces as a ServiceError with
        code ServerSideEncryptionConfigurationNotFoundError.
        """
        self._check(response, STATUS_GET, OP_GET_BUCKET_ENCRYPTION, bucket_name)
        return decode_encryption(response.body)

    def lookup_encryption(self, response: TransportResponse, bucket_name: str) -> EncryptionLookup:
        """Like get_encryption, but reports "not configured" as an absent result."""
        try:
            return EncryptionLookup.present(self.get_encryption(response, bucket_name))
        except ServiceError as e:
            if e.code == ERROR_NO_ENCRYPTION:
                return EncryptionLookup.absent(e)
            raise
