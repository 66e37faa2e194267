"""Builds request descriptors for configuration sub-resources."""

from __future__ import annotations

from ...constants import (
    EMPTY_SHA256_HEX,
    HEADER_BYPASS_GOVERNANCE,
    QUERY_ENCRYPTION,
    QUERY_RETENTION,
    QUERY_VERSION_ID,
)
from ...exceptions import InvalidArgument
from .base import Digester
from .codec import encode_encryption, encode_retention
from .models import (
    EncryptionConfiguration,
    Operation,
    RequestDescriptor,
    RequestIntent,
    Resource,
    RetentionConfiguration,
    RetentionMode,
)


def _sub_resource_query(marker: str, version_id: str | None = None) -> dict[str, str]:
    query = {marker: ""}
    if version_id:
        query[QUERY_VERSION_ID] = version_id
    return query


class RequestBuilder:
    """Turns validated configurations and caller intent into request descriptors."""

    def __init__(self, digester: Digester) -> None:
        self.digester = digester

    def _with_body(
        self,
        method: str,
        bucket_name: str,
        object_name: str | None,
        query: dict[str, str],
        body: bytes,
        headers: dict[str, str] | None = None,
    ) -> RequestDescriptor:
        return RequestDescriptor(
            method=method,
            bucket_name=bucket_name,
            object_name=object_name,
            query=query,
            headers=headers or {},
            body=body,
            content_length=len(body),
            content_md5=self.digester.md5_base64(body),
            content_sha256=self.digester.sha256_hex(body),
        )

    @staticmethod
    def _without_body(
        method: str,
        bucket_name: str,
        object_name: str | None,
        query: dict[str, str],
    ) -> RequestDescriptor:
        return RequestDescriptor(
            method=method,
            bucket_name=bucket_name,
            object_name=object_name,
            query=query,
            content_sha256=EMPTY_SHA256_HEX,
        )

    def build_set_retention(
        self,
        bucket_name: str,
        object_name: str,
        config: RetentionConfiguration,
        version_id: str | None = None,
        governance_bypass: bool = False,
    ) -> RequestDescriptor:
        """Build a PUT ``?retention`` request.

        The bypass header is only emitted when ``governance_bypass`` is set.
        COMPLIANCE locks cannot be overridden, so asking for a bypass together
        with a COMPLIANCE mode is rejected.

        Raises:
            InvalidArgument: If config is missing or bypass is combined with COMPLIANCE
        """
        if not isinstance(config, RetentionConfiguration):
            raise InvalidArgument("retention configuration must be a RetentionConfiguration")
        if governance_bypass and config.mode is RetentionMode.COMPLIANCE:
            raise InvalidArgument("governance bypass cannot be requested for COMPLIANCE retention")

        headers = {}
        if governance_bypass:
            headers[HEADER_BYPASS_GOVERNANCE] = "true"

        return self._with_body(
            "PUT",
            bucket_name,
            object_name,
            _sub_resource_query(QUERY_RETENTION, version_id),
            encode_retention(config),
            headers,
        )

    def build_get_retention(
        self,
        bucket_name: str,
        object_name: str,
        version_id: str | None = None,
    ) -> RequestDescriptor:
        """Build a GET ``?retention`` request."""
        return self._without_body(
            "GET", bucket_name, object_name, _sub_resource_query(QUERY_RETENTION, version_id)
        )

    def build_set_encryption(
        self,
        bucket_name: str,
        config: EncryptionConfiguration | None,
    ) -> RequestDescriptor:
        """Build a PUT ``?encryption`` request.

        Content-MD5 is mandatory for default encryption changes.

        Raises:
            InvalidArgument: If config is None or not an EncryptionConfiguration
        """
        if config is None:
            raise InvalidArgument("configuration cannot be empty")
        if not isinstance(config, EncryptionConfiguration):
            raise InvalidArgument("configuration must be an EncryptionConfiguration")
        return self._with_body(
            "PUT", bucket_name, None, _sub_resource_query(QUERY_ENCRYPTION), encode_encryption(config)
        )

    def build_get_encryption(self, bucket_name: str) -> RequestDescriptor:
        """Build a GET ``?encryption`` request."""
        return self._without_body("GET", bucket_name, None, _sub_resource_query(QUERY_ENCRYPTION))

    def build_remove_encryption(self, bucket_name: str) -> RequestDescriptor:
        """Build a DELETE ``?encryption`` request."""
        return self._without_body("DELETE", bucket_name, None, _sub_resource_query(QUERY_ENCRYPTION))

    def build(
        self,
        intent: RequestIntent,
        config: RetentionConfiguration | EncryptionConfiguration | None = None,
    ) -> RequestDescriptor:
        """Build the request for an intent.

        Raises:
            InvalidArgument: For intents with no corresponding request
        """
        if intent.resource is Resource.RETENTION:
            if not intent.object_name:
                raise InvalidArgument("retention requests require an object name")
            if intent.operation is Operation.SET:
                return self.build_set_retention(
                    intent.bucket_name,
                    intent.object_name,
                    config,  # type: ignore[arg-type]
                    intent.version_id,
                    intent.governance_bypass,
                )
            if intent.operation is Operation.GET:
                return self.build_get_retention(intent.bucket_name, intent.object_name, intent.version_id)
            # removal is a SET with an empty configuration
            raise InvalidArgument("retention is removed by setting an empty configuration")

        if intent.object_name:
            raise InvalidArgument("encryption is a bucket-level configuration")
        if intent.operation is Operation.SET:
            return self.build_set_encryption(intent.bucket_name, config)  # type: ignore[arg-type]
        if intent.operation is Operation.GET:
            return self.build_get_encryption(intent.bucket_name)
        return self.build_remove_encryption(intent.bucket_name)
