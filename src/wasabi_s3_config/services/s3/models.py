"""Models for retention and default encryption configuration."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import quote

from ...constants import HEADER_CONTENT_LENGTH, HEADER_CONTENT_MD5, HEADER_CONTENT_SHA256
from ...exceptions import InvalidArgument, InvalidRetentionMode, ServiceError


class RetentionMode(str, enum.Enum):
    """Object lock retention mode."""

    GOVERNANCE = "GOVERNANCE"
    COMPLIANCE = "COMPLIANCE"

    @classmethod
    def parse(cls, value: RetentionMode | str) -> RetentionMode:
        """Return the mode for ``value`` or raise InvalidRetentionMode."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidRetentionMode(f"invalid retention mode `{value}`") from None


class SSEAlgorithm(str, enum.Enum):
    """Server-side encryption algorithm for bucket default encryption."""

    AES256 = "AES256"
    AWS_KMS = "aws:kms"

    @classmethod
    def parse(cls, value: SSEAlgorithm | str) -> SSEAlgorithm:
        """Return the algorithm for ``value`` or raise InvalidArgument."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgument(f"invalid encryption algorithm `{value}`") from None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class RetentionConfiguration:
    """Retention lock of a single object version.

    A configuration with neither mode nor date set represents "no retention"
    and is what a removal request sends.
    """

    mode: RetentionMode | None = None
    retain_until_date: datetime | None = None

    def __post_init__(self) -> None:
        if self.mode is not None:
            object.__setattr__(self, "mode", RetentionMode.parse(self.mode))
        if self.retain_until_date is not None:
            if not isinstance(self.retain_until_date, datetime):
                raise InvalidArgument("retain until date must be a datetime")
            object.__setattr__(self, "retain_until_date", _as_utc(self.retain_until_date))

    @property
    def is_empty(self) -> bool:
        """Whether neither mode nor retain-until date is set."""
        return self.mode is None and self.retain_until_date is None


def new_retention_configuration(
    mode: RetentionMode | str | None = None,
    retain_until_date: datetime | None = None,
) -> RetentionConfiguration:
    """Create a validated retention configuration.

    Args:
        mode: GOVERNANCE or COMPLIANCE; None for no retention
        retain_until_date: Retain-until instant; naive values are taken as UTC

    Returns:
        Retention configuration

    Raises:
        InvalidRetentionMode: If mode is not a known retention mode
    """
    return RetentionConfiguration(mode=mode, retain_until_date=retain_until_date)


@dataclass(frozen=True)
class EncryptionRule:
    """Default encryption rule applied to new objects in a bucket."""

    algorithm: SSEAlgorithm
    kms_master_key_id: str | None = None

    def __post_init__(self) -> None:
        algorithm = SSEAlgorithm.parse(self.algorithm)
        object.__setattr__(self, "algorithm", algorithm)
        # the store treats a blank key id as absent
        key_id = self.kms_master_key_id.strip() if self.kms_master_key_id is not None else None
        object.__setattr__(self, "kms_master_key_id", key_id or None)
        if self.kms_master_key_id is not None and algorithm is not SSEAlgorithm.AWS_KMS:
            raise InvalidArgument(f"KMS key id is only valid with {SSEAlgorithm.AWS_KMS.value}")

    @classmethod
    def sse_s3(cls) -> EncryptionRule:
        return cls(SSEAlgorithm.AES256)

    @classmethod
    def sse_kms(cls, key_id: str | None = None) -> EncryptionRule:
        return cls(SSEAlgorithm.AWS_KMS, key_id)


@dataclass(frozen=True)
class EncryptionConfiguration:
    """Bucket default server-side encryption configuration."""

    rules: tuple[EncryptionRule, ...] = ()

    def __post_init__(self) -> None:
        rules = tuple(self.rules)
        for rule in rules:
            if not isinstance(rule, EncryptionRule):
                raise InvalidArgument("encryption rules must be EncryptionRule instances")
        object.__setattr__(self, "rules", rules)


@dataclass(frozen=True)
class EncryptionLookup:
    """Outcome of looking up a bucket's default encryption.

    Either a configuration is present, or the store reported that none is
    configured. Any other failure is raised as a ServiceError instead.
    """

    configuration: EncryptionConfiguration | None = None
    error: ServiceError | None = None

    @classmethod
    def present(cls, configuration: EncryptionConfiguration) -> EncryptionLookup:
        return cls(configuration=configuration)

    @classmethod
    def absent(cls, error: ServiceError) -> EncryptionLookup:
        return cls(error=error)

    @property
    def is_present(self) -> bool:
        return self.configuration is not None

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error is not None else None


@dataclass
class PutObjectRetentionOptions:
    """Options for setting object retention."""

    mode: RetentionMode | str | None = None
    retain_until_date: datetime | None = None
    version_id: str | None = None
    governance_bypass: bool = False


class Operation(str, enum.Enum):
    SET = "SET"
    GET = "GET"
    REMOVE = "REMOVE"


class Resource(str, enum.Enum):
    RETENTION = "retention"
    ENCRYPTION = "encryption"


@dataclass(frozen=True)
class RequestIntent:
    """What the caller wants done, before it becomes a request."""

    operation: Operation
    resource: Resource
    bucket_name: str
    object_name: str | None = None
    version_id: str | None = None
    governance_bypass: bool = False


@dataclass(frozen=True)
class RequestDescriptor:
    """Transport-neutral description of a single HTTP request."""

    method: str
    bucket_name: str
    object_name: str | None = None
    query: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    content_length: int = 0
    content_md5: str | None = None
    content_sha256: str = ""

    @property
    def resource_path(self) -> str:
        """Path-style resource path, e.g. ``/bucket/object``."""
        path = "/" + quote(self.bucket_name, safe="")
        if self.object_name:
            path += "/" + quote(self.object_name, safe="/~")
        return path

    @property
    def query_string(self) -> str:
        """Query string with bare sub-resource markers (``retention&versionId=v1``)."""
        parts = []
        for key in sorted(self.query):
            value = self.query[key]
            if value:
                parts.append(f"{quote(key, safe='')}={quote(value, safe='~')}")
            else:
                parts.append(quote(key, safe=""))
        return "&".join(parts)

    @property
    def url_path(self) -> str:
        query = self.query_string
        return f"{self.resource_path}?{query}" if query else self.resource_path

    @property
    def all_headers(self) -> dict[str, str]:
        """Caller headers merged with the content integrity headers."""
        headers = dict(self.headers)
        if self.body is not None:
            headers[HEADER_CONTENT_LENGTH] = str(self.content_length)
        if self.content_md5:
            headers[HEADER_CONTENT_MD5] = self.content_md5
        if self.content_sha256:
            headers[HEADER_CONTENT_SHA256] = self.content_sha256
        return headers


@dataclass(frozen=True)
class TransportResponse:
    """Status, headers and body returned by the transport."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    reason: str = ""

    def header(self, name: str, default: Any = "") -> Any:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default
