"""Builders for configurations from camelCase spec dicts."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..exceptions import DecodeError, InvalidArgument
from ..services.s3.codec import parse_iso8601
from ..services.s3.models import (
    EncryptionConfiguration,
    EncryptionRule,
    PutObjectRetentionOptions,
    RetentionConfiguration,
    new_retention_configuration,
)


def _parse_date(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return parse_iso8601(str(value))
    except DecodeError as e:
        raise InvalidArgument(f"invalid retainUntilDate: {e}") from e


def create_retention_config_from_spec(spec: dict[str, Any]) -> RetentionConfiguration:
    """Create a retention configuration from a spec.

    Args:
        spec: ``{"mode": "GOVERNANCE", "retainUntilDate": "2030-01-01T00:00:00Z"}``;
            both keys optional

    Returns:
        Validated retention configuration

    Raises:
        InvalidRetentionMode: If mode is unknown
        InvalidArgument: If retainUntilDate is not a timezone-qualified timestamp
    """
    return new_retention_configuration(spec.get("mode"), _parse_date(spec.get("retainUntilDate")))


def create_retention_options_from_spec(spec: dict[str, Any]) -> PutObjectRetentionOptions:
    """Create set-retention options from a spec.

    Adds ``versionId`` and ``governanceBypass`` to the keys understood by
    create_retention_config_from_spec.
    """
    config = create_retention_config_from_spec(spec)
    return PutObjectRetentionOptions(
        mode=config.mode,
        retain_until_date=config.retain_until_date,
        version_id=spec.get("versionId") or None,
        governance_bypass=bool(spec.get("governanceBypass", False)),
    )


def create_encryption_config_from_spec(spec: dict[str, Any]) -> EncryptionConfiguration:
    """Create an encryption configuration from a spec.

    Args:
        spec: Either a single rule ``{"algorithm": "aws:kms", "kmsKeyId": "..."}``
            or ``{"rules": [...]}`` with one such dict per rule. The algorithm
            defaults to AES256.

    Returns:
        Encryption configuration

    Raises:
        InvalidArgument: If an algorithm is unknown or a key id is given for AES256
    """
    rule_specs = spec["rules"] if "rules" in spec else [spec]
    rules = [
        EncryptionRule(rule.get("algorithm", "AES256"), rule.get("kmsKeyId") or None)
        for rule in rule_specs
    ]
    return EncryptionConfiguration(rules=tuple(rules))
