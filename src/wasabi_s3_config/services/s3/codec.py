"""XML codec for retention and encryption configuration documents."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from xml.etree import ElementTree as ET

from ...exceptions import DecodeError, ValidationError
from .models import (
    EncryptionConfiguration,
    EncryptionRule,
    RetentionConfiguration,
    RetentionMode,
    SSEAlgorithm,
)

RETENTION_ROOT = "Retention"
RETENTION_MODE = "Mode"
RETENTION_UNTIL = "RetainUntilDate"

ENCRYPTION_ROOT = "ServerSideEncryptionConfiguration"
ENCRYPTION_RULE = "Rule"
ENCRYPTION_DEFAULT = "ApplyServerSideEncryptionByDefault"
ENCRYPTION_ALGORITHM = "SSEAlgorithm"
ENCRYPTION_KMS_KEY = "KMSMasterKeyID"

_TIMESTAMP_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$",
    re.IGNORECASE,
)


def format_iso8601(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC timestamp with a ``Z`` suffix.

    Fractional seconds are written only when non-zero, without trailing zeros.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text + "Z"


def parse_iso8601(text: str) -> datetime:
    """Parse a timezone-qualified ISO-8601 timestamp into a UTC datetime.

    Raises:
        DecodeError: If the text is not a timezone-qualified timestamp
    """
    match = _TIMESTAMP_RE.match(text.strip())
    if match is None:
        raise DecodeError(f"invalid timestamp `{text}`")
    base, fraction, offset = match.groups()
    if fraction:
        # sub-microsecond digits are truncated
        base += "." + fraction[:6].ljust(6, "0")
    offset = "+00:00" if offset.upper() == "Z" else offset
    try:
        parsed = datetime.fromisoformat(base + offset)
    except ValueError as e:
        raise DecodeError(f"invalid timestamp `{text}`: {e}") from e
    return parsed.astimezone(timezone.utc)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def _parse_root(data: bytes | str, expected: str) -> ET.Element:
    if not data:
        raise DecodeError(f"empty document, expected <{expected}>")
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise DecodeError(f"malformed XML document: {e}") from e
    name = _local_name(root.tag)
    if name != expected:
        raise DecodeError(f"expected element type <{expected}> but have <{name}>")
    return root


def _find(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _findall(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _text(element: ET.Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    text = element.text.strip()
    return text or None


def _tostring(root: ET.Element) -> bytes:
    return ET.tostring(root, encoding="unicode").encode("utf-8")


def encode_retention(config: RetentionConfiguration) -> bytes:
    """Encode a retention configuration as a ``<Retention>`` document.

    Unset fields are omitted from the document.
    """
    root = ET.Element(RETENTION_ROOT)
    if config.mode is not None:
        ET.SubElement(root, RETENTION_MODE).text = config.mode.value
    if config.retain_until_date is not None:
        ET.SubElement(root, RETENTION_UNTIL).text = format_iso8601(config.retain_until_date)
    return _tostring(root)


def decode_retention(data: bytes | str) -> RetentionConfiguration:
    """Decode a ``<Retention>`` document.

    Unknown elements are ignored. An unknown mode or an unparsable date is a
    DecodeError; neither is ever replaced by a default.
    """
    root = _parse_root(data, RETENTION_ROOT)

    mode = None
    mode_text = _text(_find(root, RETENTION_MODE))
    if mode_text is not None:
        try:
            mode = RetentionMode(mode_text)
        except ValueError:
            raise DecodeError(f"unknown retention mode `{mode_text}`") from None

    retain_until_date = None
    date_element = _find(root, RETENTION_UNTIL)
    if date_element is not None:
        retain_until_date = parse_iso8601(date_element.text or "")

    return RetentionConfiguration(mode=mode, retain_until_date=retain_until_date)


def encode_encryption(config: EncryptionConfiguration) -> bytes:
    """Encode an encryption configuration as a ``<ServerSideEncryptionConfiguration>`` document."""
    root = ET.Element(ENCRYPTION_ROOT)
    for rule in config.rules:
        apply = ET.SubElement(ET.SubElement(root, ENCRYPTION_RULE), ENCRYPTION_DEFAULT)
        ET.SubElement(apply, ENCRYPTION_ALGORITHM).text = rule.algorithm.value
        if rule.kms_master_key_id is not None:
            ET.SubElement(apply, ENCRYPTION_KMS_KEY).text = rule.kms_master_key_id
    return _tostring(root)


def decode_encryption(data: bytes | str) -> EncryptionConfiguration:
    """Decode a ``<ServerSideEncryptionConfiguration>`` document."""
    root = _parse_root(data, ENCRYPTION_ROOT)

    rules = []
    for index, rule_element in enumerate(_findall(root, ENCRYPTION_RULE)):
        apply = _find(rule_element, ENCRYPTION_DEFAULT)
        if apply is None:
            raise DecodeError(f"rule {index} has no <{ENCRYPTION_DEFAULT}> element")
        algorithm_text = _text(_find(apply, ENCRYPTION_ALGORITHM))
        if algorithm_text is None:
            raise DecodeError(f"rule {index} has no <{ENCRYPTION_ALGORITHM}> value")
        try:
            algorithm = SSEAlgorithm(algorithm_text)
        except ValueError:
            raise DecodeError(f"unknown encryption algorithm `{algorithm_text}`") from None
        try:
            rules.append(EncryptionRule(algorithm, _text(_find(apply, ENCRYPTION_KMS_KEY))))
        except ValidationError as e:
            raise DecodeError(f"invalid rule {index}: {e}") from e

    return EncryptionConfiguration(rules=tuple(rules))
