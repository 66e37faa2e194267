"""Bucket and object name validation."""

from __future__ import annotations

import re

from ..constants import MAX_BUCKET_NAME_LENGTH, MAX_OBJECT_NAME_BYTES, MIN_BUCKET_NAME_LENGTH
from ..exceptions import InvalidBucketName, InvalidObjectName

VALID_BUCKET_NAME = re.compile(r"[A-Za-z0-9][A-Za-z0-9.\-_:]{1,61}[A-Za-z0-9]")
VALID_BUCKET_NAME_STRICT = re.compile(r"[a-z0-9][a-z0-9.\-]{1,61}[a-z0-9]")
IP_ADDRESS = re.compile(r"(\d+\.){3}\d+")


def check_bucket_name(name: str, strict: bool = False) -> None:
    """Validate a bucket name.

    Args:
        name: Bucket name
        strict: Only allow lowercase letters, digits, dots and hyphens

    Raises:
        InvalidBucketName: If the name is invalid
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidBucketName("Bucket name cannot be empty")
    if len(name) < MIN_BUCKET_NAME_LENGTH:
        raise InvalidBucketName(f"Bucket name cannot be shorter than {MIN_BUCKET_NAME_LENGTH} characters")
    if len(name) > MAX_BUCKET_NAME_LENGTH:
        raise InvalidBucketName(f"Bucket name cannot be longer than {MAX_BUCKET_NAME_LENGTH} characters")
    if IP_ADDRESS.fullmatch(name):
        raise InvalidBucketName("Bucket name cannot be an ip address")
    if ".." in name or ".-" in name or "-." in name:
        raise InvalidBucketName("Bucket name contains invalid characters")
    pattern = VALID_BUCKET_NAME_STRICT if strict else VALID_BUCKET_NAME
    if not pattern.fullmatch(name):
        raise InvalidBucketName("Bucket name contains invalid characters")


def check_object_name(name: str) -> None:
    """Validate an object name.

    Raises:
        InvalidObjectName: If the name is blank, too long or not valid UTF-8
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidObjectName("Object name cannot be empty")
    try:
        encoded = name.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidObjectName("Object name with non UTF-8 strings are not supported") from None
    if len(encoded) > MAX_OBJECT_NAME_BYTES:
        raise InvalidObjectName(f"Object name cannot be longer than {MAX_OBJECT_NAME_BYTES} characters")


class S3NameValidator:
    """Default name validator following S3 bucket naming rules."""

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def check_bucket_name(self, name: str) -> None:
        check_bucket_name(name, strict=self.strict)

    def check_object_name(self, name: str) -> None:
        check_object_name(name)
