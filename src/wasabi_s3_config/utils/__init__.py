"""Utility functions for the S3 configuration client."""

from .checksums import HashlibDigester, md5_base64, sha256_hex
from .context import context_fields, correlation_scope, current_correlation_id
from .errors import sanitize_dict, sanitize_error_message, sanitize_exception
from .names import S3NameValidator, check_bucket_name, check_object_name

__all__ = [
    "HashlibDigester",
    "md5_base64",
    "sha256_hex",
    "S3NameValidator",
    "check_bucket_name",
    "check_object_name",
    "context_fields",
    "correlation_scope",
    "current_correlation_id",
    "sanitize_dict",
    "sanitize_error_message",
    "sanitize_exception",
]
