"""Redaction of credentials in logged requests and messages."""

import re
from typing import Any

# Patterns that might expose credentials
SENSITIVE_PATTERNS = [
    r"(Credential=)[A-Z0-9]{16,128}/[^,\s]*",
    r"(Signature=)[0-9a-f]{64}",
    r"(X-Amz-Security-Token=)[^&\s]+",
    r"(access[_\s]?key[_\s]?id[:=\s]+)[A-Z0-9]{16,128}",
    r"(secret[_\s]?access[_\s]?key[:=\s]+)[A-Za-z0-9/+=]{40}",
]

# Header and field names to redact completely
SENSITIVE_FIELDS = {
    "authorization",
    "x-amz-security-token",
    "access_key",
    "secret_key",
    "session_token",
    "password",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize a message to remove credentials.

    Args:
        message: Original message

    Returns:
        Message with credentials redacted
    """
    sanitized = message
    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, r"\1[REDACTED]", sanitized, flags=re.IGNORECASE)
    return sanitized


def sanitize_exception(error: Exception) -> str:
    """Sanitize exception message."""
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize, typically request headers
        sensitive_keys: Additional lowercase keys to redact

    Returns:
        Sanitized copy with sensitive values redacted
    """
    all_sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        if key.lower() in all_sensitive:
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized
