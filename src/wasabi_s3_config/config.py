"""Client settings loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ClientSettings:
    """Connection settings for the configuration client."""

    endpoint: str
    region: str = "us-east-1"
    access_key: str | None = None
    secret_key: str | None = None
    session_token: str | None = None
    path_style: bool = True
    insecure_skip_verify: bool = False
    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    strict_bucket_names: bool = False


def load_settings() -> ClientSettings:
    """Load client settings from environment variables.

    Environment Variables:
        S3_ENDPOINT: Endpoint URL (required)
        S3_REGION: Signing region (default: us-east-1)
        S3_ACCESS_KEY / S3_SECRET_KEY / S3_SESSION_TOKEN: Credentials
        S3_PATH_STYLE: Use path-style addressing (default: true)
        S3_INSECURE_SKIP_VERIFY: Skip TLS verification (default: false)
        S3_CONNECT_TIMEOUT / S3_READ_TIMEOUT: Timeouts in seconds
        S3_STRICT_BUCKET_NAMES: Enforce strict bucket naming (default: false)

    Raises:
        ValueError: If S3_ENDPOINT is not set or a timeout is not a number
    """
    endpoint = os.getenv("S3_ENDPOINT")
    if not endpoint:
        raise ValueError("S3_ENDPOINT is required")

    return ClientSettings(
        endpoint=endpoint,
        region=os.getenv("S3_REGION", "us-east-1"),
        access_key=os.getenv("S3_ACCESS_KEY"),
        secret_key=os.getenv("S3_SECRET_KEY"),
        session_token=os.getenv("S3_SESSION_TOKEN"),
        path_style=_env_bool("S3_PATH_STYLE", True),
        insecure_skip_verify=_env_bool("S3_INSECURE_SKIP_VERIFY", False),
        connect_timeout=float(os.getenv("S3_CONNECT_TIMEOUT", "10.0")),
        read_timeout=float(os.getenv("S3_READ_TIMEOUT", "60.0")),
        strict_bucket_names=_env_bool("S3_STRICT_BUCKET_NAMES", False),
    )
