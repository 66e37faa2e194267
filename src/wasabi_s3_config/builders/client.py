"""Builder for configuration client instances."""

from __future__ import annotations

from typing import Any

import boto3
from kubernetes import client, config

from ..config import ClientSettings, load_settings
from ..services.aws.client import ConfigClient
from ..services.aws.transport import BotocoreTransport
from ..utils.names import S3NameValidator
from ..utils.secrets import get_secret_value


def create_client_from_settings(settings: ClientSettings | None = None) -> ConfigClient:
    """Create a configuration client from settings.

    Args:
        settings: Client settings; loaded from the environment when omitted

    Returns:
        Configured client using the botocore transport
    """
    if settings is None:
        settings = load_settings()

    access_key, secret_key, session_token = settings.access_key, settings.secret_key, settings.session_token
    if not access_key or not secret_key:
        # fall back to the standard AWS credential chain (env, profile, instance role)
        credentials = boto3.session.Session().get_credentials()
        if credentials is not None:
            frozen = credentials.get_frozen_credentials()
            access_key, secret_key, session_token = frozen.access_key, frozen.secret_key, frozen.token

    transport = BotocoreTransport(
        endpoint=settings.endpoint,
        region=settings.region,
        access_key=access_key,
        secret_key=secret_key,
        session_token=session_token,
        path_style=settings.path_style,
        insecure_skip_verify=settings.insecure_skip_verify,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    )
    return ConfigClient(transport, validator=S3NameValidator(strict=settings.strict_bucket_names))


def create_client_from_spec(
    spec: dict[str, Any],
    meta: dict[str, Any],
) -> ConfigClient:
    """Create a configuration client from a provider spec.

    Credentials are read from Kubernetes secrets referenced by the spec.

    Args:
        spec: Provider spec (endpoint, region, auth secret refs, tls, pathStyle)
        meta: Resource metadata

    Returns:
        Configured client

    Raises:
        ValueError: If configuration is invalid
    """
    endpoint = spec.get("endpoint")
    region = spec.get("region")
    if not endpoint or not region:
        raise ValueError("endpoint and region are required")

    auth = spec.get("auth", {})
    access_key_ref = auth.get("accessKeySecretRef", {})
    secret_key_ref = auth.get("secretKeySecretRef", {})

    access_key_name = access_key_ref.get("name")
    access_key_key = access_key_ref.get("key", "access-key")
    secret_key_name = secret_key_ref.get("name")
    secret_key_key = secret_key_ref.get("key", "secret-key")

    if not access_key_name or not secret_key_name:
        raise ValueError("accessKeySecretRef and secretKeySecretRef are required")

    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()

    api = client.CoreV1Api()
    namespace = meta.get("namespace", "default")

    access_key = get_secret_value(api, namespace, access_key_name, access_key_key)
    secret_key = get_secret_value(api, namespace, secret_key_name, secret_key_key)

    session_token = None
    session_token_ref = auth.get("sessionTokenSecretRef")
    if session_token_ref and session_token_ref.get("name"):
        session_token = get_secret_value(
            api,
            namespace,
            session_token_ref["name"],
            session_token_ref.get("key", "session-token"),
        )

    tls_config = spec.get("tls", {})
    timeouts = spec.get("timeouts", {})

    settings = ClientSettings(
        endpoint=endpoint,
        region=region,
        access_key=access_key,
        secret_key=secret_key,
        session_token=session_token,
        path_style=spec.get("pathStyle", True),
        insecure_skip_verify=tls_config.get("insecureSkipVerify", False),
        connect_timeout=float(timeouts.get("connectSeconds", 10.0)),
        read_timeout=float(timeouts.get("readSeconds", 60.0)),
        strict_bucket_names=spec.get("strictBucketNames", False),
    )
    return create_client_from_settings(settings)
