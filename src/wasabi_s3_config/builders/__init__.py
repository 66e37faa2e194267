"""Builders for clients and configurations."""

from .client import create_client_from_settings, create_client_from_spec
from .configuration import (
    create_encryption_config_from_spec,
    create_retention_config_from_spec,
    create_retention_options_from_spec,
)

__all__ = [
    "create_client_from_settings",
    "create_client_from_spec",
    "create_encryption_config_from_spec",
    "create_retention_config_from_spec",
    "create_retention_options_from_spec",
]
