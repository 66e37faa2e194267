"""Object retention and bucket default encryption for S3-compatible stores."""

from .exceptions import (
    DecodeError,
    InvalidArgument,
    InvalidBucketName,
    InvalidObjectName,
    InvalidRetentionMode,
    OperationCancelled,
    ServiceError,
    TransportError,
    ValidationError,
)
from .services.aws.client import ConfigClient
from .services.aws.transport import BotocoreTransport
from .services.s3.models import (
    EncryptionConfiguration,
    EncryptionLookup,
    EncryptionRule,
    PutObjectRetentionOptions,
    RetentionConfiguration,
    RetentionMode,
    SSEAlgorithm,
    new_retention_configuration,
)

__version__ = "0.1.0"

__all__ = [
    "BotocoreTransport",
    "ConfigClient",
    "DecodeError",
    "EncryptionConfiguration",
    "EncryptionLookup",
    "EncryptionRule",
    "InvalidArgument",
    "InvalidBucketName",
    "InvalidObjectName",
    "InvalidRetentionMode",
    "OperationCancelled",
    "PutObjectRetentionOptions",
    "RetentionConfiguration",
    "RetentionMode",
    "SSEAlgorithm",
    "ServiceError",
    "TransportError",
    "ValidationError",
    "new_retention_configuration",
]
