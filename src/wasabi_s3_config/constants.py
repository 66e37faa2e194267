"""Constants for the S3 configuration client."""

# Sub-resource query markers
QUERY_RETENTION = "retention"
QUERY_ENCRYPTION = "encryption"
QUERY_VERSION_ID = "versionId"

# Headers
HEADER_BYPASS_GOVERNANCE = "x-amz-bypass-governance-retention"
HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_CONTENT_MD5 = "Content-MD5"
HEADER_CONTENT_SHA256 = "x-amz-content-sha256"
HEADER_REQUEST_ID = "x-amz-request-id"
HEADER_HOST_ID = "x-amz-id-2"

# SHA-256 of an empty payload
EMPTY_SHA256_HEX = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

# Accepted status codes per operation
STATUS_SET_RETENTION = frozenset({200, 204})
STATUS_GET = frozenset({200})
STATUS_SET_ENCRYPTION = frozenset({200})
STATUS_REMOVE_ENCRYPTION = frozenset({200, 204})

# Service error codes
ERROR_NO_RETENTION = "NoSuchObjectLockConfiguration"
ERROR_NO_ENCRYPTION = "ServerSideEncryptionConfigurationNotFoundError"

# Operation names (metrics, tracing and ServiceError.operation_name)
OP_PUT_OBJECT_RETENTION = "PutObjectRetention"
OP_GET_OBJECT_RETENTION = "GetObjectRetention"
OP_PUT_BUCKET_ENCRYPTION = "PutBucketEncryption"
OP_GET_BUCKET_ENCRYPTION = "GetBucketEncryption"
OP_DELETE_BUCKET_ENCRYPTION = "DeleteBucketEncryption"

# Name limits
MAX_OBJECT_NAME_BYTES = 1024
MIN_BUCKET_NAME_LENGTH = 3
MAX_BUCKET_NAME_LENGTH = 63

# Identity
SERVICE_NAME = "wasabi-s3-config"
