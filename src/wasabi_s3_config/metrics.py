"""Prometheus metrics for the S3 configuration client."""

from prometheus_client import Counter, Histogram

operations_total = Counter(
    "wasabi_s3_config_operations_total",
    "Total number of configuration operations",
    ["operation", "result"],
)

operation_duration_seconds = Histogram(
    "wasabi_s3_config_operation_duration_seconds",
    "Duration of configuration operations in seconds",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

service_errors_total = Counter(
    "wasabi_s3_config_service_errors_total",
    "Total number of error responses from the object store",
    ["operation", "code"],
)
