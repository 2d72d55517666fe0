"""
Prometheus metrics definitions for storage operations.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

storage_operations_total = Counter(
    'storage_operations_total',
    'Total object storage operations',
    ['operation', 'status']
)

storage_operation_duration_seconds = Histogram(
    'storage_operation_duration_seconds',
    'Object storage operation duration in seconds',
    ['operation'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

storage_uploaded_bytes_total = Counter(
    'storage_uploaded_bytes_total',
    'Total declared bytes written to object storage'
)
