"""
Object storage gateway.

Stores uploaded bytes in an S3-compatible bucket under unique keys and
issues public or presigned URLs for them.
"""
from object_gateway.exceptions import (
    GatewayError,
    InvalidCollectionError,
    MalformedURLError,
    PresignError,
    StorageConnectionError,
    StorageError,
    StorageWriteError,
)
from object_gateway.schemas import UploadResult
from object_gateway.storage import ConnectionConfig, KeyGenerator, ObjectStorageGateway

__version__ = "0.1.0"

__all__ = [
    "ConnectionConfig",
    "KeyGenerator",
    "ObjectStorageGateway",
    "UploadResult",
    "GatewayError",
    "StorageError",
    "StorageConnectionError",
    "InvalidCollectionError",
    "StorageWriteError",
    "PresignError",
    "MalformedURLError",
]
