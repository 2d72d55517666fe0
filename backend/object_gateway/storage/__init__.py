"""
Storage module for S3-compatible object storage.

Uploads arbitrary bytes under collision-resistant keys and issues public
or presigned URLs for them.
"""
from object_gateway.storage.client import ConnectionConfig, get_client
from object_gateway.storage.keys import KeyGenerator, generate_key
from object_gateway.storage.operations import (
    delete_object,
    object_exists,
    presigned_url,
    public_url,
    resolve_key,
    upload_object,
)
from object_gateway.storage.gateway import ObjectStorageGateway

__all__ = [
    "ConnectionConfig",
    "get_client",
    "KeyGenerator",
    "generate_key",
    "upload_object",
    "public_url",
    "presigned_url",
    "resolve_key",
    "object_exists",
    "delete_object",
    "ObjectStorageGateway",
]
