"""
S3-compatible client factory.

Uses boto3 with the S3 API, so any S3-compatible store works (AWS S3,
MinIO, Cloudflare R2, ...).

A fresh client is built for every operation from an immutable
``ConnectionConfig``. There is no module-level client: rotating
credentials only requires passing a new config.
"""
import logging
from dataclasses import dataclass, field
from urllib.parse import urlsplit

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from object_gateway.exceptions import StorageConnectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Credential bundle for one bucket.

    The secret key is excluded from ``repr`` so the config can't leak into
    logs or tracebacks by accident.
    """
    access_key: str
    secret_key: str = field(repr=False)
    bucket: str
    endpoint: str
    region: str = "us-east-1"
    secure: bool = True
    timeout: int = 10


def _endpoint_url(endpoint: str, secure: bool) -> str:
    """
    Normalize an endpoint into a URL boto3 accepts.

    Accepts ``host[:port]`` (MinIO style) or a full URL. A scheme, when
    present, must agree with ``secure``.
    """
    if not endpoint or not endpoint.strip():
        raise StorageConnectionError("Storage endpoint is empty")

    scheme = "https" if secure else "http"
    raw = endpoint.strip()
    if "://" not in raw:
        raw = f"{scheme}://{raw}"

    try:
        parts = urlsplit(raw)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise StorageConnectionError(f"Malformed storage endpoint '{endpoint}': {e}") from e

    if parts.scheme not in ("http", "https"):
        raise StorageConnectionError(f"Unsupported endpoint scheme '{parts.scheme}'")
    if parts.scheme != scheme:
        raise StorageConnectionError(
            f"Endpoint scheme '{parts.scheme}' does not match secure={secure}"
        )
    if not parts.hostname:
        raise StorageConnectionError(f"Malformed storage endpoint '{endpoint}': missing host")

    path = parts.path.rstrip("/")
    return f"{parts.scheme}://{parts.netloc}{path}"


def get_client(config: ConnectionConfig):
    """
    Build an authenticated S3 client bound to ``config.endpoint``.

    This only checks the shape of the endpoint and credentials; network
    errors surface from the operations performed with the client.

    Args:
        config: Connection configuration

    Returns:
        boto3 S3 client

    Raises:
        StorageConnectionError: endpoint or credentials are malformed
    """
    if not config.access_key or not config.secret_key:
        raise StorageConnectionError("Storage access key and secret key are required")

    endpoint_url = _endpoint_url(config.endpoint, config.secure)

    try:
        # Path-style addressing: bucket goes in the path, not the hostname
        client = boto3.client(
            's3',
            endpoint_url=endpoint_url,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region,
            use_ssl=config.secure,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'},
                connect_timeout=config.timeout,
                read_timeout=config.timeout,
            )
        )
        logger.debug(f"Storage client created for {endpoint_url}")
        return client
    except (ValueError, BotoCoreError) as e:
        raise StorageConnectionError(f"Failed to create storage client: {e}") from e
