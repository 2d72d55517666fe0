"""
Object storage operations.

Each function takes an already built S3 client (see ``client.get_client``)
and a bucket name, performs one operation and raises a typed gateway error
on failure. Nothing is retried here: retry policy belongs to botocore's own
configuration or to the caller.
"""
import logging
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import BinaryIO, Optional, Union
from urllib.parse import quote, unquote, urlsplit

from botocore.exceptions import BotoCoreError, ClientError

from object_gateway.exceptions import (
    InvalidCollectionError,
    MalformedURLError,
    PresignError,
    StorageError,
    StorageWriteError,
)
from object_gateway.schemas import UploadResult
from object_gateway.storage.keys import KeyGenerator, generate_key
from object_gateway.utils.logging import (
    log_object_uploaded,
    log_storage_failure,
    log_url_issued,
)
from object_gateway.utils.metrics import storage_uploaded_bytes_total
from object_gateway.utils.storage_metrics import track_storage_metrics

logger = logging.getLogger(__name__)

DEFAULT_PRESIGN_TTL = 3600  # 1 hour
MAX_PRESIGN_TTL = 7 * 24 * 3600  # SigV4 upper bound

PUBLIC_READ_ACL = "public-read"

NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


def size_in_kb(size_bytes: int) -> int:
    """Convert bytes to KB, rounding halves up (1536 -> 2)."""
    kb = Decimal(size_bytes) / Decimal(1024)
    return int(kb.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def validate_collection(collection: Optional[str]) -> None:
    """
    Reject an empty collection label.

    The collection is a validation gate only: keys are not namespaced by it.
    """
    if not collection:
        raise InvalidCollectionError("invalid collection name")


@track_storage_metrics("upload")
def upload_object(
    client,
    bucket: str,
    content: Union[bytes, BinaryIO],
    original_filename: str,
    declared_size: int,
    content_type: str,
    collection: str,
    key_generator: Optional[KeyGenerator] = None
) -> UploadResult:
    """
    Store a byte stream under a freshly generated key.

    The object is written with the given content type and a public-read
    ACL, so the returned public URL is immediately usable.

    Args:
        client: boto3 S3 client
        bucket: Target bucket
        content: Bytes or a readable binary stream
        original_filename: Filename as sent by the client
        declared_size: Exact byte length of ``content``
        content_type: MIME type of the content
        collection: Logical category label (must be non-empty)
        key_generator: Optional key generator (defaults to system random/clock)

    Returns:
        UploadResult describing the stored object

    Raises:
        InvalidCollectionError: collection is empty (no I/O performed)
        StorageWriteError: the backend rejected or failed the write,
            including a mismatch between ``declared_size`` and the body
    """
    validate_collection(collection)

    if key_generator is not None:
        key = key_generator.generate(original_filename)
    else:
        key = generate_key(original_filename)

    start_time = time.time()
    try:
        client.put_object(
            Bucket=bucket,
            Key=key,
            Body=content,
            ContentLength=declared_size,
            ContentType=content_type,
            ACL=PUBLIC_READ_ACL,
        )
    except (ClientError, BotoCoreError) as e:
        log_storage_failure(
            logger,
            operation="upload",
            error=str(e),
            key=key,
            bucket=bucket,
            duration_ms=(time.time() - start_time) * 1000,
        )
        raise StorageWriteError(f"Failed to upload {key}: {e}") from e

    size_kb = size_in_kb(declared_size)
    storage_uploaded_bytes_total.inc(declared_size)
    log_object_uploaded(
        logger,
        key=key,
        bucket=bucket,
        size_kb=size_kb,
        content_type=content_type,
        duration_ms=(time.time() - start_time) * 1000,
    )

    return UploadResult(
        key=key,
        content_type=content_type,
        url=public_url(client, bucket, key),
        size_kb=size_kb,
    )


def public_url(client, bucket: str, key: str) -> str:
    """
    Build the permanent public URL of an object.

    Only valid if the object is publicly readable. Never expires.

    Args:
        client: boto3 S3 client (its endpoint is used)
        bucket: Bucket name
        key: Object key

    Returns:
        ``{endpoint}/{bucket}/{key}`` with the key percent-encoded
    """
    endpoint = client.meta.endpoint_url.rstrip("/")
    url = f"{endpoint}/{bucket}/{quote(key, safe='')}"
    log_url_issued(logger, key=key, bucket=bucket, url_type="public")
    return url


@track_storage_metrics("presign")
def presigned_url(client, bucket: str, key: str, ttl: int = DEFAULT_PRESIGN_TTL) -> str:
    """
    Generate a presigned GET URL for reading an object.

    Works regardless of the object's ACL but expires after ``ttl`` seconds.
    Signing is local; no request is sent to the backend.

    Args:
        client: boto3 S3 client
        bucket: Bucket name
        key: Object key
        ttl: URL expiration in seconds (default: 1 hour, max: 7 days)

    Returns:
        Presigned URL string

    Raises:
        PresignError: ttl out of range or the URL could not be signed
    """
    if isinstance(ttl, bool) or not isinstance(ttl, int) or not 0 < ttl <= MAX_PRESIGN_TTL:
        raise PresignError(f"Presign ttl must be between 1 and {MAX_PRESIGN_TTL} seconds, got {ttl!r}")

    try:
        url = client.generate_presigned_url(
            ClientMethod='get_object',
            Params={
                'Bucket': bucket,
                'Key': key,
            },
            ExpiresIn=ttl
        )
    except (ClientError, BotoCoreError) as e:
        log_storage_failure(logger, operation="presign", error=str(e), key=key, bucket=bucket)
        raise PresignError(f"Failed to presign {key}: {e}") from e

    log_url_issued(logger, key=key, bucket=bucket, url_type="presigned", ttl=ttl)
    return url


def resolve_key(url: str) -> str:
    """
    Extract the object key from a previously issued URL.

    Takes the last path segment, so it works for public and presigned URLs
    alike (signing query parameters are ignored). Pure string parsing.

    Unlike a plain basename, a URL whose path ends in "/" (or has no path)
    is rejected rather than resolved to its parent segment, which would be
    the bucket name and never an object key.

    Args:
        url: Public or presigned URL

    Returns:
        Object key (percent-decoded)

    Raises:
        MalformedURLError: input is not a parseable URL or has no final path segment
    """
    if not isinstance(url, str):
        raise MalformedURLError(f"URL must be a string, got {type(url).__name__}")

    try:
        parts = urlsplit(url.strip())
        parts.port
    except ValueError as e:
        raise MalformedURLError(f"Malformed URL '{url}': {e}") from e

    segment = parts.path.rsplit("/", 1)[-1]
    if not segment:
        raise MalformedURLError(f"URL '{url}' has no object key in its path")

    return unquote(segment)


@track_storage_metrics("head")
def object_exists(client, bucket: str, key: str) -> bool:
    """
    Check if an object exists in the bucket.

    Returns:
        True if the object exists, False on a not-found response

    Raises:
        StorageError: any other backend failure
    """
    try:
        client.head_object(Bucket=bucket, Key=key)
        return True
    except ClientError as e:
        error_code = str(e.response.get('Error', {}).get('Code', ''))
        if error_code in NOT_FOUND_CODES:
            return False
        log_storage_failure(logger, operation="head", error=str(e), key=key, bucket=bucket)
        raise StorageError(f"Failed to check {key}: {e}") from e
    except BotoCoreError as e:
        log_storage_failure(logger, operation="head", error=str(e), key=key, bucket=bucket)
        raise StorageError(f"Failed to check {key}: {e}") from e


@track_storage_metrics("delete")
def delete_object(client, bucket: str, key: str) -> None:
    """
    Delete an object from the bucket.

    Idempotent: deleting a missing object is not an error.

    Raises:
        StorageWriteError: the backend rejected or failed the delete
    """
    try:
        client.delete_object(Bucket=bucket, Key=key)
    except ClientError as e:
        error_code = str(e.response.get('Error', {}).get('Code', ''))
        if error_code in NOT_FOUND_CODES:
            logger.debug(f"Object {key} not found (already deleted)")
            return
        log_storage_failure(logger, operation="delete", error=str(e), key=key, bucket=bucket)
        raise StorageWriteError(f"Failed to delete {key}: {e}") from e
    except BotoCoreError as e:
        log_storage_failure(logger, operation="delete", error=str(e), key=key, bucket=bucket)
        raise StorageWriteError(f"Failed to delete {key}: {e}") from e

    logger.debug(f"Deleted object {key} from {bucket}")
