"""
Object storage gateway façade.

Turns uploaded bytes into uniquely named objects, issues public or
presigned URLs for them and maps URLs back to keys.

Flow:
1. Caller hands over bytes, filename, size, MIME type and a collection label
2. Gateway validates the collection (no I/O on failure)
3. Gateway builds a fresh client and generates a unique key
4. Object is written with a public-read ACL
5. Caller receives an UploadResult and persists it

The gateway holds no mutable state: each call builds its own client through
the injected factory, so one instance is safe to share between threads.
"""
from typing import BinaryIO, Callable, Optional, Union

from object_gateway.config import Settings
from object_gateway.exceptions import StorageConnectionError
from object_gateway.schemas import UploadResult
from object_gateway.storage import operations
from object_gateway.storage.client import ConnectionConfig, get_client
from object_gateway.storage.keys import KeyGenerator


class ObjectStorageGateway:
    """
    Upload and URL operations for one bucket.

    Args:
        config: Connection configuration
        key_generator: Key generator (defaults to system random source and clock)
        client_factory: Callable building a client from ``config``
        presign_ttl: Default presigned URL lifetime in seconds
    """

    def __init__(
        self,
        config: ConnectionConfig,
        key_generator: Optional[KeyGenerator] = None,
        client_factory: Callable[[ConnectionConfig], object] = get_client,
        presign_ttl: int = operations.DEFAULT_PRESIGN_TTL
    ):
        self._config = config
        self._key_generator = key_generator or KeyGenerator()
        self._client_factory = client_factory
        self._presign_ttl = presign_ttl

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ObjectStorageGateway":
        """
        Build a gateway from environment settings.

        Raises:
            StorageConnectionError: storage settings are incomplete
        """
        if not all([
            settings.s3_endpoint,
            settings.s3_bucket,
            settings.s3_access_key,
            settings.s3_secret_key
        ]):
            raise StorageConnectionError(
                "Object storage not configured. "
                "Set S3_ENDPOINT, S3_BUCKET, S3_ACCESS_KEY and S3_SECRET_KEY."
            )

        config = ConnectionConfig(
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            bucket=settings.s3_bucket,
            endpoint=settings.s3_endpoint,
            region=settings.s3_region,
            secure=settings.s3_secure,
            timeout=settings.s3_timeout,
        )
        kwargs.setdefault("presign_ttl", settings.s3_presign_expiration)
        return cls(config, **kwargs)

    @property
    def bucket(self) -> str:
        """Get configured bucket name."""
        return self._config.bucket

    def _client(self):
        return self._client_factory(self._config)

    def upload(
        self,
        content: Union[bytes, BinaryIO],
        original_filename: str,
        declared_size: int,
        content_type: str,
        collection: str
    ) -> UploadResult:
        """
        Store ``content`` under a new unique key.

        See ``operations.upload_object`` for the error contract. The
        collection is checked before any client is built.
        """
        operations.validate_collection(collection)
        return operations.upload_object(
            self._client(),
            self.bucket,
            content,
            original_filename,
            declared_size,
            content_type,
            collection,
            key_generator=self._key_generator,
        )

    def public_url(self, key: str) -> str:
        """Permanent public URL for ``key``."""
        return operations.public_url(self._client(), self.bucket, key)

    def presigned_url(self, key: str, ttl: Optional[int] = None) -> str:
        """Presigned GET URL for ``key``, valid for ``ttl`` seconds (default: gateway ttl)."""
        if ttl is None:
            ttl = self._presign_ttl
        return operations.presigned_url(self._client(), self.bucket, key, ttl)

    @staticmethod
    def resolve_key(url: str) -> str:
        """Object key of a previously issued public or presigned URL."""
        return operations.resolve_key(url)

    def object_exists(self, key: str) -> bool:
        """Check whether ``key`` is present in the bucket."""
        return operations.object_exists(self._client(), self.bucket, key)

    def delete_object(self, key: str) -> None:
        """Delete ``key`` from the bucket (idempotent)."""
        operations.delete_object(self._client(), self.bucket, key)
