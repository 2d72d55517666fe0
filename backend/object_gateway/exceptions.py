"""
Exception hierarchy for the object storage gateway.

Every failure is raised to the immediate caller. Backend exceptions are
chained with ``raise ... from exc`` so the original error stays available
as ``__cause__``.
"""


class GatewayError(Exception):
    """Base class for all gateway errors."""


class StorageError(GatewayError):
    """Base class for storage backend errors."""


class StorageConnectionError(StorageError):
    """The storage client could not be constructed (bad endpoint or credentials shape)."""


class InvalidCollectionError(StorageError, ValueError):
    """The caller supplied an empty collection label."""


class StorageWriteError(StorageError):
    """The backend rejected or failed an object write or delete."""


class PresignError(StorageError):
    """The backend could not produce a signed URL."""


class MalformedURLError(GatewayError, ValueError):
    """A URL given to the resolver could not be parsed."""


class TokenLoadError(GatewayError):
    """A Google OAuth access token could not be loaded."""


class EmailSendError(GatewayError):
    """A transactional e-mail could not be delivered to the provider."""
