"""
Structured JSON logging for the gateway.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- key
- bucket
- operation
- duration_ms

Usage:
    from object_gateway.utils.logging import configure_logging, log_object_uploaded

    configure_logging('object-gateway', 'INFO')
    log_object_uploaded(logger, key='photo-...png', bucket='media', size_kb=12, duration_ms=45.2)

Credentials (access/secret keys, API keys, tokens) are never passed to these
helpers.
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the process.

        Args:
            service_name: Service identifier attached to every record
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    key: Optional[str] = None,
    bucket: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        key: Optional object key
        bucket: Optional bucket name
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if key:
        extra["key"] = key
    if bucket:
        extra["bucket"] = bucket
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Storage event functions

def log_object_uploaded(
    logger: logging.Logger,
    key: str,
    bucket: str,
    size_kb: int,
    content_type: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a successful object upload.

    Args:
        logger: Logger instance
        key: Generated object key (required)
        bucket: Target bucket (required)
        size_kb: Declared size in KB (required)
        content_type: Optional MIME type
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="object_uploaded",
        key=key,
        bucket=bucket,
        duration_ms=duration_ms,
        size_kb=size_kb,
        **kwargs
    )
    if content_type:
        extra["content_type"] = content_type

    logger.info(f"Object uploaded: {key}", extra=extra)


def log_url_issued(
    logger: logging.Logger,
    key: str,
    bucket: str,
    url_type: str,
    ttl: Optional[int] = None,
    **kwargs
):
    """
    Log issuance of a public or presigned URL.

    Args:
        logger: Logger instance
        key: Object key (required)
        bucket: Bucket name (required)
        url_type: "public" or "presigned" (required)
        ttl: Expiry in seconds for presigned URLs
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="url_issued",
        key=key,
        bucket=bucket,
        url_type=url_type,
        **kwargs
    )
    if ttl is not None:
        extra["ttl"] = ttl

    logger.debug(f"{url_type.capitalize()} URL issued for {key}", extra=extra)


def log_storage_failure(
    logger: logging.Logger,
    operation: str,
    error: str,
    key: Optional[str] = None,
    bucket: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a storage backend failure before it is raised to the caller.

    Args:
        logger: Logger instance
        operation: Operation name (upload, presign, delete, head) (required)
        error: Error message (required)
        key: Optional object key
        bucket: Optional bucket name
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="storage_failure",
        key=key,
        bucket=bucket,
        duration_ms=duration_ms,
        operation=operation,
        error=str(error),
        **kwargs
    )

    logger.warning(f"Storage failure: {operation} - {error}", extra=extra)


def log_email_sent(
    logger: logging.Logger,
    message_id: str,
    domain: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a transactional e-mail accepted by the provider.

    The recipient address is intentionally not a parameter.
    """
    extra = _build_log_extra(
        event="email_sent",
        duration_ms=duration_ms,
        message_id=message_id,
        domain=domain,
        **kwargs
    )

    logger.info(f"Email accepted by provider: {message_id}", extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
