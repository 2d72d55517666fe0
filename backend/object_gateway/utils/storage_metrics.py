"""
Decorator for tracking storage operation metrics.
"""
import time
import functools
from object_gateway.utils.metrics import (
    storage_operations_total,
    storage_operation_duration_seconds,
)


def track_storage_metrics(operation: str):
    """
    Decorator to track storage operation metrics.
    
    Counts every call under ``status="success"`` or ``status="failure"`` and
    observes its latency. Exceptions are re-raised unchanged.
    
    Args:
        operation: Operation name (upload, presign, delete, head)
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            
            try:
                result = func(*args, **kwargs)
            except Exception:
                storage_operations_total.labels(
                    operation=operation,
                    status="failure"
                ).inc()
                storage_operation_duration_seconds.labels(
                    operation=operation
                ).observe(time.time() - start_time)
                raise
            
            storage_operations_total.labels(
                operation=operation,
                status="success"
            ).inc()
            storage_operation_duration_seconds.labels(
                operation=operation
            ).observe(time.time() - start_time)
            return result
        
        return wrapper
    return decorator
