"""
Cloud Retry - Exception Hierarchy.

Custom exceptions for cloud request failures with retry-awareness.
"""

from .base import (
    CloudClientError,
    TransportError,
    ConnectionError,
    TimeoutError,
    ServiceError,
    FunctionError,
    RetriesExhaustedError,
    RetryStoppedError,
)

__all__ = [
    "CloudClientError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "ServiceError",
    "FunctionError",
    "RetriesExhaustedError",
    "RetryStoppedError",
]
