"""
Cloud Retry - Transports.

Single-attempt HTTP transports used by the retry driver.
"""

from .base import AsyncTransport, Transport, TransportResponse
from .httpx_transport import AsyncHttpxTransport, HttpxTransport

__all__ = [
    "Transport",
    "AsyncTransport",
    "TransportResponse",
    "HttpxTransport",
    "AsyncHttpxTransport",
]
