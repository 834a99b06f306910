"""Transport layer for talking to amp agents.

Transport is the abstract request executor; HttpxTransport is the default
implementation backed by a shared httpx connection pool.
"""

from .base import Transport, TransportResponse
from .errors import ErrorMapper
from .httpx_transport import HttpxTransport

__all__ = [
    "Transport",
    "TransportResponse",
    "ErrorMapper",
    "HttpxTransport",
]
