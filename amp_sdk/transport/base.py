"""
Base Transport Interface

This module defines the abstract base class for the request executor used
to talk to amp agents. The default implementation is HttpxTransport; tests
and applications with their own HTTP stack can provide another one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class TransportResponse:
    """Status and raw body of a completed exchange."""
    status_code: int
    content: bytes = b""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(ABC):
    """
    Abstract request executor.

    A transport is responsible for:
    - Sending one request and returning its status and body
    - Bounding the exchange by the given timeout
    - Raising TransportError for connection failures and timeouts

    A transport should NOT:
    - Interpret status codes (a non-200 answer is still a response)
    - Retry requests
    """

    @abstractmethod
    async def execute(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        timeout_ms: Optional[int] = None
    ) -> TransportResponse:
        """
        Execute a single request.

        Args:
            method: HTTP method ("GET", "POST")
            url: Absolute URL including any query string
            headers: Request headers
            body: Raw request body
            timeout_ms: Bound on the whole exchange in milliseconds

        Returns:
            TransportResponse with the status code and body

        Raises:
            TransportError: For connection errors and timeouts
        """
        pass

    async def aclose(self) -> None:
        """Release pooled resources. The default implementation holds none."""
        return None
