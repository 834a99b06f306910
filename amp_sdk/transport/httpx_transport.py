from typing import Mapping, Optional

import httpx

from ..config.constants import DEFAULT_IDLE_TIMEOUT_MS, DEFAULT_MAX_KEEPALIVE_CONNECTIONS, DEFAULT_TIMEOUT_MS
from ..observability.logging import AmpLogger
from .base import Transport, TransportResponse
from .errors import ErrorMapper


logger = AmpLogger("transport")


class HttpxTransport(Transport):
    """Transport over a shared httpx.AsyncClient connection pool.

    One instance is meant to serve every session of a client, so the pool
    keeps thousands of idle keep-alive connections and reclaims them after
    ``idle_timeout_ms``.
    """

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_keepalive_connections: int = DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
        idle_timeout_ms: int = DEFAULT_IDLE_TIMEOUT_MS,
        client: Optional[httpx.AsyncClient] = None
    ):
        self._timeout_ms = timeout_ms
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_ms / 1000),
            limits=httpx.Limits(
                max_connections=None,
                max_keepalive_connections=max_keepalive_connections,
                keepalive_expiry=idle_timeout_ms / 1000,
            ),
        )

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def execute(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        timeout_ms: Optional[int] = None
    ) -> TransportResponse:
        timeout = (timeout_ms or self._timeout_ms) / 1000
        try:
            response = await self._client.request(
                method,
                url,
                headers=dict(headers or {}),
                content=body,
                timeout=timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = ErrorMapper.map_httpx_error(e, url)
            logger.debug(
                "Transport failure",
                method=method,
                url=url,
                **ErrorMapper.get_error_classification(error)
            )
            raise error from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            reason=response.reason_phrase,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
