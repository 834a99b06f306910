"""Main client interface for Amp SDK."""

import asyncio
from typing import Any, Callable, Dict, Mapping, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config.constants import API_PREFIX, REGISTRATION_PATH, SENTINEL_AMP_TOKEN
from ..core.ids import generate_random_string
from ..core.routing import AgentPool
from ..errors import ConfigError, RegistrationError, TransportError
from ..models.options import AmpOptions, SessionOptions, load_options
from ..observability.logging import AmpLogger
from ..transport import ErrorMapper, HttpxTransport, Transport, TransportResponse
from .session import Session


logger = AmpLogger("client")


class AmpClient:
    """
    Handle bound to one amp project.

    The client owns the agent pool and the shared transport and is the
    factory for sessions. It holds no per-user state, so a single instance
    can serve many concurrent sessions. Use ``AmpClient.create`` to validate
    options and register the project with every agent:

        async with await AmpClient.create({"project_key": key, "agents": [url]}) as amp:
            session = amp.create_session(user_id="XYZ")
            response = await session.decide("Decide", candidates)
    """

    def __init__(
        self,
        options: Union[AmpOptions, Mapping[str, Any]],
        transport: Optional[Transport] = None,
        id_generator: Optional[Callable[[], str]] = None
    ):
        """
        Initialize the client without contacting any agent.

        Args:
            options: AmpOptions or a mapping of option values
            transport: Optional transport; an HttpxTransport is created if omitted
            id_generator: Optional generator for user and session ids

        Raises:
            ConfigError: If the options are invalid
        """
        self.options = load_options(options)
        self.pool = AgentPool(self.options.agents)
        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(
            timeout_ms=self.options.timeout_ms,
            max_keepalive_connections=self.options.max_keepalive_connections,
            idle_timeout_ms=self.options.idle_timeout_ms,
        )
        self._id_generator = id_generator or generate_random_string

    @classmethod
    async def create(
        cls,
        options: Union[AmpOptions, Mapping[str, Any]],
        transport: Optional[Transport] = None,
        id_generator: Optional[Callable[[], str]] = None
    ) -> "AmpClient":
        """
        Validate options, build the client and register the project.

        Raises:
            ConfigError: If the options are invalid (nothing is sent)
            RegistrationError: If any agent rejects or can't be reached for registration
        """
        client = cls(options, transport=transport, id_generator=id_generator)
        if client.options.register_project:
            try:
                await client.register()
            except Exception:
                await client.aclose()
                raise
        return client

    @classmethod
    async def from_env(cls, transport: Optional[Transport] = None, **overrides) -> "AmpClient":
        """Create a client from AMP_* environment variables."""
        return await cls.create(AmpOptions.from_env(**overrides), transport=transport)

    async def register(self) -> None:
        """
        Tell every agent about the project and its session lifetime.

        Raises:
            RegistrationError: On the first agent that fails
        """
        lifetime_seconds = self.options.session_lifetime_ms // 1000
        for agent in self.pool.endpoints:
            url = httpx.URL(
                f"{agent}{REGISTRATION_PATH}/{self.options.project_key}",
                params={"session_life_time": str(lifetime_seconds)},
            )
            try:
                with logger.track_request("register", agent):
                    response = await self.send("GET", str(url), None, self.options.timeout_ms)
                    if not response.ok:
                        raise ErrorMapper.map_status(response)
            except TransportError as e:
                raise RegistrationError(
                    f"registering project with {agent} failed: {e}",
                    agent=agent,
                    original_error=e
                ) from e

    def create_session(self, options: Optional[SessionOptions] = None, **kwargs) -> Session:
        """
        Create a session for one user interaction.

        Args:
            options: SessionOptions; alternatively pass its fields as keyword arguments

        Returns:
            Session with generated ids and client defaults filled in

        Raises:
            ConfigError: If the options are invalid, or given both ways
        """
        if options is not None and kwargs:
            raise ConfigError(
                f"pass SessionOptions or keyword arguments, not both (got {', '.join(sorted(kwargs))})"
            )
        if options is None:
            try:
                options = SessionOptions(**kwargs)
            except PydanticValidationError as e:
                raise ConfigError(f"invalid session options: {e}") from e

        amp_token = options.amp_token or ""
        if self.options.dont_use_tokens:
            amp_token = SENTINEL_AMP_TOKEN

        return Session(
            client=self,
            user_id=options.user_id or self._id_generator(),
            session_id=options.session_id or self._id_generator(),
            amp_token=amp_token,
            timeout_ms=options.timeout_ms or self.options.timeout_ms,
            session_lifetime_ms=options.session_lifetime_ms or self.options.session_lifetime_ms,
        )

    def select_agent(self, user_id: str) -> str:
        """Agent responsible for ``user_id``."""
        return self.pool.select(user_id)

    def endpoint_url(self, agent: str, operation: str) -> str:
        return f"{agent}{API_PREFIX}/{self.options.project_key}/{operation}"

    @property
    def headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", **self.options.headers}

    async def send(
        self,
        method: str,
        url: str,
        body: Optional[bytes],
        timeout_ms: int
    ) -> TransportResponse:
        """
        Execute one request, cancelling it if ``timeout_ms`` elapses.

        Raises:
            TransportError: For connection failures and timeouts
        """
        try:
            return await asyncio.wait_for(
                self.transport.execute(method, url, self.headers, body, timeout_ms),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError as e:
            raise ErrorMapper.map_httpx_error(e, url) from e

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "AmpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"AmpClient(project_key={self.options.project_key!r}, agents={list(self.pool.endpoints)!r})"
