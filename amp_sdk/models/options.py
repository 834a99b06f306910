"""
Client and session configuration models.

All durations are integer milliseconds. A value of 0 means "use the
default": the client falls back to the SDK defaults, a session falls back
to its client's values.
"""

import os
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..config.constants import (
    ALLOWED_AGENT_SCHEMES,
    DEFAULT_IDLE_TIMEOUT_MS,
    DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
    DEFAULT_SESSION_LIFETIME_MS,
    DEFAULT_TIMEOUT_MS,
    ENV_AGENTS,
    ENV_DONT_USE_TOKENS,
    ENV_PROJECT_KEY,
    ENV_SESSION_LIFETIME_MS,
    ENV_TIMEOUT_MS,
)
from ..errors import ConfigError


class AmpOptions(BaseModel):
    """Validated configuration for an AmpClient."""

    model_config = ConfigDict(frozen=True)

    project_key: str = Field(..., description="Project the client is bound to")
    agents: List[str] = Field(..., description="Base URLs of the amp agents")
    timeout_ms: int = Field(
        default=0, ge=0, validate_default=True, description="Default request timeout"
    )
    session_lifetime_ms: int = Field(
        default=0, ge=0, validate_default=True, description="Default session lifetime"
    )
    dont_use_tokens: bool = Field(
        default=False,
        description="Replace server issued amp tokens with a fixed sentinel"
    )
    register_project: bool = Field(
        default=True,
        description="Register the project with every agent when the client is created"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers sent with every request (e.g. credentials)"
    )
    max_keepalive_connections: int = Field(default=DEFAULT_MAX_KEEPALIVE_CONNECTIONS, ge=1)
    idle_timeout_ms: int = Field(default=DEFAULT_IDLE_TIMEOUT_MS, ge=0)

    @field_validator('project_key')
    def validate_project_key(cls, v):
        if not v:
            raise ValueError("project key can't be empty")
        # Used verbatim as one URL path segment
        if any(c in v for c in "/?#"):
            raise ValueError("project key can't contain '/', '?' or '#'")
        try:
            httpx.URL(f"http://agent/{v}")
        except httpx.InvalidURL as e:
            raise ValueError(f"project key is not usable in a URL: {e}")
        return v

    @field_validator('agents')
    def validate_agents(cls, v):
        if not v:
            raise ValueError("agents can't be empty")
        agents = []
        for agent in v:
            try:
                url = httpx.URL(agent)
            except httpx.InvalidURL as e:
                raise ValueError(f'agent "{agent}" is not a valid URL: {e}')
            if url.scheme not in ALLOWED_AGENT_SCHEMES or not url.host:
                raise ValueError(f'agent "{agent}" must start with http or https')
            agent = agent.rstrip("/")
            if agent not in agents:
                agents.append(agent)
        return agents

    @field_validator('timeout_ms')
    def default_timeout(cls, v):
        return v or DEFAULT_TIMEOUT_MS

    @field_validator('session_lifetime_ms')
    def default_session_lifetime(cls, v):
        return v or DEFAULT_SESSION_LIFETIME_MS

    @classmethod
    def from_env(cls, **overrides) -> "AmpOptions":
        """
        Build options from AMP_* environment variables.

        Keyword arguments take precedence over the environment.

        Raises:
            ConfigError: If the resulting options are invalid
        """
        data: Dict[str, Any] = {}
        if os.getenv(ENV_PROJECT_KEY) is not None:
            data["project_key"] = os.getenv(ENV_PROJECT_KEY)
        if os.getenv(ENV_AGENTS):
            data["agents"] = [a.strip() for a in os.environ[ENV_AGENTS].split(",") if a.strip()]
        if os.getenv(ENV_TIMEOUT_MS):
            data["timeout_ms"] = os.environ[ENV_TIMEOUT_MS]
        if os.getenv(ENV_SESSION_LIFETIME_MS):
            data["session_lifetime_ms"] = os.environ[ENV_SESSION_LIFETIME_MS]
        if os.getenv(ENV_DONT_USE_TOKENS):
            data["dont_use_tokens"] = os.environ[ENV_DONT_USE_TOKENS].lower() in ("1", "true", "yes")
        data.update(overrides)
        return load_options(data)


class SessionOptions(BaseModel):
    """Optional per-session settings; unset values are filled in by the client."""

    user_id: Optional[str] = None
    session_id: Optional[str] = None
    amp_token: Optional[str] = None
    timeout_ms: int = Field(default=0, ge=0)
    session_lifetime_ms: int = Field(default=0, ge=0)


def load_options(options: Union[AmpOptions, Mapping[str, Any]]) -> AmpOptions:
    """Validate raw client options, raising ConfigError instead of pydantic errors."""
    if isinstance(options, AmpOptions):
        return options
    try:
        return AmpOptions.model_validate(dict(options))
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"invalid amp options: {messages}") from e
