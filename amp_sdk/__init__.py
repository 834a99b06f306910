"""
Amp SDK - thin client for amp decision agents.

This package lets an application obtain personalization decisions from
amp agents and report outcome events back to them:
- Consistent-hash routing keeps each user on the same agent
- Sessions carry the user id, session id, event index and amp token
- Decide calls fall back to a deterministic local decision when the
  agent can't be reached or answers with something unusable
"""

__version__ = "0.1.0"

from .api.client import AmpClient
from .api.session import Session
from .core.decision import combination_count, decode_index, encode_index, fallback_decision
from .core.routing import AgentPool
from .errors import (
    AmpError,
    CandidateOverflowError,
    ConfigError,
    DecodeError,
    EmptyContextError,
    ErrorCategory,
    RegistrationError,
    TransportError,
    ValidationError,
)
from .models import AmpOptions, CandidateField, DecideResponse, SessionOptions
from .transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    # Main client
    "AmpClient",
    "Session",

    # Configuration
    "AmpOptions",
    "SessionOptions",

    # Decisions
    "CandidateField",
    "DecideResponse",
    "combination_count",
    "decode_index",
    "encode_index",
    "fallback_decision",

    # Routing
    "AgentPool",

    # Transport
    "Transport",
    "TransportResponse",
    "HttpxTransport",

    # Errors
    "AmpError",
    "ConfigError",
    "RegistrationError",
    "ValidationError",
    "EmptyContextError",
    "CandidateOverflowError",
    "TransportError",
    "DecodeError",
    "ErrorCategory",
]
