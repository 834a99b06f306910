"""Data models for Amp SDK."""

from .decision import CandidateField, DecideResponse
from .options import AmpOptions, SessionOptions, load_options
from .wire import AgentRequest, AgentResponse, DecisionRequest

__all__ = [
    # Configuration
    "AmpOptions",
    "SessionOptions",
    "load_options",

    # Decisions
    "CandidateField",
    "DecideResponse",

    # Wire format
    "AgentRequest",
    "AgentResponse",
    "DecisionRequest",
]
