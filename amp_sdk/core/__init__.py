"""Core protocol logic for Amp SDK.

This package contains:
- routing: consistent-hash agent selection
- decision: candidate encoding and fallback decisions
- ids: random identifier generation
"""

from .decision import combination_count, decode_index, encode_index, fallback_decision
from .ids import generate_random_string
from .routing import AgentPool

__all__ = [
    "AgentPool",
    "combination_count",
    "decode_index",
    "encode_index",
    "fallback_decision",
    "generate_random_string",
]
