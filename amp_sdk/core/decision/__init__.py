"""Decision layer: candidate encoding and fallback decisions."""

from .encoder import (
    build_candidate_group,
    check_candidate_limit,
    combination_count,
    decode_index,
    encode_index,
    fallback_decision,
)

__all__ = [
    "build_candidate_group",
    "check_candidate_limit",
    "combination_count",
    "decode_index",
    "encode_index",
    "fallback_decision",
]
