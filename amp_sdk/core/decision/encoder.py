"""
Candidate cross-product encoding.

A list of candidate fields spans a combinatorial space whose size is the
product of the option counts. Each combination has an index in [0, N)
read as a mixed-radix number: the first field is the least significant
digit and each field's option count is its base.
"""

from typing import Any, Dict, List, Mapping, Sequence

from ...config.constants import DECIDE_LIMIT, DECIDE_UPPER_LIMIT, FALLBACK_INDEX
from ...errors import CandidateOverflowError
from ...models.decision import CandidateField
from ...models.wire import DecisionRequest


def combination_count(fields: Sequence[CandidateField]) -> int:
    """Number of distinct combinations the fields can produce."""
    count = 1
    for field in fields:
        count *= len(field.values)
    return count


def decode_index(fields: Sequence[CandidateField], index: int) -> Dict[str, Any]:
    """Map a combination index back to one value per field.

    Args:
        fields: Candidate fields, least significant first
        index: Combination index in [0, combination_count(fields))

    Returns:
        Dict mapping each field name to its selected value
    """
    total = combination_count(fields)
    if not 0 <= index < total:
        raise IndexError(f"combination index {index} out of range [0, {total})")

    decision: Dict[str, Any] = {}
    partial = index
    for field in fields:
        decision[field.name] = field.values[partial % len(field.values)]
        partial //= len(field.values)
    return decision


def encode_index(fields: Sequence[CandidateField], decision: Mapping[str, Any]) -> int:
    """Inverse of decode_index.

    Raises:
        KeyError: If a field is missing from the decision
        ValueError: If a decided value is not one of the field's options
    """
    index = 0
    radix = 1
    for field in fields:
        index += field.values.index(decision[field.name]) * radix
        radix *= len(field.values)
    return index


def fallback_decision(fields: Sequence[CandidateField]) -> Dict[str, Any]:
    """Decision used when the agent can't provide one: the first value of every field."""
    return decode_index(fields, FALLBACK_INDEX)


def check_candidate_limit(fields: Sequence[CandidateField]) -> int:
    """Return the combination count, rejecting spaces larger than DECIDE_UPPER_LIMIT."""
    count = combination_count(fields)
    if count > DECIDE_UPPER_LIMIT:
        raise CandidateOverflowError(
            f"can't have more than {DECIDE_UPPER_LIMIT} candidates, got {count}"
        )
    return count


def build_candidate_group(fields: Sequence[CandidateField], limit: int = DECIDE_LIMIT) -> DecisionRequest:
    """Build the single candidate group sent with a decide call."""
    group: Dict[str, List[Any]] = {field.name: list(field.values) for field in fields}
    return DecisionRequest(limit=limit, candidates=[group])
