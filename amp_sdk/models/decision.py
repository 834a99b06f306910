from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CandidateField(BaseModel):
    """One axis of a decision: a name and its mutually exclusive options."""
    name: str = Field(..., min_length=1, description="Field name in the decision")
    values: List[Any] = Field(..., min_length=1, description="Ordered option values")


class DecideResponse(BaseModel):
    """Result of a decide call.

    When ``fallback`` is true the decision was computed locally and
    ``failure_reason`` describes why the agent's answer could not be used.
    """
    decision: Dict[str, Any]
    amp_token: str = ""
    fallback: bool = False
    failure_reason: Optional[str] = None
