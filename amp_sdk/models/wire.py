"""JSON bodies exchanged with amp agents."""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config.constants import DECIDE_LIMIT
from ..errors import ValidationError


class DecisionRequest(BaseModel):
    """Candidate group sent with decide calls."""
    limit: int = DECIDE_LIMIT
    candidates: List[Dict[str, List[Any]]]


class AgentRequest(BaseModel):
    """Request body shared by decide, decideWithContext and observe."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    session_id: str = Field(..., alias="sessionId")
    decision_name: Optional[str] = Field(None, alias="decisionName")
    name: Optional[str] = None
    index: int
    ts: int
    amp_token: Optional[str] = Field(None, alias="ampToken")
    session_lifetime: int = Field(..., alias="sessionLifetime")
    properties: Optional[Dict[str, Any]] = None
    decision: Optional[DecisionRequest] = None

    def to_payload(self) -> bytes:
        """Serialize to JSON, leaving out unset optional fields."""
        data = self.model_dump(by_alias=True)
        # Only top-level fields are optional; property values pass through untouched
        body = {k: v for k, v in data.items() if v is not None}
        try:
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise ValidationError(f"request can't be encoded as JSON: {e}") from e


class AgentResponse(BaseModel):
    """Response body from an agent. ``decision`` is itself JSON encoded."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    amp_token: Optional[str] = Field(None, alias="ampToken")
    decision: Optional[str] = None
