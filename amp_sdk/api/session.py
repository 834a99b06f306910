"""Session: correlation state and the decide/observe calls for one user interaction."""

import json
import threading
import time
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from ..config.constants import DECIDE_PATH, DECIDE_WITH_CONTEXT_PATH, OBSERVE_PATH, SENTINEL_AMP_TOKEN
from ..core.decision import build_candidate_group, check_candidate_limit, fallback_decision
from ..errors import DecodeError, EmptyContextError, TransportError, ValidationError
from ..models.decision import CandidateField, DecideResponse
from ..models.wire import AgentRequest, AgentResponse, DecisionRequest
from ..observability.logging import AmpLogger
from ..transport import ErrorMapper

if TYPE_CHECKING:
    from .client import AmpClient


logger = AmpLogger("session")

Candidates = Union[Sequence[CandidateField], Mapping[str, Sequence[Any]]]


def _as_fields(candidates: Candidates) -> List[CandidateField]:
    """Accept either CandidateFields or a name -> values mapping."""
    if isinstance(candidates, Mapping):
        try:
            return [CandidateField(name=name, values=list(values)) for name, values in candidates.items()]
        except PydanticValidationError as e:
            raise ValidationError(f"invalid candidates: {e}") from e
    return list(candidates)


def _decode_decision(response: AgentResponse) -> Dict[str, Any]:
    try:
        decision = json.loads(response.decision or "")
    except ValueError as e:
        raise DecodeError(f"can't unmarshal decision: {e}") from e
    if not isinstance(decision, dict):
        raise DecodeError(f"decision is not a JSON object: {response.decision!r}")
    return decision


class Session:
    """
    One logical user session.

    Every call increments the event index by one and sends the current amp
    token; the agent's token is adopted from successful responses. If two
    calls on the same session run concurrently the response that arrives
    last decides the token, so callers that need a deterministic token
    sequence must serialize calls on a session.

    Attributes:
        user_id: Affinity key; all calls go to the agent chosen for it
        session_id: Session identifier sent with every call
        amp_token: Current continuation token ("" until the first response)
        timeout_ms: Default timeout for calls on this session
        session_lifetime_ms: Lifetime reported to the agent
    """

    def __init__(
        self,
        client: "AmpClient",
        user_id: str,
        session_id: str,
        amp_token: str = "",
        timeout_ms: int = 0,
        session_lifetime_ms: int = 0
    ):
        self._client = client
        self.user_id = user_id
        self.session_id = session_id
        self.amp_token = amp_token
        self.timeout_ms = timeout_ms
        self.session_lifetime_ms = session_lifetime_ms
        self._index = 0
        self._index_lock = threading.Lock()

    @property
    def client(self) -> "AmpClient":
        return self._client

    @property
    def index(self) -> int:
        """Index of the last dispatched call (0 before the first one)."""
        return self._index

    def _next_index(self) -> int:
        with self._index_lock:
            self._index += 1
            return self._index

    def _resolve_timeout(self, timeout_ms: int) -> int:
        return timeout_ms or self.timeout_ms or self._client.options.timeout_ms

    def _build_request(
        self,
        name: Optional[str] = None,
        properties: Optional[Dict[str, Any]] = None,
        decision_name: Optional[str] = None,
        decision: Optional[DecisionRequest] = None
    ) -> AgentRequest:
        return AgentRequest(
            user_id=self.user_id,
            session_id=self.session_id,
            decision_name=decision_name or None,
            name=name or None,
            index=self._next_index(),
            ts=int(time.time() * 1000),
            amp_token=self.amp_token or None,
            session_lifetime=self.session_lifetime_ms,
            properties=dict(properties) if properties else None,
            decision=decision,
        )

    async def _call_agent(self, agent: str, operation: str, request: AgentRequest,
                          timeout_ms: int) -> AgentResponse:
        url = self._client.endpoint_url(agent, operation)
        response = await self._client.send("POST", url, request.to_payload(), timeout_ms)
        if not response.ok:
            raise ErrorMapper.map_status(response)
        try:
            return AgentResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            raise DecodeError(f"error unmarshalling response from server: {e}") from e

    def _adopt_token(self, response: AgentResponse) -> None:
        if not response.amp_token:
            logger.warning("Received a response with no amp token", session_id=self.session_id)
        elif self._client.options.dont_use_tokens:
            self.amp_token = SENTINEL_AMP_TOKEN
        else:
            self.amp_token = response.amp_token

    async def decide(
        self,
        decision_name: str,
        candidates: Candidates,
        timeout_ms: int = 0
    ) -> DecideResponse:
        """
        Ask the agent to pick one combination of candidate values.

        Args:
            decision_name: Name of the decision
            candidates: CandidateFields, or a mapping of field name to options
            timeout_ms: Call timeout; 0 uses the session default

        Returns:
            DecideResponse; ``fallback`` is set when the agent's answer couldn't be used

        Raises:
            CandidateOverflowError: If the candidates span more than 50 combinations
        """
        return await self._decide(DECIDE_PATH, None, None, decision_name, candidates, timeout_ms)

    async def decide_with_context(
        self,
        context_name: str,
        context_properties: Optional[Dict[str, Any]],
        decision_name: str,
        candidates: Candidates,
        timeout_ms: int = 0
    ) -> DecideResponse:
        """
        Same as ``decide``, sending a named context along with the decision.

        Raises:
            EmptyContextError: If ``context_name`` is empty
            CandidateOverflowError: If the candidates span more than 50 combinations
        """
        if not context_name:
            raise EmptyContextError("context name can't be empty")
        return await self._decide(
            DECIDE_WITH_CONTEXT_PATH, context_name, context_properties,
            decision_name, candidates, timeout_ms
        )

    async def _decide(
        self,
        operation: str,
        context_name: Optional[str],
        context_properties: Optional[Dict[str, Any]],
        decision_name: str,
        candidates: Candidates,
        timeout_ms: int
    ) -> DecideResponse:
        fields = _as_fields(candidates)
        check_candidate_limit(fields)

        request = self._build_request(
            name=context_name,
            properties=context_properties,
            decision_name=decision_name,
            decision=build_candidate_group(fields),
        )
        agent = self._client.select_agent(self.user_id)

        with logger.track_request(operation, agent, session_id=self.session_id) as info:
            try:
                response = await self._call_agent(agent, operation, request, self._resolve_timeout(timeout_ms))
                decision = _decode_decision(response)
            except (TransportError, DecodeError) as e:
                logger.log_fallback(decision_name, str(e), self.session_id, info['request_id'])
                return DecideResponse(
                    decision=fallback_decision(fields),
                    amp_token=self.amp_token,
                    fallback=True,
                    failure_reason=str(e),
                )

            self._adopt_token(response)
            return DecideResponse(decision=decision, amp_token=self.amp_token, fallback=False)

    async def observe(
        self,
        event_name: str,
        properties: Optional[Dict[str, Any]] = None,
        timeout_ms: int = 0
    ) -> str:
        """
        Report an outcome event to the agent.

        Args:
            event_name: Name of the event (e.g. "Click")
            properties: Optional event properties
            timeout_ms: Call timeout; 0 uses the session default

        Returns:
            The session's amp token after the call

        Raises:
            EmptyContextError: If ``event_name`` is empty
            TransportError: If the agent can't be reached or answers with an error
            DecodeError: If the agent's response body can't be parsed
        """
        if not event_name:
            raise EmptyContextError("event name can't be empty")

        request = self._build_request(name=event_name, properties=properties)
        agent = self._client.select_agent(self.user_id)

        with logger.track_request(OBSERVE_PATH, agent, session_id=self.session_id):
            response = await self._call_agent(agent, OBSERVE_PATH, request, self._resolve_timeout(timeout_ms))

        self._adopt_token(response)
        return self.amp_token

    def __repr__(self) -> str:
        return f"Session(user_id={self.user_id!r}, session_id={self.session_id!r}, index={self._index})"
