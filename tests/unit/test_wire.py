"""Unit tests for agent request/response bodies."""

import json

import pytest

from amp_sdk.errors import ValidationError
from amp_sdk.models.wire import AgentRequest, AgentResponse, DecisionRequest


def observe_request(**overrides):
    fields = dict(user_id="u1", session_id="s1", index=3, ts=1700000000000, session_lifetime=1800000)
    fields.update(overrides)
    return AgentRequest(**fields)


class TestAgentRequest:

    def test_camel_case_and_omitted_fields(self):
        body = json.loads(observe_request(name="Click").to_payload())
        assert body == {
            "userId": "u1",
            "sessionId": "s1",
            "name": "Click",
            "index": 3,
            "ts": 1700000000000,
            "sessionLifetime": 1800000,
        }

    def test_decision_group(self):
        request = observe_request(
            decision_name="Decide",
            amp_token="tok",
            decision=DecisionRequest(candidates=[{"color": ["red"]}]),
        )
        body = json.loads(request.to_payload())
        assert body["decisionName"] == "Decide"
        assert body["ampToken"] == "tok"
        assert body["decision"] == {"limit": 1, "candidates": [{"color": ["red"]}]}

    def test_none_property_values_are_kept(self):
        body = json.loads(observe_request(name="Click", properties={"referrer": None}).to_payload())
        assert body["properties"] == {"referrer": None}

    def test_unserializable_properties(self):
        request = observe_request(name="Click", properties={"when": object()})
        with pytest.raises(ValidationError):
            request.to_payload()


class TestAgentResponse:

    def test_parse(self):
        response = AgentResponse.model_validate_json(b'{"ampToken": "t", "decision": "{}", "extra": 1}')
        assert response.amp_token == "t"
        assert response.decision == "{}"

    def test_missing_fields(self):
        response = AgentResponse.model_validate_json(b'{"ampToken": null}')
        assert response.amp_token is None
        assert response.decision is None
