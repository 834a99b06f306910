"""End-to-end tests through HttpxTransport against a simulated agent."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from amp_sdk import AmpClient, CandidateField, RegistrationError, TransportError
from amp_sdk.transport import HttpxTransport


PROJECT_KEY = "6f97ea165d886458"
AGENTS = ["http://agent-a:8100", "http://agent-b:8100"]
CANDIDATES = [
    CandidateField(name="color", values=["red", "green", "blue"]),
    CandidateField(name="count", values=[10, 100]),
]


class SimulatedAgent:
    """Minimal agent: registers projects, picks the last combination, issues tokens."""

    def __init__(self):
        self.registrations = []
        self.calls = []
        self.tokens = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith("/test/update_from_spa/"):
            self.registrations.append((request.url.host, parse_qs(request.url.query.decode())))
            return httpx.Response(200, text="ok")

        body = json.loads(request.content)
        self.calls.append((request.url.host, path, body))
        self.tokens += 1
        answer = {"ampToken": f"{body['sessionId']}-{self.tokens}"}
        if "decision" in body:
            group = body["decision"]["candidates"][0]
            answer["decision"] = json.dumps({name: values[-1] for name, values in group.items()})
        return httpx.Response(200, json=answer)


def httpx_transport(handler):
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.integration
class TestEndToEnd:
    """Full client/session flow over HTTP."""

    @pytest.mark.asyncio
    async def test_decide_and_observe(self):
        agent = SimulatedAgent()
        client = await AmpClient.create(
            {"project_key": PROJECT_KEY, "agents": AGENTS},
            transport=httpx_transport(agent)
        )

        assert [host for host, _ in agent.registrations] == ["agent-a", "agent-b"]
        assert agent.registrations[0][1] == {"session_life_time": ["1800"]}

        session = client.create_session(user_id="XYZ", session_id="S")
        response = await session.decide_with_context(
            "AmpSession", {"browser_height": 1740, "browser_width": 360}, "Decide", CANDIDATES, 3000
        )

        assert response.fallback is False
        assert response.decision == {"color": "blue", "count": 100}
        assert response.amp_token == "S-1"

        token = await session.observe("Click", {"url": "google.com", "pageNumber": 1})
        assert token == "S-2"

        hosts = {host for host, _, _ in agent.calls}
        assert len(hosts) == 1
        assert [path for _, path, _ in agent.calls] == [
            f"/api/core/v2/{PROJECT_KEY}/decideWithContextV2",
            f"/api/core/v2/{PROJECT_KEY}/observeV2",
        ]
        assert agent.calls[1][2]["ampToken"] == "S-1"
        assert [body["index"] for _, _, body in agent.calls] == [1, 2]

    @pytest.mark.asyncio
    async def test_backend_down(self):
        def unreachable(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = AmpClient(
            {"project_key": PROJECT_KEY, "agents": AGENTS, "register_project": False},
            transport=httpx_transport(unreachable)
        )
        session = client.create_session(user_id="u1")

        response = await session.decide("Decide", CANDIDATES)

        assert response.fallback is True
        assert response.decision == {"color": "red", "count": 10}
        assert response.amp_token == ""

        with pytest.raises(TransportError) as exc_info:
            await session.observe("Click")
        assert "connection refused" in str(exc_info.value)
        assert session.amp_token == ""
        assert session.index == 2

    @pytest.mark.asyncio
    async def test_registration_rejected(self):
        transport = httpx_transport(lambda r: httpx.Response(403, text="unknown project"))

        with pytest.raises(RegistrationError) as exc_info:
            await AmpClient.create({"project_key": PROJECT_KEY, "agents": AGENTS}, transport=transport)

        assert "403" in str(exc_info.value)
        assert "unknown project" in str(exc_info.value)
