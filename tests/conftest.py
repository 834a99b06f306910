"""Shared pytest fixtures for Amp SDK tests."""

import pytest

from amp_sdk import AmpClient, CandidateField
from tests.helpers.agent_mocks import FakeTransport


PROJECT_KEY = "6f97ea165d886458"
AGENTS = ["http://agent-a:8100", "http://agent-b:8100"]


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests over HttpxTransport")


@pytest.fixture
def amp_options():
    """Client options that skip registration."""
    return {
        "project_key": PROJECT_KEY,
        "agents": list(AGENTS),
        "register_project": False,
    }


@pytest.fixture
def fake_transport():
    """Transport answering every request with a token and no decision."""
    return FakeTransport()


@pytest.fixture
def client(amp_options, fake_transport):
    """Client wired to the fake transport."""
    return AmpClient(amp_options, transport=fake_transport)


@pytest.fixture
def sample_candidates():
    """color x count, six combinations."""
    return [
        CandidateField(name="color", values=["red", "green", "blue"]),
        CandidateField(name="count", values=[10, 100]),
    ]
