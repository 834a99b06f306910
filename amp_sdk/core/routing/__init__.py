"""Routing layer: agent selection by user affinity."""

from .agent_pool import AgentPool

__all__ = ["AgentPool"]
