"""
Consistent-hash selection of amp agents.

Every agent owns several virtual points on a 32-bit ring. A key is routed
to the agent owning the first point clockwise from the key's hash, so the
same user keeps hitting the same agent and adding or removing an agent only
moves the keys that land next to its points.
"""

import bisect
import hashlib
from typing import Iterable, List, Tuple

from ...config.constants import VIRTUAL_NODES_PER_AGENT
from ...errors import ConfigError


def _hash(key: str) -> int:
    return int.from_bytes(hashlib.md5(key.encode("utf-8")).digest()[:4], "big")


class AgentPool:
    """Immutable hash ring over a set of agent endpoints.

    Endpoint changes produce a new pool through ``with_endpoint`` and
    ``without_endpoint``; an existing pool never changes, so it can be
    shared freely between sessions and threads.
    """

    def __init__(self, endpoints: Iterable[str], replicas: int = VIRTUAL_NODES_PER_AGENT):
        """
        Build the ring.

        Args:
            endpoints: Agent identifiers (usually base URLs); duplicates are ignored
            replicas: Number of virtual points per endpoint

        Raises:
            ConfigError: If no endpoint is given
        """
        unique: List[str] = []
        for endpoint in endpoints:
            if endpoint not in unique:
                unique.append(endpoint)
        if not unique:
            raise ConfigError("agent pool needs at least one endpoint")
        if replicas < 1:
            raise ConfigError("agent pool needs at least one virtual point per endpoint")

        self._endpoints: Tuple[str, ...] = tuple(unique)
        self._replicas = replicas

        points = sorted(
            (_hash(f"{endpoint}-{i}"), endpoint)
            for endpoint in self._endpoints
            for i in range(replicas)
        )
        self._hashes: Tuple[int, ...] = tuple(h for h, _ in points)
        self._owners: Tuple[str, ...] = tuple(e for _, e in points)

    @property
    def endpoints(self) -> Tuple[str, ...]:
        return self._endpoints

    def __len__(self) -> int:
        return len(self._endpoints)

    def __contains__(self, endpoint: object) -> bool:
        return endpoint in self._endpoints

    def __repr__(self) -> str:
        return f"AgentPool({list(self._endpoints)!r})"

    def select(self, key: str) -> str:
        """Return the endpoint responsible for ``key``."""
        position = bisect.bisect_right(self._hashes, _hash(key))
        if position == len(self._hashes):
            position = 0
        return self._owners[position]

    def with_endpoint(self, endpoint: str) -> "AgentPool":
        """New pool that also contains ``endpoint``."""
        return AgentPool(self._endpoints + (endpoint,), self._replicas)

    def without_endpoint(self, endpoint: str) -> "AgentPool":
        """New pool without ``endpoint``.

        Raises:
            ConfigError: If that would leave the pool empty
        """
        return AgentPool((e for e in self._endpoints if e != endpoint), self._replicas)
