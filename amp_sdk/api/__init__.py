"""Public client API for Amp SDK."""

from .client import AmpClient
from .session import Session

__all__ = ["AmpClient", "Session"]
