"""Configuration constants for Amp SDK."""

from .constants import (
    DECIDE_UPPER_LIMIT,
    DEFAULT_SESSION_LIFETIME_MS,
    DEFAULT_TIMEOUT_MS,
    SENTINEL_AMP_TOKEN,
)

__all__ = [
    "DECIDE_UPPER_LIMIT",
    "DEFAULT_SESSION_LIFETIME_MS",
    "DEFAULT_TIMEOUT_MS",
    "SENTINEL_AMP_TOKEN",
]
