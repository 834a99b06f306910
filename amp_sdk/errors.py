"""
Exception hierarchy for Amp SDK.

ConfigError and RegistrationError are raised while building an AmpClient.
ValidationError subclasses are raised before a request is sent.
TransportError and DecodeError describe failed exchanges with an agent;
decide calls absorb them into a fallback decision, observe calls raise them.
"""

from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    """Classification of failed agent exchanges."""
    NETWORK = "network"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    UNKNOWN = "unknown"


class AmpError(Exception):
    pass


class ConfigError(AmpError):
    pass


class RegistrationError(AmpError):
    """
    Raised when the one-time project registration with an agent fails.

    Attributes:
        agent: Base URL of the agent that rejected the registration
        original_error: The underlying TransportError
    """

    def __init__(self, message: str, agent: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.agent = agent
        self.original_error = original_error


class ValidationError(AmpError):
    pass


class EmptyContextError(ValidationError):
    pass


class CandidateOverflowError(ValidationError):
    pass


class TransportError(AmpError):
    """
    A request to an agent failed on the wire.

    Attributes:
        message: Error message
        status_code: HTTP status code if the agent answered
        category: ErrorCategory of the failure
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.category = category
        self.original_error = original_error


class DecodeError(AmpError):
    pass
