"""
Structured logging utility for Amp SDK components.

This module provides a consistent logging interface for the client, the
sessions and the transport, with standard fields like session_id, agent
and request_id.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Optional


class AmpLogger:
    """Structured logger for Amp SDK components."""

    def __init__(self, component: str):
        """
        Initialize logger for a specific component.

        Args:
            component: Name of the component (e.g., "session", "client")
        """
        self.component = component
        self.logger = logging.getLogger(f"amp_sdk.{component}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"component={self.component}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, **kwargs):
        """Log debug message with structured fields."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message with structured fields."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message with structured fields."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, error: Optional[Exception] = None, **kwargs):
        """Log error message with structured fields."""
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(self._format_message(message, **kwargs))

    @contextmanager
    def track_request(self, method: str, agent: str, session_id: Optional[str] = None,
                      request_id: Optional[str] = None):
        """
        Context manager to track request timing and log key events.

        Args:
            method: The operation being called (e.g., "decide", "observe")
            agent: Base URL of the selected agent
            session_id: Session the request belongs to
            request_id: Optional request ID (generated if not provided)

        Yields:
            Dict with request metadata including request_id
        """
        if request_id is None:
            request_id = str(uuid.uuid4())[:8]

        start_time = time.time()

        self.debug(
            f"Starting {method} request",
            agent=agent,
            session_id=session_id,
            request_id=request_id
        )

        metadata: Dict[str, Any] = {
            'request_id': request_id,
            'agent': agent,
            'method': method,
            'start_time': start_time
        }

        try:
            yield metadata

            duration = time.time() - start_time
            self.info(
                f"Completed {method} request",
                agent=agent,
                session_id=session_id,
                request_id=request_id,
                duration_ms=int(duration * 1000)
            )

        except Exception as e:
            duration = time.time() - start_time
            self.error(
                f"Failed {method} request",
                agent=agent,
                session_id=session_id,
                request_id=request_id,
                duration_ms=int(duration * 1000),
                error=e
            )
            raise

    def log_fallback(self, decision_name: str, reason: str, session_id: str,
                     request_id: Optional[str] = None):
        """Log a locally computed fallback decision."""
        self.warning(
            "Using fallback decision",
            decision=decision_name,
            session_id=session_id,
            request_id=request_id,
            reason=reason
        )
