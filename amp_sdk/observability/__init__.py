"""Observability helpers for Amp SDK."""

from .logging import AmpLogger

__all__ = ["AmpLogger"]
