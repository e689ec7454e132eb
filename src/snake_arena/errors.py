"""Exceptions raised by the arena core."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a session is built from invalid settings."""


class EmptyBodyError(RuntimeError):
    """Raised when shrinking a snake would leave it without a body.

    This signals a logic bug in the turn engine, not a game outcome.
    """
