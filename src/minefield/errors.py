"""
Exception types raised by the minefield engine.
"""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Board dimensions or mine count cannot produce a playable board."""


class CorruptSnapshot(MinefieldError, ValueError):
    """Persisted game state is incomplete or malformed."""
