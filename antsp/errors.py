from __future__ import annotations


class ACOError(Exception):
    """Base class for solver errors."""


class ConfigurationError(ACOError, ValueError):
    """Bad parameters or input matrix, reported before any simulation work."""


class InternalConsistencyError(ACOError, RuntimeError):
    """The probability model broke; the current run cannot continue."""
