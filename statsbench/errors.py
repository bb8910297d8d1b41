from __future__ import annotations


class StatsBenchError(Exception):
    """Base class for every error raised by the benchmark."""


class ConfigurationError(StatsBenchError):
    """Raised when the run settings cannot describe a valid benchmark."""


class CorpusUnavailable(StatsBenchError):
    """Raised when the metric corpus is missing, unreadable or empty."""


class ConnectionSetupFailed(StatsBenchError):
    """Raised when a sender cannot open its UDP connection."""


class TransmissionFailed(StatsBenchError):
    """Raised when a batch could not be written to the connection."""


__all__ = [
    "StatsBenchError",
    "ConfigurationError",
    "CorpusUnavailable",
    "ConnectionSetupFailed",
    "TransmissionFailed",
]
