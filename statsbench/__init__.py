"""
UDP throughput benchmark for statsd-compatible metric servers.

A pool of sender threads fires random lines from a metric corpus at the
target in batched datagrams for a fixed duration, then reports how many
metrics were generated and the resulting metrics-per-second rate.
"""

from .config import BenchSettings
from .corpus import MetricCorpus, RandomSelector, load_corpus
from .counter import RunSummary, ThroughputAccumulator, WorkerStats
from .errors import (
    ConfigurationError,
    ConnectionSetupFailed,
    CorpusUnavailable,
    StatsBenchError,
    TransmissionFailed,
)
from .runner import RunCoordinator, run_benchmark
from .sender import SenderWorker

__all__ = [
    "BenchSettings",
    "ConfigurationError",
    "ConnectionSetupFailed",
    "CorpusUnavailable",
    "MetricCorpus",
    "RandomSelector",
    "RunCoordinator",
    "RunSummary",
    "SenderWorker",
    "StatsBenchError",
    "ThroughputAccumulator",
    "TransmissionFailed",
    "WorkerStats",
    "load_corpus",
    "run_benchmark",
]
