from __future__ import annotations

import threading
from dataclasses import dataclass, field


class ThroughputAccumulator:
    """Count of generated metrics shared by every sender thread."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def add(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass
class WorkerStats:
    worker_id: int
    connected: bool = False
    generated: int = 0
    batches_sent: int = 0
    batches_failed: int = 0
    bytes_sent: int = 0
    error: str | None = None


@dataclass
class RunSummary:
    """Outcome of one run.

    ``total_generated`` counts metrics at generation time, so lines left in an
    unflushed batch at the deadline, or dropped by a failed send, are included.
    The rate is therefore an intent-to-send rate, not delivered throughput.
    """

    total_generated: int
    duration_s: float
    elapsed_s: float
    workers: list[WorkerStats] = field(default_factory=list)

    @property
    def metrics_per_second(self) -> float:
        return self.total_generated / self.duration_s

    @property
    def connected_workers(self) -> int:
        return sum(1 for worker in self.workers if worker.connected)


__all__ = ["RunSummary", "ThroughputAccumulator", "WorkerStats"]
