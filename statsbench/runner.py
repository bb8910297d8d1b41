from __future__ import annotations

import logging
import threading
import time

from .config import BenchSettings
from .corpus import MetricCorpus
from .counter import RunSummary, ThroughputAccumulator
from .sender import Connector, SenderWorker, open_udp_connection, warn_if_oversized

LOGGER = logging.getLogger("statsbench.runner")


class RunCoordinator:
    """Start the sender pool, stop it at the deadline and join every thread."""

    def __init__(
        self,
        settings: BenchSettings,
        corpus: MetricCorpus,
        connect: Connector = open_udp_connection,
    ) -> None:
        self._settings = settings
        self._corpus = corpus
        self._connect = connect

    def run(self) -> RunSummary:
        settings = self._settings
        warn_if_oversized(self._corpus, settings.batch_size)
        accumulator = ThroughputAccumulator()
        stop_event = threading.Event()

        workers = [
            SenderWorker(
                worker_id=idx,
                settings=settings,
                corpus=self._corpus,
                accumulator=accumulator,
                stop_event=stop_event,
                connect=self._connect,
            )
            for idx in range(settings.concurrency)
        ]
        threads = [
            threading.Thread(target=worker.run, name=f"statsbench-sender-{worker.stats.worker_id}")
            for worker in workers
        ]

        LOGGER.info(
            "Sending to %s with %d worker(s), batch size %d, for %.3fs",
            settings.address_label,
            settings.concurrency,
            settings.batch_size,
            settings.duration_seconds,
        )

        started_at = time.monotonic()
        deadline = threading.Timer(settings.duration_seconds, stop_event.set)
        deadline.daemon = True
        deadline.start()
        try:
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()
        finally:
            deadline.cancel()
            stop_event.set()
        elapsed = time.monotonic() - started_at

        summary = RunSummary(
            total_generated=accumulator.value,
            duration_s=settings.duration_seconds,
            elapsed_s=elapsed,
            workers=[worker.stats for worker in workers],
        )
        LOGGER.info(
            "Run finished after %.3fs: %d metric(s) from %d/%d connected worker(s)",
            elapsed,
            summary.total_generated,
            summary.connected_workers,
            settings.concurrency,
        )
        return summary


def run_benchmark(
    settings: BenchSettings,
    corpus: MetricCorpus,
    connect: Connector = open_udp_connection,
) -> RunSummary:
    return RunCoordinator(settings, corpus, connect=connect).run()


__all__ = ["RunCoordinator", "run_benchmark"]
