from __future__ import annotations

import logging
import threading

import pytest

from statsbench.corpus import MetricCorpus
from statsbench.errors import ConnectionSetupFailed


class FakeConnection:
    """In-memory stand-in for a connected UDP socket."""

    def __init__(self, fail_every: int = 0) -> None:
        self.datagrams: list[bytes] = []
        self.close_count = 0
        self.writes_after_close = 0
        self._fail_every = fail_every
        self._attempts = 0

    def send(self, data: bytes) -> int:
        if self.close_count:
            self.writes_after_close += 1
        self._attempts += 1
        if self._fail_every and self._attempts % self._fail_every == 0:
            raise OSError("simulated send failure")
        self.datagrams.append(data)
        return len(data)

    def close(self) -> None:
        self.close_count += 1


class RecordingConnector:
    def __init__(self, fail_every: int = 0) -> None:
        self.connections: list[FakeConnection] = []
        self.addresses: list[tuple[str, int]] = []
        self._fail_every = fail_every
        self._lock = threading.Lock()

    def __call__(self, address: tuple[str, int]) -> FakeConnection:
        conn = FakeConnection(self._fail_every)
        with self._lock:
            self.addresses.append(address)
            self.connections.append(conn)
        return conn


class FailingConnector:
    def __init__(self) -> None:
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, address: tuple[str, int]) -> FakeConnection:
        with self._lock:
            self.calls += 1
        raise ConnectionSetupFailed(f"error connecting to {address[0]}:{address[1]}: refused")


@pytest.fixture
def two_line_corpus() -> MetricCorpus:
    return MetricCorpus.from_lines(["a:1|c", "b:2|c"])


@pytest.fixture
def recording_connector() -> RecordingConnector:
    return RecordingConnector()


@pytest.fixture(autouse=True)
def restore_statsbench_logger():
    logger = logging.getLogger("statsbench")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(level)
