from __future__ import annotations

import logging
import random
import socket
import threading
from typing import Callable, Protocol

from .config import MAX_DATAGRAM_BYTES, BenchSettings
from .corpus import MetricCorpus, RandomSelector
from .counter import ThroughputAccumulator, WorkerStats
from .errors import ConnectionSetupFailed, TransmissionFailed

LOGGER = logging.getLogger("statsbench.sender")


class Connection(Protocol):
    def send(self, data: bytes) -> int: ...

    def close(self) -> None: ...


Connector = Callable[[tuple[str, int]], Connection]


def open_udp_connection(address: tuple[str, int]) -> socket.socket:
    """Return a datagram socket connected to ``address``.

    Connecting a UDP socket only fixes the peer; no packet is exchanged.
    """
    host, port = address
    try:
        family, sock_type, proto, _, sockaddr = socket.getaddrinfo(
            host, port, type=socket.SOCK_DGRAM
        )[0]
        sock = socket.socket(family, sock_type, proto)
    except (OSError, UnicodeError) as exc:
        raise ConnectionSetupFailed(f"error connecting to {host}:{port}: {exc}") from exc
    try:
        sock.connect(sockaddr)
    except OSError as exc:
        sock.close()
        raise ConnectionSetupFailed(f"error connecting to {host}:{port}: {exc}") from exc
    return sock


class SenderWorker:
    """Fire random corpus lines at the endpoint in batches until stopped."""

    def __init__(
        self,
        worker_id: int,
        settings: BenchSettings,
        corpus: MetricCorpus,
        accumulator: ThroughputAccumulator,
        stop_event: threading.Event,
        connect: Connector = open_udp_connection,
    ) -> None:
        self._settings = settings
        self._corpus = corpus
        self._accumulator = accumulator
        self._stop_event = stop_event
        self._connect = connect
        seed = None if settings.seed is None else settings.seed + worker_id
        self._selector = RandomSelector(corpus, random.Random(seed))
        self.stats = WorkerStats(worker_id=worker_id)

    def run(self) -> WorkerStats:
        try:
            conn = self._connect(self._settings.address)
        except ConnectionSetupFailed as exc:
            self.stats.error = str(exc)
            LOGGER.error("worker %d: %s", self.stats.worker_id, exc)
            return self.stats

        self.stats.connected = True
        try:
            self._send_loop(conn)
        finally:
            conn.close()
        return self.stats

    def _send_loop(self, conn: Connection) -> None:
        batch_size = self._settings.batch_size
        buffer = bytearray()
        batch_count = 0

        while not self._stop_event.is_set():
            buffer += self._selector.choose().encode("utf-8")
            buffer += b"\n"
            self._accumulator.add(1)
            self.stats.generated += 1
            batch_count += 1

            if batch_count == batch_size:
                try:
                    self._flush(conn, buffer)
                except TransmissionFailed as exc:
                    self.stats.batches_failed += 1
                    LOGGER.warning("worker %d: %s", self.stats.worker_id, exc)
                buffer.clear()
                batch_count = 0

    def _flush(self, conn: Connection, buffer: bytearray) -> None:
        payload = bytes(buffer)
        try:
            conn.send(payload)
        except OSError as exc:
            raise TransmissionFailed(
                f"error writing {len(payload)} bytes to socket: {exc}"
            ) from exc
        self.stats.batches_sent += 1
        self.stats.bytes_sent += len(payload)


def estimate_batch_bytes(corpus: MetricCorpus, batch_size: int) -> int:
    """Largest datagram a batch of ``batch_size`` lines could produce."""
    longest = max(len(line.encode("utf-8")) for line in corpus.lines)
    return (longest + 1) * batch_size


def warn_if_oversized(corpus: MetricCorpus, batch_size: int) -> bool:
    estimate = estimate_batch_bytes(corpus, batch_size)
    if estimate <= MAX_DATAGRAM_BYTES:
        return False
    LOGGER.warning(
        "batches of %d metrics may reach %d bytes, above the %d byte UDP limit; "
        "oversized sends will be counted as transmission failures",
        batch_size,
        estimate,
        MAX_DATAGRAM_BYTES,
    )
    return True


__all__ = [
    "Connection",
    "Connector",
    "SenderWorker",
    "estimate_batch_bytes",
    "open_udp_connection",
    "warn_if_oversized",
]
