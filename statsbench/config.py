from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

DEFAULT_BATCH_SIZE = 100
DEFAULT_CONCURRENCY = 10
DEFAULT_ADDRESS = "127.0.0.1:8125"
DEFAULT_DURATION = "30s"

# Largest payload a single IPv4 UDP datagram can carry.
MAX_DATAGRAM_BYTES = 65_507

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse ``30s``, ``500ms``, ``1m30s`` or a bare number of seconds."""
    text = value.strip()
    if not text:
        raise ConfigurationError("duration must not be empty")
    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ConfigurationError(f"invalid duration {value!r}")
        return seconds

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if position != len(text):
        raise ConfigurationError(f"invalid duration {value!r}")
    return total


def parse_address(value: str) -> tuple[str, int]:
    host, sep, port_str = value.strip().rpartition(":")
    if not sep or not host:
        raise ConfigurationError(f"address {value!r} must look like host:port")
    host = host.strip("[]")
    try:
        port = int(port_str)
    except ValueError as exc:
        raise ConfigurationError(f"invalid port in address {value!r}") from exc
    if not 0 < port < 65_536:
        raise ConfigurationError(f"port out of range in address {value!r}")
    return host, port


@dataclass(frozen=True)
class BenchSettings:
    """Everything a run needs, handed to the coordinator and every sender."""

    batch_size: int = DEFAULT_BATCH_SIZE
    concurrency: int = DEFAULT_CONCURRENCY
    host: str = "127.0.0.1"
    port: int = 8125
    duration_seconds: float = 30.0
    seed: int | None = None
    metrics_file: Path | None = None

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ConfigurationError("batch size must be > 0")
        if self.concurrency <= 0:
            raise ConfigurationError("concurrency must be > 0")
        if self.duration_seconds <= 0:
            raise ConfigurationError("duration must be > 0")

    @property
    def address(self) -> tuple[str, int]:
        return self.host, self.port

    @property
    def address_label(self) -> str:
        return f"{self.host}:{self.port}"


__all__ = [
    "BenchSettings",
    "DEFAULT_ADDRESS",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_DURATION",
    "MAX_DATAGRAM_BYTES",
    "parse_address",
    "parse_duration",
]
