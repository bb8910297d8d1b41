from __future__ import annotations

import logging
import logging.handlers
import queue
import sys
from pathlib import Path
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: str = "INFO",
    log_path: Path | None = None,
    stream: TextIO | None = None,
) -> logging.handlers.QueueListener:
    """Route every ``statsbench`` record through one queue-draining thread.

    Sender threads only enqueue records; the returned listener is the single
    writer, so lines from concurrent workers never interleave. Callers must
    ``stop()`` the listener to flush pending records.
    """
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = []
    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logger = logging.getLogger("statsbench")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.addHandler(logging.handlers.QueueHandler(records))

    listener = logging.handlers.QueueListener(records, *handlers)
    listener.start()
    return listener


def shutdown_logging(listener: logging.handlers.QueueListener) -> None:
    listener.stop()
    for handler in listener.handlers:
        handler.close()


__all__ = ["LOG_FORMAT", "configure_logging", "shutdown_logging"]
