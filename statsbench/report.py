from __future__ import annotations

import dataclasses
import logging
import sys
from pathlib import Path
from typing import TextIO

import pandas as pd

from .counter import RunSummary

LOGGER = logging.getLogger("statsbench.report")

WORKER_COLUMNS = [
    "worker_id",
    "connected",
    "generated",
    "batches_sent",
    "batches_failed",
    "bytes_sent",
    "metrics_per_second",
    "error",
]


def print_summary(summary: RunSummary, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    print(f"metrics sent: {summary.total_generated}", file=out)
    print(f"metrics per second: {summary.metrics_per_second:.2f}", file=out)


def workers_dataframe(summary: RunSummary) -> pd.DataFrame:
    """One row per sender, rates computed against the configured duration."""
    rows = [dataclasses.asdict(worker) for worker in summary.workers]
    if not rows:
        return pd.DataFrame(columns=WORKER_COLUMNS)

    df = pd.DataFrame(rows)
    df["metrics_per_second"] = df["generated"] / summary.duration_s
    return df[WORKER_COLUMNS]


def write_workers_csv(summary: RunSummary, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    df = workers_dataframe(summary)
    df.to_csv(path, index=False)
    LOGGER.info("Saved per-worker results to %s (%d rows)", path, len(df))
    return path


__all__ = ["WORKER_COLUMNS", "print_summary", "workers_dataframe", "write_workers_csv"]
