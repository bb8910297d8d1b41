from __future__ import annotations

import io

import pandas as pd
import pytest

from statsbench.counter import RunSummary, WorkerStats
from statsbench.report import WORKER_COLUMNS, print_summary, workers_dataframe, write_workers_csv


@pytest.fixture
def summary() -> RunSummary:
    return RunSummary(
        total_generated=300,
        duration_s=2.0,
        elapsed_s=2.05,
        workers=[
            WorkerStats(worker_id=0, connected=True, generated=200, batches_sent=20, bytes_sent=1_400),
            WorkerStats(worker_id=1, connected=True, generated=100, batches_sent=9, batches_failed=1, bytes_sent=630),
            WorkerStats(worker_id=2, connected=False, error="error connecting to host:1: refused"),
        ],
    )


def test_print_summary_format(summary):
    out = io.StringIO()

    print_summary(summary, out)

    assert out.getvalue() == "metrics sent: 300\nmetrics per second: 150.00\n"


def test_workers_dataframe(summary):
    df = workers_dataframe(summary)

    assert list(df.columns) == WORKER_COLUMNS
    assert list(df["worker_id"]) == [0, 1, 2]
    assert list(df["metrics_per_second"]) == [100.0, 50.0, 0.0]
    assert df["generated"].sum() == summary.total_generated
    assert df.loc[2, "connected"] == False  # noqa: E712


def test_workers_dataframe_without_workers():
    df = workers_dataframe(RunSummary(total_generated=0, duration_s=1.0, elapsed_s=1.0))

    assert df.empty
    assert list(df.columns) == WORKER_COLUMNS


def test_write_workers_csv(summary, tmp_path):
    path = write_workers_csv(summary, tmp_path / "out" / "workers.csv")

    df = pd.read_csv(path)
    assert len(df) == 3
    assert df["batches_failed"].tolist() == [0, 1, 0]


def test_render_worker_chart(summary, tmp_path):
    from statsbench.charts import render_worker_chart

    path = render_worker_chart(summary, tmp_path / "workers.png")

    assert path.exists()
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
