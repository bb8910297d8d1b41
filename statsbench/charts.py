from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import seaborn as sns

from .counter import RunSummary
from .report import workers_dataframe

LOGGER = logging.getLogger("statsbench.charts")

sns.set_style("whitegrid")
plt.rcParams["figure.dpi"] = 100
plt.rcParams["savefig.dpi"] = 300
plt.rcParams["font.size"] = 10
plt.rcParams["axes.labelsize"] = 11
plt.rcParams["axes.titlesize"] = 13

CONNECTED_COLOR = "#2E86AB"
FAILED_COLOR = "#C73E1D"


def render_worker_chart(summary: RunSummary, chart_path: Path) -> Path:
    """Bar chart of metrics/second per sender, failed connections in red."""
    df = workers_dataframe(summary)
    chart_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(max(6, 0.6 * len(df) + 2), 6))
    labels = [f"#{worker_id}" for worker_id in df["worker_id"]]
    colors = [CONNECTED_COLOR if ok else FAILED_COLOR for ok in df["connected"]]

    bars = ax.bar(
        labels,
        df["metrics_per_second"],
        color=colors,
        alpha=0.8,
        edgecolor="white",
        linewidth=2,
    )
    ax.set_xlabel("Sender", fontweight="semibold")
    ax.set_ylabel("Throughput (metrics/s)", fontweight="semibold")
    ax.set_title(
        f"{summary.total_generated} metrics in {summary.duration_s:g}s "
        f"({summary.metrics_per_second:.1f} metrics/s)",
        fontweight="bold",
        pad=15,
    )
    ax.grid(True, alpha=0.3, axis="y", linestyle="--")

    if len(df) <= 16:
        for bar in bars:
            height = bar.get_height()
            ax.text(
                bar.get_x() + bar.get_width() / 2.0,
                height,
                f"{height:.0f}",
                ha="center",
                va="bottom",
                fontweight="semibold",
            )

    plt.tight_layout()
    fig.savefig(chart_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    LOGGER.info("Rendered chart %s", chart_path)
    return chart_path


__all__ = ["render_worker_chart"]
