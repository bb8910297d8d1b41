from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import (
    DEFAULT_ADDRESS,
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONCURRENCY,
    DEFAULT_DURATION,
    BenchSettings,
    parse_address,
    parse_duration,
)
from .corpus import load_corpus
from .errors import ConfigurationError, CorpusUnavailable
from .logs import configure_logging, shutdown_logging
from .report import print_summary, write_workers_csv
from .runner import run_benchmark

LOGGER = logging.getLogger("statsbench.main")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="statsbench",
        description="Measure statsd-over-UDP ingestion throughput",
    )
    parser.add_argument(
        "-b",
        "--batch-size",
        type=int,
        help=f"the number of metrics to batch before sending (default {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=int,
        help=f"the number of concurrent connections (default {DEFAULT_CONCURRENCY})",
    )
    parser.add_argument(
        "-a",
        "--address",
        help=f"host:port of the metrics server (default {DEFAULT_ADDRESS})",
    )
    parser.add_argument(
        "-d",
        "--duration",
        help=f"how long the benchmark will last, e.g. 500ms, 30s, 1m (default {DEFAULT_DURATION})",
    )
    parser.add_argument(
        "-f",
        "--metrics-file",
        help="newline-delimited metrics to choose from (default: bundled sample)",
    )
    parser.add_argument("--seed", type=int, help="seed for reproducible metric selection")
    parser.add_argument("--output-csv", help="write per-worker statistics to this CSV file")
    parser.add_argument("--chart", help="render a per-worker throughput chart to this PNG file")
    parser.add_argument("--log-level", help="Logging level (default INFO)")
    parser.add_argument("--log-path", help="also write log records to this file")
    return parser.parse_args(argv)


def _env_positive_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        parsed = int(value)
        if parsed <= 0:
            raise ValueError("non-positive value")
    except ValueError:
        print(f"invalid {name} value {value!r}; defaulting to {default}", file=sys.stderr)
        return default
    return parsed


def build_settings(args: argparse.Namespace) -> BenchSettings:
    """Resolve flags over ``STATSBENCH_*`` variables.

    Bad flag values raise ``ConfigurationError``; bad environment values fall
    back to the defaults with a notice on stderr.
    """
    env = os.environ

    batch_size = args.batch_size
    if batch_size is None:
        batch_size = _env_positive_int("STATSBENCH_BATCH_SIZE", DEFAULT_BATCH_SIZE)

    concurrency = args.concurrency
    if concurrency is None:
        concurrency = _env_positive_int("STATSBENCH_CONCURRENCY", DEFAULT_CONCURRENCY)

    seed = args.seed
    if seed is None:
        seed_str = env.get("STATSBENCH_SEED")
        if seed_str:
            try:
                seed = int(seed_str)
            except ValueError:
                print(
                    f"invalid STATSBENCH_SEED value {seed_str!r}; using a random seed",
                    file=sys.stderr,
                )

    if args.address:
        host, port = parse_address(args.address)
    else:
        address_str = env.get("STATSBENCH_ADDRESS", DEFAULT_ADDRESS)
        try:
            host, port = parse_address(address_str)
        except ConfigurationError:
            print(
                f"invalid STATSBENCH_ADDRESS value {address_str!r}; defaulting to {DEFAULT_ADDRESS}",
                file=sys.stderr,
            )
            host, port = parse_address(DEFAULT_ADDRESS)

    if args.duration:
        duration = parse_duration(args.duration)
    else:
        duration_str = env.get("STATSBENCH_DURATION", DEFAULT_DURATION)
        try:
            duration = parse_duration(duration_str)
            if duration <= 0:
                raise ConfigurationError("non-positive duration")
        except ConfigurationError:
            print(
                f"invalid STATSBENCH_DURATION value {duration_str!r}; defaulting to {DEFAULT_DURATION}",
                file=sys.stderr,
            )
            duration = parse_duration(DEFAULT_DURATION)

    metrics_file = args.metrics_file or env.get("STATSBENCH_METRICS_FILE")
    return BenchSettings(
        batch_size=batch_size,
        concurrency=concurrency,
        host=host,
        port=port,
        duration_seconds=duration,
        seed=seed,
        metrics_file=Path(metrics_file) if metrics_file else None,
    )


def run(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    env = os.environ

    log_path_value = args.log_path or env.get("STATSBENCH_LOG_PATH")
    listener = configure_logging(
        args.log_level or env.get("STATSBENCH_LOG_LEVEL", "INFO"),
        log_path=Path(log_path_value) if log_path_value else None,
    )
    try:
        try:
            settings = build_settings(args)
        except ConfigurationError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

        try:
            corpus = load_corpus(settings.metrics_file)
        except CorpusUnavailable as exc:
            print(f"error: {exc} message: reading metrics file", file=sys.stderr)
            return 1

        summary = run_benchmark(settings, corpus)

        output_csv = args.output_csv or env.get("STATSBENCH_OUTPUT_CSV")
        if output_csv:
            write_workers_csv(summary, Path(output_csv))

        chart = args.chart or env.get("STATSBENCH_CHART")
        if chart:
            from .charts import render_worker_chart

            render_worker_chart(summary, Path(chart))
    finally:
        shutdown_logging(listener)

    print_summary(summary)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
