from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .errors import CorpusUnavailable

LOGGER = logging.getLogger("statsbench.corpus")

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_METRICS_FILE_NAME = "sample_metrics.txt"
BUNDLED_METRICS_PATH = BASE_DIR / "data" / DEFAULT_METRICS_FILE_NAME


@dataclass(frozen=True)
class MetricCorpus:
    """Read-only, index-addressable set of metric lines used as payloads."""

    lines: tuple[str, ...]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "MetricCorpus":
        kept = tuple(line.strip() for line in lines if line.strip())
        if not kept:
            raise CorpusUnavailable("metric corpus contains no non-empty lines")
        return cls(lines=kept)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    def __contains__(self, line: object) -> bool:
        return line in self.lines


def load_corpus(path: Path | str | None = None) -> MetricCorpus:
    """Read a newline-delimited metrics file, skipping blank rows.

    Falls back to the corpus bundled with the package when ``path`` is None.
    """
    corpus_path = Path(path) if path is not None else BUNDLED_METRICS_PATH
    try:
        text = corpus_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusUnavailable(f"unable to read metrics file {corpus_path}: {exc}") from exc

    try:
        corpus = MetricCorpus.from_lines(text.splitlines())
    except CorpusUnavailable as exc:
        raise CorpusUnavailable(f"metrics file {corpus_path} has no metrics") from exc

    LOGGER.info("Loaded %d metrics from %s", len(corpus), corpus_path)
    return corpus


class RandomSelector:
    """Uniform draws over a corpus with a private random source."""

    def __init__(self, corpus: MetricCorpus, rng: random.Random | None = None) -> None:
        self._lines = corpus.lines
        self._size = len(corpus.lines)
        self._rng = rng or random.Random()

    def choose(self) -> str:
        return self._lines[self._rng.randrange(self._size)]


__all__ = [
    "BUNDLED_METRICS_PATH",
    "DEFAULT_METRICS_FILE_NAME",
    "MetricCorpus",
    "RandomSelector",
    "load_corpus",
]
