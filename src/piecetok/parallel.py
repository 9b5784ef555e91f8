"""Parallel processing mode helpers for batch tokenization."""

import os
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import TYPE_CHECKING, Literal

from .errors import StrategyError
from .types import Token

if TYPE_CHECKING:
    from ._models.base import Model

ParallelStrategy = Literal["auto", "batch", "chunk", "off"]


class ParallelMode(str, Enum):
    """Named parallelization modes for batch tokenization."""

    AUTO = "auto"
    BATCH = "batch"
    CHUNK = "chunk"
    OFF = "off"

    @classmethod
    def get(cls, name: str) -> "ParallelMode":
        """Get parallel mode by name (case-insensitive)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise StrategyError(
                "unknown mode",
                invalid_name=name,
                available=[mode.value for mode in cls],
            )


def list_parallel_modes() -> list[str]:
    """Return available parallel mode names."""
    return [mode.value for mode in ParallelMode]


def run_batch(
    model: "Model",
    words: list[str],
    num_workers: int | None = None,
    parallel_mode: ParallelMode = ParallelMode.AUTO,
) -> list[list[Token]]:
    """
    Tokenize ``words`` with ``model``, optionally across a thread pool.

    Models are read-only once built, so workers share one instance without
    locking. A single word is never split across workers, hence "chunk"
    behaves like "off".
    """
    if num_workers is None:
        workers = os.cpu_count() or 1
    else:
        workers = max(1, num_workers)

    def process_batch() -> list[list[Token]]:
        """Tokenize all words concurrently at the batch level."""
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(model.tokenize, words))

    match parallel_mode:
        case ParallelMode.OFF | ParallelMode.CHUNK:
            return [model.tokenize(word) for word in words]
        case ParallelMode.BATCH:
            return process_batch()
        case ParallelMode.AUTO:
            if len(words) <= 1 or workers == 1:
                return [model.tokenize(word) for word in words]
            return process_batch()


def tokenize_batch(
    model: "Model",
    words: list[str],
    num_workers: int | None = None,
    parallel_mode: ParallelStrategy = "auto",
) -> list[list[Token]]:
    """Tokenize many words with optional parallel processing mode."""
    return model.tokenize_batch(
        words,
        num_workers=num_workers,
        parallel_mode=ParallelMode.get(parallel_mode),
    )


__all__ = [
    "ParallelStrategy",
    "ParallelMode",
    "list_parallel_modes",
    "run_batch",
    "tokenize_batch",
]
