"""
Base model interface for subword tokenization implementations.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..parallel import ParallelMode, run_batch
from ..types import Token, Vocab

if TYPE_CHECKING:
    from ..trainer import WordPieceTrainer

log = logging.getLogger(__name__)


class SubwordModel(Protocol):
    """Another subword model a WordPiece can be derived from."""

    def vocabulary(self) -> Vocab: ...

    def unknown_token(self) -> str | None: ...

    def continuing_subword_prefix(self) -> str | None: ...


class Model(ABC):
    """
    Abstract base class for subword models.

    A model is built once and never mutated afterwards: every method here is
    a read-only query, safe to call from many threads at once.
    """

    MODEL_TYPE: str = "base"

    @abstractmethod
    def tokenize(self, sequence: str) -> list[Token]:
        """Split one pre-tokenized word into pieces."""
        ...

    @abstractmethod
    def vocabulary(self) -> Vocab:
        """Return a copy of the token -> id mapping."""
        ...

    def vocabulary_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.vocabulary())

    @abstractmethod
    def token_to_id(self, token: str) -> int | None:
        """Return the id of ``token`` or ``None`` when unknown."""
        ...

    @abstractmethod
    def id_to_token(self, id: int) -> str | None:
        """Return the token for ``id`` or ``None`` when unknown."""
        ...

    @abstractmethod
    def save(self, folder: str | Path, name: str | None = None) -> list[Path]:
        """Persist the model under ``folder`` and return the written paths."""
        ...

    @abstractmethod
    def trainer(self) -> "WordPieceTrainer":
        """Return a fresh trainer bound to this model's conventions."""
        ...

    def tokenize_batch(
        self,
        words: list[str],
        num_workers: int | None = None,
        parallel_mode: ParallelMode = ParallelMode.AUTO,
    ) -> list[list[Token]]:
        """
        Tokenize multiple words, in input order.

        :param words: Pre-tokenized words.
        :param num_workers: Thread count for batch-level parallel mode.
        :param parallel_mode: Batch parallelization mode selection.
        :raises MissingUnkTokenError: If any word needs the missing unknown token.
        """
        if not words:
            return []
        log.debug(f"tokenizing {len(words)} words ({parallel_mode.value})")
        return run_batch(self, words, num_workers, parallel_mode)


__all__ = ["Model", "SubwordModel"]
