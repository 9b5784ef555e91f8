"""
Line-oriented vocabulary persistence.

One token per line, UTF-8, and the zero-based line index is the token id.
Only vocabularies whose ids are already dense and zero-based survive a
write/read round trip unchanged.
"""

import logging
from pathlib import Path
from typing import Final

from .errors import ModelLoadError
from .types import Vocab

VOCAB_SUFFIX: Final[str] = "vocab.txt"

log = logging.getLogger(__name__)


def vocab_filename(name: str | None = None) -> str:
    """Return ``<name>-vocab.txt``, or ``vocab.txt`` when no name is given."""
    if name:
        return f"{name}-{VOCAB_SUFFIX}"
    return VOCAB_SUFFIX


def read_vocab(path: str | Path) -> Vocab:
    """
    Read a vocabulary file into a token -> id mapping.

    :param path: Path to the vocabulary file.
    :return: Mapping where each token's id is its zero-based line number.
    :raises ModelLoadError: If the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise ModelLoadError("vocab filepath does not exist", model_path=str(path))

    log.info(f"loading vocab from {path}")

    vocab: Vocab = {}
    # split on "\n" only; a stray "\r" is trailing whitespace and gets trimmed
    with path.open("r", encoding="utf-8", newline="\n") as f:
        for index, line in enumerate(f):
            vocab[line.rstrip()] = index

    log.debug(f"loaded {len(vocab)} tokens")
    return vocab


def write_vocab(vocab: Vocab, folder: str | Path, name: str | None = None) -> Path:
    """
    Write ``vocab`` to ``folder`` sorted ascending by id, one token per line.

    :param vocab: Token -> id mapping to persist.
    :param folder: Output directory, created when missing.
    :param name: Optional file name prefix.
    :return: Path of the written file.
    """
    vocab_path = Path(folder) / vocab_filename(name)
    vocab_path.parent.mkdir(parents=True, exist_ok=True)

    log.debug(f"saving {len(vocab)} tokens to {vocab_path}")

    ordered = sorted(vocab.items(), key=lambda item: item[1])
    with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
        for token, _ in ordered:
            f.write(f"{token}\n")

    return vocab_path


__all__ = ["VOCAB_SUFFIX", "vocab_filename", "read_vocab", "write_vocab"]
