"""
WordPiece model: greedy longest-match-first segmentation over a prefix trie.

See https://static.googleusercontent.com/media/research.google.com/en//pubs/archive/37842.pdf
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Final

from typing_extensions import deprecated, override

from ..errors import MissingUnkTokenError
from ..trainer import WordPieceTrainer
from ..trie import Trie
from ..types import Token, Vocab, VocabR
from ..vocab import read_vocab, write_vocab
from .base import Model, SubwordModel

DEFAULT_UNK_TOKEN: Final[str] = "[UNK]"
DEFAULT_CONTINUING_SUBWORD_PREFIX: Final[str] = "##"
DEFAULT_MAX_INPUT_CHARS_PER_WORD: Final[int] = 100
# marks the start of a word inside the trie, never part of the output
SENTINEL: Final[str] = "▁"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordPieceConfig:
    """Settings a `WordPieceBuilder` turns into a `WordPiece`."""

    files: str | None = None
    vocab: Vocab = field(default_factory=dict)
    unk_token: str = DEFAULT_UNK_TOKEN
    continuing_subword_prefix: str = DEFAULT_CONTINUING_SUBWORD_PREFIX
    max_input_chars_per_word: int = DEFAULT_MAX_INPUT_CHARS_PER_WORD


class WordPieceBuilder:
    """
    Fluent builder for `WordPiece` models.

    Every setter returns a new builder, so a partially configured builder can
    be shared and specialised without the holders seeing each other's changes.

    .. code-block:: python

        model = (
            WordPiece.builder()
            .vocab({"[UNK]": 0, "play": 1, "##ing": 2})
            .max_input_chars_per_word(50)
            .build()
        )
    """

    def __init__(self, config: WordPieceConfig | None = None) -> None:
        self.config = config if config is not None else WordPieceConfig()

    def _with(self, **changes) -> "WordPieceBuilder":
        # each builder owns its vocab dict
        changes.setdefault("vocab", dict(self.config.vocab))
        return WordPieceBuilder(replace(self.config, **changes))

    def configure(self, **options) -> "WordPieceBuilder":
        """
        Apply keyword options through the matching setters.

        :raises TypeError: If an option does not name a setter.
        """
        builder = self
        for key, value in options.items():
            setter = getattr(builder, key, None)
            if key.startswith("_") or key in ("build", "configure"):
                setter = None
            if not callable(setter):
                raise TypeError(f"unknown model option: {key!r}")
            builder = setter(value)
        return builder

    def files(self, vocab: str | Path) -> "WordPieceBuilder":
        """Set the vocabulary file; it overrides any in-memory vocab on build."""
        return self._with(files=str(vocab))

    def vocab(self, vocab: Vocab) -> "WordPieceBuilder":
        """Set the token -> id mapping."""
        return self._with(vocab=dict(vocab))

    def unk_token(self, unk_token: str) -> "WordPieceBuilder":
        """Set the token substituted for words that cannot be segmented."""
        return self._with(unk_token=unk_token)

    def continuing_subword_prefix(self, prefix: str) -> "WordPieceBuilder":
        """Set the prefix marking pieces that continue a word."""
        return self._with(continuing_subword_prefix=prefix)

    def max_input_chars_per_word(self, max_chars: int) -> "WordPieceBuilder":
        """Set the length above which a word maps straight to the unknown token."""
        return self._with(max_input_chars_per_word=max_chars)

    def build(self) -> "WordPiece":
        """
        Construct a `WordPiece` from the current configuration.

        :raises ModelLoadError: If a vocabulary file was set but does not exist.
        :raises OSError: If reading the vocabulary file fails.
        """
        config = self.config
        vocab = read_vocab(config.files) if config.files else dict(config.vocab)
        model = WordPiece(
            vocab,
            unk_token=config.unk_token,
            continuing_subword_prefix=config.continuing_subword_prefix,
            max_input_chars_per_word=config.max_input_chars_per_word,
        )
        log.info(f"built {model!r}")
        return model


class WordPiece(Model):
    """
    WordPiece subword model.

    Segments a word into the longest known pieces from left to right. Pieces
    after the first carry the continuing-subword prefix (``##`` by default).
    When any part of the word cannot be matched, the whole word becomes a
    single unknown token.
    """

    MODEL_TYPE = "wordpiece"

    def __init__(
        self,
        vocab: Vocab | None = None,
        *,
        unk_token: str = DEFAULT_UNK_TOKEN,
        continuing_subword_prefix: str = DEFAULT_CONTINUING_SUBWORD_PREFIX,
        max_input_chars_per_word: int = DEFAULT_MAX_INPUT_CHARS_PER_WORD,
    ) -> None:
        self._vocab: Vocab = dict(vocab) if vocab else {}
        # duplicate ids collapse here: the last token wins
        self._vocab_r: VocabR = {tok_id: token for token, tok_id in self._vocab.items()}
        self._unk_token = unk_token
        self._continuing_subword_prefix = continuing_subword_prefix
        self._max_input_chars_per_word = max_input_chars_per_word
        self._trie = self._build_trie()

    def _build_trie(self) -> Trie:
        """Insert continuation pieces without their prefix, word-initial ones behind the sentinel."""
        prefix = self._continuing_subword_prefix
        trie = Trie()
        for token in self._vocab:
            if token.startswith(prefix):
                trie.push(token[len(prefix) :])
            else:
                trie.push(SENTINEL + token)
        log.debug(f"built trie with {len(trie)} entries from {len(self._vocab)} tokens")
        return trie

    # Construction
    # ===================================================================================

    @staticmethod
    def builder() -> WordPieceBuilder:
        """Get a `WordPieceBuilder`."""
        return WordPieceBuilder()

    @staticmethod
    def read_file(vocab: str | Path) -> Vocab:
        """Read a vocabulary file where each token's id is its line number."""
        return read_vocab(vocab)

    @staticmethod
    def from_file(vocab: str | Path) -> WordPieceBuilder:
        """Get a builder that loads its vocabulary from ``vocab``."""
        return WordPiece.builder().files(vocab)

    @classmethod
    def from_model(cls, other: SubwordModel) -> "WordPiece":
        """
        Derive a `WordPiece` from another subword model.

        The vocabulary is copied verbatim. The other model's unknown token and
        continuing prefix replace the defaults only when they are non-empty.
        """
        builder = cls.builder().vocab(other.vocabulary())
        if unk := other.unknown_token():
            builder = builder.unk_token(unk)
        if prefix := other.continuing_subword_prefix():
            builder = builder.continuing_subword_prefix(prefix)
        return builder.build()

    @classmethod
    @deprecated("Use `WordPiece.from_model()`, which accepts any subword model.")
    def from_bpe(cls, bpe: SubwordModel) -> "WordPiece":
        """Create a `WordPiece` model from a BPE model."""
        return cls.from_model(bpe)

    # Configuration (read-only)
    # ===================================================================================

    @property
    def unk_token(self) -> str:
        return self._unk_token

    @property
    def continuing_subword_prefix(self) -> str:
        return self._continuing_subword_prefix

    @property
    def max_input_chars_per_word(self) -> int:
        return self._max_input_chars_per_word

    # Model interface
    # ===================================================================================

    @override
    def vocabulary(self) -> Vocab:
        return dict(self._vocab)

    @override
    def vocabulary_size(self) -> int:
        return len(self._vocab)

    @override
    def token_to_id(self, token: str) -> int | None:
        return self._vocab.get(token)

    @override
    def id_to_token(self, id: int) -> str | None:
        return self._vocab_r.get(id)

    @override
    def tokenize(self, sequence: str) -> list[Token]:
        """
        Split one word into WordPiece tokens.

        Offsets are character positions in ``sequence``. The result is either
        a full segmentation or a single unknown token covering the word.

        :param sequence: A pre-tokenized word.
        :return: Tokens in left-to-right order.
        :raises MissingUnkTokenError: If the word needs the unknown token and
                                      the vocabulary does not contain it.
        """
        chars = [SENTINEL, *sequence]
        total = len(chars)

        if total > self._max_input_chars_per_word + 1:
            return [self._unk(total - 1)]

        # whole word is a known token
        if (tok_id := self._vocab.get(sequence)) is not None:
            return [Token(value=sequence, id=tok_id, offsets=(0, total - 1))]

        cursor = 0
        pieces: list[Token] = []
        for start, stop in self._trie.matches(chars):
            if cursor < start:
                return [self._unk(len(sequence))]
            # the sentinel at index 0 is never part of a piece
            start = max(start, 1)
            piece = "".join(chars[start:stop])
            if start > 1:
                piece = self._continuing_subword_prefix + piece
            tok_id = self._vocab.get(piece)
            if tok_id is None:
                return [self._unk(len(sequence))]
            # shift back by one to drop the sentinel's slot
            pieces.append(Token(value=piece, id=tok_id, offsets=(start - 1, stop - 1)))
            cursor = stop

        if cursor != total:
            return [self._unk(len(sequence))]
        return pieces

    def _unk(self, length: int) -> Token:
        """Build the whole-word fallback token spanning ``length`` characters."""
        tok_id = self._vocab.get(self._unk_token)
        if tok_id is None:
            raise MissingUnkTokenError(
                "missing unk token from the vocabulary", unk_token=self._unk_token
            )
        return Token(value=self._unk_token, id=tok_id, offsets=(0, length))

    @override
    def save(self, folder: str | Path, name: str | None = None) -> list[Path]:
        """
        Write the vocabulary to ``folder`` as ``<name>-vocab.txt`` or ``vocab.txt``.

        Ids are not stored; they are recovered from line order on load, so
        only dense zero-based ids round-trip.

        :return: List holding the written vocabulary path.
        """
        log.info(f"saving wordpiece vocab to {folder}")
        path = write_vocab(self._vocab, folder, name)
        log.info("vocab saved successfully")
        return [path]

    @override
    def trainer(self) -> WordPieceTrainer:
        return WordPieceTrainer(
            special_tokens=[self._unk_token],
            continuing_subword_prefix=self._continuing_subword_prefix,
        )

    # Value semantics
    # ===================================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordPiece):
            return NotImplemented
        return (
            self._vocab == other._vocab
            and self._vocab_r == other._vocab_r
            and self._unk_token == other._unk_token
            and self._continuing_subword_prefix == other._continuing_subword_prefix
            and self._max_input_chars_per_word == other._max_input_chars_per_word
        )

    def __repr__(self) -> str:
        return (
            f"WordPiece(unk_token={self._unk_token!r}, "
            f"continuing_subword_prefix={self._continuing_subword_prefix!r}, "
            f"max_input_chars_per_word={self._max_input_chars_per_word}, "
            f"vocab={len(self._vocab)})"
        )


__all__ = [
    "DEFAULT_UNK_TOKEN",
    "DEFAULT_CONTINUING_SUBWORD_PREFIX",
    "DEFAULT_MAX_INPUT_CHARS_PER_WORD",
    "SENTINEL",
    "WordPieceConfig",
    "WordPieceBuilder",
    "WordPiece",
]
