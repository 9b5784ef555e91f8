"""Frequency-counting trainer that learns a WordPiece vocabulary from text."""

import logging
from collections import Counter, defaultdict
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ._decorators import measure_time
from .errors import TrainingError
from .pattern import compile_pattern
from .types import Vocab

if TYPE_CHECKING:
    from ._models.wordpiece import WordPiece

log = logging.getLogger(__name__)


class WordPieceTrainer:
    """
    Learns a WordPiece vocabulary by repeatedly merging the most frequent
    adjacent pair of pieces.

    Words are split into characters, every character after the first
    carrying the continuing-subword prefix. The vocabulary holds the special
    tokens first, then the alphabet, then merged pieces in merge order, so
    ids are dense and zero-based and the result round-trips through a
    vocabulary file.

    Example:
       >>> trainer = WordPieceTrainer(vocab_size=50, special_tokens=["[UNK]"])
       >>> vocab = trainer.train(["hugging hugs", "bugs hug"])
       >>> vocab["[UNK]"]
       0
    """

    def __init__(
        self,
        vocab_size: int = 30000,
        min_frequency: int = 0,
        special_tokens: list[str] | None = None,
        continuing_subword_prefix: str = "##",
        limit_alphabet: int | None = None,
        pattern: str = "bert",
        verbose: bool = False,
    ) -> None:
        self.vocab_size = vocab_size
        self.min_frequency = min_frequency
        self.special_tokens = list(special_tokens or [])
        self.continuing_subword_prefix = continuing_subword_prefix
        self.limit_alphabet = limit_alphabet
        self.verbose = verbose
        # splits raw text into words; invalid custom patterns raise PatternError
        self._pat = compile_pattern(pattern)
        self._words: Counter[str] = Counter()

    @property
    def words(self) -> dict[str, int]:
        """Word frequencies collected so far."""
        return dict(self._words)

    def feed(self, texts: str | Iterable[str]) -> None:
        """Pre-tokenize ``texts`` and add their words to the frequency counts."""
        if isinstance(texts, str):
            texts = [texts]
        for text in texts:
            self._words.update(m.group() for m in self._pat.finditer(text) if m.group())
        log.debug(f"collected {len(self._words)} distinct words")

    @measure_time
    def train(self, texts: str | Iterable[str] | None = None) -> Vocab:
        """
        Learn a vocabulary of at most ``vocab_size`` tokens.

        The alphabet is always kept whole, so the result can exceed
        ``vocab_size`` when the corpus has more characters than that.

        :param texts: Optional text to feed before training.
        :return: Token -> id mapping usable by `WordPieceBuilder.vocab`.
        :raises TrainingError: If no words were fed, or ``vocab_size`` cannot
                               hold the special tokens.
        """
        vocab: Vocab = {}
        for tok in self.special_tokens:
            vocab.setdefault(tok, len(vocab))
        if self.vocab_size < len(vocab):
            raise TrainingError(
                f"vocab size too small for {len(vocab)} special tokens",
                vocab_size=self.vocab_size,
            )

        if texts is not None:
            self.feed(texts)
        if not self._words:
            raise TrainingError(
                "empty corpus, no training performed", vocab_size=self.vocab_size
            )

        alphabet = self._alphabet()
        splits: dict[str, list[str]] = {}
        for word in self._words:
            if all(c in alphabet for c in word):
                splits[word] = self._split(word)

        for symbol in sorted({s for split in splits.values() for s in split}):
            vocab.setdefault(symbol, len(vocab))
        log.debug(f"initial vocabulary has {len(vocab)} tokens")

        pairs, where = self._count_pairs(splits)
        n_merges = 0
        while len(vocab) < self.vocab_size:
            if not pairs:
                log.warning(
                    f"no more pairs to merge after {n_merges} merges, stopping early"
                )
                break
            # most frequent pair, lexicographically smallest on ties
            pair, count = min(pairs.items(), key=lambda kv: (-kv[1], kv[0]))
            if count < self.min_frequency:
                log.warning(
                    f"best pair frequency {count} below min_frequency "
                    f"{self.min_frequency} after {n_merges} merges, stopping early"
                )
                break

            merged = self._merge_symbol(pair)
            self._merge_words(splits, pair, merged, pairs, where)
            vocab.setdefault(merged, len(vocab))
            n_merges += 1

            if self.verbose:
                log.info(f"merge {n_merges}: {pair} -> {merged} ({count})")

        log.info(f"trained vocabulary of {len(vocab)} tokens with {n_merges} merges")
        return vocab

    def train_model(
        self, texts: str | Iterable[str] | None = None, **builder_kwargs
    ) -> "WordPiece":
        """
        Train and wrap the vocabulary in a `WordPiece` model.

        The model uses this trainer's continuing prefix and, unless
        ``unk_token`` is given, the first special token as unknown token.

        :param texts: Optional text to feed before training.
        :param builder_kwargs: `WordPieceBuilder` options such as ``unk_token``
                               or ``max_input_chars_per_word``.
        :raises TypeError: If an option is not a builder setting.
        """
        from ._models.wordpiece import WordPiece

        builder = WordPiece.builder().continuing_subword_prefix(
            self.continuing_subword_prefix
        )
        if self.special_tokens:
            builder = builder.unk_token(self.special_tokens[0])
        # reject bad options before spending time on training
        builder = builder.configure(**builder_kwargs)
        return builder.vocab(self.train(texts)).build()

    def _alphabet(self) -> set[str]:
        """Characters seen in the corpus, cut to the ``limit_alphabet`` most frequent."""
        char_counts: Counter[str] = Counter()
        for word, freq in self._words.items():
            for c in word:
                char_counts[c] += freq
        if self.limit_alphabet is None or len(char_counts) <= self.limit_alphabet:
            return set(char_counts)
        kept = sorted(char_counts.items(), key=lambda kv: (-kv[1], kv[0]))
        dropped = len(kept) - self.limit_alphabet
        log.debug(f"dropping {dropped} rare characters from the alphabet")
        return {c for c, _ in kept[: self.limit_alphabet]}

    def _split(self, word: str) -> list[str]:
        prefix = self.continuing_subword_prefix
        return [word[0], *(prefix + c for c in word[1:])]

    def _count_pairs(
        self, splits: dict[str, list[str]]
    ) -> tuple[Counter[tuple[str, str]], dict[tuple[str, str], set[str]]]:
        """Count adjacent pairs once and index which words contain each pair."""
        pairs: Counter[tuple[str, str]] = Counter()
        where: defaultdict[tuple[str, str], set[str]] = defaultdict(set)
        for word, split in splits.items():
            freq = self._words[word]
            for a, b in zip(split, split[1:]):
                pairs[a, b] += freq
                where[a, b].add(word)
        return pairs, where

    def _merge_words(
        self,
        splits: dict[str, list[str]],
        pair: tuple[str, str],
        merged: str,
        pairs: Counter[tuple[str, str]],
        where: dict[tuple[str, str], set[str]],
    ) -> None:
        """
        Merge ``pair`` in the words that contain it and update ``pairs`` in place.

        Only the touched words are rescanned: their old pair counts are
        removed and the counts after the merge added back.
        """
        touched: set[tuple[str, str]] = set()
        for word in where.pop(pair, set()):
            split = splits[word]
            freq = self._words[word]
            for p in zip(split, split[1:]):
                pairs[p] -= freq
                touched.add(p)
            self._apply_merge(split, pair, merged)
            for p in zip(split, split[1:]):
                pairs[p] += freq
                where[p].add(word)
                touched.add(p)

        # drop exhausted pairs so they never win a tie
        for p in touched:
            if pairs[p] <= 0:
                del pairs[p]
                where.pop(p, None)

    def _merge_symbol(self, pair: tuple[str, str]) -> str:
        a, b = pair
        return a + b.removeprefix(self.continuing_subword_prefix)

    @staticmethod
    def _apply_merge(split: list[str], pair: tuple[str, str], merged: str) -> None:
        """Replace every occurrence of ``pair`` in ``split`` in place."""
        i = 0
        while i < len(split) - 1:
            if split[i] == pair[0] and split[i + 1] == pair[1]:
                split[i : i + 2] = [merged]
            else:
                i += 1


__all__ = ["WordPieceTrainer"]
