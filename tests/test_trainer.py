"""Unit tests for the WordPiece vocabulary trainer."""

import pytest

from piecetok import Token, WordPieceTrainer
from piecetok.errors import PatternError, TrainingError


def test_empty_corpus_raises():
    """Training without any words fails."""
    with pytest.raises(TrainingError):
        WordPieceTrainer().train([])
    with pytest.raises(TrainingError):
        WordPieceTrainer().train("   ")


def test_feed_counts_words():
    """The default pattern splits punctuation from words."""
    trainer = WordPieceTrainer()
    trainer.feed("Hello, world!")
    trainer.feed(["world"])
    assert trainer.words == {"Hello": 1, ",": 1, "world": 2, "!": 1}


def test_whitespace_pattern():
    """Named patterns select how text is split into words."""
    trainer = WordPieceTrainer(pattern="whitespace")
    trainer.feed("Hello, world!")
    assert trainer.words == {"Hello,": 1, "world!": 1}


def test_invalid_custom_pattern():
    """A malformed regex is reported as a PatternError."""
    with pytest.raises(PatternError):
        WordPieceTrainer(pattern="(")


def test_vocab_layout():
    """Special tokens, then alphabet, then merges, with dense ids."""
    vocab = WordPieceTrainer(vocab_size=10, special_tokens=["[UNK]"]).train("ab ab ab")
    assert vocab == {"[UNK]": 0, "##b": 1, "a": 2, "ab": 3}


def test_vocab_size_limits_merges():
    """No merges happen once the vocabulary is full."""
    trainer = WordPieceTrainer(vocab_size=4, special_tokens=["[UNK]"])
    vocab = trainer.train("abc abc")
    assert vocab == {"[UNK]": 0, "##b": 1, "##c": 2, "a": 3}


def test_ties_break_lexicographically():
    """Equally frequent pairs merge in lexicographic order."""
    trainer = WordPieceTrainer(vocab_size=6, special_tokens=["[UNK]"])
    vocab = trainer.train("ab cd")
    assert vocab["ab"] == 5
    assert "cd" not in vocab


def test_min_frequency_stops_training():
    """Pairs rarer than min_frequency are never merged."""
    vocab = WordPieceTrainer(min_frequency=2).train("ab")
    assert vocab == {"##b": 0, "a": 1}


def test_limit_alphabet_drops_rare_characters():
    """Words using characters outside the kept alphabet are ignored."""
    vocab = WordPieceTrainer(limit_alphabet=1).train("aa aa ax")
    assert "##x" not in vocab
    assert "x" not in vocab
    assert "aa" in vocab


def test_train_model():
    """A trained model segments seen words and rejects impossible ones."""
    trainer = WordPieceTrainer(vocab_size=100, special_tokens=["[UNK]"])
    model = trainer.train_model("hug hugs hug hugs")

    vocab = model.vocabulary()
    assert vocab["##ug"] < vocab["hug"] < vocab["hugs"]
    assert model.tokenize("hugs") == [Token("hugs", vocab["hugs"], (0, 4))]
    # "g" only ever appears inside a word
    assert model.tokenize("gush") == [Token("[UNK]", 0, (0, 4))]


def test_train_model_with_custom_prefix():
    """The model is built with the trainer's continuing prefix."""
    trainer = WordPieceTrainer(
        vocab_size=5, special_tokens=["<unk>"], continuing_subword_prefix="@@"
    )
    model = trainer.train_model("ab ab")
    assert model.continuing_subword_prefix == "@@"
    assert model.unk_token == "<unk>"
    assert [tok.value for tok in model.tokenize("abb")] == ["ab", "@@b"]


def test_vocab_size_must_hold_special_tokens():
    """A vocab_size below the special token count is rejected."""
    trainer = WordPieceTrainer(vocab_size=1, special_tokens=["[UNK]", "[PAD]"])
    with pytest.raises(TrainingError) as exc_info:
        trainer.train("ab")
    assert exc_info.value.vocab_size == 1


def test_train_model_applies_builder_options():
    """Extra keywords configure the built model."""
    trainer = WordPieceTrainer(special_tokens=["[UNK]", "<unk>"])
    model = trainer.train_model("ab ab", max_input_chars_per_word=1, unk_token="<unk>")

    assert model.max_input_chars_per_word == 1
    assert model.unk_token == "<unk>"
    assert model.tokenize("ab") == [Token("<unk>", 1, (0, 2))]


def test_train_model_rejects_unknown_option():
    """Keywords that are not builder settings fail before training."""
    trainer = WordPieceTrainer()
    with pytest.raises(TypeError):
        trainer.train_model("ab ab", dropout=0.1)
    assert trainer.words == {}


def _recount_train(words, vocab_size, prefix="##"):
    """Train by recounting every pair after each merge."""
    splits = {w: [w[0], *(prefix + c for c in w[1:])] for w in words}
    vocab = {}
    for s in sorted({s for split in splits.values() for s in split}):
        vocab.setdefault(s, len(vocab))
    while len(vocab) < vocab_size:
        pairs = {}
        for w, split in splits.items():
            for p in zip(split, split[1:]):
                pairs[p] = pairs.get(p, 0) + words[w]
        if not pairs:
            break
        pair = min(pairs, key=lambda p: (-pairs[p], p))
        merged = pair[0] + pair[1].removeprefix(prefix)
        for split in splits.values():
            i = 0
            while i < len(split) - 1:
                if (split[i], split[i + 1]) == pair:
                    split[i : i + 2] = [merged]
                else:
                    i += 1
        vocab.setdefault(merged, len(vocab))
    return vocab


def test_incremental_pair_counts_match_full_recount():
    """Updating pair counts per merge gives the same vocabulary as recounting."""
    text = (
        "hug hugs hugging pug pugs pun puns bun buns hunting hunger "
        "banana bandana nanna aaaa abab ababab mississippi"
    )
    trainer = WordPieceTrainer(vocab_size=60)
    vocab = trainer.train(text)
    assert vocab == _recount_train(trainer.words, 60)


def test_training_time_is_logged(caplog):
    """Training logs its duration, also when it fails."""
    with caplog.at_level("INFO", logger="piecetok._decorators"):
        WordPieceTrainer().train("ab")
        with pytest.raises(TrainingError):
            WordPieceTrainer().train("")

    messages = [r.getMessage() for r in caplog.records if r.name == "piecetok._decorators"]
    assert messages[0].startswith("WordPieceTrainer.train finished after")
    assert messages[1].startswith("WordPieceTrainer.train failed after")


def test_verbose_logs_each_merge(caplog):
    """Verbose training logs every merge with its pair and frequency."""
    with caplog.at_level("INFO", logger="piecetok.trainer"):
        WordPieceTrainer(verbose=True).train("ab ab")

    messages = [r.getMessage() for r in caplog.records if r.name == "piecetok.trainer"]
    assert "merge 1: ('a', '##b') -> ab (2)" in messages
