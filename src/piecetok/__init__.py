"""PieceTok: WordPiece subword tokenization library."""

from ._models.base import Model, SubwordModel
from ._models.wordpiece import (
    DEFAULT_CONTINUING_SUBWORD_PREFIX,
    DEFAULT_MAX_INPUT_CHARS_PER_WORD,
    DEFAULT_UNK_TOKEN,
    WordPiece,
    WordPieceBuilder,
    WordPieceConfig,
)
from .errors import (
    MissingUnkTokenError,
    ModelLoadError,
    PatternError,
    PieceTokError,
    StrategyError,
    TrainingError,
)
from .factory import from_pretrained, get_model, list_models
from .parallel import ParallelMode, list_parallel_modes, tokenize_batch
from .pattern import TokenPattern, get_pattern, list_patterns
from .trainer import WordPieceTrainer
from .trie import Trie
from .types import Token
from .vocab import read_vocab, write_vocab

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("piecetok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Model",
    "SubwordModel",
    "WordPiece",
    "WordPieceBuilder",
    "WordPieceConfig",
    "WordPieceTrainer",
    "Token",
    "Trie",
    "TokenPattern",
    "ParallelMode",
    "DEFAULT_UNK_TOKEN",
    "DEFAULT_CONTINUING_SUBWORD_PREFIX",
    "DEFAULT_MAX_INPUT_CHARS_PER_WORD",
    "PieceTokError",
    "MissingUnkTokenError",
    "ModelLoadError",
    "TrainingError",
    "StrategyError",
    "PatternError",
    "get_model",
    "from_pretrained",
    "get_pattern",
    "read_vocab",
    "write_vocab",
    "tokenize_batch",
    "list_models",
    "list_patterns",
    "list_parallel_modes",
]
