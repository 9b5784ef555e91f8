"""Factory functions for creating subword models."""

from pathlib import Path
from typing import Any, Final, Literal

from ._models.base import Model
from ._models.wordpiece import WordPiece, WordPieceBuilder
from .errors import StrategyError

ModelName = Literal["wordpiece"]

_MODEL_REGISTRY: Final[dict[str, type[Model]]] = {
    "wordpiece": WordPiece,
}

_BUILDER_REGISTRY: Final[dict[str, type[WordPieceBuilder]]] = {
    "wordpiece": WordPieceBuilder,
}


def list_models() -> list[str]:
    """Return names of all available model types."""
    return list(_MODEL_REGISTRY.keys())


def _get_builder(name: str) -> WordPieceBuilder:
    if name not in _BUILDER_REGISTRY:
        raise StrategyError(
            "unknown model name",
            invalid_name=name,
            available=list(_MODEL_REGISTRY.keys()),
        )
    return _BUILDER_REGISTRY[name]()


def get_model(name: ModelName = "wordpiece", **config: Any) -> Model:
    """
    Build a model by name from keyword configuration.

    :param name: Registered model name.
    :param config: Builder options, e.g. ``vocab``, ``unk_token``,
                   ``continuing_subword_prefix``, ``max_input_chars_per_word``.
    :return: Built model instance.
    :raises StrategyError: If the model name is unknown.
    :raises TypeError: If an option is not a builder setting.

    .. code-block:: python

        model = get_model("wordpiece", vocab={"[UNK]": 0, "hi": 1})
        model.tokenize("hi")
    """
    builder = _get_builder(name)
    return builder.configure(**config).build()


def from_pretrained(
    vocab_path: str | Path, model: ModelName = "wordpiece", **config: Any
) -> Model:
    """
    Load a model from a vocabulary file.

    :param vocab_path: Path to a ``vocab.txt`` style file.
    :param model: Registered model name.
    :param config: Extra builder options applied before building.
    :return: Loaded model.
    :raises ModelLoadError: If the file does not exist.

    .. code-block:: python

        model = from_pretrained("path/to/vocab.txt")
        tokens = model.tokenize("unaffable")
    """
    builder = _get_builder(model).files(vocab_path)
    return builder.configure(**config).build()


__all__ = ["ModelName", "list_models", "get_model", "from_pretrained"]
