"""Custom exception hierarchy for piecetok errors."""

import regex as re


class PieceTokError(Exception):
    """Base exception for all piecetok errors."""


class MissingUnkTokenError(PieceTokError):
    """Raised when the unknown token is needed but absent from the vocabulary."""

    def __init__(self, message: str, *, unk_token: str | None = None) -> None:
        extra = " "
        if unk_token is not None:
            extra += f"(unk token: {unk_token}) "
        super().__init__(message + extra)
        self.unk_token = unk_token


class ModelLoadError(PieceTokError, OSError):
    """Raised when loading a vocabulary from disk fails."""

    def __init__(self, message: str, *, model_path: str | None = None) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        super().__init__(message + extra)
        self.model_path = model_path


class TrainingError(PieceTokError):
    """Raised when vocabulary training fails."""

    def __init__(self, message: str, *, vocab_size: int | None = None) -> None:
        extra = " "
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        super().__init__(message + extra)
        self.vocab_size = vocab_size


class StrategyError(PieceTokError):
    """Raised when a named mode or model cannot be resolved."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available


class PatternError(PieceTokError):
    """Raised when compiling and/or validating regex patterns."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        """
        Initialize PatternError with pattern details.

        Args:
            message: Error message.
            pattern: The regex pattern that failed.
            regex_err: The underlying regex error from the regex library.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__(message + extra)
        self.pattern = pattern
        self.regex_err = regex_err


__all__ = [
    "PieceTokError",
    "MissingUnkTokenError",
    "ModelLoadError",
    "TrainingError",
    "StrategyError",
    "PatternError",
]
