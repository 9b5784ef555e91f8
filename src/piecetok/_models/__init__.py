"""Subword model implementations."""

from .base import Model, SubwordModel
from .wordpiece import WordPiece, WordPieceBuilder, WordPieceConfig


__all__ = ["Model", "SubwordModel", "WordPiece", "WordPieceBuilder", "WordPieceConfig"]
