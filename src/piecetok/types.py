"""
Core types for subword tokenization.
"""

from dataclasses import dataclass

from typing_extensions import TypeAliasType

Vocab = TypeAliasType("Vocab", dict[str, int])
VocabR = TypeAliasType("VocabR", dict[int, str])
Offsets = TypeAliasType("Offsets", tuple[int, int])


@dataclass(frozen=True, slots=True)
class Token:
    """One piece of a tokenized word."""

    value: str
    id: int
    # half-open character span into the original word
    offsets: Offsets
