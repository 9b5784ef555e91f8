"""Pre-tokenization patterns used to split training text into words."""

from enum import Enum

import regex as re

from .errors import PatternError


class TokenPattern(str, Enum):
    """
    Pre-defined regex patterns for splitting raw text into words.

    Sources:
    - BERT: punctuation split of the original BERT BasicTokenizer
    - GPT2: https://github.com/openai/tiktoken/blob/main/tiktoken_ext/openai_public.py
    """

    WHITESPACE = r"\S+"

    # every punctuation mark is its own word
    BERT = r"[^\s\p{P}]+|\p{P}"

    GPT2 = (
        r"'(?:[sdmt]|ll|ve|re)|"
        r" ?\p{L}+|"
        r" ?\p{N}+|"
        r" ?[^\s\p{L}\p{N}]+|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise PatternError(
                f"unknown pattern: {name!r}. "
                f"valid patterns: {', '.join(pat.name.lower() for pat in cls)}"
            )


def get_pattern(name: str) -> str:
    """Return the regex source for a built-in pattern name."""
    return TokenPattern.get(name)


def list_patterns() -> list[str]:
    """Return names of all available built-in patterns."""
    return [pat.name.lower() for pat in TokenPattern]


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a built-in pattern name or a custom regex string.

    :raises PatternError: If a custom pattern is not a valid regex.
    """
    if pattern.upper().replace("-", "_") in TokenPattern.__members__:
        pattern = TokenPattern.get(pattern)
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e) from e


__all__ = ["TokenPattern", "get_pattern", "list_patterns", "compile_pattern"]
