"""Type definitions for the shell word tokenizer."""

from __future__ import annotations

from enum import Enum

from typing import NamedTuple


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class LexMode(_StrEnum):
    """Active tokenizer mode. Exactly one is active at a time."""

    DEFAULT = "default"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    DOUBLE_QUOTE_ESCAPE = "double_quote_escape"
    ESCAPE = "escape"
    SEPARATOR = "separator"


class Word(NamedTuple):
    """A shell word with its span in the original text."""

    value: str  # Decoded text (quotes and escapes resolved)
    offset: int  # Start offset in original text
    length: int  # Source characters occupied, quotes and escapes included

    @property
    def end(self) -> int:
        """Offset just past the word (exclusive)."""
        return self.offset + self.length


class LocatedArgs(NamedTuple):
    """Words typed up to the cursor."""

    args: list[str]  # Word values, truncated at the cursor
    in_word: bool  # True when the cursor is inside the last word
