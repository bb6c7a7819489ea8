"""Exceptions raised by termcomp."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termcomp.shell.types import Word

__all__ = [
    "CompletionEnvironmentError",
    "InvalidFlagsError",
    "TermcompError",
    "UnsupportedExpansionError",
]


class TermcompError(Exception):
    """Base class for all termcomp errors."""


class UnsupportedExpansionError(TermcompError):
    """
    Raised when the line uses command substitution or braced expansion.

    Attributes:
        words: Words completed before the offending construct. They do not
            describe the whole line.
        offset: Offset of the character that triggered the error.
    """

    def __init__(self, offset: int, words: Sequence[Word] = ()) -> None:
        super().__init__(f"Cannot lex shell expansion at offset {offset}")
        self.offset = offset
        self.words: list[Word] = list(words)


class InvalidFlagsError(TermcompError):
    """Raised when the words typed so far do not parse as flags."""

    def __init__(self, args: Sequence[str]) -> None:
        super().__init__(f"Invalid flags in {list(args)!r}")
        self.args_so_far: list[str] = list(args)


class CompletionEnvironmentError(TermcompError):
    """Raised when the completion point cannot be read from the environment."""
