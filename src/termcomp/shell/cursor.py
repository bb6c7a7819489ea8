"""Locate the completion point within tokenized words."""

from __future__ import annotations

from collections.abc import Sequence

from termcomp.shell.tokenizer import tokenize
from termcomp.shell.types import LocatedArgs, Word

__all__ = ["completion_prefix", "current_word_index", "locate", "parse_args"]


def current_word_index(words: Sequence[Word], cursor: int) -> int:
    """
    Find the word the cursor is in.

    A cursor right after the last character of a word still counts as inside
    it ("toto<TAB>"), a cursor on the first character does not ("<TAB>toto").

    Returns:
        Index of the current word, or -1 if the cursor is between words.
    """
    current = -1
    for i, word in enumerate(words):
        if word.offset < cursor <= word.end:
            current = i
    return current


def locate(words: Sequence[Word], cursor: int) -> tuple[list[str], bool]:
    """
    Truncate words at the cursor.

    Args:
        words: Tokenized words in source order.
        cursor: Cursor offset in the original text.

    Returns:
        A tuple of (values, in_word) where values holds the word values up to
        and including the word under the cursor, and in_word tells whether
        the cursor is inside the last of them.
    """
    current = current_word_index(words, cursor)
    if current >= 0:
        return [word.value for word in words[: current + 1]], True

    values = [word.value for word in words if word.offset < cursor]
    return values, False


def parse_args(line: str, point: int) -> LocatedArgs:
    """
    Get the words typed up to the completion point.

    The line is cut at point before tokenizing, so the word under the cursor
    only holds the characters before it.

    Args:
        line: The full command line.
        point: Cursor offset in line.

    Returns:
        LocatedArgs with the truncated word values and the in-word flag.

    Raises:
        UnsupportedExpansionError: If the text before point cannot be lexed.
    """
    point = max(0, min(point, len(line)))
    words = tokenize(line[:point])
    args, in_word = locate(words, point)
    return LocatedArgs(args=args, in_word=in_word)


def completion_prefix(args: Sequence[str], in_word: bool) -> tuple[int, str]:
    """
    Compute the position and prefix being completed.

    Returns:
        A tuple of (position, prefix): position is the index of the word being
        completed, prefix its text so far ("" when starting a new word).
    """
    position = len(args)
    prefix = ""
    if in_word and args:
        position -= 1
        prefix = args[position]
    return position, prefix
