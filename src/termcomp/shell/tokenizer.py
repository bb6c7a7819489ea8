"""Shell word tokenizer for command-line completion.

Re-lexes a (possibly incomplete) shell command line into words, resolving
quotes and escapes while keeping the span each word occupies in the
original text.

Quote handling:
    - Single quotes: no escapes inside, everything is literal
    - Double quotes: backslash escapes only $, `, " and \\; before any other
      character the backslash is kept
    - Unquoted: backslash escapes the next character, whatever it is

Command substitution (`...`, $(...)) and braced parameter expansion (${...})
need a grammar, not a lexer, and raise UnsupportedExpansionError.
"""

from __future__ import annotations

import dataclasses

from termcomp.errors import UnsupportedExpansionError
from termcomp.shell.types import LexMode, Word

__all__ = ["tokenize"]

# Characters a backslash escapes inside double quotes
_DOUBLE_QUOTE_ESCAPABLE = frozenset({"$", "`", '"', "\\"})

# Characters following $ that start an unsupported expansion
_EXPANSION_OPENERS = frozenset({"(", "{"})


@dataclasses.dataclass
class _LexState:
    """Mutable state of a single tokenize call."""

    mode: LexMode = LexMode.DEFAULT
    dollar_pending: bool = False
    start: int | None = None  # Offset where the open word started
    buf: list[str] = dataclasses.field(default_factory=list)

    def open(self, pos: int) -> None:
        """Start a word at pos unless one is already open."""
        if self.start is None:
            self.start = pos

    def push(self, chars: str, pos: int) -> None:
        self.open(pos)
        self.buf.append(chars)

    def pull(self, pos: int) -> Word:
        """Close the open word; pos is the offset just past it."""
        if self.start is None:
            raise RuntimeError("No word is open")
        word = Word(value="".join(self.buf), offset=self.start, length=pos - self.start)
        self.buf.clear()
        self.start = None
        return word


def tokenize(text: str) -> list[Word]:
    """
    Split text into shell words.

    The whole text is consumed. Callers completing a line truncate it at the
    cursor first. An unterminated quote or trailing backslash is not an
    error: the open word is returned as typed so far.

    Args:
        text: The command line to tokenize.

    Returns:
        Words in source order, each with its decoded value and its span in text.

    Raises:
        UnsupportedExpansionError: On a backtick, $( or ${ outside single
            quotes. The words completed before it are attached to the error.
    """
    words: list[Word] = []
    state = _LexState()
    pos = 0
    n = len(text)

    while pos < n:
        char = text[pos]

        if state.dollar_pending:
            state.dollar_pending = False
            if char in _EXPANSION_OPENERS:
                raise UnsupportedExpansionError(pos, words)
            # The $ was already pushed; re-evaluate this char in the active mode
            continue

        mode = state.mode

        if mode is LexMode.SINGLE_QUOTE:
            if char == "'":
                state.mode = LexMode.DEFAULT
            else:
                state.push(char, pos)

        elif mode is LexMode.DOUBLE_QUOTE:
            if char == '"':
                state.mode = LexMode.DEFAULT
            elif char == "\\":
                state.mode = LexMode.DOUBLE_QUOTE_ESCAPE
            elif char == "$":
                state.push(char, pos)
                state.dollar_pending = True
            elif char == "`":
                raise UnsupportedExpansionError(pos, words)
            else:
                state.push(char, pos)

        elif mode is LexMode.DOUBLE_QUOTE_ESCAPE:
            state.mode = LexMode.DOUBLE_QUOTE
            if char in _DOUBLE_QUOTE_ESCAPABLE:
                state.push(char, pos)
            else:
                state.push("\\" + char, pos)

        elif mode is LexMode.ESCAPE:
            state.mode = LexMode.DEFAULT
            state.push(char, pos)

        elif mode is LexMode.SEPARATOR:
            if not char.isspace():
                state.mode = LexMode.DEFAULT
                state.open(pos)
                continue

        else:
            if char == "`":
                raise UnsupportedExpansionError(pos, words)
            elif char == "'":
                state.open(pos)
                state.mode = LexMode.SINGLE_QUOTE
            elif char == '"':
                state.open(pos)
                state.mode = LexMode.DOUBLE_QUOTE
            elif char == "\\":
                state.open(pos)
                state.mode = LexMode.ESCAPE
            elif char == "$":
                state.push(char, pos)
                state.dollar_pending = True
            elif char.isspace():
                if state.start is not None:
                    words.append(state.pull(pos))
                state.mode = LexMode.SEPARATOR
            else:
                state.push(char, pos)

        pos += 1

    # End of input: flush the word still open
    if state.start is not None:
        words.append(state.pull(pos))

    return words
