"""Completion context classification.

Decides whether the cursor is completing a flag name, a flag value or a
positional argument by running a permissive flag parse over the words typed
so far and reading the shape of where that parse stopped.
"""

from __future__ import annotations

from collections.abc import Sequence

from termcomp.completion.flags import parse_flags
from termcomp.completion.types import (
    FlagArity,
    FlagSchema,
    ParseErrorKind,
    ParseOutcome,
    Verdict,
)
from termcomp.logging import get_logger

__all__ = ["classify", "classify_outcome"]

_logger = get_logger("completion.classifier")


def classify(words: Sequence[str], in_word: bool, schema: FlagSchema) -> Verdict:
    """
    Classify the completion expected after words.

    Args:
        words: Word values up to the cursor, command name first.
        in_word: True when the cursor is inside the last word.
        schema: The flags the command recognizes.

    Returns:
        The Verdict for the completion point.
    """
    verdict, _ = classify_outcome(words, in_word, schema)
    return verdict


def classify_outcome(
    words: Sequence[str], in_word: bool, schema: FlagSchema
) -> tuple[Verdict, ParseOutcome | None]:
    """
    Classify the completion point and return the flag parse it relied on.

    The outcome is None when there was nothing to parse.
    """
    if not words:
        return Verdict.ARGUMENT, None

    last = words[-1]
    ends_with_dash = last.startswith("-")

    outcome = parse_flags(schema, words[1:])

    if outcome.error is not None:
        if not ends_with_dash:
            verdict = Verdict.ERROR
        elif in_word:
            # Still typing the flag name
            verdict = Verdict.FLAG_NAME
        else:
            verdict = _refine_by_arity(last, outcome, schema)
    else:
        remaining = len(outcome.remaining)
        if remaining == 0:
            if not in_word:
                verdict = Verdict.ARGUMENT
            elif ends_with_dash:
                verdict = Verdict.FLAG_NAME
            else:
                verdict = Verdict.FLAG_VALUE
        elif remaining == 1:
            verdict = Verdict.FLAG_NAME if ends_with_dash else Verdict.ARGUMENT
        else:
            verdict = Verdict.ARGUMENT

    _logger.debug("Classified %r (in_word=%s) as %s", list(words), in_word, verdict)
    return verdict, outcome


def _refine_by_arity(last: str, outcome: ParseOutcome, schema: FlagSchema) -> Verdict:
    """
    Resolve a complete dash word that failed to parse.

    Only a declared valued flag waiting for its value ("cmd -name <TAB>")
    leads to value completion. An unknown flag, a boolean flag given a value
    or a finished "-name=value" word cannot be completed.
    """
    error = outcome.error
    if error is None or error.kind is not ParseErrorKind.MISSING_VALUE:
        return Verdict.ERROR
    if "=" in last:
        return Verdict.ERROR

    spec = schema.get(last)
    if spec is None or spec.arity is not FlagArity.VALUE or spec.name != error.flag:
        return Verdict.ERROR
    return Verdict.FLAG_VALUE
