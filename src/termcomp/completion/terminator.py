"""Suggestion dispatch for a command's completion.

A Terminator is configured with the command's flag schema and with
generators for flag values and positional arguments. Given the words typed
so far it classifies the completion point and calls the matching generator.

    terminator = Terminator(schema)
    terminator.flag("name", value_gen(["alice", "bob"]))
    terminator.arg(0, shell_compgen("file"))
    exit_code = terminator.terminate()

Positions passed to arg() are zero-indexed among the non-flag words:

    cmd toto<TAB> titi     position 0
    cmd toto <TAB> titi    position 1

A Terminator is itself an Argsgen, so sub-commands are completed by handing
the remaining words to another Terminator through an Argsgen that picks it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from typing import Protocol, TextIO

from termcomp.completion.classifier import classify_outcome
from termcomp.completion.compgen import Compgen, flag_name_gen, flag_value_gen
from termcomp.completion.environment import is_completion_mode, read_args
from termcomp.completion.types import FlagSchema, Verdict
from termcomp.error_handling import wrap_handler
from termcomp.errors import InvalidFlagsError, TermcompError
from termcomp.logging import get_logger
from termcomp.shell.cursor import completion_prefix

__all__ = ["Argsgen", "Terminator"]


class Argsgen(Protocol):
    """Completes the non-flag words of a command line."""

    def compgen(self, args: Sequence[str], in_word: bool) -> list[str]: ...


class Terminator:
    """Dispatches a completion request to the right generator."""

    def __init__(
        self, schema: FlagSchema, *, logger: logging.Logger | None = None
    ) -> None:
        if logger is None:
            logger = get_logger("completion.terminator")
        self._logger = logger
        self._schema = schema
        self._flag_gens: dict[str, Compgen] = {}
        self._arg_gens: dict[int, Compgen] = {}
        self._argsgen: Argsgen | None = None

    @property
    def schema(self) -> FlagSchema:
        return self._schema

    def flag(self, name: str, gen: Compgen) -> None:
        """Use gen to complete the values of flag name."""
        self._flag_gens[name.lstrip("-")] = gen

    def arg(self, position: int, gen: Compgen) -> None:
        """Use gen to complete the positional argument at position."""
        self._arg_gens[position] = gen

    def argsgen(self, argsgen: Argsgen | None) -> None:
        """Hand every positional completion to argsgen."""
        self._argsgen = argsgen

    def compgen(self, args: Sequence[str], in_word: bool) -> list[str]:
        """
        Generate suggestions for the words typed so far.

        Args:
            args: Word values up to the cursor, command name first.
            in_word: True when the cursor is inside the last word.

        Returns:
            Suggestions for the word being completed.

        Raises:
            InvalidFlagsError: If the words do not parse as flags.
        """
        verdict, outcome = classify_outcome(args, in_word, self._schema)
        _, prefix = completion_prefix(args, in_word)

        if verdict is Verdict.ERROR:
            raise InvalidFlagsError(args)

        if verdict is Verdict.FLAG_NAME:
            seen = outcome.seen if outcome is not None else frozenset()
            return self._generate(flag_name_gen(self._schema, seen), prefix, "flag names")

        if verdict is Verdict.FLAG_VALUE:
            # The flag is the last complete word
            key_index = len(args) - 2 if in_word else len(args) - 1
            key = args[key_index].lstrip("-") if key_index >= 0 else ""
            gen = self._flag_gens.get(key) or flag_value_gen(self._schema, key)
            self._logger.debug("Completing value of flag %r", key)
            return self._generate(gen, prefix, f"flag {key!r} values")

        remaining = list(outcome.remaining) if outcome is not None else []
        if self._argsgen is not None:
            return self._argsgen.compgen(remaining, in_word)

        position = len(remaining) - 1 if in_word else len(remaining)
        gen = self._arg_gens.get(position)
        if gen is None:
            self._logger.debug("No generator for argument %d", position)
            return []
        return self._generate(gen, prefix, f"argument {position}")

    def terminate(
        self,
        environ: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> int | None:
        """
        Answer a bash completion request, if there is one.

        Reads COMP_LINE and COMP_POINT, writes one suggestion per line to
        stream (stdout by default) and returns the exit code the process
        should end with. Returns None when not run for completion, so the
        program can carry on normally.
        """
        if not is_completion_mode(environ):
            return None
        if stream is None:
            stream = sys.stdout

        try:
            located = read_args(environ)
            suggestions = self.compgen(located.args, located.in_word)
        except TermcompError as exc:
            self._logger.warning("Cannot complete line: %s", exc)
            return 1

        if suggestions:
            stream.write("\n".join(suggestions) + "\n")
        return 0

    def _generate(self, gen: Compgen, prefix: str, feature_name: str) -> list[str]:
        safe = wrap_handler(
            logger=self._logger,
            feature_name=f"{feature_name} generator",
            default_factory=list,
        )(gen)
        return safe(prefix)
