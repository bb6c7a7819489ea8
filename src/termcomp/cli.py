"""Command-line interface for termcomp.

Completes a command line for a command described by options, e.g.:

    complete -C 'termcomp --flag name --bool yes --values name=alice,bob' cmd

bash appends the command name, the current word and the previous word to the
``complete -C`` command. Everything from the first positional word on is
ignored, even words that look like termcomp options.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TextIO

from termcomp.completion.classifier import classify
from termcomp.completion.compgen import value_gen
from termcomp.completion.environment import completion_line, completion_point
from termcomp.completion.terminator import Terminator
from termcomp.completion.types import FlagArity, FlagSchema, FlagSpec
from termcomp.errors import TermcompError
from termcomp.logging import configure_logging, get_logger
from termcomp.shell.cursor import completion_prefix, parse_args as parse_line


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    line: str | None
    point: int | None
    flags: tuple[FlagSpec, ...]
    flag_values: tuple[tuple[str, tuple[str, ...]], ...]
    arg_values: tuple[str, ...]
    explain: bool
    log_level: str
    log_file: Path | None
    debug: bool

    def schema(self) -> FlagSchema:
        return FlagSchema(self.flags)


def _valued_flag(text: str) -> FlagSpec:
    name, _, default = text.partition("=")
    return FlagSpec(name=name.lstrip("-"), arity=FlagArity.VALUE, default=default)


def _bool_flag(text: str) -> FlagSpec:
    return FlagSpec(name=text.lstrip("-"), arity=FlagArity.BOOL)


def _flag_values(text: str) -> tuple[str, tuple[str, ...]]:
    name, sep, values = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=a,b,c, got {text!r}")
    return name.lstrip("-"), _split_values(values)


def _split_values(text: str) -> tuple[str, ...]:
    return tuple(value for value in text.split(",") if value)


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="termcomp",
        description="Shell command-line completion for flag-driven commands",
        allow_abbrev=False,
    )

    parser.add_argument(
        "--line",
        default=None,
        help="Command line to complete (default: $COMP_LINE)",
    )

    parser.add_argument(
        "--point",
        type=int,
        default=None,
        help="Cursor offset in the line (default: $COMP_POINT, or end of --line)",
    )

    parser.add_argument(
        "--flag",
        dest="flags",
        action="append",
        type=_valued_flag,
        default=[],
        metavar="NAME[=DEFAULT]",
        help="Declare a flag taking a value (repeatable)",
    )

    parser.add_argument(
        "--bool",
        dest="flags",
        action="append",
        type=_bool_flag,
        metavar="NAME",
        help="Declare a boolean flag (repeatable)",
    )

    parser.add_argument(
        "--values",
        action="append",
        type=_flag_values,
        default=[],
        metavar="NAME=a,b,c",
        help="Suggested values for a flag (repeatable)",
    )

    parser.add_argument(
        "--args",
        type=_split_values,
        default=(),
        metavar="a,b,c",
        help="Suggested values for positional arguments",
    )

    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print the completion context as JSON instead of suggestions",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: WARNING, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    # Words appended by bash's `complete -C`, from the command name on
    parser.add_argument("words", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)

    args = parser.parse_args(argv)

    flags = tuple(args.flags)
    try:
        FlagSchema(flags)
    except ValueError as exc:
        parser.error(str(exc))

    # Determine log level: explicit --log-level wins, otherwise --debug sets DEBUG
    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "WARNING"

    return CliArgs(
        line=args.line,
        point=args.point,
        flags=flags,
        flag_values=tuple(args.values),
        arg_values=tuple(args.args),
        explain=args.explain,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
    )


def build_terminator(args: CliArgs) -> Terminator:
    """Build the Terminator described by the command-line options."""
    terminator = Terminator(args.schema())
    for name, values in args.flag_values:
        terminator.flag(name, value_gen(values))
    if args.arg_values:
        terminator.argsgen(_StaticArgs(args.arg_values))
    return terminator


class _StaticArgs:
    """Suggests the same values for every positional argument."""

    def __init__(self, values: Sequence[str]) -> None:
        self._gen = value_gen(values)

    def compgen(self, args: Sequence[str], in_word: bool) -> list[str]:
        _, prefix = completion_prefix(args, in_word)
        return self._gen(prefix)


def _resolve_line(
    args: CliArgs, environ: Mapping[str, str]
) -> tuple[str, int] | None:
    """Get the line and point from the options, falling back to the environment."""
    line = args.line if args.line is not None else completion_line(environ)
    if args.point is not None:
        point = args.point
    elif args.line is not None:
        point = len(line)
    else:
        point = completion_point(environ)

    if not line or point < 0:
        return None
    return line, point


def run(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    stdout: TextIO | None = None,
) -> int:
    """
    Complete a command line.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].
        environ: Environment to read COMP_LINE/COMP_POINT from. If None,
            uses os.environ.
        stdout: Stream receiving the suggestions. If None, uses sys.stdout.

    Returns:
        Exit code (0 for success, 1 if the line cannot be completed,
        2 if there is no line to complete).
    """
    args = parse_args(argv)
    if environ is None:
        environ = os.environ
    if stdout is None:
        stdout = sys.stdout

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")
    logger.debug("Configuration: %s", args)

    resolved = _resolve_line(args, environ)
    if resolved is None:
        logger.error("No command line to complete: use --line or set COMP_LINE/COMP_POINT")
        return 2
    line, point = resolved

    try:
        located = parse_line(line, point)
        if args.explain:
            _, prefix = completion_prefix(located.args, located.in_word)
            document = {
                "words": located.args,
                "in_word": located.in_word,
                "prefix": prefix,
                "verdict": str(classify(located.args, located.in_word, args.schema())),
            }
            stdout.write(json.dumps(document) + "\n")
            return 0

        suggestions = build_terminator(args).compgen(located.args, located.in_word)
    except TermcompError as exc:
        logger.warning("Cannot complete %r: %s", line, exc)
        return 1

    if suggestions:
        stdout.write("\n".join(suggestions) + "\n")
    return 0
