"""Permissive flag parsing over a flag schema.

Parses words the way a classic "stop at the first non-flag" parser does and
reports where and why it stopped, instead of failing the way a CLI would on
a line that is still being typed.

A fresh click command is built for every call, so no parser state is shared
between calls.
"""

from __future__ import annotations

from collections.abc import Sequence

import click
from click.core import ParameterSource

from termcomp.completion.types import (
    FlagArity,
    FlagParseError,
    FlagSchema,
    ParseErrorKind,
    ParseOutcome,
)
from termcomp.logging import get_logger

__all__ = ["parse_flags"]

_REMAINING_PARAM = "remaining"

_logger = get_logger("completion.flags")


def _param_name(index: int) -> str:
    # Flag names are arbitrary strings; click parameter names must be identifiers
    return f"flag_{index}"


def _build_command(schema: FlagSchema) -> click.Command:
    """Build a click command accepting the schema's flags as -name and --name."""
    params: list[click.Parameter] = []
    for index, flag in enumerate(schema):
        decls = [_param_name(index), f"-{flag.name}", f"--{flag.name}"]
        if flag.arity is FlagArity.BOOL:
            params.append(click.Option(decls, is_flag=True, default=False))
        else:
            params.append(click.Option(decls, type=click.STRING, default=None))
    params.append(click.Argument([_REMAINING_PARAM], nargs=-1))

    return click.Command(
        "termcomp",
        params=params,
        add_help_option=False,
        context_settings={
            "allow_interspersed_args": False,
            "ignore_unknown_options": False,
        },
    )


def _flag_name(option_name: str | None) -> str:
    return (option_name or "").split("=", 1)[0].lstrip("-")


def _to_parse_error(schema: FlagSchema, exc: click.UsageError) -> FlagParseError:
    message = exc.format_message()

    if isinstance(exc, click.NoSuchOption):
        return FlagParseError(
            kind=ParseErrorKind.UNKNOWN_FLAG,
            flag=_flag_name(exc.option_name),
            message=message,
        )

    if isinstance(exc, click.BadOptionUsage):
        name = _flag_name(exc.option_name)
        spec = schema.get(name)
        # Valued options only complain when their value is missing
        if spec is not None and spec.arity is FlagArity.VALUE:
            kind = ParseErrorKind.MISSING_VALUE
        else:
            kind = ParseErrorKind.UNEXPECTED_VALUE
        return FlagParseError(kind=kind, flag=name, message=message)

    return FlagParseError(kind=ParseErrorKind.MALFORMED, flag="", message=message)


def parse_flags(schema: FlagSchema, tokens: Sequence[str]) -> ParseOutcome:
    """
    Consume flags from the front of tokens.

    Flags are accepted with one or two dashes, with their value either in the
    next token or after "=". Parsing stops at the first token that is not a
    flag (a bare "-" counts as a word) or right after "--".

    Args:
        schema: The recognized flags.
        tokens: Words to parse, without the command name.

    Returns:
        ParseOutcome with the words left after the flags and the flags that
        were set, or with an error describing the first malformed flag.
    """
    command = _build_command(schema)

    try:
        ctx = command.make_context(command.name, list(tokens))
    except click.UsageError as exc:
        error = _to_parse_error(schema, exc)
        _logger.debug("Flag parse of %r failed: %s", list(tokens), error.message)
        return ParseOutcome(remaining=(), seen=frozenset(), error=error)

    seen = frozenset(
        flag.name
        for index, flag in enumerate(schema)
        if ctx.get_parameter_source(_param_name(index)) is ParameterSource.COMMANDLINE
    )
    remaining = tuple(ctx.params.get(_REMAINING_PARAM) or ())
    _logger.debug("Flag parse of %r left %r", list(tokens), remaining)
    return ParseOutcome(remaining=remaining, seen=seen)
