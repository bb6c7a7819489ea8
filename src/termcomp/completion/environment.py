"""Read the completion request from the bash completion environment.

bash runs a ``complete -C`` command with the line being edited in COMP_LINE
and the cursor offset in COMP_POINT.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from termcomp.errors import CompletionEnvironmentError
from termcomp.shell.cursor import parse_args
from termcomp.shell.types import LocatedArgs

COMP_LINE = "COMP_LINE"
COMP_POINT = "COMP_POINT"

__all__ = [
    "COMP_LINE",
    "COMP_POINT",
    "completion_line",
    "completion_point",
    "is_completion_mode",
    "read_args",
]


def _env(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def is_completion_mode(environ: Mapping[str, str] | None = None) -> bool:
    """True if both COMP_LINE and COMP_POINT are set to non-empty values."""
    env = _env(environ)
    return bool(env.get(COMP_LINE)) and bool(env.get(COMP_POINT))


def completion_line(environ: Mapping[str, str] | None = None) -> str:
    return _env(environ).get(COMP_LINE, "")


def completion_point(environ: Mapping[str, str] | None = None) -> int:
    """Return COMP_POINT as an integer, or -1 if it is missing or invalid."""
    try:
        return int(_env(environ).get(COMP_POINT, ""))
    except ValueError:
        return -1


def read_args(environ: Mapping[str, str] | None = None) -> LocatedArgs:
    """
    Get the words typed up to the completion point.

    Raises:
        CompletionEnvironmentError: If COMP_POINT is missing or not a
            non-negative integer.
        UnsupportedExpansionError: If the line cannot be lexed.
    """
    point = completion_point(environ)
    if point < 0:
        raise CompletionEnvironmentError(
            f"{COMP_POINT} is not a valid offset: {_env(environ).get(COMP_POINT)!r}"
        )
    return parse_args(completion_line(environ), point)
