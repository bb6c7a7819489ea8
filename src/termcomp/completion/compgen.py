"""Suggestion generators.

A Compgen turns the prefix being completed into a list of suggestions.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable, Iterable
from typing import TypeAlias

from termcomp.completion.types import FlagSchema
from termcomp.logging import get_logger

Compgen: TypeAlias = Callable[[str], list[str]]

__all__ = [
    "Compgen",
    "flag_name_gen",
    "flag_value_gen",
    "shell_compgen",
    "value_gen",
]

_logger = get_logger("completion.compgen")


def value_gen(values: Iterable[str]) -> Compgen:
    """Return a Compgen suggesting the values that start with the prefix."""
    choices = list(values)

    def generate(prefix: str) -> list[str]:
        return [value for value in choices if value.startswith(prefix)]

    return generate


def flag_value_gen(schema: FlagSchema, key: str) -> Compgen:
    """
    Return a Compgen suggesting the default value of flag key.

    This is the fallback for flags without a dedicated generator.
    """

    def generate(prefix: str) -> list[str]:
        spec = schema.get(key)
        if spec is None or not spec.default.startswith(prefix):
            return []
        return [spec.default]

    return generate


def flag_name_gen(schema: FlagSchema, seen: Iterable[str] = ()) -> Compgen:
    """
    Return a Compgen suggesting flag names not set yet.

    The dashes typed in the prefix are kept on every suggestion ("--na" gives
    "--name"); a prefix without dashes gets a single one.
    """
    used = frozenset(seen)

    def generate(prefix: str) -> list[str]:
        name = prefix.lstrip("-")
        dash = prefix[: len(prefix) - len(name)] or "-"
        return [
            dash + flag.name
            for flag in schema
            if flag.name not in used and flag.name.startswith(name)
        ]

    return generate


def shell_compgen(action: str, *, timeout: float = 5.0) -> Compgen:
    """
    Return a Compgen delegating to the bash ``compgen -A <action>`` builtin.

    Useful actions include ``file``, ``directory``, ``command``, ``user``,
    ``hostname``, ``variable`` and ``signal`` (see ``help compgen``).
    Failures (no bash, non-zero exit, timeout) yield no suggestions.
    """

    def generate(prefix: str) -> list[str]:
        script = f"compgen -A {shlex.quote(action)} -- {shlex.quote(prefix)}"
        try:
            result = subprocess.run(
                ["bash", "-i", "-c", script],
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            _logger.debug("compgen -A %s failed: %s", action, exc)
            return []

        if result.returncode != 0:
            _logger.debug(
                "compgen -A %s exited with %d: %s",
                action,
                result.returncode,
                result.stderr.strip(),
            )
            return []
        return [line for line in result.stdout.splitlines() if line]

    return generate
