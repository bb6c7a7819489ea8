"""Completion context classification and suggestion dispatch."""

from termcomp.completion.classifier import classify
from termcomp.completion.compgen import (
    Compgen,
    flag_name_gen,
    flag_value_gen,
    shell_compgen,
    value_gen,
)
from termcomp.completion.flags import parse_flags
from termcomp.completion.terminator import Argsgen, Terminator
from termcomp.completion.types import (
    FlagArity,
    FlagParseError,
    FlagSchema,
    FlagSpec,
    ParseErrorKind,
    ParseOutcome,
    Verdict,
)

__all__ = [
    "Argsgen",
    "Compgen",
    "FlagArity",
    "FlagParseError",
    "FlagSchema",
    "FlagSpec",
    "ParseErrorKind",
    "ParseOutcome",
    "Terminator",
    "Verdict",
    "classify",
    "flag_name_gen",
    "flag_value_gen",
    "parse_flags",
    "shell_compgen",
    "value_gen",
]
