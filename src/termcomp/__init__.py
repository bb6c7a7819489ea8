"""Shell command-line completion for flag-driven commands."""

from termcomp.completion import FlagArity, FlagSchema, FlagSpec, Terminator, Verdict, classify
from termcomp.errors import TermcompError, UnsupportedExpansionError
from termcomp.shell import Word, locate, parse_args, tokenize

__version__ = "0.1.0"

__all__ = [
    "FlagArity",
    "FlagSchema",
    "FlagSpec",
    "TermcompError",
    "Terminator",
    "UnsupportedExpansionError",
    "Verdict",
    "Word",
    "classify",
    "locate",
    "parse_args",
    "tokenize",
]
