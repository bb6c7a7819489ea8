"""Shell line lexing for completion."""

from termcomp.shell.cursor import completion_prefix, locate, parse_args
from termcomp.shell.tokenizer import tokenize
from termcomp.shell.types import LexMode, LocatedArgs, Word

__all__ = [
    "LexMode",
    "LocatedArgs",
    "Word",
    "completion_prefix",
    "locate",
    "parse_args",
    "tokenize",
]
