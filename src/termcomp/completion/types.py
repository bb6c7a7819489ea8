"""Type definitions for completion context classification."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from enum import Enum

from typing import NamedTuple


# "=" separates a value, "/" declares secondary click options
_RESERVED_CHARS = frozenset({"=", "/", " ", "\t", "\n"})


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class Verdict(_StrEnum):
    """What kind of completion the cursor position expects."""

    ERROR = "error"
    FLAG_NAME = "flag_name"
    FLAG_VALUE = "flag_value"
    ARGUMENT = "argument"


class FlagArity(_StrEnum):
    """Whether a flag consumes a value token."""

    BOOL = "bool"
    VALUE = "value"


class ParseErrorKind(_StrEnum):
    """Why a permissive flag parse stopped with an error."""

    UNKNOWN_FLAG = "unknown_flag"
    MISSING_VALUE = "missing_value"
    UNEXPECTED_VALUE = "unexpected_value"
    MALFORMED = "malformed"


class FlagSpec(NamedTuple):
    """A recognized flag."""

    name: str  # Without leading dashes
    arity: FlagArity
    default: str = ""


@dataclasses.dataclass(frozen=True)
class FlagSchema:
    """Read-only set of recognized flags, in declaration order."""

    flags: tuple[FlagSpec, ...] = ()

    def __post_init__(self) -> None:
        names = [flag.name for flag in self.flags]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate flag names in {names!r}")
        for name in names:
            if not name or name.startswith("-") or _RESERVED_CHARS & set(name):
                raise ValueError(f"Invalid flag name {name!r}")

    @classmethod
    def from_mapping(cls, arities: Mapping[str, FlagArity]) -> FlagSchema:
        """Build a schema from a name -> arity mapping."""
        return cls(tuple(FlagSpec(name, FlagArity(arity)) for name, arity in arities.items()))

    def __iter__(self) -> Iterator[FlagSpec]:
        return iter(self.flags)

    def __len__(self) -> int:
        return len(self.flags)

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None if isinstance(name, str) else False

    def get(self, name: str) -> FlagSpec | None:
        """Look up a flag by name (leading dashes are ignored)."""
        name = name.lstrip("-")
        for flag in self.flags:
            if flag.name == name:
                return flag
        return None

    def names(self) -> list[str]:
        return [flag.name for flag in self.flags]


class FlagParseError(NamedTuple):
    """Details of a failed permissive parse."""

    kind: ParseErrorKind
    flag: str  # Flag name without dashes, "" if unknown
    message: str


class ParseOutcome(NamedTuple):
    """Result of a permissive flag parse."""

    remaining: tuple[str, ...]  # Words left after the flags
    seen: frozenset[str]  # Flags set on the command line
    error: FlagParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
