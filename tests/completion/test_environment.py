"""Tests for reading the bash completion environment."""

from __future__ import annotations

import pytest

from termcomp.completion.environment import (
    COMP_LINE,
    COMP_POINT,
    completion_line,
    completion_point,
    is_completion_mode,
    read_args,
)
from termcomp.errors import CompletionEnvironmentError, UnsupportedExpansionError
from termcomp.shell.types import LocatedArgs


class TestIsCompletionMode:
    def test_both_set(self) -> None:
        assert is_completion_mode({COMP_LINE: "cmd ", COMP_POINT: "4"})

    def test_missing_point(self) -> None:
        assert not is_completion_mode({COMP_LINE: "cmd "})

    def test_empty_line(self) -> None:
        assert not is_completion_mode({COMP_LINE: "", COMP_POINT: "0"})

    def test_defaults_to_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(COMP_LINE, "cmd")
        monkeypatch.setenv(COMP_POINT, "3")
        assert is_completion_mode()
        assert completion_line() == "cmd"
        assert completion_point() == 3


class TestCompletionPoint:
    def test_valid(self) -> None:
        assert completion_point({COMP_POINT: "12"}) == 12

    def test_invalid(self) -> None:
        assert completion_point({COMP_POINT: "twelve"}) == -1

    def test_missing(self) -> None:
        assert completion_point({}) == -1

    def test_missing_line(self) -> None:
        assert completion_line({}) == ""


class TestReadArgs:
    def test_reads_line_up_to_point(self) -> None:
        environ = {COMP_LINE: "tester tototata", COMP_POINT: "11"}
        assert read_args(environ) == LocatedArgs(["tester", "toto"], True)

    def test_invalid_point_raises(self) -> None:
        with pytest.raises(CompletionEnvironmentError, match="COMP_POINT"):
            read_args({COMP_LINE: "cmd", COMP_POINT: "-1"})

    def test_lexing_error_propagates(self) -> None:
        with pytest.raises(UnsupportedExpansionError):
            read_args({COMP_LINE: "cmd ${HOME} x", COMP_POINT: "13"})
