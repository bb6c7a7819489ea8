"""Tests for completion dispatch."""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence

import pytest

from termcomp.completion.compgen import value_gen
from termcomp.completion.terminator import Terminator
from termcomp.completion.types import FlagArity, FlagSchema, FlagSpec
from termcomp.errors import InvalidFlagsError


@pytest.fixture
def terminator() -> Terminator:
    schema = FlagSchema(
        (
            FlagSpec("name", FlagArity.VALUE, default="name"),
            FlagSpec("yes", FlagArity.BOOL),
        )
    )
    return Terminator(schema)


class RecordingArgsgen:
    def __init__(self) -> None:
        self.calls: list[tuple[list[str], bool]] = []

    def compgen(self, args: Sequence[str], in_word: bool) -> list[str]:
        self.calls.append((list(args), in_word))
        return ["recorded"]


class TestFlagCompletion:
    def test_flag_names(self, terminator: Terminator) -> None:
        assert terminator.compgen(["cmd", "-"], True) == ["-name", "-yes"]

    def test_flag_names_skip_seen(self, terminator: Terminator) -> None:
        assert terminator.compgen(["cmd", "-yes", "--"], True) == ["--name"]

    def test_default_value(self, terminator: Terminator) -> None:
        assert terminator.compgen(["cmd", "-name"], False) == ["name"]

    def test_flag_generator_after_flag(self, terminator: Terminator) -> None:
        terminator.flag("name", value_gen(["alice", "bob"]))
        assert terminator.compgen(["cmd", "-name"], False) == ["alice", "bob"]

    def test_flag_generator_in_value(self, terminator: Terminator) -> None:
        terminator.flag("-name", value_gen(["alice", "bob"]))
        assert terminator.compgen(["cmd", "--name", "b"], True) == ["bob"]

    def test_invalid_flags_raise(self, terminator: Terminator) -> None:
        with pytest.raises(InvalidFlagsError) as excinfo:
            terminator.compgen(["cmd", "-no", "toto", "tata"], True)
        assert excinfo.value.args_so_far == ["cmd", "-no", "toto", "tata"]


class TestArgumentCompletion:
    def test_no_generator(self, terminator: Terminator) -> None:
        assert terminator.compgen(["cmd", "toto"], True) == []

    def test_first_position_after_command(self, terminator: Terminator) -> None:
        terminator.arg(0, value_gen(["foo", "bar"]))
        assert terminator.compgen(["cmd"], False) == ["foo", "bar"]

    def test_position_in_word(self, terminator: Terminator) -> None:
        terminator.arg(0, value_gen(["foo", "bar"]))
        assert terminator.compgen(["cmd", "-yes", "f"], True) == ["foo"]

    def test_next_position(self, terminator: Terminator) -> None:
        terminator.arg(0, value_gen(["foo"]))
        terminator.arg(1, value_gen(["one", "two"]))
        assert terminator.compgen(["cmd", "foo"], False) == ["one", "two"]
        assert terminator.compgen(["cmd", "foo", "t"], True) == ["two"]
        assert terminator.compgen(["cmd", "foo", "two"], False) == []

    def test_argsgen_takes_precedence(self, terminator: Terminator) -> None:
        terminator.arg(0, value_gen(["foo"]))
        recorder = RecordingArgsgen()
        terminator.argsgen(recorder)

        assert terminator.compgen(["cmd", "-yes", "sub", "x"], True) == ["recorded"]
        assert recorder.calls == [(["sub", "x"], True)]

    def test_subcommand_recursion(self) -> None:
        commit = Terminator(FlagSchema.from_mapping({"force": FlagArity.BOOL}))
        commit.arg(0, value_gen(["main.py", "README.md"]))
        subcommands = {"commit": commit}

        class Dispatch:
            def compgen(self, args: Sequence[str], in_word: bool) -> list[str]:
                if len(args) == 1 and in_word:
                    return value_gen(subcommands)(args[0])
                sub = subcommands.get(args[0]) if args else None
                return sub.compgen(args, in_word) if sub else []

        root = Terminator(FlagSchema())
        root.argsgen(Dispatch())

        assert root.compgen(["git", "co"], True) == ["commit"]
        assert root.compgen(["git", "commit", "--f"], True) == ["--force"]
        assert root.compgen(["git", "commit", "--force", "M"], True) == ["main.py"]


class TestGeneratorFailure:
    def test_failing_generator_yields_nothing(
        self, terminator: Terminator, caplog: pytest.LogCaptureFixture
    ) -> None:
        def broken(prefix: str) -> list[str]:
            raise RuntimeError("generator exploded")

        terminator.flag("name", broken)
        with caplog.at_level(logging.ERROR):
            assert terminator.compgen(["cmd", "-name"], False) == []

        assert "flag 'name' values generator" in caplog.text
        assert "generator exploded" in caplog.text


class TestTerminate:
    def test_not_in_completion_mode(self, terminator: Terminator) -> None:
        assert terminator.terminate(environ={}) is None

    def test_writes_suggestions(self, terminator: Terminator) -> None:
        stream = io.StringIO()
        code = terminator.terminate(
            environ={"COMP_LINE": "cmd -na toto", "COMP_POINT": "7"}, stream=stream
        )
        assert code == 0
        assert stream.getvalue() == "-name\n"

    def test_no_suggestions_writes_nothing(self, terminator: Terminator) -> None:
        stream = io.StringIO()
        code = terminator.terminate(
            environ={"COMP_LINE": "cmd arg", "COMP_POINT": "7"}, stream=stream
        )
        assert code == 0
        assert stream.getvalue() == ""

    def test_invalid_point(self, terminator: Terminator) -> None:
        stream = io.StringIO()
        code = terminator.terminate(
            environ={"COMP_LINE": "cmd", "COMP_POINT": "x"}, stream=stream
        )
        assert code == 1
        assert stream.getvalue() == ""

    def test_unsupported_expansion(self, terminator: Terminator) -> None:
        stream = io.StringIO()
        code = terminator.terminate(
            environ={"COMP_LINE": "cmd $(ls) -", "COMP_POINT": "11"}, stream=stream
        )
        assert code == 1
        assert stream.getvalue() == ""

    def test_invalid_flags(
        self, terminator: Terminator, caplog: pytest.LogCaptureFixture
    ) -> None:
        stream = io.StringIO()
        with caplog.at_level(logging.WARNING):
            code = terminator.terminate(
                environ={"COMP_LINE": "cmd -no toto", "COMP_POINT": "12"},
                stream=stream,
            )
        assert code == 1
        assert "Cannot complete line" in caplog.text
