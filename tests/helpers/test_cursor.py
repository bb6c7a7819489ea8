"""Tests for cursor marker helper."""

from __future__ import annotations

import pytest

from tests.helpers.cursor import extract_cursor_offset


class TestExtractCursorOffset:
    """Tests for extract_cursor_offset function."""

    def test_offset_at_start(self) -> None:
        """Offset 0 at start."""
        text, offset = extract_cursor_offset(text_with_cursor="<CURSOR>cmd")
        assert text == "cmd"
        assert offset == 0

    def test_offset_in_middle(self) -> None:
        """Offset in middle of text."""
        text, offset = extract_cursor_offset(text_with_cursor="cmd <CURSOR>-name")
        assert text == "cmd -name"
        assert offset == 4

    def test_offset_at_end(self) -> None:
        """Offset at end of text."""
        text, offset = extract_cursor_offset(text_with_cursor="cmd -yes<CURSOR>")
        assert text == "cmd -yes"
        assert offset == 8

    def test_custom_marker(self) -> None:
        """Can use custom marker."""
        text, offset = extract_cursor_offset(text_with_cursor="cmd |arg", marker="|")
        assert text == "cmd arg"
        assert offset == 4

    def test_missing_marker_raises(self) -> None:
        """Raises ValueError when marker is missing."""
        with pytest.raises(ValueError, match="not found"):
            extract_cursor_offset(text_with_cursor="cmd arg")

    def test_multiple_markers_raises(self) -> None:
        """Raises ValueError when multiple markers present."""
        with pytest.raises(ValueError, match="Multiple"):
            extract_cursor_offset(text_with_cursor="<CURSOR>cmd <CURSOR>arg")
