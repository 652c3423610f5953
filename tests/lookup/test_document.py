"""Tests for TextDocument line indexing."""

import pytest

from symscope.lookup.document import TextDocument
from symscope.lookup.protocols import LineDocument


class TestTextDocument:
    """Tests for TextDocument."""

    def test_satisfies_line_document_protocol(self) -> None:
        assert isinstance(TextDocument("x"), LineDocument)

    def test_line_count_includes_trailing_empty_line(self) -> None:
        """A trailing newline opens one more (empty) line."""
        assert TextDocument("a\nb").line_count == 2
        assert TextDocument("a\nb\n").line_count == 3
        assert TextDocument("").line_count == 1

    def test_line_offsets_exclude_newline(self) -> None:
        doc = TextDocument("ab\ncd\n")

        assert doc.line_start_offset(1) == 3
        assert doc.line_end_offset(0) == 2
        assert doc.line_end_offset(1) == 5
        assert doc.line_end_offset(2) == 6

    def test_line_number_of_offsets(self) -> None:
        doc = TextDocument("ab\ncd")

        assert doc.line_number(0) == 0
        assert doc.line_number(2) == 0  # the newline itself
        assert doc.line_number(3) == 1
        assert doc.line_number(5) == 1

    def test_out_of_range_raises(self) -> None:
        doc = TextDocument("ab")

        with pytest.raises(IndexError):
            doc.line_start_offset(1)
        with pytest.raises(IndexError):
            doc.line_number(3)
