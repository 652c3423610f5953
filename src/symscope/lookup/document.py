"""Line-indexed text documents."""

from __future__ import annotations

from bisect import bisect_right


class TextDocument:
    """An immutable `LineDocument` over a string.

    Lines are 0-based and separated by ``\\n``; a trailing newline opens one
    more (empty) line. Line end offsets exclude the newline.
    """

    __slots__ = ("_text", "_line_starts")

    def __init__(self, text: str):
        self._text = text
        starts = [0]
        idx = text.find("\n")
        while idx >= 0:
            starts.append(idx + 1)
            idx = text.find("\n", idx + 1)
        self._line_starts = starts

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_start_offset(self, line: int) -> int:
        self._check_line(line)
        return self._line_starts[line]

    def line_end_offset(self, line: int) -> int:
        self._check_line(line)
        if line + 1 < len(self._line_starts):
            return self._line_starts[line + 1] - 1
        return len(self._text)

    def line_number(self, offset: int) -> int:
        if offset < 0 or offset > len(self._text):
            raise IndexError(f"offset {offset} outside document of length {len(self._text)}")
        return bisect_right(self._line_starts, offset) - 1

    def _check_line(self, line: int) -> None:
        if line < 0 or line >= len(self._line_starts):
            raise IndexError(f"line {line} outside document with {len(self._line_starts)} lines")

    def __repr__(self) -> str:
        return f"TextDocument(lines={self.line_count}, length={len(self._text)})"
