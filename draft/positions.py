"""
Translate offsets in a text buffer into (line, column) positions.

Lines and columns are both counted from zero.  A line's terminating newline belongs to that line, so the offset of a
newline character has the same line number as the characters before it.  Offsets at or past the end of the text are
reported as if the last line went on forever.
"""

from bisect import bisect_left
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Position:
    line: int = 0
    column: int = 0

    def relative_to(self, anchor: "Position") -> "Position":
        """
        Turn a position inside a fragment into a document position, given the document position of the fragment's
        first character.  Only the fragment's first line is shifted sideways.
        """
        if self.line == 0:
            return Position(anchor.line, anchor.column + self.column)
        return Position(anchor.line + self.line, self.column)


class PositionIndex:
    """
    Walks forward through the text as it is queried.  Successive calls to `position_of` must not go backwards; that is
    checked with an assertion, so under `python -O` a backwards query silently answers with stale line information.
    Use `LineTable` where queries arrive in no particular order.
    """

    def __init__(self, text: str):
        self.text = text
        self._line = 0
        self._line_start = 0
        self._scanned = 0
        self._last_offset = 0

    def position_of(self, offset: int) -> Position:
        assert offset >= self._last_offset, f"offset {offset} queried after {self._last_offset}"
        self._last_offset = offset
        while (newline := self.text.find("\n", self._scanned, offset)) >= 0:
            self._line += 1
            self._line_start = newline + 1
            self._scanned = newline + 1
        self._scanned = max(self._scanned, min(offset, len(self.text)))
        return Position(self._line, offset - self._line_start)


class LineTable:
    """Answers position queries in any order by binary search over the offsets of every newline."""

    def __init__(self, text: str):
        self.newlines: List[int] = [offset for offset, character in enumerate(text) if character == "\n"]

    def position_of(self, offset: int) -> Position:
        line = bisect_left(self.newlines, offset)
        line_start = self.newlines[line - 1] + 1 if line else 0
        return Position(line, offset - line_start)
