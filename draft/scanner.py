"""
Split one code fragment into spans, finding the section references in it.

A fragment is code in the target language, so the delimiters of a section reference can turn up inside comments and
literals where they must be left alone.  The scanner recognizes just enough of the language to step over those: line
comments, nesting block comments, raw strings with any number of `#` marks, ordinary strings with backslash escapes, and
character literals (telling them apart from lifetimes like `'a`).  Everything it steps over is plain text.

The spans come out in order and without gaps, so joining their text gives back the fragment.  A lexeme that is still
open at the end of the fragment comes out as an UNTERMINATED span saying what was left open; an unterminated character
literal is the exception, its span is only the quote and the one character after it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from draft import patterns


class SpanKind(Enum):
    PLAIN_TEXT = 1
    SECTION_REFERENCE = 2
    UNTERMINATED = 3


@dataclass(frozen=True)
class Span:
    lo: int
    hi: int
    kind: SpanKind
    description: Optional[str] = None  # what was left open, only for UNTERMINATED spans

    def text_of(self, text: str) -> str:
        return text[self.lo : self.hi]


class SectionScanner:
    """An iterator of spans over one fragment.  The cursor only moves forward."""

    def __init__(self, text: str):
        self.text = text
        self.cursor = 0
        self._pending: Optional[Span] = None

    def __iter__(self) -> Iterator[Span]:
        return self

    def __next__(self) -> Span:
        if self._pending is not None:
            span, self._pending = self._pending, None
            return span
        plain_text_start = self.cursor
        while self.cursor < len(self.text):
            span = self._step()
            if span is None:
                continue
            if span.lo > plain_text_start:
                self._pending = span
                return Span(plain_text_start, span.lo, SpanKind.PLAIN_TEXT)
            return span
        if self.cursor > plain_text_start:
            return Span(plain_text_start, self.cursor, SpanKind.PLAIN_TEXT)
        raise StopIteration

    def _step(self) -> Optional[Span]:
        """
        Move the cursor past the next lexeme that matters.  Return the span for it if it is a section reference or was
        left open, otherwise None (the cursor has moved over more plain text).
        """
        match = patterns.OPENER_PATTERN.search(self.text, self.cursor)
        if match is None:
            self.cursor = len(self.text)
            return None
        if match.group("section") is not None:
            return self._section_reference(match.start())
        if match.group("line_comment") is not None:
            return self._line_comment(match.end())
        if match.group("block_comment") is not None:
            return self._block_comment(match.start(), match.end())
        if match.group("raw_string") is not None:
            return self._raw_string(match.start(), match.end(), len(match.group("hashes")))
        if match.group("string") is not None:
            return self._string(match.start(), match.end())
        return self._char_literal_or_lifetime(match.start(), match.end())

    def _unterminated(self, lo: int, description: str) -> Span:
        self.cursor = len(self.text)
        return Span(lo, self.cursor, SpanKind.UNTERMINATED, description)

    def _section_reference(self, lo: int) -> Optional[Span]:
        close = self.text.find(patterns.SECTION_CLOSE, lo + len(patterns.SECTION_OPEN))
        if close < 0:
            return self._unterminated(lo, "section name")
        self.cursor = close + len(patterns.SECTION_CLOSE)
        return Span(lo, self.cursor, SpanKind.SECTION_REFERENCE)

    def _line_comment(self, position: int) -> Optional[Span]:
        # A comment on the fragment's last line needs no newline.
        newline = self.text.find("\n", position)
        self.cursor = len(self.text) if newline < 0 else newline
        return None

    def _block_comment(self, lo: int, position: int) -> Optional[Span]:
        depth = 1
        while depth:
            marker = patterns.BLOCK_COMMENT_MARKER_PATTERN.search(self.text, position)
            if marker is None:
                return self._unterminated(lo, "block comment")
            depth += 1 if marker.group() == "/*" else -1
            position = marker.end()
        self.cursor = position
        return None

    def _raw_string(self, lo: int, position: int, hash_count: int) -> Optional[Span]:
        terminator = '"' + "#" * hash_count
        end = self.text.find(terminator, position)
        if end < 0:
            return self._unterminated(lo, "raw string")
        self.cursor = end + len(terminator)
        return None

    def _string(self, lo: int, position: int) -> Optional[Span]:
        while (stop := patterns.STRING_STOP_PATTERN.search(self.text, position)) is not None:
            if stop.group() == '"':
                self.cursor = stop.end()
                return None
            position = stop.end() + 1  # skip whatever the backslash escapes
        return self._unterminated(lo, "double quote string")

    def _char_literal_or_lifetime(self, lo: int, position: int) -> Optional[Span]:
        lifetime = patterns.LIFETIME_PATTERN.match(self.text, position)
        if lifetime is not None and not self.text.startswith("'", lifetime.end()):
            self.cursor = lifetime.end()
            return None
        if position < len(self.text) and self.text[position] != "\n":
            escape = patterns.CHAR_ESCAPE_PATTERN.match(self.text, position)
            position = escape.end() if escape is not None else position + 1
            if self.text.startswith("'", position):
                self.cursor = position + 1
                return None
        self.cursor = position
        return Span(lo, position, SpanKind.UNTERMINATED, "character literal")
