"""
Expand a section into source text by replacing every reference in it with the expansion of the section it names.

Before each expanded reference a line comment holding the reference is written, so the output can be traced back to
the document.  Problems found along the way do not stop the expansion: a reference to a section that does not exist (or
that is already being expanded further up) is copied through unchanged, an unterminated comment or literal is dropped,
and each is recorded as an ExpansionError at its position in the document.  Only asking for a section that does not
exist at all is an exception.
"""

from dataclasses import dataclass
from enum import Enum
from io import StringIO
import logging
from typing import List

from draft import patterns
from draft.errors import NoSuchSectionError, NoUnnamedFragmentsError
from draft.positions import Position, PositionIndex
from draft.scanner import SectionScanner, SpanKind
from draft.sections import SectionTable, normalize_whitespace, reference_key


logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    UNTERMINATED_COMMENT = 1
    UNTERMINATED_STRING = 2
    UNTERMINATED_CHAR_LITERAL = 3
    UNTERMINATED_SECTION_NAME = 4
    UNDEFINED_SECTION = 5
    CYCLIC_SECTION_REFERENCE = 6


UNTERMINATED_ERROR_KINDS = {
    "block comment": ErrorKind.UNTERMINATED_COMMENT,
    "raw string": ErrorKind.UNTERMINATED_STRING,
    "double quote string": ErrorKind.UNTERMINATED_STRING,
    "character literal": ErrorKind.UNTERMINATED_CHAR_LITERAL,
    "section name": ErrorKind.UNTERMINATED_SECTION_NAME,
}


@dataclass(frozen=True)
class ExpansionError:
    kind: ErrorKind
    position: Position
    detail: str  # the section name, or what was left unterminated

    @property
    def description(self) -> str:
        if self.kind is ErrorKind.UNDEFINED_SECTION:
            return f'undefined section "{self.detail}"'
        if self.kind is ErrorKind.CYCLIC_SECTION_REFERENCE:
            return f'section "{self.detail}" refers to itself'
        return f"unterminated {self.detail}"

    def __str__(self) -> str:
        return f"{self.description} at line {self.position.line}, col {self.position.column}"


class Draft:
    def __init__(self, table: SectionTable):
        self.table = table
        self.expansion_errors: List[ExpansionError] = []

    @classmethod
    def from_document(cls, document: str, language: str = patterns.DEFAULT_LANGUAGE) -> "Draft":
        return cls(SectionTable.from_document(document, language))

    @property
    def errors(self) -> List[str]:
        """The problems found by the most recent call to `expand`, formatted for people."""
        return [str(error) for error in self.expansion_errors]

    def expand(self, name: str = "") -> str:
        key = normalize_whitespace(name)
        self.expansion_errors = []
        if key not in self.table:
            if not key:
                raise NoUnnamedFragmentsError()
            raise NoSuchSectionError(key)
        stream = StringIO()
        self._expand_section(stream, key, [], self.expansion_errors)
        return stream.getvalue()

    def _expand_section(self, stream: StringIO, key: str, key_stack: List[str], errors: List[ExpansionError]):
        logger.debug('expanding section "%s"', key)
        key_stack.append(key)
        for fragment in self.table.fragments(key):
            index = PositionIndex(fragment.body)

            def record(kind: ErrorKind, offset: int, detail: str):
                position = index.position_of(offset).relative_to(fragment.anchor)
                errors.append(ExpansionError(kind, position, detail))

            for span in SectionScanner(fragment.body):
                text = span.text_of(fragment.body)
                if span.kind is SpanKind.PLAIN_TEXT:
                    stream.write(text)
                elif span.kind is SpanKind.SECTION_REFERENCE:
                    referenced_key = reference_key(text)
                    if referenced_key in key_stack:
                        record(ErrorKind.CYCLIC_SECTION_REFERENCE, span.lo, referenced_key)
                        stream.write(text)
                    elif referenced_key not in self.table:
                        record(ErrorKind.UNDEFINED_SECTION, span.lo, referenced_key)
                        stream.write(text)
                    else:
                        stream.write(f"\n{patterns.LINE_COMMENT_PREFIX} {text}\n")
                        self._expand_section(stream, referenced_key, key_stack, errors)
                else:
                    record(UNTERMINATED_ERROR_KINDS[span.description], span.lo, span.description)
        key_stack.pop()
