"""
Draft extracts code from literate markdown documents.

Fenced code blocks in the target language are collected into sections, and references to sections inside the code are
replaced by the sections' own code.
"""

from draft.errors import DraftError, NoSuchSectionError, NoUnnamedFragmentsError, SectionNotFoundError
from draft.expander import Draft, ErrorKind, ExpansionError
from draft.positions import LineTable, Position, PositionIndex
from draft.scanner import SectionScanner, Span, SpanKind
from draft.sections import SectionFragment, SectionTable

__version__ = "0.1.0"
