"""
Find the fenced code blocks of a markdown document.

Only top-level fences are recognized: an opening line of three or more backticks or tildes, indented at most three
spaces and followed by an info string, and a closing line of the same character, at least as long, with nothing after
it but whitespace.  A fence that is never closed runs to the end of the document.
"""

from dataclasses import dataclass
from io import StringIO
import logging
from typing import Iterator, Optional

from draft import patterns
from draft.positions import LineTable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FencedBlock:
    info: str  # first word of the info string, possibly empty
    start: int  # offset in the document of the first character after the opening fence line
    text: str  # everything between the fence lines, exactly as written


@dataclass
class OpenFence:
    fence: str
    info: str
    start: int
    line_start: int

    def closes_on(self, line: str) -> bool:
        match = patterns.FENCE_PATTERN.match(line)
        if match is None or match.group("info").strip():
            return False
        fence = match.group("fence")
        return fence[0] == self.fence[0] and len(fence) >= len(self.fence)


def open_fence(line: str, line_start: int) -> Optional[OpenFence]:
    match = patterns.FENCE_PATTERN.match(line)
    if match is None:
        return None
    fence = match.group("fence")
    info = match.group("info")
    if fence[0] == "`" and "`" in info:
        return None
    words = info.split()
    return OpenFence(fence, words[0] if words else "", line_start + len(line), line_start)


def fenced_blocks(document: str) -> Iterator[FencedBlock]:
    current_fence: Optional[OpenFence] = None
    offset = 0
    for line in StringIO(document, newline="\n"):
        line_start = offset
        offset += len(line)
        if current_fence is None:
            current_fence = open_fence(line, line_start)
        elif current_fence.closes_on(line):
            yield FencedBlock(current_fence.info, current_fence.start, document[current_fence.start : line_start])
            current_fence = None
    if current_fence is not None:
        line_number = LineTable(document).position_of(current_fence.line_start).line + 1
        logger.warning("fence opened on line %d is never closed", line_number)
        yield FencedBlock(current_fence.info, current_fence.start, document[current_fence.start :])
