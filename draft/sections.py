"""
Collect the code fragments of a document into sections.

Each fenced block in the target language is one fragment.  A fragment that starts with a header like `⟨name⟩≡` (or
`⟨name⟩+≡`) belongs to the section `name`; any other fragment belongs to the unnamed section, whose key is "".  All
fragments of a section are kept, in document order, whether or not their header carries the `+`.
"""

from collections import defaultdict
from dataclasses import dataclass
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from draft import patterns
from draft.fences import FencedBlock, fenced_blocks
from draft.positions import Position, PositionIndex


logger = logging.getLogger(__name__)


def normalize_whitespace(text: str) -> str:
    return patterns.WHITESPACE_PATTERN.sub(" ", text.strip())


def reference_key(reference: str) -> str:
    """The section key named by a complete reference, delimiters included."""
    assert reference.startswith(patterns.SECTION_OPEN) and reference.endswith(patterns.SECTION_CLOSE)
    return normalize_whitespace(reference[len(patterns.SECTION_OPEN) : -len(patterns.SECTION_CLOSE)])


@dataclass(frozen=True)
class SectionHeader:
    key: str
    is_continuation: bool
    length: int  # how much of the fragment the header takes up, including the newline ending it


def parse_section_header(text: str) -> Optional[SectionHeader]:
    match = patterns.SECTION_HEADER_PATTERN.match(text)
    if match is None:
        return None
    length = match.end()
    if text.startswith("\n", length):
        length += 1
    return SectionHeader(normalize_whitespace(match.group("name")), bool(match.group("continuation")), length)


@dataclass(frozen=True)
class SectionFragment:
    body: str
    anchor: Position  # document position of the first character of body
    is_continuation: bool = False


class SectionTable:
    """
    Section keys mapped to their fragments.  Build one with `from_document` or `from_blocks`; once built it does not
    change.
    """

    def __init__(self, sections: Dict[str, Tuple[SectionFragment, ...]]):
        self._sections = dict(sections)

    @classmethod
    def from_document(cls, document: str, language: str = patterns.DEFAULT_LANGUAGE) -> "SectionTable":
        return cls.from_blocks(document, fenced_blocks(document), language)

    @classmethod
    def from_blocks(
        cls, document: str, blocks: Iterable[FencedBlock], language: str = patterns.DEFAULT_LANGUAGE
    ) -> "SectionTable":
        """
        Blocks must arrive in document order; their anchors are found with a single forward pass over the document.
        Blocks whose info tag is not `language` are skipped.
        """
        sections: Dict[str, List[SectionFragment]] = defaultdict(list)
        index = PositionIndex(document)
        for block in blocks:
            if block.info != language:
                logger.debug('skipping "%s" block at offset %d', block.info, block.start)
                continue
            key = ""
            is_continuation = False
            body = block.text
            body_start = block.start
            if (header := parse_section_header(block.text)) is not None:
                key = header.key
                is_continuation = header.is_continuation
                body = block.text[header.length :]
                body_start += header.length
                if is_continuation and key not in sections:
                    logger.warning('section "%s" is continued before it is defined', key)
                elif not is_continuation and key in sections:
                    logger.warning('section "%s" is defined again; its fragments are appended', key)
            anchor = index.position_of(body_start)
            logger.debug('fragment for section "%s" at line %d, col %d', key, anchor.line, anchor.column)
            sections[key].append(SectionFragment(body, anchor, is_continuation))
        return cls({key: tuple(fragments) for key, fragments in sections.items()})

    def __contains__(self, key: str) -> bool:
        return key in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def keys(self) -> List[str]:
        return list(self._sections)

    def fragments(self, key: str) -> Tuple[SectionFragment, ...]:
        return self._sections.get(key, ())
