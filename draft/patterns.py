import re


SECTION_OPEN = "⟨"
SECTION_CLOSE = "⟩"

LINE_COMMENT_PREFIX = "//"

DEFAULT_LANGUAGE = "rust"

SECTION_HEADER_PATTERN = re.compile(
    r"""
    \A\s*
    ⟨(?P<name>[^⟨⟩]*)⟩     # the name of the section being defined
    (?P<continuation>\+?)
    ≡
    [ \t\r]*
    """,
    re.VERBOSE | re.DOTALL,
)

WHITESPACE_PATTERN = re.compile(r"\s+")

# Everything that can start a lexeme the section scanner must step over as a unit.
OPENER_PATTERN = re.compile(
    r"""
      (?P<section>⟨)
    | (?P<line_comment>//)
    | (?P<block_comment>/\*)
    | (?P<raw_string>r(?P<hashes>\#*)")
    | (?P<string>")
    | (?P<char>')
    """,
    re.VERBOSE,
)

BLOCK_COMMENT_MARKER_PATTERN = re.compile(r"/\*|\*/")

STRING_STOP_PATTERN = re.compile(r'[\\"]')

LIFETIME_PATTERN = re.compile(r"[^\W\d]\w*")

CHAR_ESCAPE_PATTERN = re.compile(r"\\(?:x[0-9A-Fa-f]{2}|u\{[0-9A-Fa-f_]{1,8}\}|.)")

FENCE_PATTERN = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>[^\r\n]*)")
