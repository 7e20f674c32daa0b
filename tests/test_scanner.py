import pytest

from draft.scanner import SectionScanner, Span, SpanKind


PLAIN = SpanKind.PLAIN_TEXT
REFERENCE = SpanKind.SECTION_REFERENCE
UNTERMINATED = SpanKind.UNTERMINATED


def scan(text: str):
    return [(span.kind, span.text_of(text)) for span in SectionScanner(text)]


def unterminated(text: str):
    return [span for span in SectionScanner(text) if span.kind is UNTERMINATED]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "fn main() {}\n",
        "a ⟨b⟩ c ⟨d⟩",
        "x /* a /* b */ c",
        'let s = "⟨not⟩" + ⟨yes⟩; "open',
        "let c = '\\n;\n⟨x",
        "r##\"x r#\"⟨y⟩\"# z\"## ⟨w⟩",
    ],
)
def test_spans_cover_the_fragment_in_order(text):
    spans = list(SectionScanner(text))
    assert "".join(span.text_of(text) for span in spans) == text
    position = 0
    for span in spans:
        assert span.lo == position
        assert span.hi > span.lo
        position = span.hi
    assert all(first.kind is not PLAIN or second.kind is not PLAIN for first, second in zip(spans, spans[1:]))


def test_empty_fragment_has_no_spans():
    assert scan("") == []


def test_code_without_references_is_one_plain_span():
    assert scan("let x = a / b;\n") == [(PLAIN, "let x = a / b;\n")]


def test_references_are_found():
    assert scan("a ⟨b⟩ c ⟨ d  e ⟩") == [(PLAIN, "a "), (REFERENCE, "⟨b⟩"), (PLAIN, " c "), (REFERENCE, "⟨ d  e ⟩")]


def test_reference_may_span_lines():
    assert scan("⟨long\nname⟩\n") == [(REFERENCE, "⟨long\nname⟩"), (PLAIN, "\n")]


def test_unterminated_reference_runs_to_end_of_fragment():
    spans = unterminated("a ⟨b c\nd")
    assert spans == [Span(2, 8, UNTERMINATED, "section name")]


def test_line_comments_hide_references():
    assert scan("// see ⟨x⟩\ny ⟨z⟩") == [(PLAIN, "// see ⟨x⟩\ny "), (REFERENCE, "⟨z⟩")]


def test_line_comment_without_newline_is_not_an_error():
    assert scan("x // ⟨x⟩") == [(PLAIN, "x // ⟨x⟩")]


def test_nested_block_comment_is_one_unit():
    assert scan("/* a /* b */ c */") == [(PLAIN, "/* a /* b */ c */")]


def test_nested_block_comment_hides_references():
    assert scan("/* ⟨a⟩ /* ⟨b⟩ */ ⟨c⟩ */ ⟨d⟩") == [(PLAIN, "/* ⟨a⟩ /* ⟨b⟩ */ ⟨c⟩ */ "), (REFERENCE, "⟨d⟩")]


def test_unbalanced_block_comment_is_unterminated():
    assert scan("x /* a /* b */ c") == [(PLAIN, "x "), (UNTERMINATED, "/* a /* b */ c")]
    assert unterminated("x /* a /* b */ c")[0].description == "block comment"


def test_raw_string_hides_references():
    assert scan('r#"a "⟨b⟩" c"# ⟨d⟩') == [(PLAIN, 'r#"a "⟨b⟩" c"# '), (REFERENCE, "⟨d⟩")]


def test_raw_string_with_fewer_hashes_inside_does_not_close_it():
    text = 'r##"x r#"⟨y⟩"# z"## ⟨w⟩'
    assert scan(text) == [(PLAIN, 'r##"x r#"⟨y⟩"# z"## '), (REFERENCE, "⟨w⟩")]


def test_raw_string_without_hashes():
    assert scan('br"\\" ⟨x⟩') == [(PLAIN, 'br"\\" '), (REFERENCE, "⟨x⟩")]


def test_unterminated_raw_string():
    spans = unterminated('let s = r#"abc" ⟨x⟩')
    assert spans == [Span(8, 19, UNTERMINATED, "raw string")]


def test_string_hides_references():
    assert scan('"⟨a⟩ // ⟨b⟩" ⟨c⟩') == [(PLAIN, '"⟨a⟩ // ⟨b⟩" '), (REFERENCE, "⟨c⟩")]


def test_escaped_quote_does_not_close_string():
    text = '"a \\" ⟨b⟩" ⟨c⟩'
    assert scan(text) == [(PLAIN, '"a \\" ⟨b⟩" '), (REFERENCE, "⟨c⟩")]


def test_escaped_backslash_does_not_escape_quote():
    assert scan('"a\\\\" ⟨c⟩') == [(PLAIN, '"a\\\\" '), (REFERENCE, "⟨c⟩")]


def test_string_may_span_lines():
    assert scan('"a\n⟨b⟩\n" ⟨c⟩') == [(PLAIN, '"a\n⟨b⟩\n" '), (REFERENCE, "⟨c⟩")]


def test_unterminated_string_runs_to_end_of_fragment():
    assert scan('x "abc ⟨d⟩\n') == [(PLAIN, "x "), (UNTERMINATED, '"abc ⟨d⟩\n')]
    assert unterminated('x "abc ⟨d⟩\n')[0].description == "double quote string"


def test_character_literals():
    assert scan("'⟨' ⟨a⟩") == [(PLAIN, "'⟨' "), (REFERENCE, "⟨a⟩")]
    assert scan("'\"' ⟨a⟩") == [(PLAIN, "'\"' "), (REFERENCE, "⟨a⟩")]
    assert scan("'\\'' ⟨a⟩") == [(PLAIN, "'\\'' "), (REFERENCE, "⟨a⟩")]
    assert scan("'x' ⟨a⟩") == [(PLAIN, "'x' "), (REFERENCE, "⟨a⟩")]


def test_multi_character_escapes_in_character_literals():
    assert scan("'\\x7f' '\\u{1F600}' ⟨a⟩") == [(PLAIN, "'\\x7f' '\\u{1F600}' "), (REFERENCE, "⟨a⟩")]


def test_lifetimes_are_not_character_literals():
    text = "fn f<'a>(x: &'a ⟨T⟩) -> &'static str"
    assert scan(text) == [(PLAIN, "fn f<'a>(x: &'a "), (REFERENCE, "⟨T⟩"), (PLAIN, ") -> &'static str")]


def test_quote_then_newline_is_a_short_unterminated_literal():
    spans = unterminated("'\n")
    assert len(spans) == 1
    assert spans[0].description == "character literal"
    assert spans[0].lo == 0
    assert spans[0].hi - spans[0].lo <= 2
    assert scan("'\n") == [(UNTERMINATED, "'"), (PLAIN, "\n")]


def test_unterminated_character_literal_covers_only_what_was_consumed():
    text = "let c = '\\n;\nlet d = ⟨x⟩;\n"
    assert scan(text) == [
        (PLAIN, "let c = "),
        (UNTERMINATED, "'\\n"),
        (PLAIN, ";\nlet d = "),
        (REFERENCE, "⟨x⟩"),
        (PLAIN, ";\n"),
    ]


def test_quote_at_end_of_fragment():
    assert unterminated("x = '") == [Span(4, 5, UNTERMINATED, "character literal")]


def test_first_opener_decides():
    assert scan('// "unclosed\n⟨a⟩') == [(PLAIN, '// "unclosed\n'), (REFERENCE, "⟨a⟩")]
    assert scan('"/* ⟨a⟩" ⟨b⟩') == [(PLAIN, '"/* ⟨a⟩" '), (REFERENCE, "⟨b⟩")]
    assert scan("/* \"unclosed */ ⟨b⟩") == [(PLAIN, '/* "unclosed */ '), (REFERENCE, "⟨b⟩")]
