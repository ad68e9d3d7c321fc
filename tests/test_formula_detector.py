from mathprep.formula.detector import detect_math_formulas, find_formula_at
from mathprep.formula.models import DelimiterFamily, FormulaLayout


def test_detects_inline_dollar_with_offsets():
    spans = detect_math_formulas("a $x$ b")

    assert len(spans) == 1
    span = spans[0]
    assert span.full_match == "$x$"
    assert span.latex == "x"
    assert (span.start_index, span.end_index) == (2, 5)
    assert span.family is DelimiterFamily.INLINE_DOLLAR
    assert span.kind == "inline"


def test_display_dollar_wins_over_two_empty_inline_spans():
    spans = detect_math_formulas("$$x$$")

    assert len(spans) == 1
    assert spans[0].family is DelimiterFamily.DISPLAY_DOLLAR
    assert spans[0].layout is FormulaLayout.FORCED_BLOCK
    assert spans[0].full_match == "$$x$$"
    assert spans[0].latex == "x"


def test_blank_payloads_are_not_formulas():
    assert detect_math_formulas("$$ $$") == []
    assert detect_math_formulas("$ $") == []
    assert detect_math_formulas("\\(   \\)") == []
    assert detect_math_formulas("\\[\n\\]") == []


def test_unterminated_openers_are_not_formulas():
    assert detect_math_formulas("\\(x^2") == []
    assert detect_math_formulas("\\[x^2") == []
    assert detect_math_formulas("price: $5") == []


def test_payload_is_trimmed_except_for_bracket_escape():
    paren = detect_math_formulas("\\(  x^2 \\)")[0]
    assert paren.latex == "x^2"
    assert paren.family is DelimiterFamily.PAREN_ESCAPE

    bracket = detect_math_formulas("\\[ a\nb \\]")[0]
    assert bracket.latex == " a\nb "
    assert bracket.layout is FormulaLayout.CONTENT_DEPENDENT


def test_first_closer_terminates_the_span():
    text = "$a \\(b$ c\\)"
    spans = detect_math_formulas(text)

    assert len(spans) == 1
    assert spans[0].full_match == "$a \\(b$"
    assert spans[0].latex == "a \\(b"


def test_failed_opener_advances_by_one_character():
    # "$$" never closes, but the second "$" still opens a valid inline formula.
    spans = detect_math_formulas("$$x$ y")

    assert len(spans) == 1
    assert spans[0].full_match == "$x$"
    assert spans[0].start_index == 1


def test_spans_are_sorted_and_non_overlapping(mixed_spans):
    families = [s.family for s in mixed_spans]
    assert families == [
        DelimiterFamily.INLINE_DOLLAR,
        DelimiterFamily.PAREN_ESCAPE,
        DelimiterFamily.BRACKET_ESCAPE,
        DelimiterFamily.DISPLAY_DOLLAR,
    ]
    for left, right in zip(mixed_spans, mixed_spans[1:]):
        assert left.end_index <= right.start_index


def test_find_formula_at_only_matches_at_position():
    assert find_formula_at("xx$a$", 0) is None
    span = find_formula_at("xx$a$", 2)
    assert span is not None
    assert span.full_match == "$a$"


def test_span_to_dict():
    d = detect_math_formulas("\\(x\\)")[0].to_dict()
    assert d["full_match"] == "\\(x\\)"
    assert d["kind"] == "inline"
    assert d["family"] == "paren_escape"
    assert d["layout"] == "forced_inline"


def test_empty_text():
    assert detect_math_formulas("") == []
