import pytest

from mathprep.formula.detector import detect_math_formulas


@pytest.fixture
def mixed_text():
    return "Inline $a$, escaped \\(b\\), bracket \\[c\\] and display $$d$$."


@pytest.fixture
def mixed_spans(mixed_text):
    return detect_math_formulas(mixed_text)


@pytest.fixture
def table_row():
    return "| Name | Formula |\n|---|---|\n| area | \\[\\pi\nr^2\\] |\n"
